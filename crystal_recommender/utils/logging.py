"""
Logging setup for the crystal recommender CLI.

Library modules only ever call ``logging.getLogger(__name__)``.  Handlers are
installed once, by the CLI, through ``configure_logging``; the engine itself
logs per-call summaries at DEBUG and catalog inconsistencies at WARNING.

Output goes to stderr (and optionally a file) so recommendation tables on
stdout can be piped.  ``AppConfig.debug`` forces DEBUG regardless of the
configured level.

JSON lines (``json_format = true`` under ``[logging]``)::

    {"ts": "2026-10-17T08:30:00Z", "level": "DEBUG", "component": "recommendations",
     "logger": "crystal_recommender.recommendations.engine", "msg": "...",
     "operation": "recommend", "results": 3}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from crystal_recommender.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_PACKAGE = "crystal_recommender"

# Attributes every LogRecord carries; anything else came from ``extra=``.
_STANDARD_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def component_of(logger_name: str) -> str:
    """Map a logger name to its subpackage, e.g. ``catalog`` or ``cli``.

    Loggers outside the package report their top-level name.
    """
    parts = logger_name.split(".")
    if parts[0] != _PACKAGE:
        return parts[0]
    return parts[1] if len(parts) > 1 else _PACKAGE


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``ts``, ``level``, ``component``, ``logger``, ``msg``, then every
    ``extra=`` field; ``traceback`` is added for ``log.exception`` records.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "component": component_of(record.name),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, val in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                payload[key] = val
        if record.exc_info:
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def resolve_level(config: "LoggingConfig", debug: bool = False) -> int:
    if debug:
        return logging.DEBUG
    return getattr(logging, config.level.upper(), logging.INFO)


def _handler(
    level: int, formatter: logging.Formatter, log_file: Optional[str] = None
) -> logging.Handler:
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: "LoggingConfig", debug: bool = False) -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Args:
        config: ``[logging]`` section of ``AppConfig``.
        debug:  ``AppConfig.debug``; forces DEBUG level when True.
    """
    level = resolve_level(config, debug)

    formatter: logging.Formatter
    if config.json_format:
        formatter = JsonLineFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers = [_handler(level, formatter)]
    if config.log_file:
        handlers.append(_handler(level, formatter, config.log_file))

    logging.basicConfig(level=level, handlers=handlers, force=True)
