"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      - committed static defaults
  2. ``config/local.toml``        - optional local overrides (gitignored)
  3. ``.env``                     - local env overrides (gitignored)
  4. Environment variables        - ``CRYSTAL_RECOMMENDER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine and CLI commands receive an ``AppConfig`` instance, never raw
dicts or individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Catalog and preference-table data files.

    ``None`` selects the JSON files bundled with the package.
    """

    model_config = ConfigDict(frozen=True)

    catalog_file: Optional[str] = None
    preferences_file: Optional[str] = None


class ScoringConfig(BaseModel):
    """Default result caps per recommendation mode."""

    model_config = ConfigDict(frozen=True)

    basic_max_recommendations: int = 3
    intelligent_max_recommendations: int = 4
    extended_max_recommendations: int = 5

    @field_validator(
        "basic_max_recommendations",
        "intelligent_max_recommendations",
        "extended_max_recommendations",
    )
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_recommendations defaults must be >= 0, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()``, which merges TOML + .env + env vars.
    """

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    scoring: ScoringConfig = ScoringConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``; when that default file
            is absent (e.g. an installed wheel) built-in defaults are used.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = root / "config" / "default.toml"
        if default_path.exists():
            raw = _read_toml_layers(default_path)
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Pass an existing TOML file or omit --config to use the defaults."
            )
        raw = _read_toml_layers(config_path)

    # 3. Apply CRYSTAL_RECOMMENDER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _read_toml_layers(config_path: Path) -> dict[str, Any]:
    """Read ``config_path`` and merge a sibling ``local.toml`` over it."""
    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)
    return raw


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply CRYSTAL_RECOMMENDER_* env vars to the raw config dict.

    Supported overrides:
      CRYSTAL_RECOMMENDER_CATALOG_FILE      → raw["catalog"]["catalog_file"]
      CRYSTAL_RECOMMENDER_PREFERENCES_FILE  → raw["catalog"]["preferences_file"]
      CRYSTAL_RECOMMENDER_LOG_LEVEL         → raw["logging"]["level"]
      CRYSTAL_RECOMMENDER_DEBUG             → raw["debug"]
    """
    if catalog_file := os.environ.get("CRYSTAL_RECOMMENDER_CATALOG_FILE"):
        raw.setdefault("catalog", {})["catalog_file"] = catalog_file

    if preferences_file := os.environ.get("CRYSTAL_RECOMMENDER_PREFERENCES_FILE"):
        raw.setdefault("catalog", {})["preferences_file"] = preferences_file

    if log_level := os.environ.get("CRYSTAL_RECOMMENDER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("CRYSTAL_RECOMMENDER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    # Flatten top-level keys that may be nested under [project]
    project = raw.pop("project", {})

    return AppConfig(
        catalog=CatalogConfig(**raw.get("catalog", {})),
        scoring=ScoringConfig(**raw.get("scoring", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
