"""
Exception types raised by the recommender.

Normal input variation never raises: missing context fields, unparseable
profile text and empty result lists are ordinary outcomes.  Exceptions are
reserved for invalid catalog data (at load time) and for genuine internal
failures during scoring, so callers can tell "no good match" apart from
"the engine misbehaved".
"""

from __future__ import annotations


class CrystalRecommenderError(RuntimeError):
    """Base class for all recommender errors."""


class CatalogError(CrystalRecommenderError):
    """Raised when catalog or preference-table data violates a load-time precondition.

    Attributes:
        source: File path or label of the offending data, if known.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{message} (source: {source})"
        super().__init__(message)


class EngineError(CrystalRecommenderError):
    """Raised when scoring fails for a reason other than ordinary input variation.

    The original exception is always chained as ``__cause__``.

    Attributes:
        operation: Name of the engine operation that failed.
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason    = reason
        super().__init__(f"Recommendation engine failed during '{operation}': {reason}")
