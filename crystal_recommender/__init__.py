"""Deterministic crystal recommendation engine."""

__version__ = "0.1.0"
