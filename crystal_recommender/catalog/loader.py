"""
Catalog loader: JSON → validated ``CatalogStore`` / ``PreferenceTables``.

Responsibilities
----------------
1. Load ``data/crystals.json`` (or any catalog JSON given by path) and
   validate every record against ``CatalogEntry``.
2. Load ``data/preferences.json`` (time-bucket / trend preferred ids and
   scenario bonus points) into ``PreferenceTables``.
3. Cross-check that every id referenced by the preference tables exists in
   the catalog.

Catalog file format
-------------------
A JSON array with one object per entry::

    {
      "id": "amethyst", "name": "Amethyst", "tier": "core",
      "chakra": "third_eye", "element": "air",
      "energy_levels": [2, 3, 4], "emotions": ["stressed", "anxious"],
      "personality_tags": ["N", "I"], "effects": ["Calms the mind"],
      "usage": "...", "evidence_level": "medium", "base_score": 85
    }

Validation rules
----------------
- The file must contain a non-empty JSON array.
- Each record must validate as a ``CatalogEntry``.
- Duplicate ids are rejected (``CatalogStore`` enforces this).

Usage
-----
    from crystal_recommender.catalog.loader import load_catalog, load_preference_tables

    store  = load_catalog()
    tables = load_preference_tables()
    missing = validate_preference_tables(tables, store)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from crystal_recommender.catalog.store import CatalogStore, PreferenceTables
from crystal_recommender.errors import CatalogError
from crystal_recommender.models.catalog import CatalogEntry

log = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_CATALOG_PATH     = DATA_DIR / "crystals.json"
DEFAULT_PREFERENCES_PATH = DATA_DIR / "preferences.json"


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise CatalogError("Catalog data file not found.", str(path))
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON: {exc}", str(path)) from exc


def parse_catalog_records(
    records: list[dict[str, Any]],
    source: str | None = None,
) -> CatalogStore:
    """Validate raw catalog records and build a ``CatalogStore``.

    Args:
        records: List of dicts, one per catalog entry.
        source:  Label used in error messages.

    Returns:
        A populated ``CatalogStore``.

    Raises:
        CatalogError: If any record fails validation, ids repeat, or the
            list is empty.
    """
    entries: list[CatalogEntry] = []
    for i, rec in enumerate(records):
        try:
            entries.append(CatalogEntry.model_validate(rec))
        except ValidationError as exc:
            ident = rec.get("id", f"index {i}") if isinstance(rec, dict) else f"index {i}"
            raise CatalogError(f"Invalid catalog entry '{ident}': {exc}", source) from exc
    return CatalogStore(entries, source=source)


def load_catalog(path: Optional[Path] = None) -> CatalogStore:
    """Load and validate the catalog JSON table.

    Args:
        path: Catalog JSON path.  Defaults to the bundled ``data/crystals.json``.

    Returns:
        Read-only ``CatalogStore``.

    Raises:
        CatalogError: On a missing file, invalid JSON, or invalid records.
    """
    path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    raw = _read_json(path)
    if not isinstance(raw, list):
        raise CatalogError("Catalog file must contain a JSON array of entries.", str(path))

    store = parse_catalog_records(raw, source=str(path))
    log.debug("Loaded %d catalog entries from %s", len(store), path)
    return store


def load_preference_tables(path: Optional[Path] = None) -> PreferenceTables:
    """Load the time / trend / scenario preference tables.

    Args:
        path: Preferences JSON path.  Defaults to the bundled
            ``data/preferences.json``.

    Returns:
        Validated ``PreferenceTables``.

    Raises:
        CatalogError: On a missing file, invalid JSON, or invalid tables.
    """
    path = Path(path) if path is not None else DEFAULT_PREFERENCES_PATH
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise CatalogError("Preferences file must contain a JSON object.", str(path))
    try:
        tables = PreferenceTables.model_validate(raw)
    except ValidationError as exc:
        raise CatalogError(f"Invalid preference tables: {exc}", str(path)) from exc

    log.debug(
        "Loaded preference tables from %s (%d referenced ids)",
        path, len(tables.referenced_ids()),
    )
    return tables


def validate_preference_tables(
    tables: PreferenceTables,
    store: CatalogStore,
) -> list[str]:
    """Return every id referenced by ``tables`` that is missing from ``store``.

    An empty list means the tables and the catalog are consistent.
    """
    missing = [entry_id for entry_id in tables.referenced_ids() if entry_id not in store]
    if missing:
        log.warning(
            "Preference tables reference %d id(s) missing from the catalog: %s",
            len(missing), ", ".join(missing),
        )
    return missing
