"""
Tests for crystal_recommender/catalog/loader.py.

What we test
------------
load_catalog():
  - Bundled data loads and validates.
  - Missing file, invalid JSON, non-array root, invalid record -> CatalogError.
  - Custom catalog path.

load_preference_tables():
  - Bundled data loads; non-object root and out-of-range bonus -> CatalogError.

validate_preference_tables():
  - Every id the bundled tables reference exists in the bundled catalog.
  - Unknown ids are returned and logged as a warning.
"""

from __future__ import annotations

import json
import logging

import pytest

from crystal_recommender.catalog.loader import (
    load_catalog,
    load_preference_tables,
    parse_catalog_records,
    validate_preference_tables,
)
from crystal_recommender.catalog.store import PreferenceTables
from crystal_recommender.errors import CatalogError
from crystal_recommender.taxonomy.crystal_taxonomy import TimeBucket


def _record(**overrides) -> dict:
    rec = {
        "id": "amethyst",
        "name": "Amethyst",
        "tier": "core",
        "chakra": "third_eye",
        "element": "air",
        "energy_levels": [2, 3, 4],
        "emotions": ["stressed", "anxious"],
        "personality_tags": ["N", "I"],
        "effects": ["Calms the mind"],
        "usage": "Hold it while meditating.",
        "evidence_level": "medium",
        "base_score": 85,
    }
    rec.update(overrides)
    return rec


class TestLoadCatalog:
    def test_bundled_catalog(self):
        store = load_catalog()
        assert len(store) == 18
        assert store.by_id("citrine").base_score == 82

    def test_custom_path(self, tmp_path):
        path = tmp_path / "crystals.json"
        path.write_text(json.dumps([_record(), _record(id="howlite", name="Howlite")]))
        store = load_catalog(path)
        assert store.ids() == ["amethyst", "howlite"]
        assert store.source == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{not json")
        with pytest.raises(CatalogError, match="Invalid JSON"):
            load_catalog(path)

    def test_root_must_be_array(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text(json.dumps({"amethyst": _record()}))
        with pytest.raises(CatalogError, match="JSON array"):
            load_catalog(path)

    def test_invalid_record_names_entry(self):
        with pytest.raises(CatalogError, match="'amethyst'"):
            parse_catalog_records([_record(base_score=150)])

    def test_unknown_mood_rejected(self):
        with pytest.raises(CatalogError):
            parse_catalog_records([_record(emotions=["melancholic"])])

    def test_empty_array_rejected(self):
        with pytest.raises(CatalogError):
            parse_catalog_records([])


class TestLoadPreferenceTables:
    def test_bundled_tables(self):
        tables = load_preference_tables()
        assert tables.time_bucket[TimeBucket.NIGHT] == ("lepidolite", "howlite", "selenite")

    def test_root_must_be_object(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[]")
        with pytest.raises(CatalogError, match="JSON object"):
            load_preference_tables(path)

    def test_invalid_bonus(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text(json.dumps({"scenario_bonus": {"daily": {"citrine": 9}}}))
        with pytest.raises(CatalogError, match="Invalid preference tables"):
            load_preference_tables(path)


class TestValidatePreferenceTables:
    def test_every_preferred_id_exists(self, catalog, tables):
        assert validate_preference_tables(tables, catalog) == []

    def test_missing_ids_reported(self, catalog, caplog):
        tables = PreferenceTables(time_bucket={TimeBucket.MORNING: ("citrine", "unobtainium")})
        with caplog.at_level(logging.WARNING):
            missing = validate_preference_tables(tables, catalog)
        assert missing == ["unobtainium"]
        assert "unobtainium" in caplog.text
