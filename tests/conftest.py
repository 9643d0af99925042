"""
Shared pytest fixtures for the crystal recommender test suite.

Provides:
  - ``catalog`` / ``tables``: the bundled catalog and preference tables,
    loaded from package data.
  - ``engine``: a ``RecommendationEngine`` over the bundled data with a
    fixed clock.
  - Sample domain object factories for use in multiple test modules.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from crystal_recommender.catalog.loader import load_catalog, load_preference_tables
from crystal_recommender.catalog.store import CatalogStore, PreferenceTables
from crystal_recommender.models.catalog import CatalogEntry
from crystal_recommender.models.energy import EnergyState3D
from crystal_recommender.models.profile import PersonalProfile
from crystal_recommender.recommendations.engine import RecommendationEngine
from crystal_recommender.taxonomy.crystal_taxonomy import (
    CatalogTier,
    Chakra,
    Element,
    EvidenceLevel,
    Mood,
    TimeBucket,
    Trend,
)
from crystal_recommender.utils.time_utils import FixedClock

# Wednesday 2026-10-14, 15:00 local: mid-afternoon, stable trend, weekday.
FIXED_MOMENT = datetime(2026, 10, 14, 15, 0)


# ── Environment isolation ─────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _clear_recommender_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CRYSTAL_RECOMMENDER_* variables from leaking into tests."""
    for name in (
        "CRYSTAL_RECOMMENDER_CATALOG_FILE",
        "CRYSTAL_RECOMMENDER_PREFERENCES_FILE",
        "CRYSTAL_RECOMMENDER_LOG_LEVEL",
        "CRYSTAL_RECOMMENDER_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


# ── Bundled data fixtures ─────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def catalog() -> CatalogStore:
    """The bundled ``data/crystals.json`` catalog."""
    return load_catalog()


@pytest.fixture(scope="session")
def tables() -> PreferenceTables:
    """The bundled ``data/preferences.json`` tables."""
    return load_preference_tables()


@pytest.fixture
def fixed_moment() -> datetime:
    return FIXED_MOMENT


@pytest.fixture
def engine(catalog: CatalogStore, tables: PreferenceTables) -> RecommendationEngine:
    """Engine over the bundled data with the clock fixed at ``FIXED_MOMENT``."""
    return RecommendationEngine(catalog, tables, clock=FixedClock(FIXED_MOMENT))


# ── Sample domain object factories ────────────────────────────────────────────

def make_entry(**overrides: Any) -> CatalogEntry:
    """Build a ``CatalogEntry`` with neutral defaults, overridden by kwargs."""
    fields: dict[str, Any] = {
        "id": "test_stone",
        "name": "Test Stone",
        "color": "grey",
        "category": "general",
        "tier": CatalogTier.CORE,
        "chakra": Chakra.ROOT,
        "element": Element.EARTH,
        "energy_levels": frozenset({3}),
        "emotions": frozenset(),
        "personality_tags": frozenset(),
        "effects": ("Plain effect",),
        "usage": "Hold it in your hand.",
        "evidence_level": EvidenceLevel.MEDIUM,
        "base_score": 50,
    }
    fields.update(overrides)
    return CatalogEntry(**fields)


@pytest.fixture
def citrine_like() -> CatalogEntry:
    """Entry mirroring the bundled citrine's matching attributes."""
    return make_entry(
        id="citrine",
        name="Citrine",
        chakra=Chakra.SOLAR_PLEXUS,
        element=Element.FIRE,
        energy_levels=frozenset({3, 4, 5}),
        emotions=frozenset({Mood.SAD, Mood.TIRED, Mood.HAPPY}),
        personality_tags=frozenset({"E", "T"}),
        effects=("Boosts confidence", "Positive energy"),
        evidence_level=EvidenceLevel.HIGH,
        base_score=82,
    )


@pytest.fixture
def obsidian_like() -> CatalogEntry:
    """Entry mirroring the bundled black_obsidian's matching attributes."""
    return make_entry(
        id="black_obsidian",
        name="Black Obsidian",
        chakra=Chakra.ROOT,
        energy_levels=frozenset({1, 2}),
        emotions=frozenset({Mood.STRESSED, Mood.ANXIOUS}),
        personality_tags=frozenset({"S", "J"}),
        effects=("Protective energy", "Grounding and stability"),
        base_score=75,
    )


@pytest.fixture
def neutral_state() -> EnergyState3D:
    """Mid-range energy state: no axis needs, stable afternoon."""
    return EnergyState3D.from_axes(
        60, 60, 60, trend=Trend.STABLE, time_bucket=TimeBucket.AFTERNOON
    )


@pytest.fixture
def empty_profile() -> PersonalProfile:
    return PersonalProfile()


@pytest.fixture
def entry_factory():
    """Return ``make_entry`` so test modules can build ad-hoc entries."""
    return make_entry
