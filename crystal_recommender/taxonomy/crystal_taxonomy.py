"""
Closed vocabularies shared by the catalog, the profile parser and the scorer.

Every tag that appears on a ``CatalogEntry`` or inside a ``PersonalProfile``
is a member of one of the enums below.  Using ``StrEnum`` keeps the values
JSON-friendly (``crystals.json`` stores plain strings) while giving the
scorer exact, typo-proof comparisons.

The ``PERSONALITY_AXES`` tuple is the integrity contract for personality
letters: every letter on a catalog entry must belong to exactly one axis.

This module has NO imports from any other ``crystal_recommender`` package.
"""

from enum import StrEnum


class Chakra(StrEnum):
    """The seven chakra tags used on catalog entries and in profiles."""

    ROOT = "root"
    SACRAL = "sacral"
    SOLAR_PLEXUS = "solar_plexus"
    HEART = "heart"
    THROAT = "throat"
    THIRD_EYE = "third_eye"
    CROWN = "crown"


class Element(StrEnum):
    """Classical element associated with a crystal."""

    EARTH = "earth"
    WATER = "water"
    FIRE = "fire"
    AIR = "air"
    LIGHT = "light"


class Mood(StrEnum):
    """Mood identifiers a caller may supply as the current mood context."""

    STRESSED = "stressed"
    ANXIOUS = "anxious"
    SAD = "sad"
    TIRED = "tired"
    NEUTRAL = "neutral"
    HAPPY = "happy"
    EXCITED = "excited"
    GRATEFUL = "grateful"


ACUTE_MOODS: frozenset[Mood] = frozenset({Mood.STRESSED, Mood.ANXIOUS})
"""Moods that trigger the intelligent-mode urgency bonus."""


class EvidenceLevel(StrEnum):
    """How strongly a crystal's claimed effect is corroborated."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Confidence(StrEnum):
    """The engine's own certainty label for one recommendation."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CatalogTier(StrEnum):
    """Which slice of the catalog an entry belongs to.

    Basic recommendations score only the ``core`` tier; intelligent and
    extended recommendations score the whole catalog.
    """

    CORE = "core"
    EXTENDED = "extended"


class EmotionalPattern(StrEnum):
    SENSITIVE = "sensitive"
    RATIONAL = "rational"
    BALANCED = "balanced"
    ADAPTIVE = "adaptive"


class EnergyArchetype(StrEnum):
    LEADER = "leader"
    CREATOR = "creator"
    HEALER = "healer"
    SAGE = "sage"
    EXPLORER = "explorer"


class Trend(StrEnum):
    """Short-term direction of the energy state."""

    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"


class TimeBucket(StrEnum):
    """Contiguous part of the day used for time-sensitive affinity rules."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class Scenario(StrEnum):
    """Usage scenario a caller may ask recommendations for."""

    MEDITATION = "meditation"
    DAILY = "daily"
    HEALING = "healing"
    PROTECTION = "protection"


class Urgency(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ── Personality axes ──────────────────────────────────────────────────────────
# Four binary axes of a four-letter typing scheme.  Each tuple is
# (first pole, second pole).

PERSONALITY_AXES: tuple[tuple[str, str], ...] = (
    ("E", "I"),   # extraversion / introversion
    ("S", "N"),   # sensing / intuition
    ("T", "F"),   # thinking / feeling
    ("J", "P"),   # judging / perceiving
)

PERSONALITY_LETTERS: frozenset[str] = frozenset(
    letter for axis in PERSONALITY_AXES for letter in axis
)
