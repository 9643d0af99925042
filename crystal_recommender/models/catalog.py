"""
Catalog entry model.

``CatalogEntry`` is one hand-curated, recommendable crystal.  Entries are
loaded once from ``data/crystals.json`` at process start and never mutated
afterwards: the model is frozen and every collection field is an immutable
``frozenset`` or ``tuple``.

Display attributes (``name``, ``color``, ``category``) are opaque to the
scorer.  The matching attributes are:

  - ``chakra`` / ``element``      - single tags from the taxonomy enums.
  - ``energy_levels``             - energy intensities (1–5) the entry suits.
  - ``emotions``                  - moods the entry addresses.
  - ``personality_tags``          - single personality-axis letters.
  - ``effects``                   - ordered effect phrases for need matching.
  - ``base_score``                - fallback score when no criteria apply.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from crystal_recommender.taxonomy.crystal_taxonomy import (
    PERSONALITY_LETTERS,
    CatalogTier,
    Chakra,
    Element,
    EvidenceLevel,
    Mood,
)


class CatalogEntry(BaseModel):
    """A single immutable catalog crystal.

    Attributes:
        id: Unique lowercase slug, e.g. ``"rose_quartz"``.
        name: Display name.
        color: Display color token (opaque to scoring).
        category: Free-form category tag used by ``CatalogStore.by_category``.
        tier: ``core`` or ``extended`` catalog slice.
        chakra: The chakra this crystal is associated with.
        element: The element this crystal is associated with.
        energy_levels: Energy intensities (1–5) this crystal suits.
        emotions: Moods this crystal addresses.
        personality_tags: Personality-axis letters this crystal suits.
        effects: Ordered short effect phrases.
        usage: Base usage instruction template.
        evidence_level: How well the claimed effect is corroborated.
        base_score: Fallback score in [0, 100].
        scientific_basis: Optional plain-language rationale.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str = ""
    category: str = "general"
    tier: CatalogTier = CatalogTier.EXTENDED
    chakra: Chakra
    element: Element
    energy_levels: frozenset[int]
    emotions: frozenset[Mood] = frozenset()
    personality_tags: frozenset[str] = frozenset()
    effects: tuple[str, ...] = ()
    usage: str
    evidence_level: EvidenceLevel = EvidenceLevel.MEDIUM
    base_score: int = 50
    scientific_basis: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id_format(cls, v: str) -> str:
        if not v or " " in v or v != v.lower():
            raise ValueError(f"Catalog id '{v}' must be lowercase with no spaces.")
        return v

    @field_validator("energy_levels")
    @classmethod
    def validate_energy_levels(cls, v: frozenset[int]) -> frozenset[int]:
        if not v:
            raise ValueError("energy_levels must not be empty.")
        bad = sorted(level for level in v if not 1 <= level <= 5)
        if bad:
            raise ValueError(f"energy_levels must be in [1, 5], got {bad}.")
        return v

    @field_validator("personality_tags")
    @classmethod
    def validate_personality_tags(cls, v: frozenset[str]) -> frozenset[str]:
        unknown = sorted(tag for tag in v if tag not in PERSONALITY_LETTERS)
        if unknown:
            raise ValueError(
                f"Unknown personality tags {unknown}. "
                f"Must be drawn from {sorted(PERSONALITY_LETTERS)}."
            )
        return v

    @field_validator("base_score")
    @classmethod
    def validate_base_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"base_score must be in [0, 100], got {v}.")
        return v

    @field_validator("usage")
    @classmethod
    def validate_usage_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("usage must not be empty.")
        return v.strip()
