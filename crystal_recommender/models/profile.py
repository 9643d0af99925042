"""
Personal profile models.

``ProfileInput`` is the structured contract with the upstream profile text
provider: every field is optional and absence never raises.  Prose fields
are parsed best-effort; the numeric ``chakra_scores`` and enumerated
``energy_archetype`` fields, when present, win over anything parsed from
prose.

``PersonalProfile`` is the derived, per-call profile consumed by the energy
estimator and the scorer.  It is never persisted.

Unknown chakra scores
---------------------
A chakra the upstream text does not score is stored as ``None``.  The
scorer treats ``None`` as non-contributing: it never takes part in the
lowest-chakra search and never counts as a deficit.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from crystal_recommender.taxonomy.crystal_taxonomy import (
    Chakra,
    EmotionalPattern,
    EnergyArchetype,
)

UNKNOWN_CHAKRA_SCORE: None = None


class ProfileInput(BaseModel):
    """Raw upstream profile payload.

    Attributes:
        personality_type: Four-letter personality string, e.g. ``"INFJ"``.
        chakra_narrative: Free-text chakra analysis.
        insight_narrative: Free-text personality / energy insight.
        chakra_scores: Optional structured chakra scores (0–100).
        energy_archetype: Optional structured archetype.
    """

    model_config = ConfigDict(frozen=True)

    personality_type: Optional[str] = None
    chakra_narrative: Optional[str] = None
    insight_narrative: Optional[str] = None
    chakra_scores: Optional[dict[Chakra, int]] = None
    energy_archetype: Optional[EnergyArchetype] = None

    @field_validator("chakra_scores")
    @classmethod
    def validate_chakra_scores(
        cls, v: Optional[dict[Chakra, int]]
    ) -> Optional[dict[Chakra, int]]:
        if v is None:
            return v
        for chakra, score in v.items():
            if not 0 <= score <= 100:
                raise ValueError(
                    f"chakra_scores[{chakra}] must be in [0, 100], got {score}."
                )
        return v


class PersonalProfile(BaseModel):
    """Structured profile derived from upstream text.

    Attributes:
        personality_type: Personality letters, passed through verbatim.
        chakra_balance: Chakra → score (lower = more deficient) or ``None``
            when unknown.
        emotional_pattern: Coarse emotional style.
        energy_archetype: Coarse energy archetype.
        preferred_energy_level: Preferred energy intensity (1–5).
    """

    model_config = ConfigDict(frozen=True)

    personality_type: str = ""
    chakra_balance: dict[Chakra, Optional[int]] = {}
    emotional_pattern: EmotionalPattern = EmotionalPattern.ADAPTIVE
    energy_archetype: EnergyArchetype = EnergyArchetype.EXPLORER
    preferred_energy_level: int = 3

    @field_validator("preferred_energy_level")
    @classmethod
    def validate_energy_level(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError(f"preferred_energy_level must be in [1, 5], got {v}.")
        return v

    @field_validator("chakra_balance")
    @classmethod
    def validate_chakra_balance(
        cls, v: dict[Chakra, Optional[int]]
    ) -> dict[Chakra, Optional[int]]:
        for chakra, score in v.items():
            if score is not None and not 0 <= score <= 100:
                raise ValueError(
                    f"chakra_balance[{chakra}] must be in [0, 100] or None, got {score}."
                )
        return v

    def has_letter(self, letter: str) -> bool:
        """Return True if ``letter`` appears in the personality type."""
        return letter in self.personality_type

    def known_chakra_scores(self) -> dict[Chakra, int]:
        """Chakra scores with the unknown sentinel filtered out."""
        return {c: s for c, s in self.chakra_balance.items() if s is not None}
