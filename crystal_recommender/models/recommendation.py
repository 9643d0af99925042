"""
Recommendation input and output models.

``RecommendationContext`` is the caller-supplied input.  Every field is
optional; an absent field disables its scoring factor in basic mode and
falls back to a neutral value in intelligent mode.

``RecommendationResult`` is one ranked, annotated recommendation.  Both
models are frozen.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from crystal_recommender.models.energy import EnergyState3D
from crystal_recommender.models.profile import PersonalProfile
from crystal_recommender.taxonomy.crystal_taxonomy import (
    Chakra,
    Confidence,
    EvidenceLevel,
    Mood,
    Scenario,
    TimeBucket,
)


class RecommendationContext(BaseModel):
    """Caller input for one recommendation call.

    When ``profile`` is supplied and the explicit ``personality_type`` /
    ``energy_level`` fields are not, the profile's values are used instead.
    ``time_bucket`` falls back to ``energy_state.time_bucket``.

    Attributes:
        mood: Current mood identifier.
        energy_level: Explicit energy level (1–5).
        chakra: Chakra to match exactly.
        personality_type: Personality letters, e.g. ``"ENTP"``.
        profile: Parsed personal profile.
        energy_state: Precomputed energy state.
        scenario: Usage scenario.
        time_bucket: Explicit part of the day (usage advice only).
        max_recommendations: Result cap; ``None`` = strategy default.
    """

    model_config = ConfigDict(frozen=True)

    mood: Optional[Mood] = None
    energy_level: Optional[int] = None
    chakra: Optional[Chakra] = None
    personality_type: Optional[str] = None
    profile: Optional[PersonalProfile] = None
    energy_state: Optional[EnergyState3D] = None
    scenario: Optional[Scenario] = None
    time_bucket: Optional[TimeBucket] = None
    max_recommendations: Optional[int] = None

    @field_validator("energy_level")
    @classmethod
    def validate_energy_level(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not 1 <= v <= 5:
            raise ValueError(f"energy_level must be in [1, 5], got {v}.")
        return v

    @field_validator("max_recommendations")
    @classmethod
    def validate_max_recommendations(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"max_recommendations must be >= 0, got {v}.")
        return v

    @property
    def effective_personality_type(self) -> Optional[str]:
        if self.personality_type:
            return self.personality_type
        if self.profile is not None and self.profile.personality_type:
            return self.profile.personality_type
        return None

    @property
    def effective_energy_level(self) -> Optional[int]:
        if self.energy_level is not None:
            return self.energy_level
        if self.profile is not None:
            return self.profile.preferred_energy_level
        return None

    @property
    def effective_time_bucket(self) -> Optional[TimeBucket]:
        if self.time_bucket is not None:
            return self.time_bucket
        if self.energy_state is not None:
            return self.energy_state.time_bucket
        return None


class RecommendationResult(BaseModel):
    """One ranked recommendation.

    Attributes:
        entry_id: Catalog entry id.
        name: Display name of the entry.
        match_score: Integer score in [0, 100].
        reasons: Ordered justification strings; never empty.
        confidence: Engine certainty label.
        usage: Contextualized usage instruction.
        evidence_level: The entry's evidence level.
    """

    model_config = ConfigDict(frozen=True)

    entry_id: str
    name: str
    match_score: int
    reasons: tuple[str, ...]
    confidence: Confidence
    usage: str
    evidence_level: EvidenceLevel

    @field_validator("match_score")
    @classmethod
    def validate_match_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"match_score must be in [0, 100], got {v}.")
        return v

    @field_validator("reasons")
    @classmethod
    def validate_reasons_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("reasons must not be empty.")
        return v
