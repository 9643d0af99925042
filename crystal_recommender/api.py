"""
Library surface.

Thin module-level functions over a lazily built, process-wide
``RecommendationEngine`` (catalog loaded once, read-only afterwards)::

    from crystal_recommender import api
    from crystal_recommender.models.recommendation import RecommendationContext

    api.recommend(RecommendationContext(mood="tired", energy_level=4))

Call ``reset_default_engine()`` after changing configuration (tests do).
"""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Optional

from crystal_recommender.config import load_config
from crystal_recommender.energy import estimator
from crystal_recommender.models.energy import EnergyState3D
from crystal_recommender.models.profile import PersonalProfile
from crystal_recommender.models.recommendation import (
    RecommendationContext,
    RecommendationResult,
)
from crystal_recommender.profile import parser
from crystal_recommender.recommendations.engine import RecommendationEngine
from crystal_recommender.taxonomy.crystal_taxonomy import Mood


@lru_cache(maxsize=1)
def default_engine() -> RecommendationEngine:
    """Build the shared engine from ``load_config()`` on first use."""
    return RecommendationEngine.from_config(load_config())


def reset_default_engine() -> None:
    default_engine.cache_clear()


def estimate_energy_state(
    now: datetime, profile: Optional[PersonalProfile] = None
) -> EnergyState3D:
    return estimator.estimate_energy_state(now, profile)


def parse_profile(
    personality_type: Optional[str] = None,
    chakra_narrative: Optional[str] = None,
    insight_narrative: Optional[str] = None,
) -> PersonalProfile:
    return parser.parse_profile(personality_type, chakra_narrative, insight_narrative)


def recommend(context: RecommendationContext) -> list[RecommendationResult]:
    """Basic-mode recommendations over the core catalog tier."""
    return default_engine().recommend(context)


def extended_recommend(context: RecommendationContext) -> list[RecommendationResult]:
    """Basic-mode recommendations over the full catalog."""
    return default_engine().extended_recommend(context)


def intelligent_recommend(
    profile: PersonalProfile,
    energy_state: Optional[EnergyState3D] = None,
    mood: Optional[Mood] = None,
    max_recommendations: Optional[int] = None,
) -> list[RecommendationResult]:
    """Intelligent-mode recommendations over the full catalog."""
    return default_engine().intelligent_recommend(
        profile, energy_state, mood=mood, max_recommendations=max_recommendations
    )


def quick_mood_recommendation(mood: Mood) -> Optional[RecommendationResult]:
    return default_engine().quick_mood_recommendation(mood)


def recommend_by_category(
    category: str, max_recommendations: int = 3
) -> list[RecommendationResult]:
    return default_engine().recommend_by_category(category, max_recommendations)
