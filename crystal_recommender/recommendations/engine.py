"""
Recommendation engine: wires the catalog, scorer, ranker and usage advisor
into the public recommendation operations.

Operations
----------
recommend(context)
    Basic mode over the core tier.  Default cap: 3.
extended_recommend(context)
    Basic mode over the whole catalog.  Default cap: 5.
intelligent_recommend(profile, energy_state, mood, max_recommendations)
    Intelligent mode over the whole catalog.  Default cap: 4.
quick_mood_recommendation(mood)
    Top basic result for a bare mood, or ``None``.
recommend_by_category(category, max_recommendations)
    Extended-tier entries of one category ranked by ``base_score``.

Failure policy
--------------
Ordinary input variation never raises.  Any unexpected exception inside an
operation is logged with its traceback and re-raised as ``EngineError``
(the original chained as ``__cause__``).  Recommender errors pass through
unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from typing import Optional

from crystal_recommender.catalog.loader import load_catalog, load_preference_tables
from crystal_recommender.catalog.store import CatalogStore, PreferenceTables
from crystal_recommender.config import AppConfig, ScoringConfig
from crystal_recommender.energy.estimator import current_energy_state
from crystal_recommender.errors import CrystalRecommenderError, EngineError
from crystal_recommender.models.energy import EnergyState3D
from crystal_recommender.models.profile import PersonalProfile
from crystal_recommender.models.recommendation import (
    RecommendationContext,
    RecommendationResult,
)
from crystal_recommender.recommendations.needs import derive_needs
from crystal_recommender.recommendations.ranker import rank
from crystal_recommender.recommendations.scorer import (
    score_entries_basic,
    score_entries_intelligent,
)
from crystal_recommender.recommendations.strategy import (
    BASIC,
    INTELLIGENT,
    ScoringStrategy,
)
from crystal_recommender.taxonomy.crystal_taxonomy import CatalogTier, Mood
from crystal_recommender.utils.time_utils import Clock, SystemClock

log = logging.getLogger(__name__)


@contextmanager
def _engine_operation(operation: str) -> Iterator[None]:
    try:
        yield
    except CrystalRecommenderError:
        raise
    except Exception as exc:
        log.exception("Recommendation operation '%s' failed", operation)
        raise EngineError(operation, f"{type(exc).__name__}: {exc}") from exc


class RecommendationEngine:
    """Deterministic crystal recommendation engine.

    Args:
        store:   Read-only catalog.
        tables:  Time / trend / scenario preference tables.
        scoring: Default result caps per mode.
        clock:   Time source used when no energy state is supplied.
    """

    def __init__(
        self,
        store:   CatalogStore,
        tables:  PreferenceTables,
        scoring: Optional[ScoringConfig] = None,
        clock:   Optional[Clock] = None,
    ) -> None:
        scoring = scoring or ScoringConfig()
        self.store  = store
        self.tables = tables
        self.clock  = clock or SystemClock()

        self.basic_strategy: ScoringStrategy = replace(
            BASIC, default_max=scoring.basic_max_recommendations
        )
        self.extended_strategy: ScoringStrategy = replace(
            BASIC, default_max=scoring.extended_max_recommendations
        )
        self.intelligent_strategy: ScoringStrategy = replace(
            INTELLIGENT, default_max=scoring.intelligent_max_recommendations
        )

    @classmethod
    def from_config(
        cls, config: AppConfig, clock: Optional[Clock] = None
    ) -> "RecommendationEngine":
        """Load catalog and preference tables named by ``config``.

        Raises:
            CatalogError: If either data file is missing or invalid.
        """
        store  = load_catalog(config.catalog.catalog_file)
        tables = load_preference_tables(config.catalog.preferences_file)
        return cls(store, tables, scoring=config.scoring, clock=clock)

    # ── Basic mode ────────────────────────────────────────────────────────────

    def recommend(self, context: RecommendationContext) -> list[RecommendationResult]:
        """Basic-mode recommendations over the core tier."""
        with _engine_operation("recommend"):
            entries = self.store.by_tier(CatalogTier.CORE)
            results = self._rank_basic(entries, context, self.basic_strategy)
        log.debug(
            "recommend: mood=%s scenario=%s -> %d result(s)",
            context.mood, context.scenario, len(results),
            extra={"operation": "recommend", "results": len(results)},
        )
        return results

    def extended_recommend(self, context: RecommendationContext) -> list[RecommendationResult]:
        """Basic-mode recommendations over the whole catalog."""
        with _engine_operation("extended_recommend"):
            results = self._rank_basic(self.store.all(), context, self.extended_strategy)
        log.debug(
            "extended_recommend: mood=%s -> %d result(s)", context.mood, len(results),
            extra={"operation": "extended_recommend", "results": len(results)},
        )
        return results

    def quick_mood_recommendation(self, mood: Mood) -> Optional[RecommendationResult]:
        """Return the single best basic-mode match for ``mood``, or ``None``."""
        results = self.recommend(RecommendationContext(mood=mood, max_recommendations=1))
        return results[0] if results else None

    def _rank_basic(
        self,
        entries:  list,
        context:  RecommendationContext,
        strategy: ScoringStrategy,
    ) -> list[RecommendationResult]:
        scored = score_entries_basic(entries, context, self.tables, strategy)
        return rank(scored, context.max_recommendations, strategy)

    # ── Intelligent mode ──────────────────────────────────────────────────────

    def intelligent_recommend(
        self,
        profile:             PersonalProfile,
        energy_state:        Optional[EnergyState3D] = None,
        mood:                Optional[Mood] = None,
        max_recommendations: Optional[int] = None,
    ) -> list[RecommendationResult]:
        """Intelligent-mode recommendations over the whole catalog.

        Args:
            profile:             Parsed personal profile.
            energy_state:        Current energy state; estimated from the
                                 engine clock and ``profile`` when omitted.
            mood:                Optional current mood.
            max_recommendations: Result cap; ``None`` = configured default.

        Returns:
            Ranked results, best first.
        """
        with _engine_operation("intelligent_recommend"):
            if energy_state is None:
                energy_state = current_energy_state(self.clock, profile)
            needs = derive_needs(energy_state, mood)
            scored = score_entries_intelligent(
                self.store.all(),
                profile,
                energy_state,
                needs,
                self.tables,
                mood=mood,
                strategy=self.intelligent_strategy,
            )
            results = rank(scored, max_recommendations, self.intelligent_strategy)
        log.debug(
            "intelligent_recommend: type=%r mood=%s needs=%s urgency=%s -> %d result(s)",
            profile.personality_type, mood, ",".join(needs.needs), needs.urgency,
            len(results),
            extra={"operation": "intelligent_recommend", "results": len(results)},
        )
        return results

    # ── Category browse ───────────────────────────────────────────────────────

    def recommend_by_category(
        self, category: str, max_recommendations: int = 3
    ) -> list[RecommendationResult]:
        """Extended-tier entries of ``category`` ranked by ``base_score``.

        Ties keep catalog order.  Core entries are never browsed here; a
        category with no extended entries yields an empty list.
        """
        with _engine_operation("recommend_by_category"):
            if max_recommendations <= 0:
                return []
            entries = sorted(
                (e for e in self.store.by_category(category) if e.tier == CatalogTier.EXTENDED),
                key=lambda e: -e.base_score,
            )
            reason = f"Selected for the {category.replace('_', ' ')} category"
            return [
                RecommendationResult(
                    entry_id=e.id,
                    name=e.name,
                    match_score=e.base_score,
                    reasons=(reason,),
                    confidence=BASIC.confidence(e.base_score, e.evidence_level, False),
                    usage=e.usage,
                    evidence_level=e.evidence_level,
                )
                for e in entries[:max_recommendations]
            ]
