"""
Recommendation ranker: converts ScoredEntry objects into ranked, labelled
RecommendationResult records.

Usage flow
----------
1. score_entries_basic(...) / score_entries_intelligent(...)
   -> list[ScoredEntry]  (one per catalog entry, catalog order)

2. rank(scored, max_recommendations, strategy)
   -> list[RecommendationResult]  (score descending, truncated, labelled)

Ordering
--------
Score descending.  ``sorted`` is stable, so equal scores keep catalog
order.  Zero-score entries are kept and simply rank last.
"""

from __future__ import annotations

from typing import Optional

from crystal_recommender.models.recommendation import RecommendationResult
from crystal_recommender.recommendations.scorer import ScoredEntry
from crystal_recommender.recommendations.strategy import ScoringStrategy


def sort_scored(scored: list[ScoredEntry]) -> list[ScoredEntry]:
    """Return ``scored`` ordered by score descending, ties in input order."""
    return sorted(scored, key=lambda s: -s.score)


def to_result(item: ScoredEntry, strategy: ScoringStrategy) -> RecommendationResult:
    """Build the output record for one scored entry, assigning confidence."""
    entry = item.entry
    return RecommendationResult(
        entry_id=entry.id,
        name=entry.name,
        match_score=item.score,
        reasons=item.breakdown.reasons,
        confidence=strategy.confidence(
            item.score, entry.evidence_level, item.breakdown.mood_matched
        ),
        usage=item.usage,
        evidence_level=entry.evidence_level,
    )


def rank(
    scored:              list[ScoredEntry],
    max_recommendations: Optional[int],
    strategy:            ScoringStrategy,
) -> list[RecommendationResult]:
    """Sort, truncate and label scored entries.

    Args:
        scored:              Output of a ``score_entries_*`` helper.
        max_recommendations: Result cap; ``None`` uses ``strategy.default_max``.
                             0 yields an empty list; a cap larger than
                             ``scored`` yields every entry.
        strategy:            Supplies the confidence rule and default cap.

    Returns:
        List of ``RecommendationResult``, best first.
    """
    limit = strategy.default_max if max_recommendations is None else max_recommendations
    if limit <= 0:
        return []
    return [to_result(item, strategy) for item in sort_scored(scored)[:limit]]
