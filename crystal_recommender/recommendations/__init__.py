"""
Recommendation engine: scores catalog entries against a caller context and
returns ranked, annotated recommendations.

Modules
-------
needs    : EnergyNeeds + derive_needs() - need tokens, primary need, urgency.
strategy : ScoringStrategy value object + BASIC / INTELLIGENT presets.
scorer   : ScoreBreakdown / ScoredEntry + score_basic() + score_intelligent().
ranker   : rank() - stable sort, truncation, confidence labels.
usage    : compose_usage() - contextual usage advice.
engine   : RecommendationEngine - the public recommendation operations.
"""
