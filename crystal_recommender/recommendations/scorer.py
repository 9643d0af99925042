"""
Match scoring: converts a catalog entry + caller context into a bounded
match score with human-readable reasons.

Basic score (renormalised, 0–100)
---------------------------------
    points     = Σ weight(f)  for every supplied factor f that matched
                 (+ scenario bonus points, 0–5, when a scenario is supplied)
    max_points = Σ weight(f)  for every supplied factor f
    score      = round(points / max_points × 100)      (base_score if max_points == 0)

Intelligent score (absolute, clamped to 0–100)
----------------------------------------------
    mood match            +30   mood ∈ entry.emotions
    needs match           +25   any need keyword inside any effect phrase
    personality overlap   +20   any entry letter inside the personality type
    energy level          +15   preferred level ∈ entry.energy_levels
    chakra deficit         +7   lowest known chakra < 40 and == entry.chakra
    time affinity          +5   entry preferred for the time bucket
    trend affinity         +5   entry preferred for the energy trend
    urgency bonus         +10   acute mood and a calming effect phrase

Both scores go through ``ScoringStrategy.final_score``; the preset's
``normalize`` flag picks the percentage or the clamped sum.

Reasons
-------
One string per factor that fired, in evaluation order.  If nothing fired a
single generic reason is emitted, so ``reasons`` is never empty.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from crystal_recommender.catalog.store import PreferenceTables
from crystal_recommender.models.catalog import CatalogEntry
from crystal_recommender.models.energy import EnergyState3D
from crystal_recommender.models.profile import PersonalProfile
from crystal_recommender.models.recommendation import RecommendationContext
from crystal_recommender.recommendations.needs import (
    LOW_AXIS_THRESHOLD,
    EnergyNeeds,
    is_calming_effect,
    need_matches_effect,
)
from crystal_recommender.recommendations.strategy import (
    BASIC,
    INTELLIGENT,
    ScoringStrategy,
)
from crystal_recommender.recommendations.usage import compose_usage
from crystal_recommender.taxonomy.crystal_taxonomy import ACUTE_MOODS, Chakra, Mood

FALLBACK_REASON = "Recommended from an overall energy analysis"

MOOD_LABELS: dict[Mood, str] = {
    Mood.STRESSED: "stressed",
    Mood.ANXIOUS:  "anxious",
    Mood.SAD:      "low",
    Mood.TIRED:    "tired",
    Mood.NEUTRAL:  "calm",
    Mood.HAPPY:    "happy",
    Mood.EXCITED:  "excited",
    Mood.GRATEFUL: "grateful",
}

_MOOD_REASONS: dict[Mood, str] = {
    Mood.STRESSED: "Helps ease stress and tension",
    Mood.ANXIOUS:  "Quiets anxiety and brings inner calm",
    Mood.SAD:      "Lifts a low mood with positive energy",
    Mood.TIRED:    "Replenishes energy and restores vitality",
    Mood.HAPPY:    "Amplifies a positive, joyful state",
    Mood.GRATEFUL: "Deepens gratitude and loving energy",
}

# Checked in this order; the first letter present in both the context and
# the entry supplies the reason.
_PERSONALITY_REASONS: tuple[tuple[str, str], ...] = (
    ("I", "Suits introverts and supports deep reflection"),
    ("E", "Suits extraverts and strengthens self-expression"),
    ("N", "Suits intuitive types and sharpens insight"),
    ("S", "Suits sensing types and strengthens grounded awareness"),
    ("T", "Suits thinking types and supports clear reasoning"),
    ("F", "Suits feeling types and supports emotional healing"),
    ("J", "Suits judging types and supports structure"),
    ("P", "Suits perceiving types and supports openness"),
)

CHAKRA_LABELS: dict[Chakra, str] = {
    Chakra.ROOT:         "root",
    Chakra.SACRAL:       "sacral",
    Chakra.SOLAR_PLEXUS: "solar plexus",
    Chakra.HEART:        "heart",
    Chakra.THROAT:       "throat",
    Chakra.THIRD_EYE:    "third eye",
    Chakra.CROWN:        "crown",
}


@dataclass
class ScoreBreakdown:
    """Score, reasons and per-factor points for one entry.

    Attributes:
        score:        Final score in [0, 100].
        reasons:      Ordered reasons; never empty.
        factors:      Factor name → points awarded (fired factors only).
        mood_matched: True if the mood factor fired.
    """

    score:        int
    reasons:      tuple[str, ...]
    factors:      dict[str, int] = field(default_factory=dict)
    mood_matched: bool = False


@dataclass
class ScoredEntry:
    """A catalog entry coupled with its breakdown and usage advice.

    This is the ranker's input type.
    """

    entry:     CatalogEntry
    breakdown: ScoreBreakdown
    usage:     str

    @property
    def score(self) -> int:
        return self.breakdown.score


# ── Basic mode ────────────────────────────────────────────────────────────────

def score_basic(
    entry: CatalogEntry,
    context: RecommendationContext,
    tables: PreferenceTables,
    strategy: ScoringStrategy = BASIC,
) -> ScoreBreakdown:
    """Score one entry in renormalised (basic) mode.

    Args:
        entry:    Catalog entry to score.
        context:  Caller context; absent fields disable their factor.
        tables:   Preference tables (scenario bonus lookup).
        strategy: Weight preset (defaults to ``BASIC``).

    Returns:
        ``ScoreBreakdown`` with a score in [0, 100].
    """
    max_points = 0
    factors: dict[str, int] = {}
    reasons: list[str] = []
    mood_matched = False

    if context.mood is not None:
        max_points += strategy.weights["mood"]
        if context.mood in entry.emotions:
            factors["mood"] = strategy.weights["mood"]
            mood_matched = True
            reasons.append(_MOOD_REASONS.get(context.mood, "Suits your current mood"))

    energy_level = context.effective_energy_level
    if energy_level is not None:
        max_points += strategy.weights["energy_level"]
        if energy_level in entry.energy_levels:
            factors["energy_level"] = strategy.weights["energy_level"]
            reasons.append(_energy_level_reason(energy_level))

    personality_type = context.effective_personality_type
    if personality_type:
        max_points += strategy.weights["personality"]
        reason = _personality_reason(personality_type, entry)
        if reason is not None:
            factors["personality"] = strategy.weights["personality"]
            reasons.append(reason)

    if context.chakra is not None:
        max_points += strategy.weights["chakra"]
        if context.chakra == entry.chakra:
            factors["chakra"] = strategy.weights["chakra"]
            reasons.append(f"Aligned with the {CHAKRA_LABELS[entry.chakra]} chakra")

    if context.scenario is not None:
        max_points += strategy.weights["scenario"]
        bonus = min(tables.scenario_points(context.scenario, entry.id), strategy.weights["scenario"])
        if bonus > 0:
            factors["scenario"] = bonus
            reasons.append(f"Well suited to {context.scenario.value} practice")

    score = strategy.final_score(sum(factors.values()), max_points, entry.base_score)

    return ScoreBreakdown(
        score=score,
        reasons=tuple(reasons) or (FALLBACK_REASON,),
        factors=factors,
        mood_matched=mood_matched,
    )


def score_entries_basic(
    entries: Iterable[CatalogEntry],
    context: RecommendationContext,
    tables: PreferenceTables,
    strategy: ScoringStrategy = BASIC,
) -> list[ScoredEntry]:
    """Score every entry in basic mode and attach contextual usage advice."""
    time_bucket = context.effective_time_bucket
    focus = context.scenario.value if context.scenario is not None else None

    scored: list[ScoredEntry] = []
    for entry in entries:
        breakdown = score_basic(entry, context, tables, strategy)
        usage = compose_usage(entry.usage, time_bucket=time_bucket, focus=focus)
        scored.append(ScoredEntry(entry=entry, breakdown=breakdown, usage=usage))
    return scored


# ── Intelligent mode ──────────────────────────────────────────────────────────

def score_intelligent(
    entry: CatalogEntry,
    profile: PersonalProfile,
    energy_state: EnergyState3D,
    needs: EnergyNeeds,
    tables: PreferenceTables,
    mood: Optional[Mood] = None,
    strategy: ScoringStrategy = INTELLIGENT,
) -> ScoreBreakdown:
    """Score one entry in absolute (intelligent) mode.

    Args:
        entry:        Catalog entry to score.
        profile:      Parsed personal profile.
        energy_state: Current energy state.
        needs:        Needs derived from ``energy_state`` and ``mood``.
        tables:       Time / trend preference tables.
        mood:         Optional current mood.
        strategy:     Weight preset (defaults to ``INTELLIGENT``).

    Returns:
        ``ScoreBreakdown`` with a score clamped to [0, 100].
    """
    factors: dict[str, int] = {}
    reasons: list[str] = []
    mood_matched = False

    # 1. Mood
    if mood is not None and mood in entry.emotions:
        factors["mood"] = strategy.points("mood")
        mood_matched = True
        reasons.append(f"A strong match for feeling {MOOD_LABELS[mood]} today")

    # 2. Needs ↔ effects
    if needs.needs and any(
        need_matches_effect(need, effect)
        for need in needs.needs
        for effect in entry.effects
    ):
        factors["needs"] = strategy.points("needs")
        reasons.append(f"Supports your {needs.mood_context or 'current needs'}")

    # 3. Personality
    if profile.personality_type and any(
        tag in profile.personality_type for tag in entry.personality_tags
    ):
        factors["personality"] = strategy.points("personality")
        reasons.append(f"Closely matched to your {profile.personality_type} personality type")

    # 4. Preferred energy level
    if profile.preferred_energy_level in entry.energy_levels:
        factors["energy_level"] = strategy.points("energy_level")
        reasons.append("Suits your preferred energy level")

    # 5. Chakra deficit
    deficit = lowest_chakra(profile)
    if deficit is not None:
        chakra, value = deficit
        if value < LOW_AXIS_THRESHOLD and chakra == entry.chakra:
            factors["chakra"] = strategy.points("chakra")
            reasons.append(f"Helps rebalance your {CHAKRA_LABELS[chakra]} chakra")

    # 6. Time of day
    if tables.prefers_for_time(energy_state.time_bucket, entry.id):
        factors["time"] = strategy.points("time")
        reasons.append(f"Well suited to {energy_state.time_bucket.value} use")

    # 7. Energy trend
    if tables.prefers_for_trend(energy_state.trend, entry.id):
        factors["trend"] = strategy.points("trend")
        reasons.append(f"Suits your {energy_state.trend.value} energy trend")

    # Urgency bonus
    if mood in ACUTE_MOODS and any(is_calming_effect(e) for e in entry.effects):
        factors["urgency"] = strategy.points("urgency")
        reasons.append("Especially helpful for easing an acute emotional state")

    return ScoreBreakdown(
        score=strategy.final_score(
            sum(factors.values()), strategy.total_points(), entry.base_score
        ),
        reasons=tuple(reasons) or (FALLBACK_REASON,),
        factors=factors,
        mood_matched=mood_matched,
    )


def score_entries_intelligent(
    entries: Iterable[CatalogEntry],
    profile: PersonalProfile,
    energy_state: EnergyState3D,
    needs: EnergyNeeds,
    tables: PreferenceTables,
    mood: Optional[Mood] = None,
    strategy: ScoringStrategy = INTELLIGENT,
) -> list[ScoredEntry]:
    """Score every entry in intelligent mode and attach personalised usage advice."""
    scored: list[ScoredEntry] = []
    for entry in entries:
        breakdown = score_intelligent(
            entry, profile, energy_state, needs, tables, mood=mood, strategy=strategy
        )
        usage = compose_usage(
            entry.usage,
            time_bucket=energy_state.time_bucket,
            focus=needs.primary_need,
            personality_type=profile.personality_type,
        )
        scored.append(ScoredEntry(entry=entry, breakdown=breakdown, usage=usage))
    return scored


def lowest_chakra(profile: PersonalProfile) -> Optional[tuple[Chakra, int]]:
    """Return the most deficient known chakra and its score, or ``None``.

    Unknown (``None``) scores never take part.  Ties keep the first chakra
    in profile order.
    """
    known = profile.known_chakra_scores()
    if not known:
        return None
    return min(known.items(), key=lambda kv: kv[1])


# ── Helpers ───────────────────────────────────────────────────────────────────

def _energy_level_reason(level: int) -> str:
    if level <= 2:
        return "Suited to a low-energy state, offering steady support"
    if level >= 4:
        return "Suited to a high-energy state, focusing and amplifying it"
    return "Matches your current energy level and keeps it balanced"


def _personality_reason(personality_type: str, entry: CatalogEntry) -> Optional[str]:
    for letter, reason in _PERSONALITY_REASONS:
        if letter in personality_type and letter in entry.personality_tags:
            return reason
    return None
