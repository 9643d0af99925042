"""
Scoring strategies: named weight presets + confidence-rule presets.

Both recommendation modes are one algorithm parameterised by a
``ScoringStrategy`` value object:

BASIC
    Weights apply only when the matching context field is supplied.  The
    score is ``points / applicable_points × 100``, i.e. a true percentage of
    the criteria that could apply.  With no applicable criteria the entry's
    ``base_score`` is returned unchanged.

        mood 40 | energy_level 25 | personality 20 | chakra 10 | scenario 5

    Confidence: high if score ≥ 80 and evidence is high; medium if
    score ≥ 60 and evidence is not low; otherwise low.

INTELLIGENT
    Fixed absolute points (not renormalised) plus an urgency bonus, then
    clamped to [0, 100].  Some factors are scaled down so they respect their
    share of the total:

        mood 30 | needs 25 | personality 20 | energy_level 15
        chakra 10 × 0.67 | time 10 × 0.5 | trend 10 × 0.5 | urgency +10

    Confidence: high if score > 80 or the mood factor fired; low if
    score < 50; otherwise medium.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field

from crystal_recommender.taxonomy.crystal_taxonomy import Confidence, EvidenceLevel

ConfidenceRule = Callable[[int, EvidenceLevel, bool], Confidence]


def basic_confidence(score: int, evidence: EvidenceLevel, mood_matched: bool = False) -> Confidence:
    """Evidence-aware confidence rule (``mood_matched`` is not consulted)."""
    if score >= 80 and evidence == EvidenceLevel.HIGH:
        return Confidence.HIGH
    if score >= 60 and evidence != EvidenceLevel.LOW:
        return Confidence.MEDIUM
    return Confidence.LOW


def intelligent_confidence(
    score: int, evidence: EvidenceLevel, mood_matched: bool = False
) -> Confidence:
    """Score-driven confidence rule (``evidence`` is not consulted)."""
    if score > 80 or mood_matched:
        return Confidence.HIGH
    if score < 50:
        return Confidence.LOW
    return Confidence.MEDIUM


@dataclass(frozen=True)
class ScoringStrategy:
    """A named scoring preset.

    Attributes:
        name:            Preset name (``"basic"`` or ``"intelligent"``).
        weights:         Factor name → full weight.
        scales:          Factor name → multiplier applied to the weight.
        normalize:       True = percentage of applicable points; False = clamped sum.
        confidence_rule: Maps (score, evidence, mood_matched) → Confidence.
        default_max:     Default result cap for this mode.
    """

    name:            str
    weights:         dict[str, int]
    confidence_rule: ConfidenceRule
    normalize:       bool
    default_max:     int
    scales:          dict[str, float] = field(default_factory=dict)

    def points(self, factor: str) -> int:
        """Points awarded when ``factor`` fires (weight × scale, rounded)."""
        return round_half_up(self.weights[factor] * self.scales.get(factor, 1.0))

    def total_points(self) -> int:
        """Points available when every factor fires."""
        return sum(self.points(factor) for factor in self.weights)

    def final_score(self, points: int, max_points: int, fallback: int) -> int:
        """Turn awarded points into a score in [0, 100].

        ``fallback`` is returned when no factor could apply.  Normalising
        strategies report ``points`` as a percentage of ``max_points``;
        the others clamp the absolute sum.
        """
        if max_points <= 0:
            return fallback
        if self.normalize:
            return _clamp(round_half_up(points / max_points * 100))
        return _clamp(points)

    def confidence(self, score: int, evidence: EvidenceLevel, mood_matched: bool) -> Confidence:
        return self.confidence_rule(score, evidence, mood_matched)


BASIC = ScoringStrategy(
    name="basic",
    weights={
        "mood":         40,
        "energy_level": 25,
        "personality":  20,
        "chakra":       10,
        "scenario":      5,
    },
    confidence_rule=basic_confidence,
    normalize=True,
    default_max=3,
)

INTELLIGENT = ScoringStrategy(
    name="intelligent",
    weights={
        "mood":         30,
        "needs":        25,
        "personality":  20,
        "energy_level": 15,
        "chakra":       10,
        "time":         10,
        "trend":        10,
        "urgency":      10,
    },
    scales={
        "chakra": 0.67,
        "time":   0.5,
        "trend":  0.5,
    },
    confidence_rule=intelligent_confidence,
    normalize=False,
    default_max=4,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def _clamp(value: int, lo: int = 0, hi: int = 100) -> int:
    return max(lo, min(hi, value))
