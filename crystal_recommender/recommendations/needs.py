"""
Energy-needs analysis for intelligent recommendations.

``derive_needs(energy_state, mood)`` turns the 3-axis energy state and the
optional mood into an ordered, de-duplicated tuple of need tokens, plus a
primary need and an urgency level.

Axis rules
----------
    physical  < 40 → physical_boost       physical > 80 → grounding
    mental    < 40 → mental_clarity       mental   > 80 → calming
    spiritual < 40 → spiritual_connection
    balance   < 50 → energy_balance

Mood rules
----------
``MOOD_NEEDS`` appends three tokens per mood (e.g. stressed →
stress_relief, calming, grounding).

Need matching
-------------
A need matches an effect phrase when any keyword in ``NEED_EFFECT_KEYWORDS``
for that need is a substring of the lower-cased phrase.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from crystal_recommender.models.energy import EnergyState3D
from crystal_recommender.taxonomy.crystal_taxonomy import ACUTE_MOODS, Mood, Urgency

LOW_AXIS_THRESHOLD  = 40
HIGH_AXIS_THRESHOLD = 80
LOW_BALANCE_THRESHOLD    = 50
URGENT_BALANCE_THRESHOLD = 30
URGENT_PHYSICAL_THRESHOLD = 25

MOOD_NEEDS: dict[Mood, tuple[str, ...]] = {
    Mood.STRESSED: ("stress_relief", "calming", "grounding"),
    Mood.ANXIOUS:  ("anxiety_relief", "peace", "emotional_stability"),
    Mood.SAD:      ("emotional_healing", "comfort", "heart_opening"),
    Mood.TIRED:    ("energy_boost", "vitality", "physical_support"),
    Mood.EXCITED:  ("grounding", "balance", "focus"),
    Mood.HAPPY:    ("amplification", "joy_enhancement", "gratitude"),
    Mood.GRATEFUL: ("heart_opening", "spiritual_connection", "love_energy"),
    Mood.NEUTRAL:  ("general_balance", "clarity", "awareness"),
}

MOOD_CONTEXT: dict[Mood, str] = {
    Mood.STRESSED: "stress relief",
    Mood.ANXIOUS:  "anxiety soothing",
    Mood.SAD:      "emotional healing",
    Mood.TIRED:    "energy lift",
    Mood.EXCITED:  "energy balance",
    Mood.HAPPY:    "positive energy",
    Mood.GRATEFUL: "heart connection",
    Mood.NEUTRAL:  "overall balance",
}

# Moods that replace the default "balance" primary need.
_MOOD_PRIMARY_NEED: dict[Mood, str] = {
    Mood.STRESSED: "stress_relief",
    Mood.ANXIOUS:  "anxiety_relief",
    Mood.SAD:      "emotional_healing",
}

NEED_EFFECT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "physical_boost":       ("vitality", "energy", "stamina", "revitalis"),
    "mental_clarity":       ("clarity", "focus", "clear", "mental"),
    "energy_balance":       ("balance", "harmon", "stabil"),
    "stress_relief":        ("calm", "relief", "relax", "sooth"),
    "anxiety_relief":       ("calm", "sooth", "stabil", "tranquil"),
    "emotional_healing":    ("healing", "heal", "emotional", "heart"),
    "energy_boost":         ("vitality", "energy", "boost", "activat"),
    "grounding":            ("ground", "stabil", "root", "balance"),
    "calming":              ("calm", "sooth", "tranquil", "peace"),
    "peace":                ("peace", "tranquil", "serene", "calm"),
    "emotional_stability":  ("stabil", "balance", "regulat", "harmon"),
    "comfort":              ("comfort", "warm", "support", "gentle"),
    "heart_opening":        ("heart", "love", "open", "connect"),
    "vitality":             ("vitality", "life force", "vigour", "energy"),
    "physical_support":     ("body", "stamina", "health", "recover"),
    "balance":              ("balance", "harmon", "regulat", "stabil"),
    "focus":                ("focus", "concentrat", "clarity", "clear"),
    "amplification":        ("amplif", "enhanc", "boost", "strength"),
    "joy_enhancement":      ("joy", "happ", "delight", "cheer"),
    "gratitude":            ("gratitude", "thank", "cherish", "apprecia"),
    "spiritual_connection": ("spiritual", "spirit", "connect", "awaken"),
    "love_energy":          ("love", "compassion", "warm", "care"),
    "general_balance":      ("balance", "harmon", "whole", "overall"),
    "clarity":              ("clarity", "clear", "transparen", "lucid"),
    "awareness":            ("aware", "conscious", "percept", "intuition"),
}

CALMING_KEYWORDS: tuple[str, ...] = ("calm", "sooth", "relax", "relief", "peace", "tranquil")


@dataclass(frozen=True)
class EnergyNeeds:
    """Needs inferred from one energy state and mood.

    Attributes:
        needs:        Ordered, de-duplicated need tokens (axis needs first).
        axis_needs:   Need tokens derived from the energy axes only.
        primary_need: Single dominant need (drives usage advice).
        urgency:      How pressing the needs are.
        mood_context: Short label for the mood, or ``""`` when no mood.
    """

    needs:        tuple[str, ...]
    axis_needs:   tuple[str, ...]
    primary_need: str
    urgency:      Urgency
    mood_context: str


def derive_needs(energy_state: EnergyState3D, mood: Optional[Mood] = None) -> EnergyNeeds:
    """Infer need tokens, primary need and urgency.

    Args:
        energy_state: Current 3-axis energy state.
        mood:         Optional current mood.

    Returns:
        ``EnergyNeeds``.  Never raises.
    """
    axis_needs: list[str] = []
    primary_need = "balance"
    urgency = Urgency.MEDIUM

    if energy_state.physical < LOW_AXIS_THRESHOLD:
        axis_needs.append("physical_boost")
        if energy_state.physical < URGENT_PHYSICAL_THRESHOLD:
            urgency = Urgency.HIGH
    elif energy_state.physical > HIGH_AXIS_THRESHOLD:
        axis_needs.append("grounding")

    if energy_state.mental < LOW_AXIS_THRESHOLD:
        axis_needs.append("mental_clarity")
        primary_need = "focus"
    elif energy_state.mental > HIGH_AXIS_THRESHOLD:
        axis_needs.append("calming")
        primary_need = "peace"

    if energy_state.spiritual < LOW_AXIS_THRESHOLD:
        axis_needs.append("spiritual_connection")

    if energy_state.balance < LOW_BALANCE_THRESHOLD:
        axis_needs.append("energy_balance")
        if energy_state.balance < URGENT_BALANCE_THRESHOLD:
            primary_need = "urgent_balance"
            urgency = Urgency.HIGH

    mood_needs: tuple[str, ...] = ()
    mood_context = ""
    if mood is not None:
        mood_needs = MOOD_NEEDS.get(mood, ())
        mood_context = MOOD_CONTEXT.get(mood, "general support")
        if primary_need == "balance" and mood in _MOOD_PRIMARY_NEED:
            primary_need = _MOOD_PRIMARY_NEED[mood]
        if mood == Mood.EXCITED and energy_state.balance < 60:
            primary_need = "grounding"
        if mood == Mood.TIRED and energy_state.physical < 50:
            urgency = Urgency.HIGH
        if mood in ACUTE_MOODS:
            urgency = Urgency.HIGH

    needs = tuple(dict.fromkeys([*axis_needs, *mood_needs]))
    if not needs:
        urgency = Urgency.LOW

    return EnergyNeeds(
        needs=needs,
        axis_needs=tuple(axis_needs),
        primary_need=primary_need,
        urgency=urgency,
        mood_context=mood_context,
    )


def need_matches_effect(need: str, effect: str) -> bool:
    """Return True if ``effect`` contains any keyword registered for ``need``."""
    text = effect.lower()
    return any(k in text for k in NEED_EFFECT_KEYWORDS.get(need, ()))


def is_calming_effect(effect: str) -> bool:
    text = effect.lower()
    return any(k in text for k in CALMING_KEYWORDS)
