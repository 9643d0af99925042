"""
Usage advice: base usage template + contextual clauses.

``compose_usage`` appends, in order:
  1. a time-of-day clause (morning and evening only),
  2. one clause for the scenario (basic mode) or primary need
     (intelligent mode),
  3. an introvert / extravert clause when a personality type is given.

Every clause is a plain table lookup; unknown keys add nothing.
"""

from __future__ import annotations

from typing import Optional

from crystal_recommender.taxonomy.crystal_taxonomy import TimeBucket

TIME_CLAUSES: dict[TimeBucket, str] = {
    TimeBucket.MORNING: "Best used during a morning meditation.",
    TimeBucket.EVENING: "Ideal for unwinding in the evening.",
}

FOCUS_CLAUSES: dict[str, str] = {
    "meditation": "Hold it in your hands or set it in front of you while meditating.",
    "daily":      "Carry it with you or keep it in your workspace.",
    "healing":    "Rest it where you need support during slow, quiet breathing.",
    "protection": "Keep it on your person or near the entrance of your home.",
    "focus":      "Keep it in your workspace to help you concentrate.",
    "peace":      "Hold it before sleep or tuck it under your pillow.",
}

PERSONALITY_CLAUSES: tuple[tuple[str, str], ...] = (
    ("I", "Use it in a quiet personal space."),
    ("E", "Wear it in social settings to keep your energy up."),
)


def compose_usage(
    template: str,
    time_bucket: Optional[TimeBucket] = None,
    focus: Optional[str] = None,
    personality_type: str = "",
) -> str:
    """Build a contextualised usage instruction.

    Args:
        template:         The entry's base usage string.
        time_bucket:      Current part of the day.
        focus:            Scenario name or primary need token.
        personality_type: Personality letters; first of I / E that appears
                          selects a clause.

    Returns:
        ``template`` unchanged when no clause applies, otherwise
        ``"<template>. <clause> <clause>"``.
    """
    clauses: list[str] = []

    if time_bucket is not None and time_bucket in TIME_CLAUSES:
        clauses.append(TIME_CLAUSES[time_bucket])

    if focus and focus in FOCUS_CLAUSES:
        clauses.append(FOCUS_CLAUSES[focus])

    for letter, clause in PERSONALITY_CLAUSES:
        if letter in personality_type:
            clauses.append(clause)
            break

    if not clauses:
        return template
    return f"{template.rstrip('. ')}. {' '.join(clauses)}"
