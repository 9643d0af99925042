"""
Profile parser: upstream free text → ``PersonalProfile``.

The upstream provider supplies three optional prose fields (personality
type, chakra analysis, energy insight).  Parsing is a best-effort adapter:
every branch has a documented default and the parser never raises.

Chakra scores
-------------
Scores are read from ``"<chakra>: <number>"`` style fragments, e.g.
``"Root chakra: 35, heart = 72%, third eye 40"``.  A chakra the narrative
does not score is left as ``None`` (unknown).  Values clamp to [0, 100],
so ``"throat: -10"`` reads as 0 and ``"crown 250"`` as 100.

Keyword rules (first match wins, case-insensitive)
--------------------------------------------------
emotional_pattern:
    emotionally rich / sensitiv / empath → sensitive
    logic / rational / reason            → rational
    balance / stable / steady            → balanced
    otherwise                            → adaptive

energy_archetype:
    leader / dominant / command      → leader
    creat / artist                   → creator
    heal / helping / helper / nurtur → healer
    wisdom / wise / scholar / sage   → sage
    otherwise                        → explorer

preferred_energy_level (personality letters):
    E and S → 4;  I and N → 2;  E → 3;  I → 2;  otherwise 3.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from crystal_recommender.models.profile import (
    UNKNOWN_CHAKRA_SCORE,
    PersonalProfile,
    ProfileInput,
)
from crystal_recommender.taxonomy.crystal_taxonomy import (
    Chakra,
    EmotionalPattern,
    EnergyArchetype,
)

log = logging.getLogger(__name__)

# ── Vocabulary tables ─────────────────────────────────────────────────────────

_EMOTIONAL_PATTERN_KEYWORDS: tuple[tuple[EmotionalPattern, tuple[str, ...]], ...] = (
    (EmotionalPattern.SENSITIVE, ("emotionally rich", "rich emotion", "sensitiv", "empath")),
    (EmotionalPattern.RATIONAL,  ("logic", "rational", "reason")),
    (EmotionalPattern.BALANCED,  ("balance", "stable", "stability", "steady")),
)

_ARCHETYPE_KEYWORDS: tuple[tuple[EnergyArchetype, tuple[str, ...]], ...] = (
    (EnergyArchetype.LEADER,  ("leader", "leadership", "dominant", "command")),
    (EnergyArchetype.CREATOR, ("creat", "artist", "artistic")),
    (EnergyArchetype.HEALER,  ("heal", "helping", "helper", "nurtur")),
    (EnergyArchetype.SAGE,    ("wisdom", "wise", "scholar", "sage")),
)

_CHAKRA_ALIASES: dict[Chakra, tuple[str, ...]] = {
    Chakra.ROOT:         ("root", "base"),
    Chakra.SACRAL:       ("sacral",),
    Chakra.SOLAR_PLEXUS: ("solar plexus", "solar_plexus", "solar-plexus", "solar"),
    Chakra.HEART:        ("heart",),
    Chakra.THROAT:       ("throat",),
    Chakra.THIRD_EYE:    ("third eye", "third_eye", "third-eye", "brow"),
    Chakra.CROWN:        ("crown",),
}

_CHAKRA_SCORE_RE = {
    chakra: re.compile(
        r"\b(?:" + "|".join(re.escape(a) for a in aliases) + r")\b"
        r"(?:\s+chakra)?\s*(?:[:=]|\bis\b|\bat\b)?\s*(-?\d+(?:\.\d+)?)\b",
        re.IGNORECASE,
    )
    for chakra, aliases in _CHAKRA_ALIASES.items()
}


# ── Public API ────────────────────────────────────────────────────────────────

def parse_profile(
    personality_type: Optional[str] = None,
    chakra_narrative: Optional[str] = None,
    insight_narrative: Optional[str] = None,
) -> PersonalProfile:
    """Derive a ``PersonalProfile`` from three optional free-text fields.

    Args:
        personality_type:  Personality letters, e.g. ``"ENFP"``.
        chakra_narrative:  Free-text chakra analysis.
        insight_narrative: Free-text energy / personality insight.

    Returns:
        A fully populated ``PersonalProfile``.  Never raises.
    """
    return parse_profile_input(
        ProfileInput(
            personality_type=personality_type,
            chakra_narrative=chakra_narrative,
            insight_narrative=insight_narrative,
        )
    )


def parse_profile_input(payload: ProfileInput) -> PersonalProfile:
    """Derive a ``PersonalProfile`` from a structured ``ProfileInput``.

    Structured ``chakra_scores`` and ``energy_archetype`` override values
    parsed from the prose fields.
    """
    mbti = (payload.personality_type or "").strip()
    insights = payload.insight_narrative or ""

    chakra_balance = parse_chakra_scores(payload.chakra_narrative or "")
    if payload.chakra_scores:
        chakra_balance.update(payload.chakra_scores)

    archetype = payload.energy_archetype or extract_energy_archetype(insights)

    profile = PersonalProfile(
        personality_type=mbti,
        chakra_balance=chakra_balance,
        emotional_pattern=extract_emotional_pattern(insights),
        energy_archetype=archetype,
        preferred_energy_level=infer_preferred_energy_level(mbti),
    )
    log.debug(
        "Parsed profile: type=%r pattern=%s archetype=%s level=%d known_chakras=%d",
        profile.personality_type,
        profile.emotional_pattern,
        profile.energy_archetype,
        profile.preferred_energy_level,
        len(profile.known_chakra_scores()),
    )
    return profile


def parse_chakra_scores(narrative: str) -> dict[Chakra, Optional[int]]:
    """Extract a score per chakra; unscored chakras map to ``None``."""
    scores: dict[Chakra, Optional[int]] = {}
    for chakra in Chakra:
        match = _CHAKRA_SCORE_RE[chakra].search(narrative) if narrative else None
        if match is None:
            scores[chakra] = UNKNOWN_CHAKRA_SCORE
            continue
        value = round(float(match.group(1)))
        scores[chakra] = max(0, min(100, value))
    return scores


def extract_emotional_pattern(insights: str) -> EmotionalPattern:
    text = insights.lower()
    for pattern, keywords in _EMOTIONAL_PATTERN_KEYWORDS:
        if any(k in text for k in keywords):
            return pattern
    return EmotionalPattern.ADAPTIVE


def extract_energy_archetype(insights: str) -> EnergyArchetype:
    text = insights.lower()
    for archetype, keywords in _ARCHETYPE_KEYWORDS:
        if any(k in text for k in keywords):
            return archetype
    return EnergyArchetype.EXPLORER


def infer_preferred_energy_level(personality_type: str) -> int:
    """Look up the preferred energy level from personality letters.

    Rules (evaluated in order; first match wins):
        1. E and S → 4
        2. I and N → 2
        3. E       → 3
        4. I       → 2
        5. default → 3
    """
    letters = personality_type
    if "E" in letters and "S" in letters:
        return 4
    if "I" in letters and "N" in letters:
        return 2
    if "E" in letters:
        return 3
    if "I" in letters:
        return 2
    return 3
