"""
Tests for crystal_recommender/profile/parser.py.

What we test
------------
parse_profile():
  - No input -> empty type, every chakra unknown, adaptive / explorer, level 3.
  - Chakra scores parsed from "<chakra>: <n>" style prose; aliases and
    case-insensitivity; values clamp to [0, 100]; unscored chakras -> None.
  - Emotional pattern and archetype keyword rules (first match wins).
  - Preferred energy level from personality letters.

parse_profile_input():
  - Structured chakra scores and archetype override prose.
"""

from __future__ import annotations

import pytest

from crystal_recommender.models.profile import ProfileInput
from crystal_recommender.profile.parser import (
    extract_emotional_pattern,
    extract_energy_archetype,
    infer_preferred_energy_level,
    parse_chakra_scores,
    parse_profile,
    parse_profile_input,
)
from crystal_recommender.taxonomy.crystal_taxonomy import (
    Chakra,
    EmotionalPattern,
    EnergyArchetype,
)


class TestParseProfile:
    def test_no_input_defaults(self):
        profile = parse_profile()
        assert profile.personality_type == ""
        assert set(profile.chakra_balance) == set(Chakra)
        assert all(v is None for v in profile.chakra_balance.values())
        assert profile.emotional_pattern == EmotionalPattern.ADAPTIVE
        assert profile.energy_archetype == EnergyArchetype.EXPLORER
        assert profile.preferred_energy_level == 3

    def test_full_input(self):
        profile = parse_profile(
            "INFJ",
            "Root chakra: 35, heart = 72%, third eye 40",
            "A sensitive healer at heart.",
        )
        assert profile.personality_type == "INFJ"
        assert profile.chakra_balance[Chakra.ROOT] == 35
        assert profile.chakra_balance[Chakra.HEART] == 72
        assert profile.chakra_balance[Chakra.THIRD_EYE] == 40
        assert profile.chakra_balance[Chakra.CROWN] is None
        assert profile.emotional_pattern == EmotionalPattern.SENSITIVE
        assert profile.energy_archetype == EnergyArchetype.HEALER
        assert profile.preferred_energy_level == 2

    def test_personality_type_stripped(self):
        assert parse_profile("  ENTP ").personality_type == "ENTP"

    def test_deterministic(self):
        assert parse_profile(None, "no numbers here") == parse_profile(None, "no numbers here")


class TestParseChakraScores:
    def test_aliases(self):
        scores = parse_chakra_scores("Solar plexus: 55; brow is 20; base at 61")
        assert scores[Chakra.SOLAR_PLEXUS] == 55
        assert scores[Chakra.THIRD_EYE] == 20
        assert scores[Chakra.ROOT] == 61

    def test_clamps_to_range(self):
        assert parse_chakra_scores("crown: 150")[Chakra.CROWN] == 100

    def test_negative_clamps_to_zero(self):
        assert parse_chakra_scores("throat: -10")[Chakra.THROAT] == 0

    def test_reads_whole_number(self):
        scores = parse_chakra_scores("crown 0050, heart 2026, sacral 12abc")
        assert scores[Chakra.CROWN] == 50
        assert scores[Chakra.HEART] == 100
        assert scores[Chakra.SACRAL] is None

    def test_decimal_value(self):
        assert parse_chakra_scores("throat: 42.7")[Chakra.THROAT] == 43

    def test_empty_narrative_all_unknown(self):
        assert all(v is None for v in parse_chakra_scores("").values())


class TestKeywordRules:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Deeply empathic and emotionally rich", EmotionalPattern.SENSITIVE),
            ("Driven by logic", EmotionalPattern.RATIONAL),
            ("Calm, steady presence", EmotionalPattern.BALANCED),
            ("", EmotionalPattern.ADAPTIVE),
        ],
    )
    def test_emotional_pattern(self, text, expected):
        assert extract_emotional_pattern(text) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("A natural LEADER", EnergyArchetype.LEADER),
            ("Artistic and creative", EnergyArchetype.CREATOR),
            ("Loves helping others", EnergyArchetype.HEALER),
            ("Seeks wisdom", EnergyArchetype.SAGE),
            ("Curious wanderer", EnergyArchetype.EXPLORER),
        ],
    )
    def test_energy_archetype(self, text, expected):
        assert extract_energy_archetype(text) == expected

    @pytest.mark.parametrize(
        "mbti,expected",
        [("ESTP", 4), ("INFP", 2), ("ENFP", 3), ("ISTJ", 2), ("", 3), ("XXXX", 3)],
    )
    def test_preferred_energy_level(self, mbti, expected):
        assert infer_preferred_energy_level(mbti) == expected


class TestParseProfileInput:
    def test_structured_values_win(self):
        profile = parse_profile_input(
            ProfileInput(
                chakra_narrative="heart: 70, root: 30",
                insight_narrative="a natural leader",
                chakra_scores={Chakra.HEART: 20},
                energy_archetype=EnergyArchetype.SAGE,
            )
        )
        assert profile.chakra_balance[Chakra.HEART] == 20
        assert profile.chakra_balance[Chakra.ROOT] == 30
        assert profile.energy_archetype == EnergyArchetype.SAGE
