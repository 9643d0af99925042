"""
Tests for crystal_recommender/recommendations/engine.py.

What we test
------------
recommend():
  - End-to-end: {mood: tired, energy_level: 4}, max 2, over citrine and
    black_obsidian -> citrine first, black_obsidian second with score 0.
  - Scores only the core tier; default cap 3; max 0 -> []; large max -> all.
  - Deterministic: identical input -> identical output.
  - Scores are in [0, 100] and reasons are never empty.

extended_recommend():
  - Scores the whole catalog; default cap 5.

intelligent_recommend():
  - Default cap 4, whole catalog.
  - Missing energy state -> estimated from the engine clock.
  - Acute mood gives calming entries the urgency reason.

quick_mood_recommendation() / recommend_by_category():
  - Top basic result for a mood.
  - base_score ranking of extended entries within a category; core
    entries skipped; unknown category -> [].

Failure policy:
  - Unexpected exceptions become EngineError with the cause chained.
"""

from __future__ import annotations

import pytest

from crystal_recommender.catalog.store import CatalogStore
from crystal_recommender.config import ScoringConfig
from crystal_recommender.energy.estimator import estimate_energy_state
from crystal_recommender.errors import CatalogError, EngineError
from crystal_recommender.models.profile import PersonalProfile
from crystal_recommender.models.recommendation import RecommendationContext
from crystal_recommender.recommendations import engine as engine_module
from crystal_recommender.recommendations.engine import RecommendationEngine
from crystal_recommender.taxonomy.crystal_taxonomy import CatalogTier, Confidence, Mood


class TestRecommend:
    def test_end_to_end_citrine_first(self, catalog, tables):
        store = CatalogStore([catalog.by_id("citrine"), catalog.by_id("black_obsidian")])
        eng = RecommendationEngine(store, tables)

        results = eng.recommend(
            RecommendationContext(mood=Mood.TIRED, energy_level=4, max_recommendations=2)
        )

        assert [r.entry_id for r in results] == ["citrine", "black_obsidian"]
        assert results[0].match_score == 100
        assert results[0].confidence == Confidence.HIGH
        assert results[1].match_score == 0
        assert results[1].reasons

    def test_core_tier_only(self, engine, catalog):
        core_ids = {e.id for e in catalog.by_tier(CatalogTier.CORE)}
        results = engine.recommend(RecommendationContext(max_recommendations=100))
        assert {r.entry_id for r in results} == core_ids
        assert len(results) == 6

    def test_default_cap(self, engine):
        assert len(engine.recommend(RecommendationContext(mood=Mood.STRESSED))) == 3

    def test_zero_max(self, engine):
        assert engine.recommend(RecommendationContext(mood=Mood.SAD, max_recommendations=0)) == []

    def test_no_fields_ranks_by_base_score(self, engine):
        results = engine.recommend(RecommendationContext(max_recommendations=3))
        assert [r.entry_id for r in results] == ["rose_quartz", "amethyst", "citrine"]

    def test_deterministic(self, engine):
        ctx = RecommendationContext(
            mood=Mood.ANXIOUS, energy_level=2, personality_type="INFP", max_recommendations=6
        )
        assert engine.recommend(ctx) == engine.recommend(ctx)

    def test_sorted_and_bounded(self, engine):
        for mood in Mood:
            results = engine.recommend(RecommendationContext(mood=mood, max_recommendations=6))
            scores = [r.match_score for r in results]
            assert scores == sorted(scores, reverse=True)
            assert all(0 <= s <= 100 for s in scores)
            assert all(r.reasons for r in results)

    def test_configured_default_cap(self, catalog, tables):
        eng = RecommendationEngine(
            catalog, tables, scoring=ScoringConfig(basic_max_recommendations=1)
        )
        assert len(eng.recommend(RecommendationContext(mood=Mood.HAPPY))) == 1


class TestExtendedRecommend:
    def test_default_cap_and_full_catalog(self, engine, catalog):
        assert len(engine.extended_recommend(RecommendationContext(mood=Mood.TIRED))) == 5
        everything = engine.extended_recommend(RecommendationContext(max_recommendations=1000))
        assert len(everything) == len(catalog)

    def test_extended_entries_can_rank(self, engine):
        results = engine.extended_recommend(
            RecommendationContext(mood=Mood.ANXIOUS, energy_level=1, max_recommendations=18)
        )
        top_ids = {r.entry_id for r in results if r.match_score == 100}
        assert "lepidolite" in top_ids
        assert "rose_quartz" in top_ids


class TestIntelligentRecommend:
    def test_default_cap(self, engine, neutral_state):
        results = engine.intelligent_recommend(PersonalProfile(), neutral_state)
        assert len(results) == 4

    def test_estimates_state_from_clock(self, engine, fixed_moment):
        profile = PersonalProfile(personality_type="INFJ")
        implicit = engine.intelligent_recommend(profile, max_recommendations=18)
        explicit = engine.intelligent_recommend(
            profile, estimate_energy_state(fixed_moment, profile), max_recommendations=18
        )
        assert implicit == explicit

    def test_acute_mood_urgency_reason(self, engine, neutral_state):
        results = engine.intelligent_recommend(
            PersonalProfile(), neutral_state, mood=Mood.ANXIOUS, max_recommendations=18
        )
        lepidolite = next(r for r in results if r.entry_id == "lepidolite")
        assert any("acute" in reason for reason in lepidolite.reasons)
        assert lepidolite.confidence == Confidence.HIGH

    def test_mood_match_ranks_above_non_match(self, engine, neutral_state):
        results = engine.intelligent_recommend(
            PersonalProfile(), neutral_state, mood=Mood.STRESSED, max_recommendations=18
        )
        by_id = {r.entry_id: r.match_score for r in results}
        assert by_id["amethyst"] > by_id["citrine"]


class TestConvenienceOperations:
    def test_quick_mood_recommendation(self, engine):
        result = engine.quick_mood_recommendation(Mood.STRESSED)
        assert result is not None
        assert result.entry_id == "amethyst"

    def test_recommend_by_category(self, engine):
        results = engine.recommend_by_category("calming")
        assert [r.entry_id for r in results] == ["lepidolite", "howlite"]
        assert [r.match_score for r in results] == [80, 72]
        assert "calming" in results[0].reasons[0]

    def test_recommend_by_category_cap_and_unknown(self, engine):
        assert len(engine.recommend_by_category("vitality", max_recommendations=2)) == 2
        assert engine.recommend_by_category("no_such_category") == []
        assert engine.recommend_by_category("calming", max_recommendations=0) == []

    def test_recommend_by_category_skips_core_tier(self, engine, catalog):
        assert catalog.by_id("green_aventurine").category == "abundance"
        assert engine.recommend_by_category("abundance") == []
        assert "amethyst" not in {r.entry_id for r in engine.recommend_by_category("calming")}


class TestFailurePolicy:
    def test_unexpected_error_wrapped(self, engine, monkeypatch):
        def _boom(*args, **kwargs):
            raise ValueError("corrupt weights")

        monkeypatch.setattr(engine_module, "score_entries_basic", _boom)

        with pytest.raises(EngineError) as excinfo:
            engine.recommend(RecommendationContext(mood=Mood.SAD))

        assert excinfo.value.operation == "recommend"
        assert isinstance(excinfo.value.__cause__, ValueError)
        assert "corrupt weights" in str(excinfo.value)

    def test_recommender_errors_pass_through(self, engine, monkeypatch):
        def _boom(*args, **kwargs):
            raise CatalogError("bad data")

        monkeypatch.setattr(engine_module, "score_entries_intelligent", _boom)

        with pytest.raises(CatalogError):
            engine.intelligent_recommend(PersonalProfile())
