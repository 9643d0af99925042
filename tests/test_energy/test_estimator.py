"""
Tests for crystal_recommender/energy/estimator.py.

What we test
------------
estimate_energy_state():
  - Hour-of-day deltas per bucket (morning, midday, mid-afternoon, evening,
    night).
  - Personality letter deltas.
  - Weekend adjustment (Sunday and Saturday).
  - Clamping to [10, 90]; balance is the mean of the clamped axes.
  - Trend and time bucket boundaries.
  - Pure: identical input -> identical output.

current_energy_state():
  - Reads the injected clock.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from crystal_recommender.energy.estimator import (
    current_energy_state,
    estimate_energy_state,
    hour_delta,
    time_bucket_for_hour,
    trend_for_hour,
)
from crystal_recommender.models.profile import PersonalProfile
from crystal_recommender.taxonomy.crystal_taxonomy import TimeBucket, Trend
from crystal_recommender.utils.time_utils import FixedClock

WEDNESDAY = datetime(2026, 10, 14)
SATURDAY  = datetime(2026, 10, 17)
SUNDAY    = datetime(2026, 10, 18)


def _at(day: datetime, hour: int) -> datetime:
    return day.replace(hour=hour)


class TestEstimateEnergyState:
    def test_weekday_morning_no_profile(self):
        state = estimate_energy_state(_at(WEDNESDAY, 8))
        assert (state.physical, state.mental, state.spiritual) == (70, 60, 50)
        assert state.balance == pytest.approx(60.0)
        assert state.trend == Trend.RISING
        assert state.time_bucket == TimeBucket.MORNING
        assert state.day_of_week == 3

    def test_weekday_mid_afternoon(self):
        state = estimate_energy_state(_at(WEDNESDAY, 15))
        assert (state.physical, state.mental, state.spiritual) == (45, 40, 50)
        assert state.trend == Trend.STABLE
        assert state.time_bucket == TimeBucket.AFTERNOON

    def test_saturday_night(self):
        state = estimate_energy_state(_at(SATURDAY, 2))
        # night (-20, -15, +10) then weekend (+5, -5, +10)
        assert (state.physical, state.mental, state.spiritual) == (35, 30, 70)
        assert state.time_bucket == TimeBucket.NIGHT
        assert state.day_of_week == 6
        assert state.is_weekend

    def test_personality_letters(self):
        profile = PersonalProfile(personality_type="ENTJ")
        state = estimate_energy_state(_at(WEDNESDAY, 12), profile)
        # midday (+10, +20, 0), E (+10, +5, 0), N (0, 0, +10)
        assert (state.physical, state.mental, state.spiritual) == (70, 75, 60)

    def test_clamped_to_ninety(self):
        profile = PersonalProfile(personality_type="ESTP")
        state = estimate_energy_state(_at(SUNDAY, 8), profile)
        # physical 50 + 20 + 10 (E) + 10 (S) + 5 (weekend) = 95 -> 90
        assert state.physical == 90
        assert state.mental == 60
        assert state.spiritual == 60
        assert state.balance == pytest.approx(70.0)
        assert state.day_of_week == 0

    def test_empty_profile_matches_no_profile(self):
        moment = _at(WEDNESDAY, 19)
        assert estimate_energy_state(moment, PersonalProfile()) == estimate_energy_state(moment)

    def test_pure(self):
        moment = _at(SUNDAY, 21)
        assert estimate_energy_state(moment) == estimate_energy_state(moment)


class TestHourTables:
    @pytest.mark.parametrize(
        "hour,expected",
        [
            (6, (20, 10, 0)), (10, (20, 10, 0)),
            (11, (10, 20, 0)), (14, (10, 20, 0)),
            (15, (-5, -10, 0)), (17, (-5, -10, 0)),
            (18, (-10, 0, 15)), (21, (-10, 0, 15)),
            (22, (-20, -15, 10)), (5, (-20, -15, 10)), (0, (-20, -15, 10)),
        ],
    )
    def test_hour_delta(self, hour, expected):
        assert hour_delta(hour) == expected

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (5, Trend.STABLE), (6, Trend.RISING), (12, Trend.RISING), (13, Trend.STABLE),
            (17, Trend.STABLE), (18, Trend.DECLINING), (23, Trend.DECLINING), (0, Trend.STABLE),
        ],
    )
    def test_trend(self, hour, expected):
        assert trend_for_hour(hour) == expected

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (4, TimeBucket.NIGHT), (5, TimeBucket.MORNING), (11, TimeBucket.MORNING),
            (12, TimeBucket.AFTERNOON), (17, TimeBucket.AFTERNOON),
            (18, TimeBucket.EVENING), (22, TimeBucket.EVENING), (23, TimeBucket.NIGHT),
        ],
    )
    def test_time_bucket(self, hour, expected):
        assert time_bucket_for_hour(hour) == expected


class TestCurrentEnergyState:
    def test_reads_clock(self):
        moment = _at(WEDNESDAY, 8)
        assert current_energy_state(FixedClock(moment)) == estimate_energy_state(moment)
