"""
Energy state estimation: (timestamp, profile) → ``EnergyState3D``.

The estimator is a pure function of its inputs.  It never reads the clock;
use ``current_energy_state(clock)`` to take the timestamp from a ``Clock``.

Algorithm
---------
1. Start every axis at 50.
2. Apply one hour-of-day delta set (``HOUR_DELTAS``):

       hours    bucket          physical  mental  spiritual
       6–10     morning           +20      +10        0
       11–14    midday            +10      +20        0
       15–17    mid-afternoon      −5      −10        0
       18–21    evening           −10        0      +15
       22–5     night             −20      −15      +10

3. Personality letters from the profile (each applies independently):
       E → +10 physical, +5 mental     I → +10 spiritual, +5 mental
       N → +10 spiritual               S → +10 physical
4. Weekend (Sunday or Saturday): +5 physical, +10 spiritual, −5 mental.
5. Clamp each axis to [10, 90]; balance = mean of the clamped axes.
6. Trend: hours 6–12 rising, 18–23 declining, otherwise stable.
7. Time bucket: 5–11 morning, 12–17 afternoon, 18–22 evening, else night.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from crystal_recommender.models.energy import AXIS_MAX, AXIS_MIN, WEEKEND_DAYS, EnergyState3D
from crystal_recommender.models.profile import PersonalProfile
from crystal_recommender.taxonomy.crystal_taxonomy import TimeBucket, Trend
from crystal_recommender.utils.time_utils import Clock, day_of_week

log = logging.getLogger(__name__)

BASELINE = 50

# (first hour, last hour, (physical, mental, spiritual)); hours not covered
# fall through to NIGHT_DELTA.
HOUR_DELTAS: tuple[tuple[int, int, tuple[int, int, int]], ...] = (
    (6,  10, (+20, +10,   0)),   # morning
    (11, 14, (+10, +20,   0)),   # midday
    (15, 17, ( -5, -10,   0)),   # mid-afternoon
    (18, 21, (-10,   0, +15)),   # evening
)
NIGHT_DELTA: tuple[int, int, int] = (-20, -15, +10)

PERSONALITY_DELTAS: dict[str, tuple[int, int, int]] = {
    "E": (+10, +5,   0),
    "I": (  0, +5, +10),
    "N": (  0,  0, +10),
    "S": (+10,  0,   0),
}

WEEKEND_DELTA: tuple[int, int, int] = (+5, -5, +10)


def hour_delta(hour: int) -> tuple[int, int, int]:
    """Return the (physical, mental, spiritual) delta for ``hour``."""
    for first, last, delta in HOUR_DELTAS:
        if first <= hour <= last:
            return delta
    return NIGHT_DELTA


def trend_for_hour(hour: int) -> Trend:
    if 6 <= hour <= 12:
        return Trend.RISING
    if 18 <= hour <= 23:
        return Trend.DECLINING
    return Trend.STABLE


def time_bucket_for_hour(hour: int) -> TimeBucket:
    if 5 <= hour <= 11:
        return TimeBucket.MORNING
    if 12 <= hour <= 17:
        return TimeBucket.AFTERNOON
    if 18 <= hour <= 22:
        return TimeBucket.EVENING
    return TimeBucket.NIGHT


def estimate_energy_state(
    now: datetime,
    profile: Optional[PersonalProfile] = None,
) -> EnergyState3D:
    """Compute the 3-axis energy state for ``now``.

    Args:
        now:     Injected timestamp; only its hour and weekday are used.
        profile: Optional profile whose personality letters adjust the axes.

    Returns:
        Fully populated ``EnergyState3D``.  Never raises.
    """
    hour = now.hour
    dow  = day_of_week(now)

    physical = mental = spiritual = BASELINE

    d_phys, d_ment, d_spir = hour_delta(hour)
    physical  += d_phys
    mental    += d_ment
    spiritual += d_spir

    if profile is not None and profile.personality_type:
        for letter, (d_phys, d_ment, d_spir) in PERSONALITY_DELTAS.items():
            if profile.has_letter(letter):
                physical  += d_phys
                mental    += d_ment
                spiritual += d_spir

    if dow in WEEKEND_DAYS:
        d_phys, d_ment, d_spir = WEEKEND_DELTA
        physical  += d_phys
        mental    += d_ment
        spiritual += d_spir

    physical  = _clamp(physical)
    mental    = _clamp(mental)
    spiritual = _clamp(spiritual)

    state = EnergyState3D(
        physical=physical,
        mental=mental,
        spiritual=spiritual,
        balance=(physical + mental + spiritual) / 3,
        trend=trend_for_hour(hour),
        time_bucket=time_bucket_for_hour(hour),
        day_of_week=dow,
    )
    log.debug(
        "Energy state at %s: physical=%d mental=%d spiritual=%d balance=%.1f trend=%s bucket=%s",
        now.isoformat(), state.physical, state.mental, state.spiritual,
        state.balance, state.trend, state.time_bucket,
    )
    return state


def current_energy_state(
    clock: Clock,
    profile: Optional[PersonalProfile] = None,
) -> EnergyState3D:
    """Read ``clock`` once and estimate the energy state for that moment."""
    return estimate_energy_state(clock.now(), profile)


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: int) -> int:
    return max(AXIS_MIN, min(AXIS_MAX, value))
