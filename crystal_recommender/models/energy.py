"""
Three-axis energy state model.

``EnergyState3D`` is produced fresh per call by
``crystal_recommender.energy.estimator.estimate_energy_state`` and discarded
after scoring.  Axis values are integers clamped to [10, 90]; ``balance`` is
the arithmetic mean of the three clamped axes.

``day_of_week`` uses 0 = Sunday … 6 = Saturday, so the weekend is {0, 6}.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from crystal_recommender.taxonomy.crystal_taxonomy import TimeBucket, Trend

AXIS_MIN = 10
AXIS_MAX = 90

WEEKEND_DAYS: frozenset[int] = frozenset({0, 6})


class EnergyState3D(BaseModel):
    """Derived physical / mental / spiritual energy state.

    Attributes:
        physical: Physical axis, in [10, 90].
        mental: Mental axis, in [10, 90].
        spiritual: Spiritual axis, in [10, 90].
        balance: Mean of the three axes.
        trend: Short-term direction.
        time_bucket: Part of the day.
        day_of_week: 0 (Sunday) … 6 (Saturday).
    """

    model_config = ConfigDict(frozen=True)

    physical: int
    mental: int
    spiritual: int
    balance: float
    trend: Trend
    time_bucket: TimeBucket
    day_of_week: int

    @field_validator("physical", "mental", "spiritual")
    @classmethod
    def validate_axis_range(cls, v: int) -> int:
        if not AXIS_MIN <= v <= AXIS_MAX:
            raise ValueError(f"Energy axis must be in [{AXIS_MIN}, {AXIS_MAX}], got {v}.")
        return v

    @field_validator("day_of_week")
    @classmethod
    def validate_day_of_week(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError(f"day_of_week must be in [0, 6], got {v}.")
        return v

    @model_validator(mode="after")
    def validate_balance(self) -> "EnergyState3D":
        expected = (self.physical + self.mental + self.spiritual) / 3
        if abs(self.balance - expected) > 1e-6:
            raise ValueError(
                f"balance ({self.balance}) must equal the mean of the three axes "
                f"({expected:.4f})."
            )
        return self

    @classmethod
    def from_axes(
        cls,
        physical: int,
        mental: int,
        spiritual: int,
        trend: Trend = Trend.STABLE,
        time_bucket: TimeBucket = TimeBucket.AFTERNOON,
        day_of_week: int = 1,
    ) -> "EnergyState3D":
        """Build a state from raw axes, deriving ``balance``."""
        return cls(
            physical=physical,
            mental=mental,
            spiritual=spiritual,
            balance=(physical + mental + spiritual) / 3,
            trend=trend,
            time_bucket=time_bucket,
            day_of_week=day_of_week,
        )

    @property
    def is_weekend(self) -> bool:
        return self.day_of_week in WEEKEND_DAYS
