"""
In-memory catalog store and preference tables.

``CatalogStore`` is the only shared state in the recommender.  It is built
once (normally by ``catalog.loader.load_catalog``) and is read-only
afterwards, so concurrent callers need no locking.

Look-ups never raise: ``by_id`` returns ``None`` for an unknown id because
callers may probe speculatively.  Construction, on the other hand, enforces
the load-time preconditions (non-empty, unique ids) and raises
``CatalogError`` when they are violated.

``PreferenceTables`` holds the small associative tables used by the scorer:
time-bucket and trend preferred ids, and the per-scenario bonus points.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, field_validator

from crystal_recommender.errors import CatalogError
from crystal_recommender.models.catalog import CatalogEntry
from crystal_recommender.taxonomy.crystal_taxonomy import (
    CatalogTier,
    Scenario,
    TimeBucket,
    Trend,
)

MAX_SCENARIO_BONUS = 5


class CatalogStore:
    """Immutable, ordered collection of catalog entries.

    Iteration order is the load order and is the tie-break order used by
    the ranker.

    Args:
        entries: Validated catalog entries, in catalog order.
        source:  Optional label (file path) used in error messages.

    Raises:
        CatalogError: If ``entries`` is empty or contains duplicate ids.
    """

    def __init__(self, entries: Iterable[CatalogEntry], source: str | None = None) -> None:
        ordered = tuple(entries)
        if not ordered:
            raise CatalogError("Catalog must contain at least one entry.", source)

        by_id: dict[str, CatalogEntry] = {}
        for entry in ordered:
            if entry.id in by_id:
                raise CatalogError(f"Duplicate catalog id '{entry.id}'.", source)
            by_id[entry.id] = entry

        self._entries = ordered
        self._by_id   = by_id
        self.source   = source

    def all(self) -> list[CatalogEntry]:
        """Return every entry in catalog order."""
        return list(self._entries)

    def by_id(self, entry_id: str) -> CatalogEntry | None:
        """Return the entry with ``entry_id``, or ``None`` if not found."""
        return self._by_id.get(entry_id)

    def by_category(self, category: str) -> list[CatalogEntry]:
        """Return entries whose ``category`` equals ``category``, in catalog order."""
        return [e for e in self._entries if e.category == category]

    def by_tier(self, tier: CatalogTier) -> list[CatalogEntry]:
        return [e for e in self._entries if e.tier == tier]

    def ids(self) -> list[str]:
        return [e.id for e in self._entries]

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(e.category for e in self._entries))

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class PreferenceTables(BaseModel):
    """Preferred-id tables used for time, trend and scenario affinity.

    Attributes:
        time_bucket:    Time bucket → ids that suit that part of the day.
        trend:          Trend → ids that suit that energy direction.
        scenario_bonus: Scenario → id → bonus points (0–5).
    """

    model_config = ConfigDict(frozen=True)

    time_bucket: dict[TimeBucket, tuple[str, ...]] = {}
    trend: dict[Trend, tuple[str, ...]] = {}
    scenario_bonus: dict[Scenario, dict[str, int]] = {}

    @field_validator("scenario_bonus")
    @classmethod
    def validate_bonus_range(
        cls, v: dict[Scenario, dict[str, int]]
    ) -> dict[Scenario, dict[str, int]]:
        for scenario, bonuses in v.items():
            for entry_id, points in bonuses.items():
                if not 0 <= points <= MAX_SCENARIO_BONUS:
                    raise ValueError(
                        f"scenario_bonus[{scenario}][{entry_id}] must be in "
                        f"[0, {MAX_SCENARIO_BONUS}], got {points}."
                    )
        return v

    def prefers_for_time(self, bucket: TimeBucket, entry_id: str) -> bool:
        return entry_id in self.time_bucket.get(bucket, ())

    def prefers_for_trend(self, trend: Trend, entry_id: str) -> bool:
        return entry_id in self.trend.get(trend, ())

    def scenario_points(self, scenario: Scenario, entry_id: str) -> int:
        return self.scenario_bonus.get(scenario, {}).get(entry_id, 0)

    def referenced_ids(self) -> list[str]:
        """Every id referenced by any table, de-duplicated, in table order."""
        ids: list[str] = []
        for id_list in self.time_bucket.values():
            ids.extend(id_list)
        for id_list in self.trend.values():
            ids.extend(id_list)
        for bonuses in self.scenario_bonus.values():
            ids.extend(bonuses)
        return list(dict.fromkeys(ids))
