from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from entity_match.config import RankingWeights, UsagePolicy
from entity_match.errors import InvalidTimestampError, UsageRecordError
from entity_match.interfaces import UsageStore
from entity_match.models import UsageRecord

logger = logging.getLogger(__name__)

DEFAULT_USAGE_KEY = "entity-usage-stats"


def record_usage(
    records: Sequence[UsageRecord],
    entity_id: str,
    now: int,
    max_entries: int = 50,
) -> list[UsageRecord]:
    """Return a new snapshot with one more selection of ``entity_id`` at ``now``.

    The result is ordered by count, then recency, and keeps at most
    ``max_entries`` records.
    """
    _check_time(now, "now")
    updated: list[UsageRecord] = []
    found = False
    for record in records:
        if not found and record.entity_id == entity_id:
            record = UsageRecord(entity_id=entity_id, count=record.count + 1, last_used_millis=now)
            found = True
        updated.append(record)
    if not found:
        updated.append(UsageRecord(entity_id=entity_id, count=1, last_used_millis=now))

    ranked = sorted(updated, key=lambda r: (r.count, r.last_used_millis), reverse=True)
    return ranked[:max_entries]


def recent(
    records: Sequence[UsageRecord],
    within_millis: int,
    now: int,
    limit: int | None = None,
) -> list[UsageRecord]:
    _check_time(now, "now")
    _check_time(within_millis, "within_millis")
    cutoff = now - within_millis
    selected = [record for record in records if record.last_used_millis > cutoff]
    selected.sort(key=lambda r: r.last_used_millis, reverse=True)
    return selected[:limit]


def favorites(
    records: Sequence[UsageRecord],
    min_count: int,
    limit: int | None = None,
) -> list[UsageRecord]:
    selected = [record for record in records if record.count >= min_count]
    selected.sort(key=lambda r: r.count, reverse=True)
    return selected[:limit]


def usage_boost(record: UsageRecord | None, weights: RankingWeights) -> float:
    if record is None:
        return 0.0
    return min(record.count * weights.usage_step, weights.usage_cap)


def index_usage(records: Sequence[UsageRecord]) -> dict[str, UsageRecord]:
    """Map entity ids to their usage; the first record wins on duplicate ids."""
    index: dict[str, UsageRecord] = {}
    for record in records:
        index.setdefault(record.entity_id, record)
    return index


def parse_usage(payload: object) -> list[UsageRecord]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise UsageRecordError(f"usage payload must be a list, got {type(payload).__name__}")
    return [UsageRecord.from_dict(item) for item in payload]


def dump_usage(records: Sequence[UsageRecord]) -> list[dict[str, object]]:
    return [record.to_dict() for record in records]


class UsageTracker:
    """Keeps usage history in an injected store.

    ``record`` performs the read, update and write under a lock, so selections
    routed through one tracker cannot overwrite each other.
    """

    def __init__(
        self,
        store: UsageStore,
        key: str = DEFAULT_USAGE_KEY,
        policy: UsagePolicy | None = None,
    ) -> None:
        self._store = store
        self._key = key
        self._policy = policy or UsagePolicy()
        self._lock = threading.Lock()

    def load(self) -> list[UsageRecord]:
        try:
            return parse_usage(self._store.get(self._key))
        except UsageRecordError:
            logger.warning("Ignoring malformed usage data under %r", self._key, exc_info=True)
            return []

    def record(self, entity_id: str, now: int) -> list[UsageRecord]:
        with self._lock:
            updated = record_usage(self.load(), entity_id, now, self._policy.max_entries)
            self._store.set(self._key, dump_usage(updated))
        logger.debug("Recorded usage of %s (%d tracked entities)", entity_id, len(updated))
        return updated

    def recent(
        self,
        now: int,
        within_millis: int | None = None,
        limit: int | None = None,
    ) -> list[UsageRecord]:
        if within_millis is None:
            within_millis = self._policy.recent_window_millis
        return recent(self.load(), within_millis, now, limit)

    def favorites(self, min_count: int | None = None, limit: int | None = None) -> list[UsageRecord]:
        if min_count is None:
            min_count = self._policy.favorite_min_count
        return favorites(self.load(), min_count, limit)


def _check_time(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTimestampError(f"{name} must be an integer number of milliseconds, got {value!r}")
