from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from entity_match.config import RankingWeights
from entity_match.engine.normalize import normalize_phone
from entity_match.engine.similarity import fuzzy_subsequence_score
from entity_match.engine.usage import index_usage, usage_boost
from entity_match.models import ComparableRecord, ScoredItem, SearchableItem, UsageRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FuzzySearchRanker:
    """Quick-pick ranking for search-as-you-type selectors.

    ``rank`` scores free-text items; ``rank_structured`` scores entities on
    name, phone and email the way a customer picker does. With an empty query
    both fall back to usage order.
    """

    def __init__(self, weights: RankingWeights | None = None) -> None:
        self._weights = weights or RankingWeights()

    @property
    def weights(self) -> RankingWeights:
        return self._weights

    def rank(
        self,
        query: str,
        items: Sequence[SearchableItem],
        usage: Sequence[UsageRecord],
        limit: int | None = None,
    ) -> list[SearchableItem]:
        return [scored.item for scored in self.rank_scored(query, items, usage, limit)]

    def rank_scored(
        self,
        query: str,
        items: Sequence[SearchableItem],
        usage: Sequence[UsageRecord],
        limit: int | None = None,
    ) -> list[ScoredItem[SearchableItem]]:
        return self._rank(
            query,
            items,
            usage,
            key=lambda item: item.item_id,
            base_score=self._text_score,
            limit=limit,
        )

    def rank_structured(
        self,
        query: str,
        records: Sequence[ComparableRecord],
        usage: Sequence[UsageRecord],
        limit: int | None = None,
    ) -> list[ComparableRecord]:
        return [scored.item for scored in self.rank_structured_scored(query, records, usage, limit)]

    def rank_structured_scored(
        self,
        query: str,
        records: Sequence[ComparableRecord],
        usage: Sequence[UsageRecord],
        limit: int | None = None,
    ) -> list[ScoredItem[ComparableRecord]]:
        return self._rank(
            query,
            records,
            usage,
            key=lambda record: record.record_id,
            base_score=self._field_score,
            limit=limit,
        )

    def _text_score(self, item: SearchableItem, query: str) -> float:
        return fuzzy_subsequence_score(item.text, query) * self._weights.text_weight

    def _field_score(self, record: ComparableRecord, query: str) -> float:
        weights = self._weights
        score = 0.0

        name_score = fuzzy_subsequence_score(record.name, query)
        if name_score > 0:
            score += name_score * weights.name_weight

        digits = normalize_phone(query)
        phone = normalize_phone(record.phone)
        if digits and phone and digits in phone:
            score += len(digits) / len(phone) * weights.phone_weight

        lowered = query.lower()
        email = (record.email or "").lower()
        if email and lowered in email:
            score += len(lowered) / len(email) * weights.email_weight

        return score

    def _rank(
        self,
        query: str,
        entries: Sequence[T],
        usage: Sequence[UsageRecord],
        key: Callable[[T], str],
        base_score: Callable[[T, str], float],
        limit: int | None,
    ) -> list[ScoredItem[T]]:
        by_entity = index_usage(usage)

        if not query:
            return _usage_order(entries, by_entity, key)[:limit]

        scored: list[ScoredItem[T]] = []
        for entry in entries:
            base = base_score(entry, query)
            if base <= 0:
                continue
            boost = usage_boost(by_entity.get(key(entry)), self._weights)
            scored.append(ScoredItem(item=entry, score=base + boost))

        logger.debug("Query %r matched %d of %d entries", query, len(scored), len(entries))
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        return ranked[:limit]


def _usage_order(
    entries: Sequence[T],
    by_entity: dict[str, UsageRecord],
    key: Callable[[T], str],
) -> list[ScoredItem[T]]:
    used: list[tuple[UsageRecord, T]] = []
    unused: list[T] = []
    for entry in entries:
        record = by_entity.get(key(entry))
        if record is None:
            unused.append(entry)
        else:
            used.append((record, entry))

    used.sort(key=lambda pair: (pair[0].count, pair[0].last_used_millis), reverse=True)
    ordered = [ScoredItem(item=entry, score=0.0) for _, entry in used]
    ordered.extend(ScoredItem(item=entry, score=0.0) for entry in unused)
    return ordered


def rank(
    query: str,
    items: Sequence[SearchableItem],
    usage: Sequence[UsageRecord],
    limit: int | None = None,
    weights: RankingWeights | None = None,
) -> list[SearchableItem]:
    return FuzzySearchRanker(weights).rank(query, items, usage, limit)


def rank_structured(
    query: str,
    records: Sequence[ComparableRecord],
    usage: Sequence[UsageRecord],
    limit: int | None = None,
    weights: RankingWeights | None = None,
) -> list[ComparableRecord]:
    return FuzzySearchRanker(weights).rank_structured(query, records, usage, limit)
