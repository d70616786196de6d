from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from entity_match.errors import UsageRecordError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ComparableRecord:
    """An existing entity (supplier, customer) eligible for duplicate checks."""

    record_id: str
    name: str = ""
    email: str | None = None
    phone: str | None = None
    website: str | None = None


@dataclass(frozen=True, slots=True)
class PartialRecord:
    """A record that is being created; every field may still be missing."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None


@dataclass(frozen=True, slots=True)
class MatchResult:
    """An existing record scored against a candidate, with the rules that fired."""

    record: ComparableRecord
    score: float
    reasons: tuple[str, ...] = ()


class ItemKind(StrEnum):
    PRODUCT = "product"
    CATEGORY = "category"
    BRAND = "brand"
    SKU = "sku"
    RECENT = "recent"
    POPULAR = "popular"


@dataclass(frozen=True, slots=True)
class SearchableItem:
    item_id: str
    text: str
    kind: ItemKind = ItemKind.PRODUCT


@dataclass(frozen=True)
class ScoredItem(Generic[T]):
    """A ranked item together with its combined score."""

    item: T
    score: float


@dataclass(frozen=True, slots=True)
class UsageRecord:
    """Selection history of one entity."""

    entity_id: str
    count: int
    last_used_millis: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity_id": self.entity_id,
            "count": self.count,
            "last_used_millis": self.last_used_millis,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "UsageRecord":
        if not isinstance(payload, Mapping):
            raise UsageRecordError(f"usage record must be an object, got {type(payload).__name__}")
        entity_id = payload.get("entity_id")
        count = payload.get("count")
        last_used = payload.get("last_used_millis")
        if not isinstance(entity_id, str) or not entity_id:
            raise UsageRecordError(f"usage record has no entity_id: {payload!r}")
        if not _is_int(count) or count < 0:
            raise UsageRecordError(f"usage record {entity_id!r} has invalid count: {count!r}")
        if not _is_int(last_used):
            raise UsageRecordError(
                f"usage record {entity_id!r} has invalid last_used_millis: {last_used!r}"
            )
        return cls(entity_id=entity_id, count=count, last_used_millis=last_used)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
