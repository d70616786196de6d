from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping, Sequence

from entity_match.models import ComparableRecord, ItemKind, SearchableItem

_ITEM_KINDS = frozenset(kind.value for kind in ItemKind)


class FieldTag(StrEnum):
    EMAIL = "EMAIL"
    KIND = "KIND"
    NAME = "NAME"
    PHONE = "PHONE"
    RECORD_ID = "RECORD_ID"
    TEXT = "TEXT"
    WEBSITE = "WEBSITE"


@dataclass(frozen=True)
class RecordSchema:
    """Maps source-system columns to the fields the engine compares."""

    tag_to_columns: Mapping[FieldTag, tuple[str, ...]]

    @classmethod
    def from_mapping(cls, mapping: Mapping[FieldTag, Sequence[str]]) -> "RecordSchema":
        frozen = {tag: tuple(columns) for tag, columns in mapping.items()}
        return cls(tag_to_columns=frozen)

    def columns_for(self, tag: FieldTag) -> tuple[str, ...]:
        return self.tag_to_columns.get(tag, ())

    def values_for(self, attributes: Mapping[str, object], tag: FieldTag) -> list[str]:
        values: list[str] = []
        for column in self.columns_for(tag):
            value = attributes.get(column)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                values.append(text)
        return values

    def joined_value(self, attributes: Mapping[str, object], tag: FieldTag, sep: str = " ") -> str:
        return sep.join(self.values_for(attributes, tag)).strip()

    def optional_value(self, attributes: Mapping[str, object], tag: FieldTag) -> str | None:
        return self.joined_value(attributes, tag) or None

    def to_record(self, attributes: Mapping[str, object]) -> ComparableRecord | None:
        """Build a comparable record from a row; rows without an id are skipped."""
        record_id = self.joined_value(attributes, FieldTag.RECORD_ID)
        if not record_id:
            return None
        return ComparableRecord(
            record_id=record_id,
            name=self.joined_value(attributes, FieldTag.NAME),
            email=self.optional_value(attributes, FieldTag.EMAIL),
            phone=self.optional_value(attributes, FieldTag.PHONE),
            website=self.optional_value(attributes, FieldTag.WEBSITE),
        )

    def to_item(self, attributes: Mapping[str, object]) -> SearchableItem | None:
        record_id = self.joined_value(attributes, FieldTag.RECORD_ID)
        if not record_id:
            return None
        raw_kind = self.joined_value(attributes, FieldTag.KIND).lower()
        kind = ItemKind(raw_kind) if raw_kind in _ITEM_KINDS else ItemKind.PRODUCT
        return SearchableItem(
            item_id=record_id,
            text=self.joined_value(attributes, FieldTag.TEXT),
            kind=kind,
        )
