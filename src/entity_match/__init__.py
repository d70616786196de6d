"""Fuzzy entity matching: duplicate detection, quick-pick ranking and usage tracking."""

from entity_match.config import DuplicateRules, EngineConfig, RankingWeights, UsagePolicy
from entity_match.models import (
    ComparableRecord,
    ItemKind,
    MatchResult,
    PartialRecord,
    ScoredItem,
    SearchableItem,
    UsageRecord,
)
from entity_match.schema import FieldTag, RecordSchema

__all__ = [
    "DuplicateRules",
    "EngineConfig",
    "RankingWeights",
    "UsagePolicy",
    "ComparableRecord",
    "ItemKind",
    "MatchResult",
    "PartialRecord",
    "ScoredItem",
    "SearchableItem",
    "UsageRecord",
    "FieldTag",
    "RecordSchema",
]
