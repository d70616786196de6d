from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

from entity_match.errors import ConfigError

WEEK_MILLIS = 7 * 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class DuplicateRules:
    """Per-field weights and thresholds used by duplicate detection.

    The defaults sum to 1.0, so a score can never exceed 1.0 without clamping.
    """

    name_weight: float = 0.4
    email_weight: float = 0.3
    phone_weight: float = 0.2
    website_weight: float = 0.1
    name_similarity_threshold: float = 0.7
    threshold: float = 0.5

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "DuplicateRules":
        return cls(**_coerce(cls, mapping))


@dataclass(frozen=True)
class RankingWeights:
    """Multipliers for search ranking; ``usage_step``/``usage_cap`` shape the usage boost."""

    text_weight: float = 3.0
    name_weight: float = 3.0
    phone_weight: float = 2.0
    email_weight: float = 1.5
    usage_step: float = 0.1
    usage_cap: float = 1.0

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "RankingWeights":
        return cls(**_coerce(cls, mapping))


@dataclass(frozen=True)
class UsagePolicy:
    max_entries: int = 50
    recent_window_millis: int = WEEK_MILLIS
    favorite_min_count: int = 3

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "UsagePolicy":
        return cls(**_coerce(cls, mapping))


@dataclass(frozen=True)
class EngineConfig:
    duplicates: DuplicateRules = field(default_factory=DuplicateRules)
    ranking: RankingWeights = field(default_factory=RankingWeights)
    usage: UsagePolicy = field(default_factory=UsagePolicy)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "EngineConfig":
        unknown = set(mapping) - {"duplicates", "ranking", "usage"}
        if unknown:
            raise ConfigError(f"unknown config sections: {', '.join(sorted(unknown))}")
        return cls(
            duplicates=DuplicateRules.from_mapping(_section(mapping, "duplicates")),
            ranking=RankingWeights.from_mapping(_section(mapping, "ranking")),
            usage=UsagePolicy.from_mapping(_section(mapping, "usage")),
        )


def load_config(path: Path | None) -> EngineConfig:
    """Read an engine config from a JSON file; ``None`` yields the defaults."""
    if path is None:
        return EngineConfig()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"{path}: top-level value must be an object")
    return EngineConfig.from_mapping(payload)


def _section(mapping: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = mapping.get(name, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"config section {name!r} must be an object")
    return section


def _coerce(cls: type, mapping: Mapping[str, Any]) -> dict[str, Any]:
    defaults = {f.name: f.default for f in fields(cls)}
    unknown = set(mapping) - set(defaults)
    if unknown:
        raise ConfigError(f"unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")

    values: dict[str, Any] = {}
    for key, value in mapping.items():
        expected = type(defaults[key])
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{cls.__name__}.{key} must be a number, got {value!r}")
        if expected is int and not isinstance(value, int):
            raise ConfigError(f"{cls.__name__}.{key} must be an integer, got {value!r}")
        values[key] = expected(value)
    return values
