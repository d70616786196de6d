import json

import pytest

from entity_match.config import DuplicateRules, EngineConfig, RankingWeights, UsagePolicy, load_config
from entity_match.errors import ConfigError


def test_default_weights_and_thresholds() -> None:
    rules = DuplicateRules()
    assert (rules.name_weight, rules.email_weight, rules.phone_weight, rules.website_weight) == (
        0.4,
        0.3,
        0.2,
        0.1,
    )
    assert rules.name_similarity_threshold == 0.7
    assert rules.threshold == 0.5

    weights = RankingWeights()
    assert (weights.name_weight, weights.phone_weight, weights.email_weight) == (3.0, 2.0, 1.5)
    assert UsagePolicy().max_entries == 50


def test_from_mapping_overrides_and_coerces() -> None:
    rules = DuplicateRules.from_mapping({"threshold": 1, "email_weight": 0.5})

    assert rules.threshold == 1.0
    assert isinstance(rules.threshold, float)
    assert rules.email_weight == 0.5
    assert rules.name_weight == 0.4


def test_from_mapping_rejects_bad_values() -> None:
    with pytest.raises(ConfigError):
        DuplicateRules.from_mapping({"treshold": 0.4})
    with pytest.raises(ConfigError):
        RankingWeights.from_mapping({"usage_cap": True})
    with pytest.raises(ConfigError):
        RankingWeights.from_mapping({"usage_cap": "1"})
    with pytest.raises(ConfigError):
        UsagePolicy.from_mapping({"max_entries": 10.5})


def test_load_config(tmp_path) -> None:
    assert load_config(None) == EngineConfig()

    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"duplicates": {"threshold": 0.6}, "usage": {"max_entries": 10}}),
        encoding="utf-8",
    )
    config = load_config(path)

    assert config.duplicates.threshold == 0.6
    assert config.usage.max_entries == 10
    assert config.ranking == RankingWeights()


def test_load_config_rejects_unknown_sections_and_bad_json(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"scoring": {}}), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)

    path.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)

    path.write_text(json.dumps({"ranking": []}), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)
