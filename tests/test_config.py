# Configuration, logging and metrics tests

import logging

import pytest
from prometheus_client import REGISTRY, CollectorRegistry

from fibrope import Rope
from fibrope.config import RopeConfig, get_config, set_config
from fibrope.logger import get_logger
from fibrope.metrics import create_rope_metrics


def sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


def test_default_config():
    config = RopeConfig()
    assert config.check_invariants is True
    assert config.log_level == "WARNING"
    assert config.metrics_enabled is True
    assert config.encoding == "utf-8"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("FIBROPE_CHECK_INVARIANTS", "0")
    monkeypatch.setenv("FIBROPE_LOG_LEVEL", "debug")
    monkeypatch.setenv("FIBROPE_METRICS_ENABLED", "false")
    monkeypatch.setenv("FIBROPE_ENCODING", "latin-1")
    config = get_config()
    assert config.check_invariants is False
    assert config.log_level == "DEBUG"
    assert config.metrics_enabled is False
    assert config.encoding == "latin-1"
    # Cached until reset
    monkeypatch.setenv("FIBROPE_ENCODING", "utf-8")
    assert get_config() is config


def test_config_is_immutable():
    config = RopeConfig()
    with pytest.raises(AttributeError):
        config.encoding = "ascii"
    changed = config.with_overrides(encoding="ascii")
    assert changed.encoding == "ascii"
    assert config.encoding == "utf-8"


def test_encoding_setting_applies_to_str_input():
    set_config(RopeConfig().with_overrides(encoding="latin-1"))
    rope = Rope("é")
    assert rope.to_string() == b"\xe9"
    assert str(rope) == "é"


def test_logger_namespace():
    assert get_logger("fibrope.rope").name == "fibrope.rope"
    assert get_logger("fibrope").name == "fibrope"
    assert get_logger("tools").name == "fibrope.tools"
    assert logging.getLogger("fibrope").handlers


def test_edit_metrics_are_counted():
    before_insert = sample("fibrope_edit_operations_total", {"operation": "insert"})
    before_splits = sample("fibrope_splits_total")
    before_concat = sample("fibrope_concatenations_total")
    rope = Rope("abc")
    rope.insert(1, "x")
    assert sample("fibrope_edit_operations_total", {"operation": "insert"}) == before_insert + 1
    assert sample("fibrope_splits_total") == before_splits + 1
    assert sample("fibrope_concatenations_total") == before_concat + 2


def test_index_errors_are_counted():
    before = sample("fibrope_index_errors_total", {"operation": "delete"})
    with pytest.raises(IndexError):
        Rope("abc").delete(2, 5)
    assert sample("fibrope_index_errors_total", {"operation": "delete"}) == before + 1


def test_rebalance_metrics(skewed_rope):
    before = sample("fibrope_rebalances_total")
    skewed_rope.balance()
    assert sample("fibrope_rebalances_total") == before + 1
    assert sample("fibrope_last_rebalance_depth") == skewed_rope.depth()
    # Already balanced: nothing recorded
    skewed_rope.balance()
    assert sample("fibrope_rebalances_total") == before + 1


def test_metrics_can_be_disabled():
    set_config(RopeConfig().with_overrides(metrics_enabled=False))
    before = sample("fibrope_edit_operations_total", {"operation": "append"})
    Rope("a").append("b")
    assert sample("fibrope_edit_operations_total", {"operation": "append"}) == before


def test_create_metrics_on_custom_registry():
    registry = CollectorRegistry()
    metrics = create_rope_metrics(registry=registry)
    assert set(metrics) == {
        "edit_operations",
        "splits",
        "concatenations",
        "rebalances",
        "index_errors",
        "last_rebalance_depth",
    }
    metrics["splits"].inc(3)
    assert registry.get_sample_value("fibrope_splits_total") == 3.0
