# tests/test_config.py
import pytest

from logic_solver.config import DEFAULTS, load_config, load_yaml, merge_overrides, rule_enabled
from logic_solver.logging_utils import get_logger, set_level


def test_defaults():
    cfg = load_config()
    assert cfg.log_level == "INFO"
    assert cfg.record_steps is True
    assert all(cfg.rules.values())
    cfg.rules["gridlock"] = False
    assert DEFAULTS["rules"]["gridlock"] is True


def test_yaml_then_overrides(tmp_path):
    path = tmp_path / "solver.yaml"
    path.write_text("log_level: WARNING\nrules:\n  multi_value_chains: false\n")
    cfg = load_config(path, log_level="DEBUG", log_grid=None)
    assert cfg.log_level == "DEBUG"
    assert cfg.log_grid is False
    assert cfg.rules["multi_value_chains"] is False
    assert cfg.rules["single_value_chains"] is True


def test_unknown_rule(tmp_path):
    with pytest.raises(ValueError):
        load_config(rules={"guessing": True})


def test_yaml_must_be_a_mapping(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        load_yaml(path)


def test_merge_overrides_skips_none():
    cfg = {"a": 1, "b": {"x": 1}}
    merge_overrides(cfg, a=None, b={"y": 2})
    assert cfg == {"a": 1, "b": {"x": 1, "y": 2}}


def test_always_on_rules():
    cfg = load_config(rules={"only_spot": False})
    assert not rule_enabled(cfg, "only_spot")
    assert rule_enabled(cfg, "unique_per_region")
    assert rule_enabled(None, "gridlock")


def test_set_level():
    logger = set_level("debug")
    assert logger is get_logger()
    assert logger.level == 10
    set_level("INFO")
    with pytest.raises(ValueError):
        set_level("chatty")
