"""Solver configuration: YAML file merged over built-in defaults."""

# config.py
# Usage:
#   cfg = load_config("config/solver.yaml", log_level="DEBUG")
#   cfg.rules["multi_value_chains"]  -> True / False

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "log_grid": False,
    "record_steps": True,
    "rules": {
        "only_spot": True,
        "locked_tuples": True,
        "hidden_tuples": True,
        "xyz_wing": True,
        "intersect_reject": True,
        "gridlock": True,
        "single_value_chains": True,
        "multi_value_chains": True,
    },
}

# These two keep the engine sound and cannot be switched off.
ALWAYS_ON = ("unique_per_region", "inconsistency")


class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__


SolverConfig = DotDict


def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return DotDict(data)


def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        if isinstance(v, dict) and isinstance(cfg.get(k), dict):
            cfg[k] = {**cfg[k], **v}
        else:
            cfg[k] = v
    return cfg


def load_config(path: str | Path | None = None, **overrides) -> SolverConfig:
    """Defaults, then the YAML file (if any), then keyword overrides."""
    cfg = DotDict(copy.deepcopy(DEFAULTS))
    if path is not None:
        merge_overrides(cfg, **load_yaml(path))
    merge_overrides(cfg, **overrides)
    unknown = set(cfg["rules"]) - set(DEFAULTS["rules"])
    for name in ALWAYS_ON:
        unknown.discard(name)
    if unknown:
        raise ValueError(f"Unknown rules in configuration: {sorted(unknown)}")
    return cfg


def rule_enabled(cfg: Dict[str, Any] | None, name: str) -> bool:
    if name in ALWAYS_ON or cfg is None:
        return True
    return bool(cfg.get("rules", {}).get(name, True))
