from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import yaml

from .solver_core import STRATEGIES

DEFAULTS: Dict[str, Any] = {
    "solver": {"strategy": "stack"},
    "render": {"cell_px": 64},
    "logging": {"level": "INFO"},
    "output": {"json": None, "image": None},
}

class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

def _wrap(data: Any) -> Any:
    if isinstance(data, dict):
        return DotDict({k: _wrap(v) for k, v in data.items()})
    return data

def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level of a config file must be a mapping")
    return _wrap(data)

def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg

def _deep_update(base: Dict[str, Any], extra: Dict[str, Any]) -> None:
    for k, v in extra.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_update(base[k], v)
        else:
            base[k] = v

def _check_sections(cfg: Dict[str, Any]) -> None:
    for section in DEFAULTS:
        if not isinstance(cfg.get(section), dict):
            raise ValueError(f"{section} must be a mapping, got {cfg.get(section)!r}")

def validate(cfg: DotDict) -> DotDict:
    _check_sections(cfg)
    strategy = cfg.solver.strategy
    if strategy not in STRATEGIES:
        raise ValueError(f"solver.strategy must be one of {STRATEGIES}, got {strategy!r}")
    cell_px = cfg.render.cell_px
    if not isinstance(cell_px, int) or cell_px <= 0:
        raise ValueError(f"render.cell_px must be a positive integer, got {cell_px!r}")
    return cfg

def load_config(path: Optional[str | Path] = None, **overrides) -> DotDict:
    """DEFAULTS <- YAML file <- overrides.

    Overrides use section__key names (e.g. solver__strategy="recursive");
    None values are skipped so unset CLI flags keep the file value.
    """
    cfg: Dict[str, Any] = copy.deepcopy(DEFAULTS)
    if path is not None:
        _deep_update(cfg, load_yaml(path))
        _check_sections(cfg)
    for name, value in overrides.items():
        section, _, key = name.partition("__")
        if not key:
            raise KeyError(f"override {name!r} must look like section__key")
        merge_overrides(cfg.setdefault(section, {}), **{key: value})
    return validate(_wrap(cfg))
