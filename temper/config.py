"""
Configuration.

Reads defaults.yaml (shipped with the package) and optionally a user YAML
file on top of it. Only the keys present in defaults.yaml are allowed.

Usage:
    from temper.config import get_config, load_config, using_config

    config = get_config()                   # active config, packaged defaults at first
    config = load_config('my_temper.yaml')  # defaults + overrides
    with using_config(config):
        meantone.val_meet(augmented)        # lattice knobs come from the file
"""

from contextlib import contextmanager
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

import yaml

from temper.validation.errors import InputError


DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"


@dataclass(frozen=True)
class LatticeConfig:
    threshold: float = 1e-4
    persistence: int = 100
    tolerance: float = 1e-9


@dataclass(frozen=True)
class FactorizationConfig:
    max_divisions: int = 100
    wart_radius: int = 0


@dataclass(frozen=True)
class TemperConfig:
    lattice: LatticeConfig = field(default_factory=LatticeConfig)
    factorization: FactorizationConfig = field(default_factory=FactorizationConfig)


def _read(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InputError(f"Config {path} must be a mapping, got {type(data).__name__}")
    return data


def _section(cls, values: Dict[str, Any], name: str):
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise InputError(f"Unknown keys in config section '{name}': {sorted(unknown)}")
    return cls(**values)


def load_config(path: Optional[Union[str, Path]] = None) -> TemperConfig:
    """
    Build a TemperConfig from defaults.yaml and an optional override file.

    Raises:
        InputError: unknown sections or keys
        FileNotFoundError: override file missing
    """
    merged = _read(DEFAULTS_PATH)
    if path is not None:
        for section, values in _read(path).items():
            if section not in merged:
                raise InputError(f"Unknown config section '{section}'")
            if not isinstance(values, dict):
                raise InputError(f"Config section '{section}' must be a mapping")
            merged[section] = {**merged[section], **values}

    return TemperConfig(
        lattice=_section(LatticeConfig, merged.get("lattice", {}), "lattice"),
        factorization=_section(FactorizationConfig, merged.get("factorization", {}), "factorization"),
    )


_active: Optional[TemperConfig] = None


def get_config() -> TemperConfig:
    """Active configuration: the packaged defaults unless replaced by using_config."""
    global _active
    if _active is None:
        _active = load_config()
    return _active


@contextmanager
def using_config(config: TemperConfig) -> Iterator[TemperConfig]:
    """
    Make `config` the fallback for every knob not passed explicitly.

    The previous configuration is restored on exit.
    """
    global _active
    previous = _active
    _active = config
    try:
        yield config
    finally:
        _active = previous
