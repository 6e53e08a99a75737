# beam_core/config.py
from __future__ import annotations

import json
import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, get_type_hints

from .simulator import DEFAULT_TRACE_EVERY

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class RunConfig:
    """Settings for one counting run; CLI flags override file values."""

    strict_start: bool = False
    trace: bool = False
    trace_every: int = DEFAULT_TRACE_EVERY
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        for name, expected in get_type_hints(type(self)).items():
            value = getattr(self, name)
            # bool is an int subclass; keep the two apart.
            if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
                raise ValueError(f"{name} must be {expected.__name__}, got {type(value).__name__}: {value!r}")
        if self.trace_every <= 0:
            raise ValueError(f"trace_every must be positive, got {self.trace_every}")
        if self.log_level.upper() not in _LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level.upper())

    def merged(self, **overrides: Any) -> "RunConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunConfig":
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a table of settings, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)


def load_params(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """
    Load run parameters from JSON or TOML.
    """
    path = str(path)
    with open(path, "rb") as fh:
        data = fh.read()
    suffix = Path(path).suffix.lower()
    if suffix in {".json", ""}:
        return json.loads(data.decode("utf-8"))
    if suffix in {".toml", ".tml"}:
        return tomllib.loads(data.decode("utf-8"))
    raise ValueError(f"Unsupported parameter file format: {suffix}")


def load_config(path: str | os.PathLike[str]) -> RunConfig:
    params = load_params(path)
    # TOML files may nest settings under a [beam] table.
    if isinstance(params, dict) and isinstance(params.get("beam"), dict):
        params = params["beam"]
    return RunConfig.from_dict(params)
