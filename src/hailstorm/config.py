"""Configuration helpers for the hailstorm CLI."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .models import Bound
from .rock import DEFAULT_ITERATIONS, DEFAULT_SEED, STATE_SIZE

DEFAULT_BOUND = (200_000_000_000_000, 400_000_000_000_000)


@dataclass(slots=True)
class HailstormConfig:
    """Resolved configuration for a hailstorm run."""

    input: Path
    bound: Bound
    iterations: int = DEFAULT_ITERATIONS
    tolerance: Optional[float] = None
    workers: int = 1
    seed: Sequence[float] = DEFAULT_SEED
    retry: bool = False


def _positive_int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"'{key}' must be a positive integer, got {value!r}")
    return value


def _build_bound(entry: Any) -> Bound:
    if entry is None:
        return Bound(*DEFAULT_BOUND)
    if isinstance(entry, dict):
        minimum, maximum = entry.get("min"), entry.get("max")
    elif isinstance(entry, (list, tuple)) and len(entry) == 2:
        minimum, maximum = entry
    else:
        raise ValueError(f"'bound' must be [min, max] or {{'min': .., 'max': ..}}, got {entry!r}")
    if not isinstance(minimum, int) or not isinstance(maximum, int):
        raise ValueError(f"'bound' values must be integers, got {entry!r}")
    return Bound(minimum, maximum)


def _build_seed(entry: Any) -> Sequence[float]:
    if entry is None:
        return DEFAULT_SEED
    if not isinstance(entry, list) or len(entry) != STATE_SIZE:
        raise ValueError(f"'seed' must be a list of {STATE_SIZE} numbers, got {entry!r}")
    return tuple(float(value) for value in entry)


def config_from_dict(data: Dict[str, Any], base_dir: Path | None = None) -> HailstormConfig:
    """Build a :class:`HailstormConfig` from already decoded JSON data."""

    if "input" not in data:
        raise ValueError("'input' must name the particle list file")
    input_path = Path(data["input"])
    if base_dir is not None and not input_path.is_absolute():
        input_path = base_dir / input_path

    tolerance = data.get("tolerance")
    if tolerance is not None:
        tolerance = float(tolerance)
        if tolerance < 0:
            raise ValueError(f"'tolerance' must be non-negative, got {tolerance!r}")

    return HailstormConfig(
        input=input_path,
        bound=_build_bound(data.get("bound")),
        iterations=_positive_int(data, "iterations", DEFAULT_ITERATIONS),
        tolerance=tolerance,
        workers=_positive_int(data, "workers", 1),
        seed=_build_seed(data.get("seed")),
        retry=bool(data.get("retry", False)),
    )


def load_config(path: str | Path) -> HailstormConfig:
    """Load configuration from a JSON file.

    Relative ``input`` paths resolve against the configuration file's directory.
    """

    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Configuration root must be a JSON object")
    return config_from_dict(data, base_dir=path.parent)
