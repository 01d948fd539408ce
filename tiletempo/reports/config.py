"""tiletempo/reports/config — ReportConfig and YAML loading."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from tiletempo.analysis import DEFAULT_METRICS


@dataclass
class ReportConfig:
    preview_tiles: int = 20
    include_timings: bool = True
    compare_tolerance_ms: float = 1.0
    output: str | None = None
    metrics: list[str] = field(default_factory=lambda: list(DEFAULT_METRICS))


_KNOWN_KEYS: frozenset[str] = frozenset(f.name for f in fields(ReportConfig))


def _require(data: dict, key: str, kinds: tuple[type, ...], label: str) -> None:
    value = data[key]
    # bool is an int subclass; only accept it where a bool is wanted
    if isinstance(value, bool) and bool not in kinds:
        raise ValueError(f"{key} must be {label}, got {value!r}")
    if not isinstance(value, kinds):
        raise ValueError(f"{key} must be {label}, got {value!r}")


def _parse_config(data: dict | None) -> ReportConfig:
    """Validate a raw YAML mapping and build a ReportConfig."""
    if data is None:
        return ReportConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")

    config = ReportConfig()
    if "preview_tiles" in data:
        _require(data, "preview_tiles", (int,), "an integer")
        if data["preview_tiles"] < 0:
            raise ValueError("preview_tiles must be >= 0")
        config.preview_tiles = data["preview_tiles"]
    if "include_timings" in data:
        _require(data, "include_timings", (bool,), "true or false")
        config.include_timings = data["include_timings"]
    if "compare_tolerance_ms" in data:
        _require(data, "compare_tolerance_ms", (int, float), "a number")
        config.compare_tolerance_ms = float(data["compare_tolerance_ms"])
    if data.get("output") is not None:
        _require(data, "output", (str,), "a path string")
        config.output = data["output"]
    if "metrics" in data:
        _require(data, "metrics", (list,), "a list of metric names")
        config.metrics = [str(m) for m in data["metrics"]]
    return config


def load_config(path: Path | str) -> ReportConfig:
    """Load report options from a YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return _parse_config(data)
