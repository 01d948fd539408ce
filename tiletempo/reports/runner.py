"""tiletempo/reports/runner — Load a level and compute its full timing report."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tiletempo.analysis import DEFAULT_METRICS, compute_metrics
from tiletempo.level import load_level
from tiletempo.timing import LevelInfo, compute_note_times, level_info

logger = logging.getLogger(__name__)


@dataclass
class TimingResult:
    """Timing report for one level file."""

    name: str
    info: LevelInfo
    timings: list[float]
    metrics: dict[str, Any] = field(default_factory=dict)
    wall_time_ms: float = 0.0


def run_level(
    path: Path | str, metrics: list[str] | None = None,
) -> TimingResult:
    """Load *path*, compute per-tile timings, summary and metrics.

    Raises:
        LevelLoadError: The file cannot be read or decoded.
        ValueError: An unknown metric name was requested.
    """
    path = Path(path)
    if metrics is None:
        metrics = DEFAULT_METRICS

    start_time = time.perf_counter()
    doc = load_level(path)
    timings = compute_note_times(doc)
    info = level_info(doc, timings)
    computed = compute_metrics(metrics, timings)
    wall_time = (time.perf_counter() - start_time) * 1000

    logger.info("%s: %d tiles in %.1fms", path.name, info.total_tiles, wall_time)
    return TimingResult(
        name=path.stem,
        info=info,
        timings=timings,
        metrics=computed,
        wall_time_ms=wall_time,
    )
