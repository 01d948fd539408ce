"""tiletempo/analysis.py — Derived metrics over a timestamp sequence.

All metrics take the cumulative hit times (ms) produced by
:func:`tiletempo.timing.compute_note_times`. Empty input yields 0.0 for
scalar metrics and an empty list for list metrics.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

DENSITY_WINDOW_MS = 1000.0


def note_intervals(times: Sequence[float]) -> np.ndarray:
    """Gap before each tile; the first tile's gap is measured from 0."""
    arr = np.asarray(times, dtype=np.float64)
    if arr.size == 0:
        return arr
    return np.diff(arr, prepend=0.0)


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------


def _metric_intervals(times: Sequence[float]) -> list[float]:
    return note_intervals(times).tolist()


def _metric_min_interval(times: Sequence[float]) -> float:
    gaps = note_intervals(times)
    return float(gaps.min()) if gaps.size else 0.0


def _metric_max_interval(times: Sequence[float]) -> float:
    gaps = note_intervals(times)
    return float(gaps.max()) if gaps.size else 0.0


def _metric_mean_interval(times: Sequence[float]) -> float:
    gaps = note_intervals(times)
    return float(gaps.mean()) if gaps.size else 0.0


def _metric_notes_per_second(times: Sequence[float]) -> float:
    if len(times) == 0 or times[-1] <= 0:
        return 0.0
    return len(times) / (times[-1] / 1000.0)


def _metric_peak_density(times: Sequence[float]) -> int:
    """Most tiles falling inside any window of DENSITY_WINDOW_MS."""
    arr = np.sort(np.asarray(times, dtype=np.float64))
    if arr.size == 0:
        return 0
    # For each tile, count tiles in [t, t + window)
    ends = np.searchsorted(arr, arr + DENSITY_WINDOW_MS, side="left")
    counts = ends - np.arange(arr.size)
    return int(counts.max())


_METRIC_DISPATCH: dict[str, Any] = {
    "intervals": _metric_intervals,
    "min_interval": _metric_min_interval,
    "max_interval": _metric_max_interval,
    "mean_interval": _metric_mean_interval,
    "notes_per_second": _metric_notes_per_second,
    "peak_density": _metric_peak_density,
}

DEFAULT_METRICS: list[str] = [
    "min_interval",
    "max_interval",
    "mean_interval",
    "notes_per_second",
    "peak_density",
]


def compute_metrics(requested: list[str], times: Sequence[float]) -> dict[str, Any]:
    """Compute the requested metrics for *times*."""
    result: dict[str, Any] = {}
    for name in requested:
        func = _METRIC_DISPATCH.get(name)
        if func is None:
            raise ValueError(
                f"Unknown metric: {name!r}. "
                f"Valid metrics: {sorted(_METRIC_DISPATCH)}"
            )
        result[name] = func(times)
    return result
