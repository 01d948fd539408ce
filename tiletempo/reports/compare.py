"""tiletempo/reports/compare — Baseline comparison and timing drift detection."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from tiletempo.reports.runner import TimingResult

MAX_DRIFT_LINES = 10


# ---------------------------------------------------------------------------
# Drift detection
# ---------------------------------------------------------------------------


def find_drift(
    current: list[float], baseline: list[float], tolerance_ms: float,
) -> list[tuple[int, float, float]]:
    """Return ``(tile_index, old, new)`` for shared tiles that moved more than *tolerance_ms*."""
    n = min(len(current), len(baseline))
    if n == 0:
        return []
    cur = np.asarray(current[:n], dtype=np.float64)
    base = np.asarray(baseline[:n], dtype=np.float64)
    drifted = np.flatnonzero(np.abs(cur - base) > tolerance_ms)
    return [(int(i), float(base[i]), float(cur[i])) for i in drifted]


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_drift(drift: list[tuple[int, float, float]]) -> list[str]:
    lines = []
    for index, old, new in drift[:MAX_DRIFT_LINES]:
        lines.append(
            f"  Tile {index + 1:3d}: {old:8.2f} → {new:8.2f} ms  ({new - old:+.2f})"
        )
    if len(drift) > MAX_DRIFT_LINES:
        lines.append(f"  ... ({len(drift) - MAX_DRIFT_LINES} more drifted tiles)")
    return lines


# ---------------------------------------------------------------------------
# Main comparison entry point
# ---------------------------------------------------------------------------


def compare_timings(
    current: TimingResult,
    baseline_path: Path | str,
    tolerance_ms: float = 1.0,
) -> int:
    """Load a baseline JSON and print how *current* differs from it.

    Returns an exit code:
    - ``0``: same tile count, no tile drifted beyond *tolerance_ms*
    - ``1``: the tile count changed
    - ``2``: same tile count but timings drifted beyond *tolerance_ms*
    """
    baseline_path = Path(baseline_path)
    with open(baseline_path) as f:
        baseline = json.load(f)

    base_info = baseline.get("info", {})
    base_tiles = base_info.get("total_tiles", 0)
    cur_tiles = current.info.total_tiles

    if base_tiles != cur_tiles:
        print(f"⚠ TILE COUNT: {base_tiles} → {cur_tiles}")
        return 1

    base_timings = baseline.get("timings")
    if base_timings is None:
        # Baseline saved without timings: only the end time can be checked
        base_timings = [base_info.get("total_duration", 0.0)] if base_tiles else []
        cur_timings = [current.info.total_duration] if cur_tiles else []
    else:
        cur_timings = current.timings

    drift = find_drift(cur_timings, base_timings, tolerance_ms)
    if drift:
        print(f"⚠ TIMING DRIFT ({len(drift)} tiles beyond {tolerance_ms:g} ms):")
        for line in _format_drift(drift):
            print(line)
        return 2

    print(f"{current.name}: timings match baseline ({cur_tiles} tiles)")
    return 0
