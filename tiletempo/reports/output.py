"""tiletempo/reports/output — Console output and JSON serialization."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from tiletempo.reports.runner import TimingResult
    from tiletempo.timing import LevelInfo


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------


def print_level_info(info: LevelInfo) -> None:
    """Print the level summary block."""
    print("=== Level Info ===")
    print(f"Song: {info.song}")
    print(f"Artist: {info.artist}")
    print(f"Author: {info.author}")
    print(f"BPM: {info.bpm:.2f}")
    print(f"Offset: {info.offset} ms")
    print(f"Pitch: {info.pitch:.0f}%")
    print(f"Countdown: {info.countdown_ticks} ticks")
    print(f"Total Tiles: {info.total_tiles}")
    print(f"Duration: {info.total_duration / 1000.0:.2f} seconds")


def print_timings(timings: Sequence[float], limit: int = 20) -> None:
    """Print the first *limit* tile timings and a count of the rest."""
    print(f"\n=== Note Timings (first {limit}) ===")
    for i, t in enumerate(timings[:limit]):
        print(f"Tile {i + 1:3d}: {t:8.2f} ms")
    if len(timings) > limit:
        print(f"... ({len(timings) - limit} more tiles)")


def print_auto_offset(value: float) -> None:
    print(f"\nAuto Offset: {value:.2f} ms")


# ---------------------------------------------------------------------------
# JSON serialization
# ---------------------------------------------------------------------------


def _result_to_dict(result: TimingResult, include_timings: bool = True) -> dict:
    """Convert a TimingResult to a JSON-serializable dict."""
    d = asdict(result)
    if not include_timings:
        d.pop("timings", None)
    return d


def save_results(
    result: TimingResult,
    path: Path | str,
    include_timings: bool = True,
) -> None:
    """Save a timing result as a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _result_to_dict(result, include_timings)
    path.write_text(json.dumps(data, indent=2) + "\n")
