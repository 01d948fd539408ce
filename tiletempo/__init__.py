"""tiletempo — Tile-accurate timing for rhythm-game level documents.

Public entry points for reading a level and computing per-tile timestamps.
"""

from tiletempo.level import (
    LevelDocument,
    LevelLoadError,
    LevelSettings,
    TimingEvent,
    load_level,
    parse_level,
)
from tiletempo.path import path_data_to_angles
from tiletempo.reader import read_document
from tiletempo.tiles import MarkerIndex, TileRecord, derive_tiles
from tiletempo.events import apply_events
from tiletempo.timing import (
    LevelInfo,
    angle_to_time,
    auto_offset,
    compute_note_times,
    integrate_times,
    level_info,
    propagate_state,
)

__all__ = [
    "LevelDocument",
    "LevelLoadError",
    "LevelSettings",
    "TimingEvent",
    "load_level",
    "parse_level",
    "path_data_to_angles",
    "read_document",
    "MarkerIndex",
    "TileRecord",
    "derive_tiles",
    "apply_events",
    "LevelInfo",
    "angle_to_time",
    "auto_offset",
    "compute_note_times",
    "integrate_times",
    "level_info",
    "propagate_state",
]
