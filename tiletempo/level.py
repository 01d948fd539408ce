"""tiletempo/level.py — Typed view over a level document.

Turns the loose tree produced by :mod:`tiletempo.reader` into immutable
settings, a geometry sequence and an ordered event list. Missing or
mistyped values fall back to defaults; nothing in here raises for odd
content. Only :func:`load_level` can fail, when the file itself cannot be
read or decoded.
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tiletempo.constants import (
    DEFAULT_BPM,
    DEFAULT_COUNTDOWN_TICKS,
    DEFAULT_OFFSET,
    DEFAULT_PITCH,
    UNKNOWN_TEXT,
)
from tiletempo.path import path_data_to_angles
from tiletempo.reader import read_document

logger = logging.getLogger(__name__)

BOM = "\ufeff"


class LevelLoadError(OSError):
    """Level text could not be read or decoded."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LevelSettings:
    """Level-wide tempo and metadata settings."""

    bpm: float = DEFAULT_BPM
    offset: int = DEFAULT_OFFSET
    pitch: float = DEFAULT_PITCH
    countdown_ticks: int = DEFAULT_COUNTDOWN_TICKS
    song: str = UNKNOWN_TEXT
    artist: str = UNKNOWN_TEXT
    author: str = UNKNOWN_TEXT

    @property
    def effective_bpm(self) -> float:
        """Base tempo scaled by pitch."""
        return self.bpm * (self.pitch / 100.0)


@dataclass(frozen=True)
class TimingEvent:
    """One entry of the ``actions`` list.

    ``floor`` indexes the raw angle sequence, markers included.
    ``beats_per_minute`` is None when the document leaves it out.
    """

    floor: int
    event_type: str
    speed_type: str = "Bpm"
    beats_per_minute: float | None = None
    bpm_multiplier: float = 1.0
    duration: float = 0.0
    planets: str = "TwoPlanets"


@dataclass(frozen=True)
class LevelDocument:
    settings: LevelSettings = field(default_factory=LevelSettings)
    angle_data: tuple[float, ...] = ()
    events: tuple[TimingEvent, ...] = ()


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float(value: Any) -> float | None:
    if not (_is_number(value) or isinstance(value, str)):
        return None
    try:
        return float(value)
    except (ValueError, OverflowError):
        return None


def get_float(data: dict, key: str, default: float | None) -> float | None:
    value = data.get(key)
    if value is None:
        return default
    result = _to_float(value)
    if result is not None:
        return result
    logger.debug("Field %r has unusable value %r, using %r", key, value, default)
    return default


def get_int(data: dict, key: str, default: int) -> int:
    value = data.get(key)
    if value is None:
        return default
    if _is_number(value):
        if math.isinf(value):
            # Saturate so an infinite floor stays outside every tile range
            return sys.maxsize if value > 0 else -sys.maxsize - 1
        try:
            return int(value)
        except ValueError:
            return default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    logger.debug("Field %r has unusable value %r, using %r", key, value, default)
    return default


def get_str(data: dict, key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ---------------------------------------------------------------------------
# Section parsers
# ---------------------------------------------------------------------------


def _parse_settings(data: Any) -> LevelSettings:
    if not isinstance(data, dict):
        return LevelSettings()
    return LevelSettings(
        bpm=get_float(data, "bpm", DEFAULT_BPM),
        offset=get_int(data, "offset", DEFAULT_OFFSET),
        pitch=get_float(data, "pitch", DEFAULT_PITCH),
        countdown_ticks=get_int(data, "countdownTicks", DEFAULT_COUNTDOWN_TICKS),
        song=get_str(data, "song", UNKNOWN_TEXT),
        artist=get_str(data, "artist", UNKNOWN_TEXT),
        author=get_str(data, "author", UNKNOWN_TEXT),
    )


def _parse_angles(root: dict) -> tuple[float, ...]:
    raw = root.get("angleData")
    if isinstance(raw, list):
        angles = (_to_float(a) for a in raw if _is_number(a))
        return tuple(a for a in angles if a is not None)
    # Legacy format
    return tuple(path_data_to_angles(get_str(root, "pathData", "")))


def _parse_event(data: dict) -> TimingEvent:
    return TimingEvent(
        floor=get_int(data, "floor", 0),
        event_type=get_str(data, "eventType", ""),
        speed_type=get_str(data, "speedType", "Bpm"),
        beats_per_minute=get_float(data, "beatsPerMinute", None),
        bpm_multiplier=get_float(data, "bpmMultiplier", 1.0),
        duration=get_float(data, "duration", 0.0),
        planets=get_str(data, "planets", "TwoPlanets"),
    )


def _parse_events(root: dict) -> tuple[TimingEvent, ...]:
    raw = root.get("actions")
    if not isinstance(raw, list):
        return ()
    return tuple(_parse_event(a) for a in raw if isinstance(a, dict))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_level(tree: Any) -> LevelDocument:
    """Build a LevelDocument from an already-read document tree."""
    root = tree if isinstance(tree, dict) else {}
    return LevelDocument(
        settings=_parse_settings(root.get("settings")),
        angle_data=_parse_angles(root),
        events=_parse_events(root),
    )


def parse_level(text: str) -> LevelDocument:
    """Read level text (BOM tolerated) into a LevelDocument."""
    if text.startswith(BOM):
        text = text[1:]
    return build_level(read_document(text))


def load_level(path: Path | str) -> LevelDocument:
    """Load a level file as UTF-8 and parse it.

    Raises:
        LevelLoadError: The file is missing, unreadable or not UTF-8.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LevelLoadError(f"{path}: {exc}") from exc
    doc = parse_level(text)
    logger.debug(
        "Loaded %s: %d angle entries, %d events",
        path, len(doc.angle_data), len(doc.events),
    )
    return doc
