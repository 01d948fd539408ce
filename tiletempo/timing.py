"""tiletempo/timing.py — Tempo/direction propagation and time integration.

Pipeline for one computation (fresh tiles every call, nothing cached):

1. :func:`tiletempo.tiles.derive_tiles` — geometry from the angle sequence.
2. :func:`tiletempo.events.apply_events` — per-tile event effects.
3. :func:`propagate_state` — carry tempo and direction forward.
4. :func:`integrate_times` — sweep angles into cumulative milliseconds.

Each pass takes and returns the tile list, so any pass can be exercised on
a hand-built list.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from tiletempo.constants import (
    ANGLE_EPSILON,
    FULL_TURN,
    HALF_TURN,
    MULTI_BODY_THRESHOLD,
    MULTI_BODY_WRAP,
)
from tiletempo.events import apply_events
from tiletempo.level import LevelDocument, LevelSettings
from tiletempo.path import fmod
from tiletempo.tiles import TileRecord, derive_tiles


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def _per_beat(numerator: float, bpm: float) -> float:
    # IEEE semantics for a zero tempo instead of ZeroDivisionError
    if bpm == 0:
        return math.copysign(math.inf, bpm) * math.copysign(1.0, numerator)
    return numerator / bpm


def angle_to_time(angle: float, bpm: float) -> float:
    """Milliseconds needed to sweep *angle* degrees at *bpm* (180° per beat)."""
    return (angle / HALF_TURN) * _per_beat(60.0, bpm) * 1000.0


def auto_offset(settings: LevelSettings) -> float:
    """Level offset plus the countdown duration, in milliseconds."""
    beat_ms = _per_beat(60000.0, settings.effective_bpm)
    return settings.offset + settings.countdown_ticks * beat_ms


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------


def propagate_state(tiles: list[TileRecord], base_bpm: float, pitch: float) -> list[TileRecord]:
    """Finalize each tile's tempo and direction by carrying values forward.

    A tile marked ``direction == -1`` flips the running direction; every tile
    then receives the running sign. Unset (negative) tempos take the running
    tempo, explicit ones replace it.
    """
    direction = 1
    tempo = base_bpm * (pitch / 100.0)

    for tile in tiles:
        if tile.direction == -1:
            direction = -direction
        tile.direction = direction

        if tile.tempo < 0:
            tile.tempo = tempo
        else:
            tempo = tile.tempo

    return tiles


def _multi_body_skew(angle: float) -> float:
    if angle > MULTI_BODY_THRESHOLD:
        return angle - MULTI_BODY_THRESHOLD
    return angle + MULTI_BODY_WRAP


def integrate_times(tiles: list[TileRecord]) -> list[float]:
    """Return the cumulative hit time (ms) of every tile."""
    times: list[float] = []
    cur_angle = 0.0
    cur_time = 0.0
    multi_body = False

    for tile in tiles:
        # Approach from the opposite side of the previous exit
        cur_angle = fmod(cur_angle - HALF_TURN, FULL_TURN)
        dest = tile.angle

        if abs(dest - cur_angle) <= ANGLE_EPSILON:
            sweep = FULL_TURN
        else:
            sweep = fmod((cur_angle - dest) * tile.direction, FULL_TURN)

        sweep += tile.extra_hold_beats * FULL_TURN

        if multi_body:
            sweep = _multi_body_skew(sweep)
        if tile.has_multi_body:
            # Applies on top of the skew above when already active
            multi_body = True
            sweep = _multi_body_skew(sweep)

        cur_time += angle_to_time(sweep, tile.tempo)

        cur_angle = dest
        if tile.is_mid_rotation:
            cur_angle += HALF_TURN

        times.append(cur_time)

    return times


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_tiles(doc: LevelDocument) -> list[TileRecord]:
    """Run derivation, events and propagation; return the finished tiles."""
    settings = doc.settings
    tiles, markers = derive_tiles(doc.angle_data)
    apply_events(tiles, markers, doc.events, settings.bpm, settings.pitch)
    return propagate_state(tiles, settings.bpm, settings.pitch)


def compute_note_times(doc: LevelDocument) -> list[float]:
    """Hit time in milliseconds for every tile of *doc*."""
    return integrate_times(build_tiles(doc))


@dataclass
class LevelInfo:
    """Summary of a level and its computed timing."""

    song: str
    artist: str
    author: str
    bpm: float
    offset: int
    pitch: float
    countdown_ticks: int
    total_tiles: int
    total_duration: float  # ms
    auto_offset: float  # ms


def level_info(doc: LevelDocument, times: list[float] | None = None) -> LevelInfo:
    """Summarize *doc*. Computes timings unless *times* is supplied."""
    if times is None:
        times = compute_note_times(doc)
    s = doc.settings
    return LevelInfo(
        song=s.song,
        artist=s.artist,
        author=s.author,
        bpm=s.bpm,
        offset=s.offset,
        pitch=s.pitch,
        countdown_ticks=s.countdown_ticks,
        total_tiles=len(times),
        total_duration=times[-1] if times else 0.0,
        auto_offset=auto_offset(s),
    )
