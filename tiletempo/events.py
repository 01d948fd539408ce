"""tiletempo/events.py — Apply level events to tile records.

Events are applied strictly in document order. A single running tempo is
threaded through them: multiplier-mode tempo changes compound on whatever
the previous tempo event left behind, regardless of which tiles the events
target.
"""

from __future__ import annotations

import logging
from typing import Iterable

from tiletempo.level import TimingEvent
from tiletempo.tiles import MarkerIndex, TileRecord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Event vocabulary
# ---------------------------------------------------------------------------

SET_SPEED = "SetSpeed"
TWIRL = "Twirl"
PAUSE = "Pause"
HOLD = "Hold"
MULTI_PLANET = "MultiPlanet"

SPEED_MULTIPLIER = "Multiplier"
THREE_PLANETS = "ThreePlanets"

TIMING_EVENT_TYPES: frozenset[str] = frozenset(
    {SET_SPEED, TWIRL, PAUSE, HOLD, MULTI_PLANET}
)


# ---------------------------------------------------------------------------
# Per-kind handlers
# ---------------------------------------------------------------------------


def _apply_set_speed(
    tile: TileRecord, event: TimingEvent, current_tempo: float, pitch: float,
) -> float:
    if event.speed_type == SPEED_MULTIPLIER:
        tile.tempo = current_tempo * event.bpm_multiplier
        return current_tempo * event.bpm_multiplier

    bpm = event.beats_per_minute
    if bpm is None:
        bpm = current_tempo
    tile.tempo = bpm * (pitch / 100.0)
    return tile.tempo


def _apply_event(
    tile: TileRecord, event: TimingEvent, current_tempo: float, pitch: float,
) -> float:
    """Mutate *tile* for *event*; return the updated running tempo."""
    kind = event.event_type
    if kind == SET_SPEED:
        return _apply_set_speed(tile, event, current_tempo, pitch)
    if kind == TWIRL:
        tile.direction = -1
    elif kind == PAUSE:
        tile.extra_hold_beats += event.duration / 2.0
    elif kind == HOLD:
        tile.extra_hold_beats += event.duration
    elif kind == MULTI_PLANET:
        tile.has_multi_body = event.planets == THREE_PLANETS
    return current_tempo


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def apply_events(
    tiles: list[TileRecord],
    markers: MarkerIndex,
    events: Iterable[TimingEvent],
    base_bpm: float,
    pitch: float,
) -> list[TileRecord]:
    """Apply *events* in order to *tiles* (in place) and return them.

    Events whose remapped floor falls outside the tile range, and events of
    kinds that do not affect timing, are ignored.
    """
    current_tempo = base_bpm * (pitch / 100.0)

    for event in events:
        if event.event_type not in TIMING_EVENT_TYPES:
            continue
        index = markers.adjust_floor(event.floor)
        if index < 0 or index >= len(tiles):
            logger.debug(
                "Ignoring %s at floor %d (tile %d of %d)",
                event.event_type, event.floor, index, len(tiles),
            )
            continue
        current_tempo = _apply_event(tiles[index], event, current_tempo, pitch)

    return tiles
