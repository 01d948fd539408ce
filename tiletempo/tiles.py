"""tiletempo/tiles.py — Tile records derived from a raw angle sequence.

Each non-marker angle entry becomes one TileRecord. A 999 marker entry
produces no tile; it flags the tile before it as mid-rotation and is
remembered in a MarkerIndex so event floors (which count markers) can be
mapped back onto tile indices.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Iterable

from tiletempo.constants import FULL_TURN, MIDSPIN
from tiletempo.path import fmod

UNSET_TEMPO = -1.0
"""TileRecord.tempo value meaning no event has set a tempo here yet."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class TileRecord:
    """Geometry and timing state for one tile.

    Mutated by the event and propagation passes, read by the integrator.
    """

    angle: float  # destination heading, [0, 360)
    tempo: float = UNSET_TEMPO
    direction: int = 1
    extra_hold_beats: float = 0.0
    is_mid_rotation: bool = False
    has_multi_body: bool = False


@dataclass
class MarkerIndex:
    """Sorted raw positions recorded for mid-rotation markers."""

    positions: list[int] = field(default_factory=list)

    def add(self, position: int) -> None:
        bisect.insort(self.positions, position)

    def upper_bound(self, floor: int) -> int:
        """Index of the first recorded position strictly greater than *floor*.

        Equivalently, the number of recorded positions ``<= floor``.
        """
        return bisect.bisect_right(self.positions, floor)

    def adjust_floor(self, floor: int) -> int:
        """Map a raw (marker-counting) floor onto a tile index."""
        return floor - self.upper_bound(floor)

    def __len__(self) -> int:
        return len(self.positions)


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------


def derive_tiles(angle_data: Iterable[float]) -> tuple[list[TileRecord], MarkerIndex]:
    """Build fresh tile records and the marker index from *angle_data*."""
    tiles: list[TileRecord] = []
    markers = MarkerIndex()

    for i, angle in enumerate(angle_data):
        if angle == MIDSPIN:
            markers.add(i - 1)
            if tiles:
                tiles[-1].is_mid_rotation = True
            continue
        tiles.append(TileRecord(angle=fmod(angle, FULL_TURN)))

    return tiles, markers
