"""tiletempo/path.py — Legacy path-character strings to angle sequences.

Older level files describe the track as a string of single-character codes
instead of a numeric ``angleData`` array. Absolute codes name a heading
directly; relative codes turn by a fixed amount from the previous heading.
``!`` is the mid-rotation marker and passes through as the 999 sentinel.
"""

from __future__ import annotations

import logging
import math

from tiletempo.constants import FULL_TURN, HALF_TURN, MIDSPIN

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Code table: char -> (degrees, is_relative)
# ---------------------------------------------------------------------------

PATH_CODES: dict[str, tuple[float, bool]] = {
    # Absolute headings, 15° apart
    "R": (0.0, False),
    "p": (15.0, False),
    "J": (30.0, False),
    "E": (45.0, False),
    "T": (60.0, False),
    "o": (75.0, False),
    "U": (90.0, False),
    "q": (105.0, False),
    "G": (120.0, False),
    "Q": (135.0, False),
    "H": (150.0, False),
    "W": (165.0, False),
    "L": (180.0, False),
    "x": (195.0, False),
    "N": (210.0, False),
    "Z": (225.0, False),
    "F": (240.0, False),
    "V": (255.0, False),
    "D": (270.0, False),
    "Y": (285.0, False),
    "B": (300.0, False),
    "C": (315.0, False),
    "M": (330.0, False),
    "A": (345.0, False),
    # Relative turns (polygon interior angles)
    "5": (108.0, True),
    "6": (252.0, True),
    "7": (900.0 / 7.0, True),
    "8": (360.0 - 900.0 / 7.0, True),
    "t": (60.0, True),
    "h": (120.0, True),
    "j": (240.0, True),
    "y": (300.0, True),
    # Mid-rotation marker
    "!": (MIDSPIN, True),
}


# ---------------------------------------------------------------------------
# Angle helpers
# ---------------------------------------------------------------------------


def fmod(a: float, b: float) -> float:
    """Floored modulo: result has the sign of *b* (``a - b*floor(a/b)``).

    Non-finite input yields NaN rather than raising.
    """
    q = a / b
    if not math.isfinite(q):
        return math.nan
    return a - b * math.floor(q)


def generalize_angle(angle: float) -> float:
    """Reduce *angle* into [0, 360) by truncating whole turns toward zero."""
    angle = angle - int(angle / FULL_TURN) * FULL_TURN
    return angle + FULL_TURN if angle < 0 else angle


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------


def path_data_to_angles(path_data: str) -> list[float]:
    """Translate a path-character string into an angle sequence.

    Unknown characters are skipped. Markers are appended as 999 and leave the
    running heading untouched.
    """
    angles: list[float] = []
    heading = 0.0

    for ch in path_data:
        code = PATH_CODES.get(ch)
        if code is None:
            logger.debug("Skipping unknown path character %r", ch)
            continue

        degrees, relative = code
        if degrees == MIDSPIN:
            angles.append(MIDSPIN)
            continue

        if relative:
            heading = generalize_angle(heading + HALF_TURN - degrees)
        else:
            heading = degrees
        angles.append(heading)

    return angles
