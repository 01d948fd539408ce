"""tiletempo/constants.py — Shared timing constants and setting defaults."""

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

MIDSPIN = 999.0
"""Angle-sequence sentinel for a mid-rotation marker (not a tile)."""

FULL_TURN = 360.0
HALF_TURN = 180.0

ANGLE_EPSILON = 0.001
"""Destination within this many degrees of the heading costs a full turn."""

# ---------------------------------------------------------------------------
# Multi-body skew
# ---------------------------------------------------------------------------

MULTI_BODY_THRESHOLD = 60.0
MULTI_BODY_WRAP = 300.0

# ---------------------------------------------------------------------------
# Setting defaults
# ---------------------------------------------------------------------------

DEFAULT_BPM = 100.0
DEFAULT_OFFSET = 0
DEFAULT_PITCH = 100.0
DEFAULT_COUNTDOWN_TICKS = 0
UNKNOWN_TEXT = "Unknown"
