"""Tests for tiletempo.events — ordered event application."""

from __future__ import annotations

import pytest

from tiletempo.events import apply_events
from tiletempo.level import TimingEvent
from tiletempo.tiles import UNSET_TEMPO, MarkerIndex, derive_tiles
from tests.levels import tiles_at


def _apply(events, n_tiles=4, base_bpm=100.0, pitch=100.0):
    tiles = tiles_at(*([0.0] * n_tiles))
    return apply_events(tiles, MarkerIndex(), events, base_bpm, pitch)


def _bpm(floor, bpm=None):
    return TimingEvent(floor=floor, event_type="SetSpeed", beats_per_minute=bpm)


def _mult(floor, multiplier):
    return TimingEvent(
        floor=floor, event_type="SetSpeed", speed_type="Multiplier",
        bpm_multiplier=multiplier,
    )


# ---------------------------------------------------------------------------
# Tempo changes
# ---------------------------------------------------------------------------

class TestSetSpeed:
    def test_absolute_tempo(self):
        tiles = _apply([_bpm(1, 150)])
        assert tiles[1].tempo == 150.0
        assert tiles[0].tempo == UNSET_TEMPO

    def test_absolute_tempo_scaled_by_pitch(self):
        tiles = _apply([_bpm(1, 150)], pitch=50.0)
        assert tiles[1].tempo == 75.0

    def test_absolute_without_value_uses_running_tempo(self):
        # running tempo 100 * 0.5 = 50, then scaled by pitch again
        tiles = _apply([_bpm(2)], pitch=50.0)
        assert tiles[2].tempo == 25.0

    def test_multiplier_from_base(self):
        tiles = _apply([_mult(1, 1.5)])
        assert tiles[1].tempo == 150.0

    def test_multipliers_compound(self):
        tiles = _apply([_mult(1, 2.0), _mult(2, 2.0)])
        assert tiles[1].tempo == 200.0
        assert tiles[2].tempo == 400.0

    def test_multiplier_after_absolute(self):
        tiles = _apply([_bpm(1, 120), _mult(3, 0.5)])
        assert tiles[3].tempo == 60.0

    def test_accumulator_follows_document_order(self):
        forward = _apply([_bpm(1, 200), _bpm(2, 300), _mult(3, 2.0)])
        swapped = _apply([_bpm(2, 300), _bpm(1, 200), _mult(3, 2.0)])
        # Tile-local assignments agree
        assert forward[1].tempo == swapped[1].tempo == 200.0
        assert forward[2].tempo == swapped[2].tempo == 300.0
        # The running tempo threaded into the multiplier does not
        assert forward[3].tempo == 600.0
        assert swapped[3].tempo == 400.0

    def test_accumulator_ignores_floor_order(self):
        tiles = _apply([_mult(3, 2.0), _mult(1, 2.0)])
        assert tiles[3].tempo == 200.0
        assert tiles[1].tempo == 400.0


# ---------------------------------------------------------------------------
# Direction, holds, multi-body
# ---------------------------------------------------------------------------

class TestOtherEvents:
    def test_twirl_marks_tile(self):
        tiles = _apply([TimingEvent(floor=2, event_type="Twirl")])
        assert [t.direction for t in tiles] == [1, 1, -1, 1]

    def test_twirl_is_assignment_not_toggle(self):
        twirl = TimingEvent(floor=1, event_type="Twirl")
        tiles = _apply([twirl, twirl])
        assert tiles[1].direction == -1

    def test_pause_adds_half_duration(self):
        tiles = _apply([TimingEvent(floor=1, event_type="Pause", duration=3.0)])
        assert tiles[1].extra_hold_beats == 1.5

    def test_hold_adds_full_duration(self):
        tiles = _apply([TimingEvent(floor=1, event_type="Hold", duration=3.0)])
        assert tiles[1].extra_hold_beats == 3.0

    def test_holds_accumulate(self):
        tiles = _apply([
            TimingEvent(floor=1, event_type="Pause", duration=2.0),
            TimingEvent(floor=1, event_type="Hold", duration=1.0),
        ])
        assert tiles[1].extra_hold_beats == 2.0

    def test_three_planets_sets_flag(self):
        tiles = _apply([TimingEvent(floor=1, event_type="MultiPlanet", planets="ThreePlanets")])
        assert tiles[1].has_multi_body

    def test_two_planets_clears_flag(self):
        tiles = _apply([
            TimingEvent(floor=1, event_type="MultiPlanet", planets="ThreePlanets"),
            TimingEvent(floor=1, event_type="MultiPlanet", planets="TwoPlanets"),
        ])
        assert not tiles[1].has_multi_body

    def test_other_planet_values_leave_flag_false(self):
        tiles = _apply([TimingEvent(floor=1, event_type="MultiPlanet", planets="FourPlanets")])
        assert not tiles[1].has_multi_body


# ---------------------------------------------------------------------------
# Addressing
# ---------------------------------------------------------------------------

class TestAddressing:
    @pytest.mark.parametrize("floor", [-1, 4, 100])
    def test_out_of_range_ignored(self, floor):
        tiles = _apply([_bpm(floor, 300), TimingEvent(floor=floor, event_type="Twirl")])
        assert all(t.tempo == UNSET_TEMPO for t in tiles)
        assert all(t.direction == 1 for t in tiles)

    def test_out_of_range_does_not_touch_accumulator(self):
        tiles = _apply([_mult(99, 3.0), _mult(1, 2.0)])
        assert tiles[1].tempo == 200.0

    def test_unknown_event_ignored(self):
        tiles = _apply([TimingEvent(floor=1, event_type="MoveCamera", duration=4.0)])
        assert tiles[1].extra_hold_beats == 0.0
        assert tiles[1].tempo == UNSET_TEMPO

    def test_floor_remapped_past_marker(self):
        tiles, markers = derive_tiles([0.0, 90.0, 999.0, 180.0])
        apply_events(
            tiles, markers,
            [TimingEvent(floor=2, event_type="Twirl"), _bpm(3, 240)],
            100.0, 100.0,
        )
        assert [t.direction for t in tiles] == [1, -1, 1]
        assert tiles[2].tempo == 240.0

    def test_only_addressed_tile_changes(self):
        tiles = _apply([
            TimingEvent(floor=2, event_type="Hold", duration=1.0),
            TimingEvent(floor=2, event_type="MultiPlanet", planets="ThreePlanets"),
        ])
        assert [t.extra_hold_beats for t in tiles] == [0.0, 0.0, 1.0, 0.0]
        assert [t.has_multi_body for t in tiles] == [False, False, True, False]

    def test_returns_same_list(self):
        tiles = tiles_at(0.0, 90.0)
        assert apply_events(tiles, MarkerIndex(), [], 100.0, 100.0) is tiles
