"""Tests for tiletempo.tiles — tile derivation and the marker index."""

from __future__ import annotations

from tiletempo.tiles import UNSET_TEMPO, MarkerIndex, TileRecord, derive_tiles


class TestDeriveTiles:
    def test_one_tile_per_angle(self):
        tiles, markers = derive_tiles([0.0, 90.0, 180.0])
        assert [t.angle for t in tiles] == [0.0, 90.0, 180.0]
        assert len(markers) == 0

    def test_initial_state(self):
        (tile,), _ = derive_tiles([45.0])
        assert tile == TileRecord(angle=45.0)
        assert tile.tempo == UNSET_TEMPO
        assert tile.direction == 1
        assert tile.extra_hold_beats == 0.0
        assert not tile.is_mid_rotation
        assert not tile.has_multi_body

    def test_angles_normalized(self):
        tiles, _ = derive_tiles([-90.0, 450.0, 360.0])
        assert [t.angle for t in tiles] == [270.0, 90.0, 0.0]

    def test_marker_flags_previous_tile(self):
        tiles, markers = derive_tiles([0.0, 90.0, 999.0, 180.0])
        assert len(tiles) == 3
        assert [t.is_mid_rotation for t in tiles] == [False, True, False]
        assert markers.positions == [1]

    def test_leading_marker_has_no_tile_to_flag(self):
        tiles, markers = derive_tiles([999.0, 0.0])
        assert len(tiles) == 1
        assert not tiles[0].is_mid_rotation
        assert markers.positions == [-1]

    def test_consecutive_markers(self):
        tiles, markers = derive_tiles([0.0, 999.0, 999.0, 90.0])
        assert len(tiles) == 2
        assert tiles[0].is_mid_rotation
        assert markers.positions == [0, 1]

    def test_tile_count_excludes_markers(self):
        angles = [0.0, 999.0, 90.0, 180.0, 999.0, 270.0, 999.0]
        tiles, markers = derive_tiles(angles)
        assert len(tiles) == len(angles) - len(markers) == 4

    def test_empty(self):
        tiles, markers = derive_tiles([])
        assert tiles == []
        assert len(markers) == 0

    def test_fresh_records_each_call(self):
        angles = [0.0, 90.0]
        first, _ = derive_tiles(angles)
        first[0].tempo = 300.0
        second, _ = derive_tiles(angles)
        assert second[0].tempo == UNSET_TEMPO


class TestMarkerIndex:
    def test_upper_bound(self):
        idx = MarkerIndex([1, 4, 4, 7])
        assert idx.upper_bound(0) == 0
        assert idx.upper_bound(1) == 1
        assert idx.upper_bound(4) == 3
        assert idx.upper_bound(6) == 3
        assert idx.upper_bound(10) == 4

    def test_adjust_floor(self):
        idx = MarkerIndex([1])
        assert idx.adjust_floor(0) == 0
        assert idx.adjust_floor(2) == 1
        assert idx.adjust_floor(3) == 2

    def test_add_keeps_sorted(self):
        idx = MarkerIndex()
        for p in (5, 1, 3):
            idx.add(p)
        assert idx.positions == [1, 3, 5]

    def test_empty_index(self):
        idx = MarkerIndex()
        assert idx.upper_bound(100) == 0
        assert idx.adjust_floor(7) == 7
