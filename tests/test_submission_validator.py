"""Tests for the submission truth check."""

from ashakk.models import Tile
from ashakk.validation import is_valid_submission


def test_all_tiles_match():
    assert is_valid_submission([Tile.of(3, 1), Tile.of(6, 3)], 3)


def test_one_tile_off_number():
    assert not is_valid_submission([Tile.of(3, 1), Tile.of(2, 2)], 3)


def test_double_matches_its_number():
    assert is_valid_submission([Tile.of(4, 4)], 4)


def test_empty_submission_is_never_valid():
    """Test an empty submission is a lie for every number."""
    assert not any(is_valid_submission([], n) for n in range(7))


def test_unset_number_matches_nothing():
    assert not is_valid_submission([Tile.of(0, 0)], -1)
