"""Submission truth check, consulted only when a doubt is raised."""

from typing import Sequence

from ashakk.models.tile import Tile


def is_valid_submission(tiles: Sequence[Tile], current_number: int) -> bool:
    """Check whether a submission honestly matches the current number.

    An undoubted submission is never checked: a lie that nobody doubts
    stands.

    Args:
        tiles: Tiles that were placed face-down.
        current_number: The number every tile was claimed to contain.

    Returns:
        False for an empty submission, otherwise True iff every tile
        contains current_number.
    """
    if not tiles:
        return False
    return all(tile.contains(current_number) for tile in tiles)
