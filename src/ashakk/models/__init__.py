"""Models package."""

from ashakk.models.tile import Tile, DOUBLE_SIX, MAX_PIP
from ashakk.models.player import Player, create_player

__all__ = [
    "Tile",
    "DOUBLE_SIX",
    "MAX_PIP",
    "Player",
    "create_player",
]
