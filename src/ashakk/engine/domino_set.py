"""Domino set utilities - generating, shuffling, dealing and hand mutation.

All functions are pure: inputs are never mutated, new lists are returned.
"""

import random
from collections import Counter
from typing import Iterable, Optional, Sequence

from ashakk.models.tile import Tile, DOUBLE_SIX, MAX_PIP

SET_SIZE = 28


def generate_set() -> list[Tile]:
    """Generate the double-six set (0|0 to 6|6), 28 tiles in fixed order."""
    return [Tile(a=i, b=j) for i in range(MAX_PIP + 1) for j in range(i, MAX_PIP + 1)]


def shuffle(tiles: Sequence[Tile], rng: Optional[random.Random] = None) -> list[Tile]:
    """Return a uniformly shuffled copy using Fisher-Yates.

    Args:
        tiles: Tiles to shuffle (left untouched).
        rng: Optional random.Random for reproducible deals. Falls back to
             the module-level generator.
    """
    source = rng if rng is not None else random
    result = list(tiles)
    for i in range(len(result) - 1, 0, -1):
        j = source.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def deal(tiles: Sequence[Tile], num_players: int) -> tuple[list[list[Tile]], list[Tile]]:
    """Split tiles into equal hands.

    Each player gets len(tiles) // num_players tiles in seat order. The
    remainder is not dealt to anyone and is returned separately.

    Returns:
        (hands, undealt)
    """
    if num_players < 1:
        raise ValueError(f"num_players must be >= 1, got {num_players}")
    per_player = len(tiles) // num_players
    hands = [list(tiles[i * per_player:(i + 1) * per_player]) for i in range(num_players)]
    undealt = list(tiles[num_players * per_player:])
    return hands, undealt


def find_starter_index(hands: Sequence[Sequence[Tile]]) -> int:
    """Seat of the first hand holding the double-six, or 0 if none does."""
    for seat, hand in enumerate(hands):
        if DOUBLE_SIX in hand:
            return seat
    return 0


def remove_from_hand(hand: Sequence[Tile], to_remove: Iterable[Tile]) -> list[Tile]:
    """Remove one matching tile per requested tile.

    Missing tiles are skipped silently; callers validate membership first
    with hand_contains_all().
    """
    result = list(hand)
    for tile in to_remove:
        for index, held in enumerate(result):
            if held == tile:
                del result[index]
                break
    return result


def add_to_hand(hand: Sequence[Tile], to_add: Iterable[Tile]) -> list[Tile]:
    return list(hand) + list(to_add)


def hand_has_number(hand: Iterable[Tile], number: int) -> bool:
    """Check whether any tile in the hand shows the given number."""
    return any(tile.contains(number) for tile in hand)


def hand_contains_all(hand: Iterable[Tile], tiles: Iterable[Tile]) -> bool:
    """Multiset membership: each requested tile must consume a distinct held tile."""
    held = Counter(tile.key() for tile in hand)
    wanted = Counter(tile.key() for tile in tiles)
    return all(held[key] >= count for key, count in wanted.items())
