"""Stub AI implementations for testing and stress runs.

These participants pick random legal moves from a player view. Useful for:
- Integration tests (full matches without a client)
- Stress runs under the collecting validator
"""

import random
from collections import Counter
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel, Field

from ashakk.models.tile import Tile, DOUBLE_SIX, MAX_PIP


class MoveKind(str, Enum):
    """Operations a participant can ask the engine for."""

    STARTER = "STARTER"
    PLAY = "PLAY"
    NO_TILE = "NO_TILE"
    DOUBT = "DOUBT"
    CHOOSE_NUMBER = "CHOOSE_NUMBER"


class Move(BaseModel):
    """A participant's decision."""

    kind: MoveKind
    tiles: list[Tile] = Field(default_factory=list)
    number: Optional[int] = None


class Participant(Protocol):
    """Protocol for automated or human participants."""

    def decide(self, view: dict) -> Optional[Move]:
        """Return a move for the current player view, or None to wait."""
        ...

    def consider_doubt(self, view: dict) -> bool:
        """Decide whether to doubt the outstanding submission."""
        ...


class StubPlayer:
    """A stub player that handles every phase with random choices.

    Plays honestly when it can, bluffs with probability bluff_rate when it
    cannot, and doubts other players' submissions with probability
    doubt_rate.
    """

    def __init__(
        self,
        player_id: str,
        seed: Optional[int] = None,
        bluff_rate: float = 0.3,
        doubt_rate: float = 0.2,
    ):
        """Initialize stub player with optional random seed."""
        self.player_id = player_id
        self._rng = random.Random(seed)
        self.bluff_rate = bluff_rate
        self.doubt_rate = doubt_rate

    def decide(self, view: dict) -> Optional[Move]:
        """Pick a move for our turn; None when it is not our turn."""
        if not view.get("is_my_turn"):
            return None

        hand = [Tile.model_validate(t) for t in view.get("my_hand", [])]
        phase = view.get("phase")

        if phase == "STARTER":
            if DOUBLE_SIX not in hand:
                return None
            rest = [t for t in hand if t != DOUBLE_SIX]
            return Move(kind=MoveKind.STARTER, number=self._favourite_number(rest))

        if view.get("needs_number_choice"):
            return Move(kind=MoveKind.CHOOSE_NUMBER, number=self._favourite_number(hand))

        number = view.get("current_number", -1)
        matching = [t for t in hand if t.contains(number)]
        if matching:
            count = self._rng.randint(1, len(matching))
            return Move(kind=MoveKind.PLAY, tiles=self._rng.sample(matching, count))

        if hand and self._rng.random() < self.bluff_rate:
            return Move(kind=MoveKind.PLAY, tiles=[self._rng.choice(hand)])

        return Move(kind=MoveKind.NO_TILE)

    def consider_doubt(self, view: dict) -> bool:
        author = view.get("last_submission_player_id")
        if view.get("phase") != "PLAY" or author is None or author == self.player_id:
            return False
        return self._rng.random() < self.doubt_rate

    def _favourite_number(self, hand: list[Tile]) -> int:
        """Most common pip in the hand; random when the hand is empty."""
        if not hand:
            return self._rng.randint(0, MAX_PIP)
        pips = Counter()
        for tile in hand:
            pips[tile.a] += 1
            if not tile.is_double():
                pips[tile.b] += 1
        best = max(pips.values())
        return self._rng.choice(sorted(p for p, c in pips.items() if c == best))


def create_stub_player(player_id: str, seed: Optional[int] = None, **kwargs) -> StubPlayer:
    """Create a stub player with the given id and optional seed."""
    return StubPlayer(player_id, seed=seed, **kwargs)
