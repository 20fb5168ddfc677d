"""Event types for match logging.

Events only carry public information: identities, counts, numbers and the
face-up starter tile. Face-down tile contents never appear here.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ashakk.models.tile import Tile


class VictoryCondition(str, Enum):
    """How the match was won."""

    STARTER_EMPTIED_HAND = "STARTER_EMPTIED_HAND"
    IMPLICIT_ACCEPTANCE = "IMPLICIT_ACCEPTANCE"
    HONEST_DOUBT = "HONEST_DOUBT"


class GameEvent(BaseModel):
    """Base class for all match events."""

    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    room_id: str
    actor: Optional[str] = None  # acting player id, if any

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def to_payload(self) -> dict:
        """Serialize with the concrete event name for broadcasting."""
        payload = self.model_dump(mode="json")
        payload["type"] = self.name
        return payload

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.name}(actor={self.actor})"


# ============================================================================
# Setup
# ============================================================================

class GameStarted(GameEvent):
    """Tiles were dealt and the starter seat was found."""

    player_count: int
    tiles_per_player: int
    undealt_count: int
    starter_id: str

    def __str__(self) -> str:
        return (
            f"GameStarted: {self.player_count} players, {self.tiles_per_player} tiles each, "
            f"{self.undealt_count} undealt, {self.starter_id} starts"
        )


class StarterPlayed(GameEvent):
    """The double-six was played face-up and the first number chosen."""

    tile: Tile
    number: int

    def __str__(self) -> str:
        return f"StarterPlayed: {self.actor} played {self.tile} and called {self.number}"


# ============================================================================
# Turn actions
# ============================================================================

class TilesSubmitted(GameEvent):
    """A player placed tiles face-down claiming they match the current number."""

    count: int
    number: int

    def __str__(self) -> str:
        return f"TilesSubmitted: {self.actor} claims {self.count} x {self.number}"


class NoTileClaimed(GameEvent):
    """A player claimed to hold nothing matching the current number."""

    consecutive: int

    def __str__(self) -> str:
        return f"NoTileClaimed: {self.actor} passes ({self.consecutive} in a row)"


class AllPassed(GameEvent):
    """Every seat passed in a row; the next player must pick a number."""

    chooser_id: str

    def __str__(self) -> str:
        return f"AllPassed: {self.chooser_id} picks the next number"


class DoubtResolved(GameEvent):
    """A doubt was raised against the last submission and resolved.

    actor is the doubter.
    """

    submitter_id: str
    was_honest: bool
    penalized_id: Optional[str] = None  # None when the submitter won instead
    tiles_collected: int = 0
    next_player_id: str

    def __str__(self) -> str:
        verdict = "honest" if self.was_honest else "bluff"
        if self.penalized_id is None:
            return f"DoubtResolved: {self.actor} doubted {self.submitter_id} ({verdict})"
        return (
            f"DoubtResolved: {self.actor} doubted {self.submitter_id} ({verdict}), "
            f"{self.penalized_id} collects {self.tiles_collected}"
        )


class NumberChosen(GameEvent):
    """A fresh current number was chosen."""

    number: int

    def __str__(self) -> str:
        return f"NumberChosen: {self.actor} called {self.number}"


# ============================================================================
# End of match
# ============================================================================

class GameOver(GameEvent):
    """The match ended."""

    winner_id: str
    condition: VictoryCondition
    leaderboard: list[str]

    def __str__(self) -> str:
        return f"GameOver: {self.winner_id} wins ({self.condition.value})"
