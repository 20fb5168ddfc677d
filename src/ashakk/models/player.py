"""Player model."""

from typing import Optional
from pydantic import BaseModel, Field

from ashakk.models.tile import Tile


class Player(BaseModel):
    """Represents a seated player.

    The id is stable for the whole match. The hand is private: only
    to_public_dict() may be sent to other players.
    """

    id: str
    name: str
    hand: list[Tile] = Field(default_factory=list)
    has_passed: bool = False  # cleared on every fresh number / board clear
    sid: Optional[str] = None  # transport session, if connected

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def to_public_dict(self) -> dict:
        """Convert to dictionary, hiding hand contents."""
        return {
            "id": self.id,
            "name": self.name,
            "hand_size": self.hand_size,
            "has_passed": self.has_passed,
        }


def create_player(player_id: str, name: str, sid: Optional[str] = None) -> Player:
    """Create a player with an empty hand.

    Args:
        player_id: Stable identifier for the match.
        name: Display name.
        sid: Optional transport session id.

    Returns:
        A new Player.
    """
    return Player(id=player_id, name=name, sid=sid)
