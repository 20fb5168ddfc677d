"""Game state management for a single Ashakk match."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ashakk.models.player import Player
from ashakk.models.tile import Tile


class GamePhase(str, Enum):
    """Match phases. PLAY is re-entered after every doubt; ENDED is terminal."""

    STARTER = "STARTER"
    PLAY = "PLAY"
    ENDED = "ENDED"


class Submission(BaseModel):
    """The most recent claim: tiles a player put face-down on the board."""

    player_id: str
    tiles: list[Tile]


class GameState(BaseModel):
    """Represents the current state of one match.

    Owned by exactly one GameRoom, which is the only writer.
    """

    room_id: str
    game_master_id: str
    players: list[Player]  # seating order == turn order
    current_player_index: int = 0
    phase: GamePhase = GamePhase.STARTER
    dealt: bool = False
    current_number: int = -1  # -1 until first chosen
    needs_number_choice: bool = False
    board: list[Tile] = Field(default_factory=list)
    starter_tile: Optional[Tile] = None
    last_submission: Optional[Submission] = None
    consecutive_no_passes: int = 0
    winner: Optional[str] = None
    leaderboard: list[str] = Field(default_factory=list)
    undealt: list[Tile] = Field(default_factory=list)  # remainder of an uneven deal

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id.

        Args:
            player_id: The player's identifier

        Returns:
            Player if seated, None otherwise
        """
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def seat_of(self, player_id: str) -> Optional[int]:
        """Get the seat index of a player, or None if not seated."""
        for seat, player in enumerate(self.players):
            if player.id == player_id:
                return seat
        return None

    def is_current_player(self, player_id: str) -> bool:
        return self.current_player.id == player_id

    def next_seat(self) -> int:
        """Seat following the current player, wrapping around the table."""
        return (self.current_player_index + 1) % len(self.players)

    def advance_turn(self) -> None:
        self.current_player_index = self.next_seat()

    def reset_passes(self) -> None:
        """Clear every passed flag and the consecutive pass counter."""
        for player in self.players:
            player.has_passed = False
        self.consecutive_no_passes = 0

    def finish(self, winner_id: str) -> None:
        """End the match and record the finishing order.

        The winner comes first; everyone else is ranked by remaining hand
        size, seat order breaking ties.
        """
        self.phase = GamePhase.ENDED
        self.winner = winner_id
        others = [p for p in self.players if p.id != winner_id]
        others.sort(key=lambda p: p.hand_size)
        self.leaderboard = [winner_id] + [p.id for p in others]

    def tiles_in_play(self) -> int:
        """Count tiles held in hands, on the board and the face-up starter."""
        total = sum(p.hand_size for p in self.players) + len(self.board)
        if self.starter_tile is not None:
            total += 1
        return total
