"""MatchRunner - drives a room with automated participants until it ends."""

import random
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel

from ashakk.ai.stub_ai import Move, MoveKind, Participant, create_stub_player
from ashakk.engine import ActionResult, GameRoom, GamePhase
from ashakk.models import Player

if TYPE_CHECKING:
    from ashakk.engine.validator import GameValidator

# Maximum number of engine operations before a match is abandoned
MAX_MATCH_ACTIONS = 5000


class MatchReport(BaseModel):
    """Outcome of an automated match."""

    room_id: str
    winner: Optional[str] = None
    actions: int = 0
    doubts: int = 0
    rejected: int = 0
    stalled: bool = False  # no legal opening move (double-six undealt)
    timed_out: bool = False


class MatchRunner:
    """Runs a complete match between participants.

    Match Flow (per step):
        1. Every other seated participant may doubt the outstanding submission
        2. Otherwise the current player decides and the move is applied
        3. Repeat until ENDED, stalled, or MAX_MATCH_ACTIONS
    """

    def __init__(
        self,
        room: GameRoom,
        participants: dict[str, Participant],
        max_actions: int = MAX_MATCH_ACTIONS,
    ):
        self.room = room
        self.participants = participants
        self.max_actions = max_actions

    def run(self) -> MatchReport:
        report = MatchReport(room_id=self.room.room_id)
        state = self.room.state

        while report.actions < self.max_actions:
            if state.phase == GamePhase.ENDED:
                report.winner = state.winner
                return report

            if self._try_doubt(report):
                continue

            current_id = state.current_player.id
            move = self.participants[current_id].decide(self.room.player_view(current_id))
            if move is None:
                # Only happens when the opener lacks the double-six
                report.stalled = True
                return report

            result = self._apply(current_id, move)
            report.actions += 1
            if not result.success:
                report.rejected += 1
                # Fall back to the one move that is always available
                if state.phase == GamePhase.PLAY and not state.needs_number_choice:
                    self.room.submit_no_tile(current_id)
                    report.actions += 1
                else:
                    report.stalled = True
                    return report

        report.timed_out = True
        return report

    def _try_doubt(self, report: MatchReport) -> bool:
        state = self.room.state
        last = state.last_submission
        if state.phase != GamePhase.PLAY or last is None:
            return False
        start = state.seat_of(last.player_id) or 0
        seats = len(state.players)
        for offset in range(1, seats):
            player = state.players[(start + offset) % seats]
            if self.participants[player.id].consider_doubt(self.room.player_view(player.id)):
                result = self.room.doubt_submission(player.id)
                report.actions += 1
                report.doubts += 1
                if not result.success:
                    report.rejected += 1
                return True
        return False

    def _apply(self, player_id: str, move: Move) -> ActionResult:
        if move.kind == MoveKind.STARTER:
            return self.room.submit_starter(player_id, move.number)
        if move.kind == MoveKind.CHOOSE_NUMBER:
            return self.room.choose_number(player_id, move.number)
        if move.kind == MoveKind.PLAY:
            return self.room.submit_tiles(player_id, move.tiles)
        if move.kind == MoveKind.NO_TILE:
            return self.room.submit_no_tile(player_id)
        return self.room.doubt_submission(player_id)


def run_stub_match(
    player_count: int,
    seed: Optional[int] = None,
    validator: Optional["GameValidator"] = None,
    max_actions: int = MAX_MATCH_ACTIONS,
) -> tuple[GameRoom, MatchReport]:
    """Deal a fresh room for stub players and play it out.

    Args:
        player_count: Seats at the table (2-4 in normal play).
        seed: Optional seed; the same seed replays the same match.
        validator: Optional validator attached to the room.
        max_actions: Operation budget before giving up.

    Returns:
        (room, report)
    """
    rng = random.Random(seed)
    players = [Player(id=f"p{seat}", name=f"Player {seat}") for seat in range(player_count)]
    room = GameRoom(
        room_id=f"stub-{seed}",
        players=players,
        game_master_id=players[0].id,
        validator=validator,
        max_players=max(player_count, 4),
    )
    room.initialize_game(rng=rng)
    participants = {
        p.id: create_stub_player(p.id, seed=rng.randrange(2**32))
        for p in players
    }
    return room, MatchRunner(room, participants, max_actions=max_actions).run()
