"""GameRoom - the rule engine that owns one match.

Match Flow:
    1. Lobby: players join until the game master starts the match
    2. Deal: the shuffled set is split evenly, the double-six holder starts
    3. STARTER: the starter plays 6|6 face-up and calls the first number
    4. PLAY: players submit tiles face-down (bluffing allowed), pass, or
       doubt the last submission; a doubt moves the whole board to whoever
       was wrong and forces a fresh number
    5. ENDED: someone emptied their hand and the claim stood
"""

import functools
import logging
import random
import threading
from typing import Iterable, Optional, Sequence, TYPE_CHECKING

from ashakk.engine.domino_set import (
    SET_SIZE,
    add_to_hand,
    deal,
    find_starter_index,
    generate_set,
    hand_contains_all,
    remove_from_hand,
    shuffle,
)
from ashakk.engine.game_state import GameState, GamePhase, Submission
from ashakk.engine.results import ActionResult, ErrorKind, FollowUp, Penalty
from ashakk.events import (
    AllPassed,
    DoubtResolved,
    GameEvent,
    GameEventLog,
    GameOver,
    GameStarted,
    NoTileClaimed,
    NumberChosen,
    StarterPlayed,
    TilesSubmitted,
    VictoryCondition,
)
from ashakk.models import DOUBLE_SIX, MAX_PIP, Player, Tile
from ashakk.validation.submission import is_valid_submission

# Import validator for type hints (avoid circular import)
if TYPE_CHECKING:
    from ashakk.engine.validator import GameValidator

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLAYERS = 4
DEFAULT_MIN_PLAYERS = 2


def _serialized(method):
    """Run the method while holding the room lock."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


def _is_pip(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_PIP


class GameRoom:
    """Authoritative engine for one room.

    The room is the only writer of its GameState. Every public operation
    runs under a per-room re-entrant lock, so concurrent requests for the
    same room are applied one at a time. Rule violations never raise: they
    come back as a failed ActionResult and leave the state untouched.
    """

    def __init__(
        self,
        room_id: str,
        players: Iterable[Player],
        game_master_id: str,
        validator: Optional["GameValidator"] = None,
        max_players: int = DEFAULT_MAX_PLAYERS,
        min_players: int = DEFAULT_MIN_PLAYERS,
    ):
        """Initialize the GameRoom.

        Args:
            room_id: Directory key of the room.
            players: Initial seated players, in seating order.
            game_master_id: The player allowed to start the match.
            validator: Optional validator for runtime invariant checking.
                       Pass None or NoOpValidator for production.
            max_players: Seats available in the lobby.
            min_players: Players required before the match may start.
        """
        self._state = GameState(
            room_id=room_id,
            game_master_id=game_master_id,
            players=list(players),
        )
        self._log = GameEventLog(room_id=room_id)
        self._validator = validator
        self._lock = threading.RLock()
        self.max_players = max_players
        self.min_players = min_players

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def room_id(self) -> str:
        return self._state.room_id

    @property
    def state(self) -> GameState:
        """The live state. Mutate only through the operations below."""
        return self._state

    @property
    def events(self) -> GameEventLog:
        return self._log

    @property
    def lock(self) -> threading.RLock:
        """Room lock, for callers that need an operation and a snapshot together."""
        return self._lock

    @property
    def is_over(self) -> bool:
        return self._state.phase == GamePhase.ENDED

    def has_player(self, player_id: str) -> bool:
        return self._state.get_player(player_id) is not None

    def can_start_game(self, player_id: str) -> bool:
        """Only the game master may trigger the deal."""
        return self._state.game_master_id == player_id

    # =========================================================================
    # Lobby and deal
    # =========================================================================

    @_serialized
    def add_player(self, player: Player) -> ActionResult:
        """Seat a new player before the deal.

        Rejected once any hand is non-empty, when the room is full, or when
        the id is already seated.
        """
        state = self._state
        if state.dealt or any(p.hand for p in state.players):
            return self._reject("add_player", player.id, ErrorKind.GAME_ALREADY_STARTED)
        if self.has_player(player.id):
            return self._reject("add_player", player.id, ErrorKind.ALREADY_IN_ROOM)
        if len(state.players) >= self.max_players:
            return self._reject("add_player", player.id, ErrorKind.ROOM_FULL)

        state.players.append(player)
        logger.info("room=%s player=%s joined (%d seated)", self.room_id, player.id, len(state.players))
        return ActionResult.ok()

    @_serialized
    def start_game(self, player_id: str, rng: Optional[random.Random] = None) -> ActionResult:
        """Start the match on behalf of a player.

        Checks the caller-side preconditions, then deals.
        """
        if self._state.dealt:
            return self._reject("start_game", player_id, ErrorKind.GAME_ALREADY_STARTED)
        if not self.can_start_game(player_id):
            return self._reject("start_game", player_id, ErrorKind.NOT_GAME_MASTER)
        if len(self._state.players) < self.min_players:
            return self._reject("start_game", player_id, ErrorKind.NOT_ENOUGH_PLAYERS)

        events = self.initialize_game(rng=rng)
        return ActionResult.ok(events=events)

    @_serialized
    def initialize_game(
        self,
        rng: Optional[random.Random] = None,
        deck: Optional[Sequence[Tile]] = None,
    ) -> list[GameEvent]:
        """Deal the set and enter the STARTER phase.

        Each player gets 28 // n tiles in seat order; the remainder is
        removed from play for the whole match. The first seat holding the
        double-six starts; if nobody holds it, seat 0 does.

        Args:
            rng: Optional random.Random for a reproducible shuffle.
            deck: Optional pre-ordered deck dealt as-is (replays). Must be a
                  permutation of the full set.

        Returns:
            The GameStarted event.

        Raises:
            RuntimeError: If the room has already been dealt. The deal happens
                          once per room, ENDED included.
            ValueError: If deck is not a permutation of the full set.
        """
        state = self._state
        if state.dealt:
            raise RuntimeError(f"room {self.room_id} has already been dealt")
        if deck is not None:
            tiles = list(deck)
            if sorted(t.key() for t in tiles) != sorted(t.key() for t in generate_set()):
                raise ValueError("deck must be a permutation of the double-six set")
        else:
            tiles = shuffle(generate_set(), rng)

        hands, undealt = deal(tiles, len(state.players))
        for player, hand in zip(state.players, hands):
            player.hand = hand
            player.has_passed = False

        state.undealt = undealt
        state.current_player_index = find_starter_index(hands)
        state.phase = GamePhase.STARTER
        state.current_number = -1
        state.needs_number_choice = False
        state.board = []
        state.starter_tile = None
        state.last_submission = None
        state.consecutive_no_passes = 0
        state.winner = None
        state.leaderboard = []
        state.dealt = True

        if undealt and DOUBLE_SIX in undealt:
            logger.warning(
                "room=%s double-six was not dealt; seat 0 cannot open the match",
                self.room_id,
            )

        event = GameStarted(
            room_id=self.room_id,
            player_count=len(state.players),
            tiles_per_player=SET_SIZE // len(state.players),
            undealt_count=len(undealt),
            starter_id=state.current_player.id,
        )
        self._log.add(event)
        logger.info("room=%s dealt to %d players, %s starts", self.room_id, len(state.players), event.starter_id)

        if self._validator:
            self._validator.on_game_start(state)

        return [event]

    # =========================================================================
    # Projections
    # =========================================================================

    @_serialized
    def public_view(self) -> dict:
        """State safe to broadcast: sizes only, never hand or board contents."""
        state = self._state
        last = state.last_submission
        return {
            "room_id": state.room_id,
            "game_master_id": state.game_master_id,
            "players": [p.to_public_dict() for p in state.players],
            "current_player_index": state.current_player_index,
            "current_player_id": state.current_player.id if state.players else None,
            "current_number": state.current_number,
            "needs_number_choice": state.needs_number_choice,
            "board_size": len(state.board),
            "starter_tile": state.starter_tile.model_dump() if state.starter_tile is not None else None,
            "phase": state.phase.value,
            "dealt": state.dealt,
            "last_submission_size": len(last.tiles) if last is not None else None,
            "last_submission_player_id": last.player_id if last is not None else None,
            "consecutive_no_passes": state.consecutive_no_passes,
            "winner": state.winner,
            "leaderboard": list(state.leaderboard),
        }

    @_serialized
    def player_view(self, player_id: str) -> dict:
        """Public view plus the player's own hand and whether it is their turn."""
        view = self.public_view()
        player = self._state.get_player(player_id)
        view["my_hand"] = [t.model_dump() for t in player.hand] if player is not None else []
        view["is_my_turn"] = (
            player is not None
            and self._state.dealt
            and not self.is_over
            and self._state.is_current_player(player_id)
        )
        return view

    # =========================================================================
    # Turn operations
    # =========================================================================

    @_serialized
    def submit_starter(self, player_id: str, number_choice: int) -> ActionResult:
        """Play the double-six face-up and call the first number.

        The same player keeps the turn and plays next.
        """
        error = self._check_turn(player_id, GamePhase.STARTER)
        if error is not None:
            return self._reject("submit_starter", player_id, error)
        if not _is_pip(number_choice):
            return self._reject("submit_starter", player_id, ErrorKind.INVALID_NUMBER_CHOICE)

        state = self._state
        player = state.current_player
        if DOUBLE_SIX not in player.hand:
            return self._reject("submit_starter", player_id, ErrorKind.MISSING_STARTER_TILE)

        player.hand = remove_from_hand(player.hand, [DOUBLE_SIX])
        state.starter_tile = DOUBLE_SIX
        state.current_number = number_choice
        state.phase = GamePhase.PLAY
        state.needs_number_choice = False
        state.reset_passes()

        events: list[GameEvent] = [
            StarterPlayed(room_id=self.room_id, actor=player_id, tile=DOUBLE_SIX, number=number_choice)
        ]
        if not player.hand:
            events.append(self._end(player_id, VictoryCondition.STARTER_EMPTIED_HAND))

        return self._applied("submit_starter", events)

    @_serialized
    def submit_tiles(self, player_id: str, tiles: Sequence[Tile]) -> ActionResult:
        """Place tiles face-down, claiming they all contain the current number.

        Only hand membership is checked; whether the claim is true is left
        to doubts. Playing implicitly accepts the previous submission: if
        its author has no tiles left, they win on the spot.
        """
        error = self._check_turn(player_id, GamePhase.PLAY)
        if error is not None:
            return self._reject("submit_tiles", player_id, error)

        state = self._state
        if state.needs_number_choice:
            return self._reject("submit_tiles", player_id, ErrorKind.NUMBER_CHOICE_REQUIRED)

        tiles = list(tiles)
        if not tiles:
            return self._reject("submit_tiles", player_id, ErrorKind.EMPTY_SUBMISSION)

        player = state.current_player
        if not hand_contains_all(player.hand, tiles):
            return self._reject("submit_tiles", player_id, ErrorKind.MISSING_SUBMITTED_TILE)

        player.hand = remove_from_hand(player.hand, tiles)
        state.board = add_to_hand(state.board, tiles)
        events: list[GameEvent] = [
            TilesSubmitted(
                room_id=self.room_id,
                actor=player_id,
                count=len(tiles),
                number=state.current_number,
            )
        ]

        prior = state.last_submission
        if prior is not None:
            prior_submitter = state.get_player(prior.player_id)
            if prior_submitter is not None and not prior_submitter.hand:
                events.append(self._end(prior_submitter.id, VictoryCondition.IMPLICIT_ACCEPTANCE))
                return self._applied("submit_tiles", events)

        state.last_submission = Submission(player_id=player_id, tiles=tiles)
        state.advance_turn()
        state.consecutive_no_passes = 0

        return self._applied("submit_tiles", events)

    @_serialized
    def submit_no_tile(self, player_id: str) -> ActionResult:
        """Claim to hold no tile with the current number.

        When every seat has passed in a row, the next player must choose a
        fresh number before anyone may act.
        """
        error = self._check_turn(player_id, GamePhase.PLAY)
        if error is not None:
            return self._reject("submit_no_tile", player_id, error)

        state = self._state
        if state.needs_number_choice:
            return self._reject("submit_no_tile", player_id, ErrorKind.NUMBER_CHOICE_REQUIRED)

        state.current_player.has_passed = True
        state.consecutive_no_passes += 1
        events: list[GameEvent] = [
            NoTileClaimed(room_id=self.room_id, actor=player_id, consecutive=state.consecutive_no_passes)
        ]

        if state.consecutive_no_passes >= len(state.players):
            state.advance_turn()
            state.needs_number_choice = True
            state.reset_passes()
            events.append(AllPassed(room_id=self.room_id, chooser_id=state.current_player.id))
            return self._applied("submit_no_tile", events, action=FollowUp.CHOOSE_NUMBER)

        state.advance_turn()
        return self._applied("submit_no_tile", events)

    @_serialized
    def accept_submission(self, player_id: str) -> ActionResult:
        """Kept for older clients: acceptance is implicit in submit_tiles."""
        return ActionResult.ok()

    @_serialized
    def doubt_submission(self, player_id: str) -> ActionResult:
        """Challenge the last submission. Any seated player but its author may doubt.

        Honest submission: the doubter collects the board and the submitter
        plays next. Bluff: the submitter collects and the doubter plays
        next. An honest submitter with an empty hand wins instead, and no
        tiles move.
        """
        state = self._state
        if not state.dealt or state.phase != GamePhase.PLAY:
            return self._reject("doubt_submission", player_id, ErrorKind.WRONG_PHASE)
        doubter = state.get_player(player_id)
        if doubter is None:
            return self._reject("doubt_submission", player_id, ErrorKind.UNKNOWN_PLAYER)
        last = state.last_submission
        if last is None:
            return self._reject("doubt_submission", player_id, ErrorKind.NO_ACTIVE_SUBMISSION)
        if last.player_id == player_id:
            return self._reject("doubt_submission", player_id, ErrorKind.SELF_DOUBT)

        submitter = state.get_player(last.player_id)
        if submitter is None:
            # Seating is fixed for the match, so the author is always seated.
            return self._reject("doubt_submission", player_id, ErrorKind.UNKNOWN_PLAYER)

        honest = is_valid_submission(last.tiles, state.current_number)
        if honest:
            penalty, penalized, next_player = Penalty.DOUBTER, doubter, submitter
        else:
            penalty, penalized, next_player = Penalty.SUBMITTER, submitter, doubter
        state.current_player_index = state.seat_of(next_player.id)

        if honest and not submitter.hand:
            events: list[GameEvent] = [
                DoubtResolved(
                    room_id=self.room_id,
                    actor=player_id,
                    submitter_id=submitter.id,
                    was_honest=True,
                    next_player_id=next_player.id,
                ),
                self._end(submitter.id, VictoryCondition.HONEST_DOUBT),
            ]
            return self._applied("doubt_submission", events, penalty=penalty)

        collected = list(state.board)
        if state.starter_tile is not None:
            collected.append(state.starter_tile)
        penalized.hand = add_to_hand(penalized.hand, collected)

        state.board = []
        state.starter_tile = None
        state.last_submission = None
        state.needs_number_choice = True
        state.reset_passes()

        logger.info(
            "room=%s %s doubted %s: %s, %s collects %d",
            self.room_id, player_id, submitter.id,
            "honest" if honest else "bluff", penalized.id, len(collected),
        )
        events = [
            DoubtResolved(
                room_id=self.room_id,
                actor=player_id,
                submitter_id=submitter.id,
                was_honest=honest,
                penalized_id=penalized.id,
                tiles_collected=len(collected),
                next_player_id=next_player.id,
            )
        ]
        return self._applied("doubt_submission", events, penalty=penalty)

    @_serialized
    def choose_number(self, player_id: str, number_choice: int) -> ActionResult:
        """Pick a fresh current number after a doubt or a full round of passes."""
        state = self._state
        if not state.dealt or state.phase != GamePhase.PLAY:
            return self._reject("choose_number", player_id, ErrorKind.WRONG_PHASE)
        if not state.needs_number_choice:
            return self._reject("choose_number", player_id, ErrorKind.NUMBER_CHOICE_NOT_NEEDED)
        if not state.is_current_player(player_id):
            return self._reject("choose_number", player_id, ErrorKind.NOT_YOUR_TURN)
        if not _is_pip(number_choice):
            return self._reject("choose_number", player_id, ErrorKind.INVALID_NUMBER_CHOICE)

        state.current_number = number_choice
        state.needs_number_choice = False
        state.reset_passes()

        events: list[GameEvent] = [NumberChosen(room_id=self.room_id, actor=player_id, number=number_choice)]
        return self._applied("choose_number", events)

    # =========================================================================
    # Internals
    # =========================================================================

    def _check_turn(self, player_id: str, phase: GamePhase) -> Optional[ErrorKind]:
        """Entry guard shared by turn operations: phase first, then turn."""
        state = self._state
        if not state.dealt or state.phase != phase:
            return ErrorKind.WRONG_PHASE
        if not state.is_current_player(player_id):
            return ErrorKind.NOT_YOUR_TURN
        return None

    def _end(self, winner_id: str, condition: VictoryCondition) -> GameOver:
        self._state.finish(winner_id)
        logger.info("room=%s %s wins (%s)", self.room_id, winner_id, condition.value)
        return GameOver(
            room_id=self.room_id,
            actor=winner_id,
            winner_id=winner_id,
            condition=condition,
            leaderboard=list(self._state.leaderboard),
        )

    def _applied(self, action_name: str, events: list[GameEvent], **kwargs) -> ActionResult:
        self._log.extend(events)
        if self._validator:
            self._validator.on_action_applied(action_name, self._state)
            if self.is_over:
                self._validator.on_game_over(self._state)
        logger.debug("room=%s %s applied: %s", self.room_id, action_name, ", ".join(str(e) for e in events))
        return ActionResult.ok(events=events, **kwargs)

    def _reject(self, action: str, player_id: str, error: ErrorKind) -> ActionResult:
        logger.debug("room=%s %s by %s rejected: %s", self.room_id, action, player_id, error.value)
        return ActionResult.fail(error)
