"""Engine package - match rules and state."""

from .domino_set import (
    SET_SIZE,
    generate_set,
    shuffle,
    deal,
    find_starter_index,
    remove_from_hand,
    add_to_hand,
    hand_has_number,
    hand_contains_all,
)
from .game_state import GameState, GamePhase, Submission
from .results import (
    ActionResult,
    ErrorKind,
    Penalty,
    FollowUp,
    AshakkError,
    RoomAlreadyExistsError,
)
from .validator import (
    GameValidator,
    NoOpValidator,
    CollectingValidator,
    create_validator,
)
from .game_room import GameRoom

__all__ = [
    "SET_SIZE",
    "generate_set",
    "shuffle",
    "deal",
    "find_starter_index",
    "remove_from_hand",
    "add_to_hand",
    "hand_has_number",
    "hand_contains_all",
    "GameState",
    "GamePhase",
    "Submission",
    "ActionResult",
    "ErrorKind",
    "Penalty",
    "FollowUp",
    "AshakkError",
    "RoomAlreadyExistsError",
    "GameValidator",
    "NoOpValidator",
    "CollectingValidator",
    "create_validator",
    "GameRoom",
]
