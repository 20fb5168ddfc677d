"""Operation results and error kinds returned by the engine."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ashakk.events.game_events import GameEvent


class ErrorKind(str, Enum):
    """Why an operation was rejected. The match state is unchanged."""

    # Engine
    NOT_YOUR_TURN = "NotYourTurn"
    WRONG_PHASE = "WrongPhase"
    INVALID_NUMBER_CHOICE = "InvalidNumberChoice"
    MISSING_STARTER_TILE = "MissingStarterTile"
    MISSING_SUBMITTED_TILE = "MissingSubmittedTile"
    EMPTY_SUBMISSION = "EmptySubmission"
    NO_ACTIVE_SUBMISSION = "NoActiveSubmission"
    SELF_DOUBT = "SelfDoubt"
    NUMBER_CHOICE_NOT_NEEDED = "NumberChoiceNotNeeded"
    NUMBER_CHOICE_REQUIRED = "NumberChoiceRequired"
    UNKNOWN_PLAYER = "UnknownPlayer"

    # Setup
    NOT_GAME_MASTER = "NotGameMaster"
    NOT_ENOUGH_PLAYERS = "NotEnoughPlayers"
    GAME_ALREADY_STARTED = "GameAlreadyStarted"
    ROOM_FULL = "RoomFull"
    ALREADY_IN_ROOM = "AlreadyInRoom"

    # Directory / transport
    ROOM_NOT_FOUND = "RoomNotFound"
    ROOM_ALREADY_EXISTS = "RoomAlreadyExists"
    NOT_IN_ROOM = "NotInRoom"
    INVALID_PAYLOAD = "InvalidPayload"


class Penalty(str, Enum):
    """Who was wrong when a doubt was resolved."""

    SUBMITTER = "SUBMITTER"
    DOUBTER = "DOUBTER"


class FollowUp(str, Enum):
    """What the table has to do next after a successful operation."""

    CHOOSE_NUMBER = "CHOOSE_NUMBER"


class ActionResult(BaseModel):
    """Outcome of an engine operation."""

    success: bool
    error: Optional[ErrorKind] = None
    penalty: Optional[Penalty] = None
    action: Optional[FollowUp] = None
    events: list[GameEvent] = Field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, **kwargs) -> "ActionResult":
        return cls(success=True, **kwargs)

    @classmethod
    def fail(cls, error: ErrorKind) -> "ActionResult":
        return cls(success=False, error=error)

    def to_ack(self) -> dict:
        """Acknowledgement payload for the transport."""
        ack: dict = {"success": self.success}
        if self.error is not None:
            ack["error"] = self.error.value
        if self.penalty is not None:
            ack["penalty"] = self.penalty.value
        if self.action is not None:
            ack["action"] = self.action.value
        return ack


class AshakkError(Exception):
    """Base exception for directory-level failures; carries an ErrorKind."""

    def __init__(self, message: str, kind: ErrorKind):
        self.kind = kind
        super().__init__(message)


class RoomAlreadyExistsError(AshakkError):
    """Raised when creating a room whose id is taken."""

    def __init__(self, message: str):
        super().__init__(message, ErrorKind.ROOM_ALREADY_EXISTS)
