"""Chronological event log for one room."""

from datetime import datetime
from typing import Optional, TypeVar
from pydantic import BaseModel, Field, SerializeAsAny

from .game_events import GameEvent, GameStarted, GameOver

E = TypeVar("E", bound=GameEvent)


class GameEventLog(BaseModel):
    """
    Chronological event log for a match.

    Structure:
    - game_start: The deal, once it happened
    - events: Every event in arrival order (including start and end)
    - game_over: Final result
    """

    room_id: str
    created_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    events: list[SerializeAsAny[GameEvent]] = Field(default_factory=list)
    game_start: Optional[GameStarted] = None
    game_over: Optional[GameOver] = None

    def add(self, event: GameEvent) -> None:
        """Append an event, remembering the start and end markers."""
        if isinstance(event, GameStarted):
            self.game_start = event
        elif isinstance(event, GameOver):
            self.game_over = event
        self.events.append(event)

    def extend(self, events: list[GameEvent]) -> None:
        for event in events:
            self.add(event)

    def of_type(self, event_type: type[E]) -> list[E]:
        """All logged events of the given type, oldest first."""
        return [e for e in self.events if isinstance(e, event_type)]

    @property
    def is_over(self) -> bool:
        return self.game_over is not None

    def __len__(self) -> int:
        return len(self.events)

    def __str__(self) -> str:
        """Human-readable transcript of the match."""
        lines = [f"Room {self.room_id} ({len(self.events)} events)"]
        for event in self.events:
            lines.append(f"  {event}")
        return "\n".join(lines)
