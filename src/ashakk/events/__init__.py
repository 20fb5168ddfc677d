"""Events package."""

from ashakk.events.game_events import (
    # Base
    GameEvent,
    # Enums
    VictoryCondition,
    # Setup
    GameStarted,
    StarterPlayed,
    # Turn actions
    TilesSubmitted,
    NoTileClaimed,
    AllPassed,
    DoubtResolved,
    NumberChosen,
    # End
    GameOver,
)

from ashakk.events.event_log import GameEventLog

__all__ = [
    "GameEvent",
    "VictoryCondition",
    "GameStarted",
    "StarterPlayed",
    "TilesSubmitted",
    "NoTileClaimed",
    "AllPassed",
    "DoubtResolved",
    "NumberChosen",
    "GameOver",
    "GameEventLog",
]
