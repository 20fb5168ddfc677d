"""Automated participants for tests and stress runs."""

from ashakk.ai.stub_ai import (
    Move,
    MoveKind,
    Participant,
    StubPlayer,
    create_stub_player,
)
from ashakk.ai.match_runner import (
    MAX_MATCH_ACTIONS,
    MatchReport,
    MatchRunner,
    run_stub_match,
)

__all__ = [
    "Move",
    "MoveKind",
    "Participant",
    "StubPlayer",
    "create_stub_player",
    "MAX_MATCH_ACTIONS",
    "MatchReport",
    "MatchRunner",
    "run_stub_match",
]
