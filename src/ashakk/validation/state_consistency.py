"""State consistency validators.

Rules:
- tile_conservation: hands + board + starter + undealt form exactly the 28-tile set
- tile_uniqueness: no tile is held in two places at once
- turn_pointer: current_player_index refers to a seated player
- submission_on_board: the last submission's tiles are on the board
- phase_winner: ENDED iff a seated winner is recorded
- starter_phase: nothing has been played while still in STARTER
- pass_counter: the consecutive pass counter stays below the player count
"""

from collections import Counter

from ashakk.engine.domino_set import generate_set
from ashakk.engine.game_state import GameState, GamePhase
from .types import ValidationViolation, ValidationSeverity


def _all_locations(state: GameState) -> list:
    tiles = []
    for player in state.players:
        tiles.extend(player.hand)
    tiles.extend(state.board)
    if state.starter_tile is not None:
        tiles.append(state.starter_tile)
    tiles.extend(state.undealt)
    return tiles


def validate_tile_accounting(state: GameState) -> list[ValidationViolation]:
    """Validate tile_conservation and tile_uniqueness.

    Skipped before the deal, when hands are legitimately empty.
    """
    violations: list[ValidationViolation] = []
    if not state.dealt:
        return violations

    located = Counter(tile.key() for tile in _all_locations(state))
    expected = Counter(tile.key() for tile in generate_set())

    duplicates = sorted(key for key, count in located.items() if count > 1)
    if duplicates:
        violations.append(ValidationViolation(
            rule_id="tile_uniqueness",
            category="Tile Accounting",
            message=f"{len(duplicates)} tile(s) found in more than one place",
            severity=ValidationSeverity.ERROR,
            context={"duplicates": [list(key) for key in duplicates]},
        ))

    missing = sorted((expected - located).keys())
    extra = sorted((located - expected).keys())
    if missing or extra:
        violations.append(ValidationViolation(
            rule_id="tile_conservation",
            category="Tile Accounting",
            message=f"Tile set not conserved: {len(missing)} missing, {len(extra)} extra",
            severity=ValidationSeverity.ERROR,
            context={
                "missing": [list(key) for key in missing],
                "extra": [list(key) for key in extra],
                "in_play": state.tiles_in_play(),
                "undealt": len(state.undealt),
            },
        ))

    return violations


def validate_state_consistency(state: GameState) -> list[ValidationViolation]:
    """Validate every state invariant.

    Args:
        state: Current game state

    Returns:
        List of validation violations (empty if valid)
    """
    violations = validate_tile_accounting(state)
    player_count = len(state.players)

    if not 0 <= state.current_player_index < player_count:
        violations.append(ValidationViolation(
            rule_id="turn_pointer",
            category="Turn Order",
            message=f"current_player_index={state.current_player_index} outside 0..{player_count - 1}",
            context={"index": state.current_player_index, "player_count": player_count},
        ))

    if state.last_submission is not None:
        on_board = Counter(tile.key() for tile in state.board)
        claimed = Counter(tile.key() for tile in state.last_submission.tiles)
        if claimed - on_board:
            violations.append(ValidationViolation(
                rule_id="submission_on_board",
                category="Submissions",
                message="Last submission has tiles that are not on the board",
                context={"player_id": state.last_submission.player_id},
            ))

    ended = state.phase == GamePhase.ENDED
    winner_seated = state.winner is not None and state.get_player(state.winner) is not None
    if ended != winner_seated:
        violations.append(ValidationViolation(
            rule_id="phase_winner",
            category="Phases",
            message=f"phase={state.phase.value} but winner={state.winner}",
            context={"phase": state.phase.value, "winner": state.winner},
        ))

    if state.phase == GamePhase.STARTER and (
        state.board or state.starter_tile is not None or state.last_submission is not None
    ):
        violations.append(ValidationViolation(
            rule_id="starter_phase",
            category="Phases",
            message="Tiles were played before the starter tile",
            context={"board_size": len(state.board)},
        ))

    if player_count and not 0 <= state.consecutive_no_passes < player_count:
        violations.append(ValidationViolation(
            rule_id="pass_counter",
            category="Turn Order",
            message=f"consecutive_no_passes={state.consecutive_no_passes} with {player_count} players",
            severity=ValidationSeverity.WARNING,
            context={"passes": state.consecutive_no_passes},
        ))

    return violations


__all__ = ["validate_state_consistency", "validate_tile_accounting"]
