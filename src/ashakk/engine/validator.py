"""GameValidator - runtime validation hooks for match invariants.

This module provides a Protocol for validating state after every
successful engine operation. Hooks are injected into GameRoom.

Usage:
    # In tests or stress runs
    validator = CollectingValidator()
    room = GameRoom("r1", players, "p0", validator=validator)
    violations = validator.get_violations()

    # No overhead in production (validator=None)
    room = GameRoom("r1", players, "p0")
"""

from typing import Protocol

from ashakk.engine.game_state import GameState, GamePhase


class GameValidator(Protocol):
    """Hooks for runtime validation at key match points.

    Hooks run synchronously under the room lock, right after the mutation.
    """

    def on_game_start(self, state: GameState) -> None:
        """Called once the deal is complete."""
        ...

    def on_action_applied(self, action: str, state: GameState) -> None:
        """Called after every successful turn operation."""
        ...

    def on_game_over(self, state: GameState) -> list:
        """Called when the match ends. Returns all violations found."""
        ...


class NoOpValidator:
    """No-op validator for production use (zero overhead)."""

    def on_game_start(self, state: GameState) -> None:
        pass

    def on_action_applied(self, action: str, state: GameState) -> None:
        pass

    def on_game_over(self, state: GameState) -> list:
        return []


class CollectingValidator(NoOpValidator):
    """Validator that collects violations for later inspection.

    Use this in tests to verify the invariants hold after every operation.
    Lazy imports are used to avoid circular imports.
    """

    def __init__(self):
        self._violations = []
        self._actions: list[str] = []
        self._ended_after: str | None = None

    def get_violations(self):
        """Get all collected violations."""
        return list(self._violations)

    @property
    def actions(self) -> list[str]:
        """Names of the operations validated so far, in order."""
        return list(self._actions)

    def clear(self):
        """Clear collected violations."""
        self._violations.clear()
        self._actions.clear()
        self._ended_after = None

    def result(self):
        """Summarize the collected violations; warnings alone keep it valid."""
        from ashakk.validation import ValidationResult
        return ValidationResult.from_violations(self._violations)

    def raise_if_violations(self) -> None:
        """Raise ValidationError if anything was collected."""
        from ashakk.validation import ValidationError
        if self._violations:
            raise ValidationError(self.get_violations())

    def on_game_start(self, state: GameState) -> None:
        """Validate the deal."""
        from ashakk.validation import validate_state_consistency
        self._actions.append("initialize_game")
        self._violations.extend(validate_state_consistency(state))

    def on_action_applied(self, action: str, state: GameState) -> None:
        """Validate state invariants and that ENDED stayed terminal."""
        from ashakk.validation import validate_state_consistency, ValidationViolation

        if self._ended_after is not None:
            self._violations.append(ValidationViolation(
                rule_id="ended_is_terminal",
                category="Phases",
                message=f"{action} was applied after the match ended ({self._ended_after})",
                action=action,
            ))

        for violation in validate_state_consistency(state):
            violation.action = action
            self._violations.append(violation)

        self._actions.append(action)
        if state.phase == GamePhase.ENDED and self._ended_after is None:
            self._ended_after = action

    def on_game_over(self, state: GameState) -> list:
        """Return all collected violations at match end."""
        return self.get_violations()


def create_validator(collect: bool = False):
    """Factory function to create appropriate validator.

    Args:
        collect: If True, returns CollectingValidator for tests.
                 If False, returns NoOpValidator for production.

    Returns:
        A GameValidator implementation.
    """
    if collect:
        return CollectingValidator()
    return NoOpValidator()
