"""Validation exceptions."""

from typing import List
from .types import ValidationViolation


class ValidationError(Exception):
    """Raised when one or more invariant violations are detected.

    Only raised on request (CollectingValidator.raise_if_violations) during
    tests and stress runs; the engine itself never raises it.
    """

    def __init__(self, violations: List[ValidationViolation]):
        self.violations = violations
        count = len(violations)
        error_violations = sum(1 for v in violations if v.severity.value == "error")
        msg = f"Validation failed with {count} violation(s) ({error_violations} errors)"
        super().__init__(msg)

    def __str__(self) -> str:
        if not self.violations:
            return "ValidationError(no violations)"
        lines = [f"ValidationError({len(self.violations)} violations):"]
        for v in self.violations:
            lines.append(f"  [{v.severity.value.upper()}] {v.rule_id}: {v.message}")
        return "\n".join(lines)
