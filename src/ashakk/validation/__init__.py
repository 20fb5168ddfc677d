"""Ashakk validation module.

Files:
- submission.py: the truth check consulted when a doubt is raised
- types.py: Shared ValidationViolation, ValidationResult, ValidationSeverity
- exceptions.py: ValidationError exception
- state_consistency.py: tile accounting, turn pointer and phase invariants
"""

from .submission import is_valid_submission
from .types import ValidationResult, ValidationViolation, ValidationSeverity
from .exceptions import ValidationError
from .state_consistency import validate_state_consistency, validate_tile_accounting

__all__ = [
    "is_valid_submission",
    "ValidationResult",
    "ValidationViolation",
    "ValidationSeverity",
    "ValidationError",
    "validate_state_consistency",
    "validate_tile_accounting",
]
