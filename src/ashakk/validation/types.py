"""Validation types shared across all validators."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ValidationSeverity(str, Enum):
    """Severity level of a validation violation."""

    ERROR = "error"
    WARNING = "warning"


class ValidationViolation(BaseModel):
    """A single invariant violation detected during validation."""

    rule_id: str  # e.g. "tile_conservation"
    category: str  # e.g. "Tile Accounting", "Turn Order"
    message: str  # Human-readable description
    severity: ValidationSeverity = ValidationSeverity.ERROR
    context: Optional[dict] = None  # Additional context for debugging
    action: Optional[str] = None  # Operation name, if raised after one


class ValidationResult(BaseModel):
    """Result of a validation check."""

    is_valid: bool = True
    violations: list[ValidationViolation] = Field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_valid

    @classmethod
    def from_violations(cls, violations: list[ValidationViolation]) -> "ValidationResult":
        errors = [v for v in violations if v.severity == ValidationSeverity.ERROR]
        return cls(is_valid=not errors, violations=list(violations))
