"""Validation result model."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation call; created fresh for each call."""
    is_valid: bool
    errors: Tuple[str, ...] = ()

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def failure(cls, *errors: str) -> "ValidationResult":
        return cls(is_valid=False, errors=tuple(errors))
