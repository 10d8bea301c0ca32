"""Application models."""
from app.application.models.validation_result import ValidationResult

__all__ = ["ValidationResult"]
