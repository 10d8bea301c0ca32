"""Application exceptions - use case failures rather than domain rule violations."""
from typing import Any, Iterable, List, Optional


class ApplicationError(Exception):
    """Base class for application-level errors."""


class ValidationError(ApplicationError):
    """One or more business rules rejected the input.

    `errors` keeps every individual message; the exception message joins them.
    """

    def __init__(self, message_or_errors, errors: Optional[Iterable[str]] = None):
        if isinstance(message_or_errors, str):
            self.errors: List[str] = list(errors) if errors is not None else [message_or_errors]
            message = message_or_errors
        else:
            self.errors = list(message_or_errors)
            message = " ".join(self.errors)
        super().__init__(message)


class EntityNotFoundError(ApplicationError):
    """A referenced entity does not exist (404 semantics)."""

    def __init__(self, entity_name: str, entity_id: Any, message: Optional[str] = None):
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(message or f"{entity_name} with ID '{entity_id}' was not found.")


class NullInputError(ApplicationError, TypeError):
    """A required input was None (as opposed to empty)."""

    def __init__(self, argument_name: str):
        self.argument_name = argument_name
        super().__init__(f"'{argument_name}' cannot be None.")
