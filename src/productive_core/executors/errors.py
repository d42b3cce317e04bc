"""
Executor Errors
"""

from __future__ import annotations

from typing import Any


class ExecutorValidationError(Exception):
    """
    Invalid executor input, detected locally before any network call.

    Attributes:
        field: Name of the offending option ("options" for no-op updates)
    """

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "ExecutorValidationError",
            "message": self.message,
            "field": self.field,
        }


def no_updates_error() -> ExecutorValidationError:
    return ExecutorValidationError(
        "No updates specified. Provide at least one field to update",
        "options",
    )


def require(value: Any, field: str, label: str | None = None) -> None:
    """Raise ExecutorValidationError if a required option is missing or blank."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ExecutorValidationError(f"{label or field} is required", field)
