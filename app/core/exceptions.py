# File: app/core/exceptions.py

"""
Error types shared by the service layer and the routes.

Validation failures that are discovered after request parsing (duplicate
email, wrong current password, ...) are reported as pydantic
``ValidationError`` objects so that callers get the same shape they get for
malformed payloads.
"""

from typing import Any

from pydantic import ValidationError
from pydantic_core import InitErrorDetails, PydanticCustomError


def field_error(field: str, message: str, value: Any = None) -> ValidationError:
    """
    Build a ValidationError carrying a single ``custom`` issue at ``field``.
    """
    detail: InitErrorDetails = {
        "type": PydanticCustomError("custom", message),
        "loc": (field,),
        "input": value,
    }
    return ValidationError.from_exception_data("ValidationError", [detail])


class UserDeletionError(Exception):
    """Raised when a user row could not be deleted."""


class UploadError(Exception):
    """Raised when an uploaded file cannot be stored as an image."""

    def __init__(self, message: str, field: str = "avatar"):
        super().__init__(message)
        self.message = message
        self.field = field
