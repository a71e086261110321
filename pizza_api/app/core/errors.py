"""
Error taxonomy shared by the services and the HTTP layer.

Services raise these exceptions; ``main.create_app`` registers a
handler that renders them as ``{"detail": ...}`` with the matching
status code.  Missing records are not exceptions: services return
``None`` and the routes answer 404.
"""

from typing import Any, List, Optional

from fastapi import status
from pydantic import ValidationError as PydanticValidationError


class PizzaAPIError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, errors: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationError(PizzaAPIError):
    """Missing or malformed input."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class StorageError(PizzaAPIError):
    """Reading or writing the document or an uploaded file failed.

    The message is logged server side only; clients receive a generic
    description.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message = "Storage failure, please retry later"


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    """Convert a pydantic error into our ``ValidationError``."""
    errors = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    fields = ", ".join(e["field"] for e in errors) or "payload"
    return ValidationError(f"Invalid or missing fields: {fields}", errors)
