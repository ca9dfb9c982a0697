"""
Error taxonomy shared by the services and the HTTP layer.

Services raise one of the ``ServiceError`` subclasses below; the
exception handlers registered in ``main.py`` turn them into the JSON
error envelope ``{"success": false, "message": ...}`` with the matching
HTTP status.
"""

from typing import Optional

from fastapi import status


class ServiceError(Exception):
    """Base class for failures reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, error: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        # Extra detail surfaced in the ``error`` field of the envelope.
        self.error = error

    def to_dict(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class Unauthenticated(ServiceError):
    """Missing, malformed or unverifiable bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(ServiceError):
    """Verified identity does not own the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidArgument(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreFailure(ServiceError):
    """The document store rejected or failed an operation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
