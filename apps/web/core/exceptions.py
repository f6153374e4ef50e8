"""
Domain exceptions shared by the catalog, accounts, and orders services.

Each error carries enough structured detail (kind + identifiers) for the
API layer to render a precise message. APIErrorMiddleware maps them to
HTTP responses.
"""

from typing import Any


class OrderingError(Exception):
    """Base exception for domain errors surfaced to API callers."""

    code = "error"
    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Structured payload for the JSON error response."""
        return {"error": self.code, "message": self.message}


class ValidationError(OrderingError):
    """Malformed input (empty cart, non-positive quantity, ...)."""

    code = "validation_error"
    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.field:
            data["field"] = self.field
        return data


class NotFoundError(OrderingError):
    """Referenced entity (menu item, account, order) does not exist."""

    code = "not_found"
    status_code = 404

    def __init__(self, entity: str, identifier: Any) -> None:
        super().__init__(f"{entity} '{identifier}' not found")
        self.entity = entity
        self.identifier = identifier

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["entity"] = self.entity
        data["identifier"] = self.identifier
        return data


class AuthenticationError(OrderingError):
    """Caller could not be identified (bad credentials, no session)."""

    code = "not_authenticated"
    status_code = 401


class AuthorizationError(OrderingError):
    """Caller's role or ownership does not permit the operation."""

    code = "forbidden"
    status_code = 403


class ConflictError(OrderingError):
    """
    Requested change conflicts with the current persisted state.

    For order transitions, carries the current and requested status so the
    caller can re-fetch and decide whether to retry.
    """

    code = "conflict"
    status_code = 409

    def __init__(
        self,
        message: str,
        current_status: str | None = None,
        requested_status: str | None = None,
    ) -> None:
        super().__init__(message)
        self.current_status = current_status
        self.requested_status = requested_status

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.current_status is not None:
            data["current_status"] = self.current_status
        if self.requested_status is not None:
            data["requested_status"] = self.requested_status
        return data
