"""
Tests for domain error payloads and the API error middleware.
"""

from unittest.mock import MagicMock

from django.test import RequestFactory

import pytest
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from apps.web.core.middleware import APIErrorMiddleware


class _Body(BaseModel):
    quantity: int


def _middleware() -> APIErrorMiddleware:
    return APIErrorMiddleware(MagicMock())


class TestErrorPayloads:
    """Tests for to_dict() on domain errors."""

    def test_not_found(self) -> None:
        error = NotFoundError("menu item", 42)

        assert error.message == "menu item '42' not found"
        assert error.to_dict() == {
            "error": "not_found",
            "message": "menu item '42' not found",
            "entity": "menu item",
            "identifier": 42,
        }

    def test_validation_with_field(self) -> None:
        error = ValidationError("cart is empty", field="items")

        assert error.to_dict()["field"] == "items"
        assert error.status_code == 400

    def test_conflict_carries_statuses(self) -> None:
        error = ConflictError(
            "nope", current_status="delivered", requested_status="preparing"
        )

        assert error.status_code == 409
        assert error.to_dict()["current_status"] == "delivered"
        assert error.to_dict()["requested_status"] == "preparing"

    def test_conflict_without_statuses(self) -> None:
        assert "current_status" not in ConflictError("Email already exists.").to_dict()


class TestAPIErrorMiddleware:
    """Tests for exception-to-JSON conversion."""

    def test_domain_error(self) -> None:
        request = RequestFactory().get("/api/orders/1")

        response = _middleware().process_exception(
            request, AuthorizationError("You can only view your own orders.")
        )

        assert response.status_code == 403
        assert response["Access-Control-Allow-Origin"] == "http://localhost:5173"

    def test_pydantic_error(self) -> None:
        request = RequestFactory().post("/api/orders")
        with pytest.raises(PydanticValidationError) as exc_info:
            _Body.model_validate({"quantity": "lots"})

        response = _middleware().process_exception(request, exc_info.value)

        assert response.status_code == 400

    def test_unexpected_error_passes_through(self) -> None:
        request = RequestFactory().get("/api/menu")

        response = _middleware().process_exception(request, RuntimeError("boom"))

        assert response is None
