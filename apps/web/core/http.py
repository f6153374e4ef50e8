"""
HTTP helpers for the JSON API - CORS-enabled responses and body parsing.
"""

import json
from typing import Any, TypeVar

from django.conf import settings
from django.http import HttpRequest, JsonResponse

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from apps.web.core.exceptions import ValidationError

_M = TypeVar("_M", bound=BaseModel)


def _cors_headers() -> dict[str, str]:
    """CORS headers for the single-page frontend (session cookies allowed)."""
    return {
        "Access-Control-Allow-Origin": settings.FRONTEND_ORIGIN,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Idempotency-Key",
    }


def json_response(data: Any, status: int = 200) -> JsonResponse:
    """Create a JSON response with CORS headers."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    response = JsonResponse(data, status=status, safe=isinstance(data, dict))
    for key, value in _cors_headers().items():
        response[key] = value
    return response


def pydantic_error_response(exc: PydanticValidationError) -> JsonResponse:
    """Render a pydantic validation failure as a 400 with field details."""
    details = [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    return json_response({"error": "validation_error", "details": details}, 400)


def parse_body(request: HttpRequest, schema: type[_M]) -> _M:
    """
    Parse and validate a JSON request body against a pydantic schema.

    Raises:
        ValidationError: If the body is not valid JSON
        pydantic.ValidationError: If the body does not match the schema
            (rendered by APIErrorMiddleware)
    """
    try:
        body = json.loads(request.body or b"{}")
    except json.JSONDecodeError as exc:
        raise ValidationError("Invalid JSON in request body") from exc
    return schema.model_validate(body)
