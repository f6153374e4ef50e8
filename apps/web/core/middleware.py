"""
API error middleware - renders domain exceptions as JSON responses.
"""

import logging
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from pydantic import ValidationError as PydanticValidationError

from .exceptions import OrderingError
from .http import json_response, pydantic_error_response

logger = logging.getLogger(__name__)


class APIErrorMiddleware:
    """
    Middleware that converts domain errors raised by views into JSON.

    - OrderingError subclasses -> their status_code and to_dict() payload
    - pydantic ValidationError -> 400 with per-field details

    Anything else is left to Django's normal handling (500 in production).
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(
        self, request: HttpRequest, exception: Exception
    ) -> HttpResponse | None:
        if isinstance(exception, OrderingError):
            logger.warning(
                "%s %s -> %s: %s",
                request.method,
                request.path,
                exception.code,
                exception.message,
            )
            return json_response(exception.to_dict(), status=exception.status_code)

        if isinstance(exception, PydanticValidationError):
            logger.warning("%s %s -> invalid request body", request.method, request.path)
            return pydantic_error_response(exception)

        if request.path.startswith("/api/"):
            logger.exception(
                "Unhandled error on %s %s", request.method, request.path
            )
        return None
