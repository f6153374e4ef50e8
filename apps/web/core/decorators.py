"""
Decorators for request handling and validation.
"""

import json
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.core.cache import cache
from django.http import HttpRequest

from .http import json_response


def api_login_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Like django's login_required, but answers 401 JSON instead of redirecting.

    Usage:
        @api_login_required
        def my_orders(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        if not request.user.is_authenticated:
            return json_response(
                {
                    "error": "not_authenticated",
                    "message": "Authentication credentials were not provided",
                },
                status=401,
            )
        return view_func(request, *args, **kwargs)

    return wrapper


def idempotency_key_supported(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that honours an optional Idempotency-Key header on POST requests.

    If the same key is used twice by the same user, returns the cached
    response from the first request. Requests without the header are
    processed normally. Cached responses are stored for 24 hours.

    Usage:
        @idempotency_key_supported
        def create_order(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        key = request.headers.get("Idempotency-Key")

        if not key or request.method != "POST":
            return view_func(request, *args, **kwargs)

        cache_key = f"idempotency:{request.user.pk}:{key}"
        cached = cache.get(cache_key)

        if cached:
            # Return cached response
            return json_response(
                cached["data"],
                status=cached["status"],
            )

        # Call the actual view
        response = view_func(request, *args, **kwargs)

        # Cache successful responses for 24 hours
        if response.status_code < 400:
            cache.set(
                cache_key,
                {
                    "data": json.loads(response.content),
                    "status": response.status_code,
                },
                timeout=86400,  # 24 hours
            )

        return response

    return wrapper
