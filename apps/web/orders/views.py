"""
Order API views - checkout, history, cancellation, and admin status updates.
"""

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.web.accounts.actor import Actor
from apps.web.core.decorators import api_login_required, idempotency_key_supported
from apps.web.core.http import json_response, parse_body

from . import services
from .serializers import CheckoutRequest, StatusUpdateRequest

logger = logging.getLogger(__name__)


def _dump(views) -> list[dict]:
    return [v.model_dump(mode="json") for v in views]


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
@idempotency_key_supported
def orders(request: HttpRequest) -> JsonResponse:
    """
    GET/POST /api/orders

    GET: The caller's own orders, newest first.
    POST: Checkout. Request body: CheckoutRequest. Response: OrderSchema (201).
    An optional Idempotency-Key header replays the first response.
    """
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]

    if request.method == "GET":
        return json_response(
            _dump(services.list_orders_for_account(actor, actor.account_id))
        )

    payload = parse_body(request, CheckoutRequest)
    if payload.user_id is not None and payload.user_id != actor.account_id:
        logger.warning(
            "Checkout by account %s sent user_id %s - ignored",
            actor.account_id,
            payload.user_id,
        )

    order = services.place_order(
        actor,
        delivery_address=payload.delivery_address,
        items=[(line.menu_item_id, line.quantity) for line in payload.items],
    )
    return json_response(services.build_order_view(order), status=201)


@require_GET
@api_login_required
def order_detail(request: HttpRequest, order_id: int) -> JsonResponse:
    """GET /api/orders/{order_id} (owner or admin)"""
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]
    return json_response(services.get_order_detail(actor, order_id))


@csrf_exempt
@require_POST
@api_login_required
def cancel(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    POST /api/orders/{order_id}/cancel

    Owner or admin. 409 when the order is no longer pending.
    """
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]
    order = services.cancel_order(actor, order_id)
    return json_response(services.build_order_view(order))


@require_GET
@api_login_required
def account_orders(request: HttpRequest, account_id: int) -> JsonResponse:
    """GET /api/orders/user/{account_id} (the account itself or an admin)"""
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]
    return json_response(_dump(services.list_orders_for_account(actor, account_id)))


# =============================================================================
# Admin
# =============================================================================


@require_GET
@api_login_required
def admin_orders(request: HttpRequest) -> JsonResponse:
    """GET /api/admin/orders"""
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]
    return json_response(_dump(services.list_all_orders(actor)))


@csrf_exempt
@require_POST
@api_login_required
def admin_order_status(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    POST /api/admin/orders/{order_id}/status

    Request body: {"status": "<next status>"}
    409 when the status is not reachable from the current one.
    """
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]
    payload = parse_body(request, StatusUpdateRequest)
    order = services.advance_order(actor, order_id, payload.status)
    return json_response(services.build_order_view(order))
