"""
Order status transitions - admin progression and customer cancellation.

Every transition re-reads the order, validates the move against the fresh
status, and then applies it with a conditional UPDATE on (id, version,
status). If another writer got there first the UPDATE matches no rows and
the caller gets a ConflictError carrying the status that won.
"""

import logging

from django.db.models import F
from django.utils import timezone

from apps.web.accounts.actor import Actor
from apps.web.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

from ..models import Order, OrderStatus
from ..state import ADMIN, OWNER, can_transition

logger = logging.getLogger(__name__)


def _get_order(order_id: int) -> Order:
    try:
        return Order.objects.get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise NotFoundError("order", order_id) from exc


def compare_and_swap_status(order: Order, target: str) -> Order:
    """
    Move `order` to `target` only if nobody changed it since it was read.

    Raises:
        ConflictError: If the stored version or status no longer matches
    """
    updated = Order.objects.filter(
        pk=order.pk,
        version=order.version,
        status=order.status,
    ).update(
        status=target,
        version=F("version") + 1,
        updated_at=timezone.now(),
    )

    if not updated:
        current = _get_order(order.pk)
        logger.warning(
            "Order %s changed concurrently: wanted %s -> %s, now %s",
            order.pk,
            order.status,
            target,
            current.status,
        )
        raise ConflictError(
            f"order was modified concurrently; current status is "
            f"'{current.get_status_display()}'",
            current_status=current.status,
            requested_status=target,
        )

    order.refresh_from_db()
    return order


def advance_order(actor: Actor, order_id: int, target: str) -> Order:
    """
    Move an order to a later status. Admin only.

    Raises:
        AuthorizationError: If the actor is not an admin
        ValidationError: If `target` is not a known status
        NotFoundError: If the order does not exist
        ConflictError: If `target` is not reachable from the current status
    """
    if not actor.is_admin:
        logger.warning(
            "Account %s attempted to change status of order %s",
            actor.account_id,
            order_id,
        )
        raise AuthorizationError("Only admins can update order status.")

    if target not in OrderStatus.values:
        raise ValidationError(f"unknown status '{target}'", field="status")

    order = _get_order(order_id)

    if not can_transition(order.status, target, ADMIN):
        raise ConflictError(
            f"cannot move order from '{order.get_status_display()}' "
            f"to '{OrderStatus(target).label}'",
            current_status=order.status,
            requested_status=target,
        )

    previous = order.status
    order = compare_and_swap_status(order, target)

    logger.info(
        "Order %s status %s -> %s by account %s",
        order.pk,
        previous,
        order.status,
        actor.account_id,
    )
    return order


def cancel_order(actor: Actor, order_id: int) -> Order:
    """
    Cancel a Pending order. The owner or an admin.

    Raises:
        NotFoundError: If the order does not exist
        AuthorizationError: If the actor neither owns the order nor is admin
        ConflictError: If the order is no longer Pending
    """
    order = _get_order(order_id)

    if actor.is_admin:
        actor_kind = ADMIN
    elif actor.owns(order.account_id):
        actor_kind = OWNER
    else:
        logger.warning(
            "Account %s attempted to cancel order %s owned by %s",
            actor.account_id,
            order_id,
            order.account_id,
        )
        raise AuthorizationError("You can only cancel your own orders.")

    if not can_transition(order.status, OrderStatus.CANCELLED, actor_kind):
        raise ConflictError(
            f"cannot cancel an order with status '{order.get_status_display()}'",
            current_status=order.status,
            requested_status=OrderStatus.CANCELLED,
        )

    order = compare_and_swap_status(order, OrderStatus.CANCELLED)

    logger.info("Order %s cancelled by account %s", order.pk, actor.account_id)
    return order
