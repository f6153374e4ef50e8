"""
Order queries - history, detail, and the admin order list.

Lines are resolved against the catalog in a single lookup per call. Items
deleted since checkout show up as withdrawn placeholders rather than
failing the query.
"""

import logging
from collections.abc import Iterable

from apps.web.accounts.actor import Actor
from apps.web.accounts.services import find_account
from apps.web.catalog.services import UNKNOWN_ITEM_NAME, ItemReference, resolve_items
from apps.web.core.exceptions import AuthorizationError, NotFoundError

from ..models import Order, OrderLine
from ..serializers import AdminOrderSchema, OrderLineSchema, OrderSchema

logger = logging.getLogger(__name__)


def _line_view(line: OrderLine, refs: dict[int, ItemReference]) -> OrderLineSchema:
    ref = refs.get(line.menu_item_id) if line.menu_item_id is not None else None
    if ref is None:
        return OrderLineSchema(
            menu_item_id=line.menu_item_id,
            item_name=UNKNOWN_ITEM_NAME,
            quantity=line.quantity,
            price_at_purchase=line.price_at_purchase,
            withdrawn=True,
        )
    return OrderLineSchema(
        menu_item_id=line.menu_item_id,
        item_name=ref.name,
        quantity=line.quantity,
        price_at_purchase=line.price_at_purchase,
        withdrawn=ref.withdrawn,
    )


def _order_fields(order: Order, refs: dict[int, ItemReference]) -> dict:
    return {
        "id": order.pk,
        "account_id": order.account_id,
        "status": order.status,
        "total_price": order.total_price,
        "delivery_address": order.delivery_address,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "lines": [_line_view(line, refs) for line in order.lines.all()],
    }


def _resolve_for(orders: Iterable[Order]) -> dict[int, ItemReference]:
    item_ids = {
        line.menu_item_id
        for order in orders
        for line in order.lines.all()
        if line.menu_item_id is not None
    }
    return resolve_items(item_ids)


def build_order_view(order: Order) -> OrderSchema:
    """Read model for a single order."""
    return OrderSchema(**_order_fields(order, _resolve_for([order])))


def list_orders_for_account(actor: Actor, account_id: int) -> list[OrderSchema]:
    """
    An account's orders, newest first. The account itself or an admin.

    Raises:
        AuthorizationError: If the actor is neither the account nor an admin
        NotFoundError: If the account does not exist
    """
    if not actor.is_admin and not actor.owns(account_id):
        logger.warning(
            "Account %s attempted to list orders of account %s",
            actor.account_id,
            account_id,
        )
        raise AuthorizationError("You can only view your own orders.")

    find_account(account_id)

    orders = list(
        Order.objects.filter(account_id=account_id).prefetch_related("lines")
    )
    refs = _resolve_for(orders)
    return [OrderSchema(**_order_fields(order, refs)) for order in orders]


def get_order_detail(actor: Actor, order_id: int) -> OrderSchema:
    """
    A single order. The owner or an admin.

    Raises:
        NotFoundError: If the order does not exist
        AuthorizationError: If the actor neither owns the order nor is admin
    """
    try:
        order = Order.objects.prefetch_related("lines").get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise NotFoundError("order", order_id) from exc

    if not actor.is_admin and not actor.owns(order.account_id):
        logger.warning(
            "Account %s attempted to read order %s", actor.account_id, order_id
        )
        raise AuthorizationError("You can only view your own orders.")

    return build_order_view(order)


def list_all_orders(actor: Actor) -> list[AdminOrderSchema]:
    """Every order with its owner's name, newest first. Admin only."""
    if not actor.is_admin:
        logger.warning("Account %s attempted to list all orders", actor.account_id)
        raise AuthorizationError("Only admins can list all orders.")

    orders = list(
        Order.objects.select_related("account").prefetch_related("lines")
    )
    refs = _resolve_for(orders)
    return [
        AdminOrderSchema(
            **_order_fields(order, refs),
            customer_name=order.account.display_name,
            customer_email=order.account.email,
        )
        for order in orders
    ]
