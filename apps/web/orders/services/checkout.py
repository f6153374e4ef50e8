"""
Checkout - turns a cart into a persisted Pending order.

Handles:
1. Validating the cart (non-empty, positive quantities)
2. Resolving every item against the catalog (must exist and be available)
3. Snapshotting prices and computing the total
4. Writing the order and its lines atomically
"""

import logging
from collections.abc import Sequence
from decimal import Decimal

from django.db import transaction

from apps.web.accounts.actor import Actor
from apps.web.accounts.services import find_account
from apps.web.catalog.models import MenuItem
from apps.web.catalog.services import find_available_item
from apps.web.core.exceptions import ValidationError

from ..models import Order, OrderLine, OrderStatus

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def _price_lines(
    items: Sequence[tuple[int, int]],
) -> list[tuple[MenuItem, int, Decimal]]:
    """
    Validate cart lines in order and snapshot the current price of each.

    Returns:
        List of (menu_item, quantity, price_at_purchase)
    """
    priced: list[tuple[MenuItem, int, Decimal]] = []

    for index, (menu_item_id, quantity) in enumerate(items):
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(
                f"quantity must be a positive integer (line {index + 1})",
                field=f"items[{index}].quantity",
            )

        menu_item = find_available_item(menu_item_id)
        priced.append((menu_item, quantity, menu_item.price))

    return priced


def calculate_total(priced: Sequence[tuple[MenuItem, int, Decimal]]) -> Decimal:
    """Sum of price x quantity over all lines, rounded to cents."""
    total = sum((price * quantity for _item, quantity, price in priced), Decimal("0"))
    return total.quantize(CENTS)


def place_order(
    actor: Actor,
    delivery_address: str,
    items: Sequence[tuple[int, int]],
) -> Order:
    """
    Create a Pending order owned by the actor.

    Args:
        actor: The authenticated caller; becomes the order owner
        delivery_address: Where to deliver; falls back to the saved address
        items: Ordered (menu_item_id, quantity) pairs. Repeated ids become
            separate lines.

    Returns:
        The persisted order with its lines

    Raises:
        ValidationError: Empty cart, non-positive quantity, or no address
        NotFoundError: Unknown owner, or an item missing or unavailable
    """
    if not items:
        raise ValidationError("cart is empty", field="items")

    account = find_account(actor.account_id)

    priced = _price_lines(items)
    total = calculate_total(priced)

    address = (delivery_address or "").strip() or account.address.strip()
    if not address:
        raise ValidationError("delivery address is required", field="delivery_address")

    with transaction.atomic():
        order = Order.objects.create(
            account=account,
            total_price=total,
            status=OrderStatus.PENDING,
            delivery_address=address,
        )
        OrderLine.objects.bulk_create(
            [
                OrderLine(
                    order=order,
                    menu_item=menu_item,
                    quantity=quantity,
                    price_at_purchase=price,
                )
                for menu_item, quantity, price in priced
            ]
        )

    logger.info(
        "Order %s placed by account %s: %d line(s), total %s",
        order.pk,
        account.pk,
        len(priced),
        total,
    )
    return order
