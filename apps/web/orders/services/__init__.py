"""Order services - checkout, status transitions, and order queries."""

from apps.web.orders.services.checkout import calculate_total, place_order
from apps.web.orders.services.queries import (
    build_order_view,
    get_order_detail,
    list_all_orders,
    list_orders_for_account,
)
from apps.web.orders.services.transitions import (
    advance_order,
    cancel_order,
    compare_and_swap_status,
)

__all__ = [
    "advance_order",
    "build_order_view",
    "calculate_total",
    "cancel_order",
    "compare_and_swap_status",
    "get_order_detail",
    "list_all_orders",
    "list_orders_for_account",
    "place_order",
]
