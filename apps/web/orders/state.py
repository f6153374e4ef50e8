"""
Order status transition table.

Maps each status to the statuses reachable from it and which actors may
request each move. Delivered and Cancelled are terminal.
"""

from .models import OrderStatus

ADMIN = "admin"
OWNER = "owner"

TRANSITIONS: dict[str, dict[str, frozenset[str]]] = {
    OrderStatus.PENDING: {
        OrderStatus.PREPARING: frozenset({ADMIN}),
        OrderStatus.CANCELLED: frozenset({ADMIN, OWNER}),
    },
    OrderStatus.PREPARING: {
        OrderStatus.READY: frozenset({ADMIN}),
    },
    OrderStatus.READY: {
        OrderStatus.DELIVERED: frozenset({ADMIN}),
    },
    OrderStatus.DELIVERED: {},
    OrderStatus.CANCELLED: {},
}


def allowed_next(current: str, actor_kind: str) -> set[str]:
    """Statuses the given kind of actor may move an order to from `current`."""
    return {
        target
        for target, actors in TRANSITIONS.get(current, {}).items()
        if actor_kind in actors
    }


def can_transition(current: str, target: str, actor_kind: str) -> bool:
    return actor_kind in TRANSITIONS.get(current, {}).get(target, frozenset())


def is_terminal(status: str) -> bool:
    return not TRANSITIONS.get(status)
