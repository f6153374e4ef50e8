"""
Tests for the order status transition table.
"""

import pytest

from apps.web.orders.models import OrderStatus
from apps.web.orders.state import ADMIN, OWNER, allowed_next, can_transition, is_terminal


class TestTransitionTable:
    """The table should allow exactly the documented moves."""

    def test_pending(self) -> None:
        assert allowed_next(OrderStatus.PENDING, ADMIN) == {
            OrderStatus.PREPARING,
            OrderStatus.CANCELLED,
        }
        assert allowed_next(OrderStatus.PENDING, OWNER) == {OrderStatus.CANCELLED}

    def test_preparing(self) -> None:
        assert allowed_next(OrderStatus.PREPARING, ADMIN) == {OrderStatus.READY}
        assert allowed_next(OrderStatus.PREPARING, OWNER) == set()

    def test_ready(self) -> None:
        assert allowed_next(OrderStatus.READY, ADMIN) == {OrderStatus.DELIVERED}
        assert allowed_next(OrderStatus.READY, OWNER) == set()

    @pytest.mark.parametrize("status", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_terminal_states(self, status) -> None:
        assert is_terminal(status)
        assert allowed_next(status, ADMIN) == set()
        assert allowed_next(status, OWNER) == set()

    def test_no_skipping_ahead(self) -> None:
        """Pending cannot jump straight to Ready or Delivered."""
        assert not can_transition(OrderStatus.PENDING, OrderStatus.READY, ADMIN)
        assert not can_transition(OrderStatus.PENDING, OrderStatus.DELIVERED, ADMIN)

    def test_no_going_back(self) -> None:
        assert not can_transition(OrderStatus.DELIVERED, OrderStatus.PREPARING, ADMIN)
        assert not can_transition(OrderStatus.READY, OrderStatus.PENDING, ADMIN)

    def test_plain_strings_accepted(self) -> None:
        """Stored values are plain strings; lookups should work with them."""
        assert can_transition("pending", "preparing", ADMIN)
        assert not can_transition("pending", "preparing", OWNER)

    def test_unknown_status(self) -> None:
        assert allowed_next("bogus", ADMIN) == set()
        assert not can_transition("bogus", OrderStatus.READY, ADMIN)
