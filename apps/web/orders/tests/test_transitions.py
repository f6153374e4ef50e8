"""
Tests for order status transitions (advance, cancel, optimistic concurrency).
"""

import pytest

from apps.web.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from apps.web.orders.models import Order, OrderStatus
from apps.web.orders.services import advance_order, cancel_order, compare_and_swap_status

from .factories import OrderFactory


@pytest.fixture
def pending_order(customer):
    return OrderFactory(account=customer, status=OrderStatus.PENDING)


@pytest.mark.django_db
class TestAdvanceOrder:
    """Tests for admin status progression."""

    def test_full_lifecycle(self, admin_actor, pending_order) -> None:
        """Pending -> Preparing -> Ready -> Delivered, then no way back."""
        for target in (OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.DELIVERED):
            order = advance_order(admin_actor, pending_order.pk, target)
            assert order.status == target

        assert order.status == OrderStatus.DELIVERED
        assert order.version == 4

        with pytest.raises(ConflictError) as exc_info:
            advance_order(admin_actor, pending_order.pk, OrderStatus.PREPARING)

        assert exc_info.value.current_status == OrderStatus.DELIVERED
        assert exc_info.value.requested_status == OrderStatus.PREPARING

    def test_cannot_skip_states(self, admin_actor, pending_order) -> None:
        """Pending cannot jump to Delivered."""
        with pytest.raises(ConflictError):
            advance_order(admin_actor, pending_order.pk, OrderStatus.DELIVERED)

        pending_order.refresh_from_db()
        assert pending_order.status == OrderStatus.PENDING
        assert pending_order.version == 1

    def test_admin_may_cancel_pending(self, admin_actor, pending_order) -> None:
        order = advance_order(admin_actor, pending_order.pk, OrderStatus.CANCELLED)
        assert order.status == OrderStatus.CANCELLED

    def test_customer_cannot_advance(self, customer_actor, pending_order) -> None:
        """Owners may not move their own order forward."""
        with pytest.raises(AuthorizationError):
            advance_order(customer_actor, pending_order.pk, OrderStatus.PREPARING)

        pending_order.refresh_from_db()
        assert pending_order.status == OrderStatus.PENDING

    def test_unknown_status(self, admin_actor, pending_order) -> None:
        with pytest.raises(ValidationError, match="unknown status"):
            advance_order(admin_actor, pending_order.pk, "shipped")

    def test_missing_order(self, admin_actor) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            advance_order(admin_actor, 999999, OrderStatus.PREPARING)

        assert exc_info.value.entity == "order"

    def test_updated_at_moves(self, admin_actor, pending_order) -> None:
        before = pending_order.updated_at

        order = advance_order(admin_actor, pending_order.pk, OrderStatus.PREPARING)

        assert order.updated_at >= before


@pytest.mark.django_db
class TestCancelOrder:
    """Tests for cancellation by owners and admins."""

    def test_owner_cancels_pending(self, customer_actor, pending_order) -> None:
        """Cancelling twice should report the order as already Cancelled."""
        order = cancel_order(customer_actor, pending_order.pk)
        assert order.status == OrderStatus.CANCELLED

        with pytest.raises(ConflictError, match="'Cancelled'") as exc_info:
            cancel_order(customer_actor, pending_order.pk)

        assert exc_info.value.current_status == OrderStatus.CANCELLED

    @pytest.mark.parametrize(
        "status",
        [
            OrderStatus.PREPARING,
            OrderStatus.READY,
            OrderStatus.DELIVERED,
            OrderStatus.CANCELLED,
        ],
    )
    def test_only_pending_can_be_cancelled(self, customer, customer_actor, status) -> None:
        order = OrderFactory(account=customer, status=status)

        with pytest.raises(ConflictError, match="cannot cancel an order with status"):
            cancel_order(customer_actor, order.pk)

        order.refresh_from_db()
        assert order.status == status

    def test_admin_cancels_any_pending(self, admin_actor, pending_order) -> None:
        order = cancel_order(admin_actor, pending_order.pk)
        assert order.status == OrderStatus.CANCELLED

    def test_other_customer_denied(self, other_actor, pending_order) -> None:
        with pytest.raises(AuthorizationError):
            cancel_order(other_actor, pending_order.pk)

        pending_order.refresh_from_db()
        assert pending_order.status == OrderStatus.PENDING

    def test_only_status_changes(self, customer_actor, pending_order) -> None:
        """Cancelling must not touch total, address, or owner."""
        cancel_order(customer_actor, pending_order.pk)

        order = Order.objects.get(pk=pending_order.pk)
        assert order.total_price == pending_order.total_price
        assert order.delivery_address == pending_order.delivery_address
        assert order.account_id == pending_order.account_id

    def test_missing_order(self, customer_actor) -> None:
        with pytest.raises(NotFoundError):
            cancel_order(customer_actor, 999999)


@pytest.mark.django_db
class TestCompareAndSwap:
    """Tests for the conditional status write."""

    def test_stale_read_conflicts(self, pending_order) -> None:
        """A write based on an outdated read should fail with the winning status."""
        stale = Order.objects.get(pk=pending_order.pk)

        # Another writer moves the order on first
        compare_and_swap_status(
            Order.objects.get(pk=pending_order.pk), OrderStatus.PREPARING
        )

        with pytest.raises(ConflictError) as exc_info:
            compare_and_swap_status(stale, OrderStatus.CANCELLED)

        assert exc_info.value.current_status == OrderStatus.PREPARING
        assert exc_info.value.requested_status == OrderStatus.CANCELLED

        pending_order.refresh_from_db()
        assert pending_order.status == OrderStatus.PREPARING
        assert pending_order.version == 2

    def test_version_bumped(self, pending_order) -> None:
        order = compare_and_swap_status(pending_order, OrderStatus.PREPARING)

        assert order.version == 2
        assert order.status == OrderStatus.PREPARING
