"""
Integration tests for order API views.
"""

import json
from decimal import Decimal

from django.core.cache import cache

import pytest

from apps.web.catalog.tests.factories import MenuItemFactory
from apps.web.orders.models import Order, OrderStatus

from .factories import OrderFactory


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def menu():
    return {
        "pizza": MenuItemFactory(name="Margherita", price=Decimal("150.00")),
        "salad": MenuItemFactory(name="Caesar Salad", price=Decimal("75.00")),
    }


def _post(http_client, url, body, **extra):
    return http_client.post(
        url, data=json.dumps(body), content_type="application/json", **extra
    )


@pytest.mark.django_db
class TestCheckoutView:
    """Tests for POST /api/orders."""

    def test_checkout(self, customer_api, customer, menu) -> None:
        response = _post(
            customer_api,
            "/api/orders",
            {
                "delivery_address": "12 Market Street",
                "items": [
                    {"menu_item_id": menu["pizza"].pk, "quantity": 2},
                    {"menu_item_id": menu["salad"].pk, "quantity": 1},
                ],
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_price"] == "375.00"
        assert data["status"] == "pending"
        assert data["account_id"] == customer.pk
        assert [line["item_name"] for line in data["lines"]] == [
            "Margherita",
            "Caesar Salad",
        ]

    def test_client_supplied_owner_ignored(
        self, customer_api, customer, other_customer, menu
    ) -> None:
        response = _post(
            customer_api,
            "/api/orders",
            {
                "user_id": other_customer.pk,
                "delivery_address": "12 Market Street",
                "items": [{"menu_item_id": menu["pizza"].pk, "quantity": 1}],
            },
        )

        assert response.status_code == 201
        assert Order.objects.get().account_id == customer.pk

    def test_empty_cart(self, customer_api) -> None:
        response = _post(customer_api, "/api/orders", {"items": []})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert response.json()["message"] == "cart is empty"

    def test_unknown_item(self, customer_api) -> None:
        response = _post(
            customer_api,
            "/api/orders",
            {"items": [{"menu_item_id": 999999, "quantity": 1}]},
        )

        assert response.status_code == 404
        assert response.json()["entity"] == "menu item"
        assert Order.objects.count() == 0

    def test_malformed_body(self, customer_api) -> None:
        response = _post(
            customer_api, "/api/orders", {"items": [{"quantity": "lots"}]}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert response.json()["details"]

    def test_invalid_json(self, customer_api) -> None:
        response = customer_api.post(
            "/api/orders", data="{not json", content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid JSON in request body"

    def test_requires_login(self, api_client, menu) -> None:
        response = _post(
            api_client,
            "/api/orders",
            {"items": [{"menu_item_id": menu["pizza"].pk, "quantity": 1}]},
        )

        assert response.status_code == 401
        assert Order.objects.count() == 0

    def test_idempotency_key_replays_first_order(self, customer_api, menu) -> None:
        body = {
            "delivery_address": "12 Market Street",
            "items": [{"menu_item_id": menu["pizza"].pk, "quantity": 1}],
        }

        first = _post(customer_api, "/api/orders", body, HTTP_IDEMPOTENCY_KEY="abc")
        second = _post(customer_api, "/api/orders", body, HTTP_IDEMPOTENCY_KEY="abc")

        assert first.status_code == second.status_code == 201
        assert first.json()["id"] == second.json()["id"]
        assert Order.objects.count() == 1


@pytest.mark.django_db
class TestOrderReadViews:
    """Tests for order history and detail endpoints."""

    def test_my_orders(self, customer_api, customer, other_customer) -> None:
        mine = OrderFactory(account=customer)
        OrderFactory(account=other_customer)

        response = customer_api.get("/api/orders")

        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [mine.pk]

    def test_detail_owner(self, customer_api, customer) -> None:
        order = OrderFactory(account=customer)

        response = customer_api.get(f"/api/orders/{order.pk}")

        assert response.status_code == 200
        assert response.json()["id"] == order.pk

    def test_detail_stranger_forbidden(self, customer_api, other_customer) -> None:
        order = OrderFactory(account=other_customer)

        response = customer_api.get(f"/api/orders/{order.pk}")

        assert response.status_code == 403
        assert "delivery_address" not in response.json()

    def test_detail_missing(self, customer_api) -> None:
        response = customer_api.get("/api/orders/999999")

        assert response.status_code == 404

    def test_account_orders_forbidden_for_stranger(
        self, customer_api, other_customer
    ) -> None:
        response = customer_api.get(f"/api/orders/user/{other_customer.pk}")

        assert response.status_code == 403

    def test_account_orders_admin(self, admin_api, customer) -> None:
        OrderFactory(account=customer)

        response = admin_api.get(f"/api/orders/user/{customer.pk}")

        assert response.status_code == 200
        assert len(response.json()) == 1


@pytest.mark.django_db
class TestCancelView:
    """Tests for POST /api/orders/{id}/cancel."""

    def test_cancel_then_conflict(self, customer_api, customer) -> None:
        order = OrderFactory(account=customer)

        first = customer_api.post(f"/api/orders/{order.pk}/cancel")
        second = customer_api.post(f"/api/orders/{order.pk}/cancel")

        assert first.status_code == 200
        assert first.json()["status"] == "cancelled"
        assert second.status_code == 409
        assert second.json()["current_status"] == "cancelled"
        assert "'Cancelled'" in second.json()["message"]

    def test_cancel_stranger(self, customer_api, other_customer) -> None:
        order = OrderFactory(account=other_customer)

        response = customer_api.post(f"/api/orders/{order.pk}/cancel")

        assert response.status_code == 403


@pytest.mark.django_db
class TestAdminOrderViews:
    """Tests for admin order list and status updates."""

    def test_list_all(self, admin_api, customer, other_customer) -> None:
        OrderFactory(account=customer)
        OrderFactory(account=other_customer)

        response = admin_api.get("/api/admin/orders")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 2
        assert {"customer_name", "customer_email"} <= set(data[0])

    def test_list_all_customer_forbidden(self, customer_api) -> None:
        response = customer_api.get("/api/admin/orders")

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_advance(self, admin_api, customer) -> None:
        order = OrderFactory(account=customer)

        response = _post(
            admin_api,
            f"/api/admin/orders/{order.pk}/status",
            {"status": "preparing"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "preparing"
        order.refresh_from_db()
        assert order.status == OrderStatus.PREPARING

    def test_advance_illegal(self, admin_api, customer) -> None:
        order = OrderFactory(account=customer, status=OrderStatus.DELIVERED)

        response = _post(
            admin_api,
            f"/api/admin/orders/{order.pk}/status",
            {"status": "preparing"},
        )

        assert response.status_code == 409
        assert response.json()["current_status"] == "delivered"
        assert response.json()["requested_status"] == "preparing"

    def test_advance_customer_forbidden(self, customer_api, customer) -> None:
        order = OrderFactory(account=customer)

        response = _post(
            customer_api,
            f"/api/admin/orders/{order.pk}/status",
            {"status": "preparing"},
        )

        assert response.status_code == 403
