"""
URL routing for order endpoints.
"""

from django.urls import path

from apps.web.orders import views

app_name = "orders"

urlpatterns = [
    path("orders", views.orders, name="orders"),
    path("orders/<int:order_id>", views.order_detail, name="order_detail"),
    path("orders/<int:order_id>/cancel", views.cancel, name="cancel"),
    path(
        "orders/user/<int:account_id>",
        views.account_orders,
        name="account_orders",
    ),
    # Admin
    path("admin/orders", views.admin_orders, name="admin_orders"),
    path(
        "admin/orders/<int:order_id>/status",
        views.admin_order_status,
        name="admin_order_status",
    ),
]
