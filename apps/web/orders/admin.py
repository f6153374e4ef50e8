"""
Admin registration for order models.

Orders are read-only here. Status changes go through the transition
services so the lifecycle rules and the version check always apply.
"""

from django.contrib import admin

from .models import Order, OrderLine


class OrderLineInline(admin.TabularInline):
    """Read-only lines within an order."""

    model = OrderLine
    extra = 0
    can_delete = False
    fields = ["menu_item_id", "quantity", "price_at_purchase"]
    readonly_fields = ["menu_item_id", "quantity", "price_at_purchase"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["id", "account", "status", "total_price", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["account__username", "account__email", "delivery_address"]
    readonly_fields = [
        "account",
        "status",
        "total_price",
        "delivery_address",
        "version",
        "created_at",
        "updated_at",
    ]
    inlines = [OrderLineInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
