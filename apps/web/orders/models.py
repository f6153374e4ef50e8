"""
Order models - orders, their lines, and the status lifecycle.

Lines snapshot the menu item price at checkout and are never modified
afterwards. The menu item reference may dangle once the item is deleted
from the catalog.
"""

from django.conf import settings
from django.db import models

from apps.web.core.models import TimestampedModel


class OrderStatus(models.TextChoices):
    """Lifecycle of an order."""

    PENDING = "pending", "Pending"
    PREPARING = "preparing", "Preparing"
    READY = "ready", "Ready"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


class Order(TimestampedModel):
    """
    Customer order.

    `version` is bumped on every status change; transitions only apply when
    the version they read is still current.
    """

    account = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    version = models.PositiveIntegerField(default=1)
    delivery_address = models.CharField(max_length=255)

    class Meta:
        ordering = ["-created_at", "-pk"]
        indexes = [
            models.Index(
                fields=["account", "-created_at"],
                name="orders_account_created_idx",
            ),
            models.Index(fields=["status"], name="orders_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.get_status_display()})"


class OrderLine(models.Model):
    """
    A line in an order: item, quantity, and the price paid per unit.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="lines",
    )
    # No database constraint: the item may later be deleted from the menu
    menu_item = models.ForeignKey(
        "catalog.MenuItem",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        related_name="+",
    )
    quantity = models.PositiveIntegerField()
    price_at_purchase = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["pk"]

    def __str__(self) -> str:
        return f"{self.quantity}x item {self.menu_item_id}"
