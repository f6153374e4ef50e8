"""
Catalog models - menu categories and items.

Order lines snapshot the item price at checkout, so editing or deleting an
item never changes historical orders.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.web.core.models import TimestampedModel


class MenuCategory(models.Model):
    """
    Category of the menu (e.g., Appetizers, Mains, Drinks).
    """

    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "menu categories"

    def __str__(self) -> str:
        return self.name


class MenuItem(TimestampedModel):
    """
    Individual menu item.

    Unavailable items stay listed for admins but cannot be ordered.
    """

    category = models.ForeignKey(
        MenuCategory,
        on_delete=models.PROTECT,
        related_name="items",
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    image_url = models.CharField(max_length=500, blank=True)

    is_available = models.BooleanField(
        default=True,
        help_text="False = cannot be ordered",
    )

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(
                fields=["category", "is_available"],
                name="catalog_item_cat_avail_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="menu_item_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return self.name
