"""
Pydantic schemas for order API requests and the order read models.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Requests
# =============================================================================


class CartLine(BaseModel):
    """A single cart entry."""

    menu_item_id: int
    quantity: int


class CheckoutRequest(BaseModel):
    """
    Request body for POST /api/orders.

    The owner is always the authenticated caller; a `user_id` sent by older
    clients is accepted and ignored.
    """

    delivery_address: str = Field(default="", max_length=255)
    items: list[CartLine] = Field(default_factory=list)
    user_id: int | None = None


class StatusUpdateRequest(BaseModel):
    """Request body for POST /api/admin/orders/{order_id}/status."""

    status: str = Field(..., min_length=1)


# =============================================================================
# Read models
# =============================================================================


class OrderLineSchema(BaseModel):
    """
    An order line resolved for display.

    `withdrawn` is true when the menu item has been deleted since checkout;
    the name is then a placeholder.
    """

    menu_item_id: int | None
    item_name: str
    quantity: int
    price_at_purchase: Decimal
    withdrawn: bool = False


class OrderSchema(BaseModel):
    """An order with its resolved lines."""

    id: int
    account_id: int
    status: str
    total_price: Decimal
    delivery_address: str
    created_at: datetime
    updated_at: datetime
    lines: list[OrderLineSchema]

    @field_validator("status", mode="before")
    @classmethod
    def status_value(cls, value: object) -> str:
        return str(value)


class AdminOrderSchema(OrderSchema):
    """An order as listed for admins, with the owner's details."""

    customer_name: str
    customer_email: str
