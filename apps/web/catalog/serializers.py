"""
Pydantic schemas for menu API requests and responses.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Responses
# =============================================================================


class MenuCategorySchema(BaseModel):
    """A menu category."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class MenuItemSchema(BaseModel):
    """A menu item with full details."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Decimal
    image_url: str
    category_id: int
    is_available: bool


# =============================================================================
# Admin requests
# =============================================================================


class MenuItemCreateRequest(BaseModel):
    """Request body for POST /api/admin/menu."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1, description="Category name")
    image_url: str = Field(default="", max_length=500)
    is_available: bool = True


class MenuItemUpdateRequest(BaseModel):
    """Request body for PUT /api/admin/menu/{item_id}."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category_id: int
    image_url: str = Field(default="", max_length=500)
    is_available: bool = True
