"""
Catalog services - menu browsing, admin item management, and the item
lookups used by checkout and order queries.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from django.db.models import Q, QuerySet

from apps.web.accounts.actor import Actor
from apps.web.core.exceptions import AuthorizationError, NotFoundError, ValidationError

from .models import MenuCategory, MenuItem

logger = logging.getLogger(__name__)

UNKNOWN_ITEM_NAME = "Unknown Item"


@dataclass(frozen=True)
class ItemReference:
    """
    Display view of a menu item referenced by an order line.

    withdrawn=True means the item has since been deleted from the catalog;
    the name is then a placeholder and the id is the one recorded at checkout.
    """

    item_id: int
    name: str
    description: str = ""
    image_url: str = ""
    withdrawn: bool = False

    @classmethod
    def from_item(cls, item: MenuItem) -> "ItemReference":
        return cls(
            item_id=item.pk,
            name=item.name,
            description=item.description,
            image_url=item.image_url,
        )

    @classmethod
    def placeholder(cls, item_id: int) -> "ItemReference":
        return cls(item_id=item_id, name=UNKNOWN_ITEM_NAME, withdrawn=True)


# =============================================================================
# Lookups for other components
# =============================================================================


def find_available_item(item_id: int) -> MenuItem:
    """
    Resolve an item that can currently be ordered.

    Raises:
        NotFoundError: If the item does not exist or is unavailable
    """
    try:
        return MenuItem.objects.get(pk=item_id, is_available=True)
    except MenuItem.DoesNotExist as exc:
        raise NotFoundError("menu item", item_id) from exc


def resolve_items(item_ids: Iterable[int]) -> dict[int, ItemReference]:
    """
    Resolve item ids for display, never failing on deleted items.

    Returns:
        Mapping of every requested id to an ItemReference (placeholder for
        ids no longer in the catalog)
    """
    wanted = set(item_ids)
    found = MenuItem.objects.in_bulk(wanted)

    resolved: dict[int, ItemReference] = {}
    for item_id in wanted:
        item = found.get(item_id)
        if item is None:
            logger.warning("Menu item %s not found - showing placeholder", item_id)
            resolved[item_id] = ItemReference.placeholder(item_id)
        else:
            resolved[item_id] = ItemReference.from_item(item)
    return resolved


# =============================================================================
# Public browsing
# =============================================================================


def list_available_items() -> QuerySet[MenuItem]:
    logger.info("Fetching all available menu items")
    return MenuItem.objects.filter(is_available=True).select_related("category")


def list_categories() -> QuerySet[MenuCategory]:
    return MenuCategory.objects.all()


def list_available_items_in_category(category_id: int) -> QuerySet[MenuItem]:
    logger.info("Fetching available items for category %s", category_id)
    return list_available_items().filter(category_id=category_id)


def search_available_items(query: str) -> QuerySet[MenuItem]:
    """
    Case-insensitive search over name and description of available items.

    Raises:
        ValidationError: If the query is blank
    """
    query = (query or "").strip()
    if not query:
        raise ValidationError("query parameter is required", field="query")

    logger.info("Searching for menu items with query: %s", query)
    return list_available_items().filter(
        Q(name__icontains=query) | Q(description__icontains=query)
    )


def get_item(item_id: int) -> MenuItem:
    """Any item by id, available or not."""
    try:
        return MenuItem.objects.select_related("category").get(pk=item_id)
    except MenuItem.DoesNotExist as exc:
        raise NotFoundError("menu item", item_id) from exc


# =============================================================================
# Admin management
# =============================================================================


def _require_admin(actor: Actor, action: str) -> None:
    if not actor.is_admin:
        logger.warning("Account %s attempted to %s", actor.account_id, action)
        raise AuthorizationError(f"Only admins can {action}.")


def list_all_items(actor: Actor) -> QuerySet[MenuItem]:
    """Every item including unavailable ones. Admin only."""
    _require_admin(actor, "list all menu items")
    logger.info("Fetching ALL menu items for admin")
    return MenuItem.objects.select_related("category")


def create_item(
    actor: Actor,
    *,
    name: str,
    price: Decimal,
    category_name: str,
    description: str = "",
    image_url: str = "",
    is_available: bool = True,
) -> MenuItem:
    """
    Create a menu item in the category with the given name.

    Raises:
        AuthorizationError: If the actor is not an admin
        NotFoundError: If no category has this name
    """
    _require_admin(actor, "create menu items")

    try:
        category = MenuCategory.objects.get(name=category_name)
    except MenuCategory.DoesNotExist as exc:
        logger.warning("Failed to create menu item: category %s not found", category_name)
        raise NotFoundError("category", category_name) from exc

    item = MenuItem.objects.create(
        category=category,
        name=name,
        description=description,
        price=price,
        image_url=image_url,
        is_available=is_available,
    )

    logger.info("Menu item %s created with ID %s", item.name, item.pk)
    return item


def update_item(
    actor: Actor,
    item_id: int,
    *,
    name: str,
    price: Decimal,
    category_id: int,
    description: str = "",
    image_url: str = "",
    is_available: bool = True,
) -> MenuItem:
    """
    Replace an item's editable fields.

    Existing order lines keep their price-at-purchase.
    """
    _require_admin(actor, "update menu items")

    item = get_item(item_id)
    if not MenuCategory.objects.filter(pk=category_id).exists():
        raise NotFoundError("category", category_id)

    item.name = name
    item.description = description
    item.price = price
    item.image_url = image_url
    item.category_id = category_id
    item.is_available = is_available
    item.save()

    logger.info("Menu item %s updated", item_id)
    return item


def delete_item(actor: Actor, item_id: int) -> None:
    """
    Remove an item from the catalog.

    Historical order lines referencing it are left in place and render as
    a placeholder.
    """
    _require_admin(actor, "delete menu items")

    item = get_item(item_id)
    item.delete()

    logger.info("Menu item %s deleted", item_id)
