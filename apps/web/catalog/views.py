"""
Menu API views - public browsing and admin item management.
"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from apps.web.accounts.actor import Actor
from apps.web.core.decorators import api_login_required
from apps.web.core.http import json_response, parse_body

from . import services
from .serializers import (
    MenuCategorySchema,
    MenuItemCreateRequest,
    MenuItemSchema,
    MenuItemUpdateRequest,
)


def _items_payload(items) -> list[dict]:
    return [MenuItemSchema.model_validate(i).model_dump(mode="json") for i in items]


@require_GET
def menu_list(request: HttpRequest) -> JsonResponse:
    """GET /api/menu - all available items."""
    return json_response(_items_payload(services.list_available_items()))


@require_GET
def category_list(request: HttpRequest) -> JsonResponse:
    """GET /api/menu/categories"""
    categories = services.list_categories()
    return json_response(
        [MenuCategorySchema.model_validate(c).model_dump(mode="json") for c in categories]
    )


@require_GET
def menu_by_category(request: HttpRequest, category_id: int) -> JsonResponse:
    """GET /api/menu/category/{category_id} - available items in one category."""
    items = services.list_available_items_in_category(category_id)
    return json_response(_items_payload(items))


@require_GET
def menu_search(request: HttpRequest) -> JsonResponse:
    """
    GET /api/menu/search?query=...

    Matches name or description, case-insensitive. 400 on a blank query.
    """
    items = services.search_available_items(request.GET.get("query", ""))
    return json_response(_items_payload(items))


@require_GET
def menu_item_detail(request: HttpRequest, item_id: int) -> JsonResponse:
    """GET /api/menu/{item_id}"""
    return json_response(MenuItemSchema.model_validate(services.get_item(item_id)))


# =============================================================================
# Admin
# =============================================================================


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_login_required
def admin_menu(request: HttpRequest) -> JsonResponse:
    """
    GET/POST /api/admin/menu

    GET: Every item including unavailable ones.
    POST: Create an item in a category given by name.
    """
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]

    if request.method == "POST":
        payload = parse_body(request, MenuItemCreateRequest)
        item = services.create_item(
            actor,
            name=payload.name,
            description=payload.description,
            price=payload.price,
            category_name=payload.category,
            image_url=payload.image_url,
            is_available=payload.is_available,
        )
        return json_response(MenuItemSchema.model_validate(item), status=201)

    return json_response(_items_payload(services.list_all_items(actor)))


@csrf_exempt
@require_http_methods(["PUT", "DELETE"])
@api_login_required
def admin_menu_item(request: HttpRequest, item_id: int) -> JsonResponse:
    """
    PUT/DELETE /api/admin/menu/{item_id}

    PUT: Replace the item's editable fields.
    DELETE: Remove the item. Past orders keep their lines.
    """
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]

    if request.method == "DELETE":
        services.delete_item(actor, item_id)
        return json_response({"message": "Menu item deleted successfully"})

    payload = parse_body(request, MenuItemUpdateRequest)
    item = services.update_item(
        actor,
        item_id,
        name=payload.name,
        description=payload.description,
        price=payload.price,
        category_id=payload.category_id,
        image_url=payload.image_url,
        is_available=payload.is_available,
    )
    return json_response(MenuItemSchema.model_validate(item))
