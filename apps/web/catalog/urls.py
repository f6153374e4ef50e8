"""
URL routing for menu endpoints.
"""

from django.urls import path

from apps.web.catalog import views

app_name = "catalog"

urlpatterns = [
    # Public menu
    path("menu", views.menu_list, name="menu_list"),
    path("menu/categories", views.category_list, name="category_list"),
    path(
        "menu/category/<int:category_id>",
        views.menu_by_category,
        name="menu_by_category",
    ),
    path("menu/search", views.menu_search, name="menu_search"),
    path("menu/<int:item_id>", views.menu_item_detail, name="menu_item_detail"),
    # Admin
    path("admin/menu", views.admin_menu, name="admin_menu"),
    path("admin/menu/<int:item_id>", views.admin_menu_item, name="admin_menu_item"),
]
