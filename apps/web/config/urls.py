"""
URL configuration for Tablefront.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    # JSON API consumed by the single-page frontend
    path("api/", include("apps.web.accounts.urls")),
    path("api/", include("apps.web.catalog.urls")),
    path("api/", include("apps.web.orders.urls")),
    path("api/admin/", include("apps.web.dashboard.urls")),
]
