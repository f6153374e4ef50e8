"""Admin registrations for account models."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Account


@admin.register(Account)
class AccountAdmin(BaseUserAdmin):  # type: ignore[type-arg]
    list_display = ["username", "email", "full_name", "role", "is_active"]
    list_filter = ["is_active", "role"]
    search_fields = ["username", "email", "full_name"]
    fieldsets = (
        *BaseUserAdmin.fieldsets,  # type: ignore[misc]
        ("Profile", {"fields": ("full_name", "phone_number", "address", "role")}),
    )
    add_fieldsets = (
        *BaseUserAdmin.add_fieldsets,
        ("Profile", {"fields": ("email", "full_name", "role")}),
    )
