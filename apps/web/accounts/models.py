"""
Account models - customer and admin identities.
"""

from typing import Any

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class Role(models.TextChoices):
    """Account role. Exactly one per account, fixed at creation."""

    CUSTOMER = "customer", "Customer"
    ADMIN = "admin", "Admin"


class AccountManager(UserManager["Account"]):
    """User manager that gives superusers the admin role."""

    def create_superuser(
        self,
        username: str,
        email: str | None = None,
        password: str | None = None,
        **extra_fields: Any,
    ) -> "Account":
        extra_fields.setdefault("role", Role.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class Account(AbstractUser):
    """
    Custom user model for the ordering platform.

    Username and email are globally unique. Role is set once at creation
    (registration always creates customers; admins come from createsuperuser).
    """

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=100, blank=True)
    phone_number = models.CharField(max_length=20, blank=True)
    address = models.CharField(max_length=255, blank=True)

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
    )

    objects = AccountManager()

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return self.username

    @property
    def is_admin(self) -> bool:
        """Check if the account holds the admin role."""
        return self.role == Role.ADMIN

    @property
    def display_name(self) -> str:
        return self.full_name or self.username
