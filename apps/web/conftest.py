"""
Pytest configuration for Django app tests.
"""

from django.test import Client as DjangoClient

import pytest

from apps.web.accounts.actor import Actor
from apps.web.accounts.models import Account
from apps.web.accounts.tests.factories import AccountFactory, AdminAccountFactory


@pytest.fixture
def customer(db) -> Account:
    """A customer account with a saved delivery address."""
    return AccountFactory(
        username="alice",
        email="alice@example.com",
        full_name="Alice Smith",
        address="12 Market Street",
    )


@pytest.fixture
def other_customer(db) -> Account:
    """A second customer, for ownership checks."""
    return AccountFactory(username="bob", email="bob@example.com")


@pytest.fixture
def admin_account(db) -> Account:
    """An account holding the admin role."""
    return AdminAccountFactory(username="manager", email="manager@example.com")


@pytest.fixture
def customer_actor(customer: Account) -> Actor:
    return Actor.from_account(customer)


@pytest.fixture
def other_actor(other_customer: Account) -> Actor:
    return Actor.from_account(other_customer)


@pytest.fixture
def admin_actor(admin_account: Account) -> Actor:
    return Actor.from_account(admin_account)


@pytest.fixture
def api_client() -> DjangoClient:
    """Anonymous Django test client."""
    return DjangoClient()


@pytest.fixture
def customer_api(customer: Account) -> DjangoClient:
    """Test client with a logged-in customer session."""
    http_client = DjangoClient()
    http_client.force_login(customer)
    return http_client


@pytest.fixture
def admin_api(admin_account: Account) -> DjangoClient:
    """Test client with a logged-in admin session."""
    http_client = DjangoClient()
    http_client.force_login(admin_account)
    return http_client
