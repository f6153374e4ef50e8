"""
Account services - registration, login, profiles, and password reset.

Also the Account Store lookups used by checkout and authorization checks
(find_account, role_of).
"""

import logging
import re

from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.password_validation import validate_password
from django.contrib.auth.tokens import default_token_generator
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode

from apps.web.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

from .actor import Actor
from .emails import build_reset_link, send_password_reset_email
from .models import Account, Role

logger = logging.getLogger(__name__)

_CAPITAL_LETTER = re.compile(r"[A-Z]")


# =============================================================================
# Account Store
# =============================================================================


def find_account(account_id: int) -> Account:
    """
    Resolve an account by id.

    Raises:
        NotFoundError: If no account has this id
    """
    try:
        return Account.objects.get(pk=account_id)
    except Account.DoesNotExist as exc:
        raise NotFoundError("account", account_id) from exc


def role_of(account_id: int) -> str:
    """Return the role of an existing account."""
    return find_account(account_id).role


# =============================================================================
# Registration and sessions
# =============================================================================


def _check_password(password: str, account: Account | None = None) -> None:
    """Run Django's password validators, re-raised as a domain error."""
    try:
        validate_password(password, user=account)
    except DjangoValidationError as exc:
        raise ValidationError(" ".join(exc.messages), field="password") from exc


def register(
    username: str,
    email: str,
    password: str,
    full_name: str = "",
    phone_number: str = "",
    address: str = "",
) -> Account:
    """
    Create a customer account.

    Raises:
        ConflictError: If the username or email is already taken
        ValidationError: If the password fails the configured validators
    """
    logger.info("Registration attempt for %s", email)

    if Account.objects.filter(username=username).exists():
        logger.warning("Registration failed: username %s already exists", username)
        raise ConflictError("Username already exists.")

    if Account.objects.filter(email__iexact=email).exists():
        logger.warning("Registration failed: email %s already exists", email)
        raise ConflictError("Email already exists.")

    candidate = Account(
        username=username,
        email=email,
        full_name=full_name,
        phone_number=phone_number,
        address=address,
    )
    _check_password(password, candidate)

    with transaction.atomic():
        account = Account.objects.create_user(
            username=username,
            email=email,
            password=password,
            full_name=full_name,
            phone_number=phone_number,
            address=address,
            role=Role.CUSTOMER,
        )

    logger.info("Registered account %s (id=%s)", account.username, account.pk)
    return account


def login_account(request: HttpRequest, email: str, password: str) -> Account:
    """
    Authenticate by email/password and start a session.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong
    """
    logger.info("Login attempt for %s", email)

    account = Account.objects.filter(email__iexact=email).first()
    user = None
    if account is not None:
        user = authenticate(request, username=account.username, password=password)

    if user is None:
        logger.warning("Failed login attempt for %s", email)
        raise AuthenticationError("Invalid email or password.")

    login(request, user)
    logger.info("Account %s (id=%s) logged in", user.username, user.pk)
    return user  # type: ignore[return-value]


def logout_account(request: HttpRequest) -> None:
    logout(request)


# =============================================================================
# Profiles
# =============================================================================


def get_profile(actor: Actor) -> Account:
    return find_account(actor.account_id)


def update_profile(
    actor: Actor, full_name: str, phone_number: str, address: str
) -> Account:
    """Update the caller's own profile fields. Role and credentials are untouched."""
    account = find_account(actor.account_id)

    account.full_name = full_name
    account.phone_number = phone_number
    account.address = address
    account.save(update_fields=["full_name", "phone_number", "address"])

    logger.info("Updated profile for account %s", account.pk)
    return account


def list_accounts(actor: Actor) -> QuerySet[Account]:
    """All accounts. Admin only."""
    if not actor.is_admin:
        logger.warning("Account %s attempted to list all accounts", actor.account_id)
        raise AuthorizationError("Only admins can list accounts.")
    return Account.objects.order_by("pk")


def get_account(actor: Actor, account_id: int) -> Account:
    """A single account. The account itself or an admin."""
    if not actor.is_admin and not actor.owns(account_id):
        logger.warning(
            "Account %s attempted to read account %s", actor.account_id, account_id
        )
        raise AuthorizationError("You can only view your own account.")
    return find_account(account_id)


# =============================================================================
# Password reset
# =============================================================================


def request_password_reset(email: str) -> None:
    """
    Email a password reset link if the address belongs to an account.

    Unknown addresses are logged and otherwise ignored, so callers cannot
    probe which emails are registered.
    """
    logger.info("Password reset requested for %s", email)

    account = Account.objects.filter(email__iexact=email, is_active=True).first()
    if account is None:
        logger.warning("Password reset for %s ignored: no such account", email)
        return

    uid = urlsafe_base64_encode(force_bytes(account.pk))
    token = default_token_generator.make_token(account)
    send_password_reset_email(account, build_reset_link(uid, token))

    logger.info("Password reset link sent to account %s", account.pk)


def _account_from_uid(uid: str) -> Account | None:
    try:
        account_id = int(force_str(urlsafe_base64_decode(uid)))
    except (TypeError, ValueError, OverflowError):
        return None
    return Account.objects.filter(pk=account_id).first()


def reset_password(uid: str, token: str, new_password: str) -> Account:
    """
    Set a new password using a reset token.

    Raises:
        ValidationError: If the token is invalid or expired, the password is
            unchanged from the current one, lacks a capital letter, or fails
            the configured validators
    """
    account = _account_from_uid(uid)
    if account is None or not default_token_generator.check_token(account, token):
        logger.warning("Password reset failed: invalid or expired token")
        raise ValidationError("Invalid or expired token.", field="token")

    if account.check_password(new_password):
        logger.warning("Password reset for account %s reused old password", account.pk)
        raise ValidationError(
            "You cannot use the same password as your current password.",
            field="new_password",
        )

    if not _CAPITAL_LETTER.search(new_password):
        logger.warning("Password reset for account %s lacks a capital", account.pk)
        raise ValidationError(
            "Password must contain at least 1 capital letter.",
            field="new_password",
        )

    _check_password(new_password, account)

    account.set_password(new_password)
    account.save(update_fields=["password"])

    logger.info("Password reset successful for account %s", account.pk)
    return account
