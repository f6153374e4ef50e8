"""
Account API views - registration, session login, profiles, password reset.
"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.web.core.decorators import api_login_required
from apps.web.core.http import json_response, parse_body

from . import services
from .actor import Actor
from .serializers import (
    AccountSchema,
    LoginRequest,
    LoginResponse,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)


@csrf_exempt
@require_POST
def register(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/register

    Create a customer account.
    Response: AccountSchema (201), 409 on duplicate username/email
    """
    payload = parse_body(request, RegisterRequest)
    account = services.register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        phone_number=payload.phone_number,
        address=payload.address,
    )
    return json_response(AccountSchema.model_validate(account), status=201)


@csrf_exempt
@require_POST
def login_view(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/login

    Email/password login. Starts a session cookie on success.
    """
    payload = parse_body(request, LoginRequest)
    account = services.login_account(request, payload.email, payload.password)
    return json_response(
        LoginResponse(
            account_id=account.pk,
            username=account.username,
            role=account.role,
        )
    )


@csrf_exempt
@require_POST
def logout_view(request: HttpRequest) -> JsonResponse:
    """POST /api/auth/logout"""
    services.logout_account(request)
    return json_response({"message": "Logged out"})


@csrf_exempt
@require_POST
def password_reset(request: HttpRequest) -> JsonResponse:
    """
    POST /api/auth/password-reset

    Always answers 200 so the endpoint cannot be used to probe accounts.
    """
    payload = parse_body(request, PasswordResetRequest)
    services.request_password_reset(payload.email)
    return json_response(
        {
            "message": "If an account with that email exists, "
            "a password reset link has been sent."
        }
    )


@csrf_exempt
@require_POST
def password_reset_confirm(request: HttpRequest) -> JsonResponse:
    """POST /api/auth/password-reset/confirm"""
    payload = parse_body(request, PasswordResetConfirmRequest)
    services.reset_password(payload.uid, payload.token, payload.new_password)
    return json_response(
        {"message": "Password reset successful. You can now log in."}
    )


@csrf_exempt
@require_http_methods(["GET", "PUT"])
@api_login_required
def me(request: HttpRequest) -> JsonResponse:
    """
    GET/PUT /api/users/me

    GET: Current account profile.
    PUT: Update full name, phone number, and address.
    """
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]

    if request.method == "PUT":
        payload = parse_body(request, ProfileUpdateRequest)
        account = services.update_profile(
            actor,
            full_name=payload.full_name,
            phone_number=payload.phone_number,
            address=payload.address,
        )
    else:
        account = services.get_profile(actor)

    return json_response(AccountSchema.model_validate(account))


@require_GET
@api_login_required
def account_list(request: HttpRequest) -> JsonResponse:
    """GET /api/users (admin only)"""
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]
    accounts = services.list_accounts(actor)
    return json_response(
        [AccountSchema.model_validate(a).model_dump(mode="json") for a in accounts]
    )


@require_GET
@api_login_required
def account_detail(request: HttpRequest, account_id: int) -> JsonResponse:
    """GET /api/users/{account_id} (self or admin)"""
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]
    account = services.get_account(actor, account_id)
    return json_response(AccountSchema.model_validate(account))
