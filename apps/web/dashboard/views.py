"""
Dashboard views - admin overview.
"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from apps.web.accounts.actor import Actor
from apps.web.core.decorators import api_login_required
from apps.web.core.http import json_response

from .services import get_dashboard


@require_GET
@api_login_required
def dashboard(request: HttpRequest) -> JsonResponse:
    """
    GET /api/admin/dashboard

    Sales stats, last 7 days of sales, recent orders, status distribution,
    and recent activity. Admin only.
    """
    actor = Actor.from_account(request.user)  # type: ignore[arg-type]
    return json_response(get_dashboard(actor))
