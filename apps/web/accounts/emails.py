"""
Account emails - password reset links sent via Resend.
"""

import logging
from urllib.parse import urlencode

from django.conf import settings

import resend

from .models import Account

logger = logging.getLogger(__name__)


class EmailError(Exception):
    """Raised when email sending fails."""

    pass


def build_reset_link(uid: str, token: str) -> str:
    """Frontend URL the customer follows to choose a new password."""
    query = urlencode({"uid": uid, "token": token})
    return f"{settings.PASSWORD_RESET_URL}?{query}"


def send_password_reset_email(account: Account, reset_link: str) -> str:
    """
    Send a password reset link via Resend.

    Args:
        account: The Account requesting the reset
        reset_link: Frontend URL carrying uid and token

    Returns:
        Resend email ID

    Raises:
        EmailError: If Resend is not configured or sending fails
    """
    api_key = getattr(settings, "RESEND_API_KEY", None)
    if not api_key:
        raise EmailError("Resend API key not configured")

    resend.api_key = api_key

    body = (
        f"<p>Hello {account.username},</p>"
        "<p>Click the link below to reset your password:</p>"
        f"<p><a href='{reset_link}'>Reset Password</a></p>"
        "<p>This link expires in 1 hour.</p>"
    )

    try:
        response = resend.Emails.send(
            {
                "from": settings.DEFAULT_FROM_EMAIL,
                "to": account.email,
                "subject": "Password Reset Request",
                "html": body,
            }
        )

        email_id = response.get("id", "") if isinstance(response, dict) else ""

        logger.info(
            "Sent password reset email to %s (ID: %s)",
            account.email,
            email_id,
        )

        return str(email_id)

    except Exception as e:
        logger.exception("Failed to send password reset email to %s: %s", account.email, e)
        raise EmailError(f"Failed to send email: {e}") from e
