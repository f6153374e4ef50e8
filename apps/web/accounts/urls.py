"""
URL routing for account endpoints.
"""

from django.urls import path

from apps.web.accounts import views

app_name = "accounts"

urlpatterns = [
    # Auth
    path("auth/register", views.register, name="register"),
    path("auth/login", views.login_view, name="login"),
    path("auth/logout", views.logout_view, name="logout"),
    path("auth/password-reset", views.password_reset, name="password_reset"),
    path(
        "auth/password-reset/confirm",
        views.password_reset_confirm,
        name="password_reset_confirm",
    ),
    # Users
    path("users", views.account_list, name="account_list"),
    path("users/me", views.me, name="me"),
    path("users/<int:account_id>", views.account_detail, name="account_detail"),
]
