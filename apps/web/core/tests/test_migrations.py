"""
Tests that the committed migrations match the models.
"""

from io import StringIO

from django.core.management import call_command

import pytest


@pytest.mark.django_db
class TestMigrations:
    """Tests for the migration history."""

    def test_no_missing_migrations(self) -> None:
        """Model changes without a migration should fail this check."""
        out = StringIO()

        call_command("makemigrations", "--check", "--dry-run", stdout=out)

        assert "No changes detected" in out.getvalue()
