"""Unit tests for the admin credential check."""

from unittest.mock import patch

import pytest

from gateway.core.admin_auth import validate_admin_secret, verify_admin_key
from gateway.core.errors import AuthenticationAppError


class TestValidateAdminSecret:
    """Test core secret comparison logic."""

    @patch("gateway.core.admin_auth.settings")
    def test_accepts_matching_secret(self, mock_settings) -> None:
        mock_settings.admin.secret_key = "s3cret-admin-key"

        # Should not raise
        validate_admin_secret("s3cret-admin-key")

    @patch("gateway.core.admin_auth.settings")
    def test_rejects_wrong_secret(self, mock_settings) -> None:
        mock_settings.admin.secret_key = "s3cret-admin-key"

        with pytest.raises(AuthenticationAppError) as exc_info:
            validate_admin_secret("guess")

        assert exc_info.value.code == "invalid_admin_credentials"
        assert exc_info.value.message == "No autorizado"

    @pytest.mark.parametrize("provided", [None, ""])
    @patch("gateway.core.admin_auth.settings")
    def test_rejects_missing_credential(self, mock_settings, provided) -> None:
        mock_settings.admin.secret_key = "s3cret-admin-key"

        with pytest.raises(AuthenticationAppError) as exc_info:
            validate_admin_secret(provided)

        assert exc_info.value.code == "invalid_admin_credentials"

    @patch("gateway.core.admin_auth.settings")
    def test_does_not_trim_credentials(self, mock_settings) -> None:
        mock_settings.admin.secret_key = "s3cret-admin-key"

        with pytest.raises(AuthenticationAppError):
            validate_admin_secret(" s3cret-admin-key ")

    @pytest.mark.parametrize("configured", [None, ""])
    @patch("gateway.core.admin_auth.settings")
    def test_rejects_everything_when_secret_not_configured(self, mock_settings, configured) -> None:
        mock_settings.admin.secret_key = configured

        with pytest.raises(AuthenticationAppError) as exc_info:
            validate_admin_secret("anything")

        assert exc_info.value.code == "admin_secret_not_configured"
        assert "ADMIN_SECRET_KEY" in exc_info.value.details["hint"]


class TestVerifyAdminKeyDependency:
    """Test FastAPI dependency for admin key verification."""

    @pytest.mark.asyncio
    @patch("gateway.core.admin_auth.settings")
    async def test_accepts_valid_key(self, mock_settings) -> None:
        mock_settings.admin.secret_key = "s3cret-admin-key"

        await verify_admin_key(x_admin_key="s3cret-admin-key")

    @pytest.mark.asyncio
    @patch("gateway.core.admin_auth.settings")
    async def test_raises_when_header_missing(self, mock_settings) -> None:
        mock_settings.admin.secret_key = "s3cret-admin-key"

        with pytest.raises(AuthenticationAppError):
            await verify_admin_key(x_admin_key=None)
