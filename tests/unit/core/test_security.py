"""
Unit Tests for Security Module.

Black box tests against the public interface of security.py.
Only the secret boundary is stubbed; cookie helpers run against real
Starlette responses and the real YAML configuration.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
from fastapi import Response

from notekeeper.core.security import clear_pin_cookie, set_pin_cookie, verify_pin


# =============================================================================
# PIN Verification
# =============================================================================


class TestVerifyPin:
    """Tests for PIN comparison."""

    def test_accepts_configured_pin(self, valid_pin):
        assert verify_pin(valid_pin) is True

    @pytest.mark.parametrize("candidate", [None, "", "0000", "43210", " 4321"])
    def test_rejects_anything_else(self, candidate):
        assert verify_pin(candidate) is False

    def test_empty_secret_locks_hidden_notes(self):
        """With no PIN configured, nothing is accepted."""
        settings = SimpleNamespace(hidden_notes_pin="")
        with patch("notekeeper.core.security.get_settings", return_value=settings):
            assert verify_pin("") is False
            assert verify_pin("anything") is False

    def test_compares_against_current_settings(self):
        """Each call checks against whatever settings object is in effect."""
        with patch(
            "notekeeper.core.security.get_settings",
            return_value=SimpleNamespace(hidden_notes_pin="1111"),
        ):
            assert verify_pin("1111") is True
        with patch(
            "notekeeper.core.security.get_settings",
            return_value=SimpleNamespace(hidden_notes_pin="2222"),
        ):
            assert verify_pin("1111") is False


# =============================================================================
# Cookies
# =============================================================================


class TestPinCookie:
    """Tests for the auth cookie helpers."""

    def test_set_pin_cookie(self, valid_pin):
        response = Response()

        set_pin_cookie(response, valid_pin)

        header = response.headers["set-cookie"]
        assert header.startswith(f"auth_pin={valid_pin}")
        assert "HttpOnly" in header
        assert "Max-Age=86400" in header
        assert "SameSite=strict" in header

    def test_cookie_not_secure_outside_production(self, valid_pin):
        response = Response()

        set_pin_cookie(response, valid_pin)

        assert "Secure" not in response.headers["set-cookie"]

    def test_clear_pin_cookie_expires_it(self):
        response = Response()

        clear_pin_cookie(response)

        header = response.headers["set-cookie"]
        assert header.startswith('auth_pin=""')
        assert "Max-Age=0" in header
