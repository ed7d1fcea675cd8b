"""
Security Utilities.

PIN credential checks for hidden notes and cookie helpers for the
PIN login flow.
"""

import hmac

from fastapi import Response

from notekeeper.core.config import get_app_config, get_settings
from notekeeper.core.logging import get_logger

logger = get_logger(__name__)


def verify_pin(candidate: str | None) -> bool:
    """
    Check a presented credential against the configured PIN.

    The secret comes from the cached settings, so changing it needs a
    restart (or get_settings.cache_clear()).
    """
    if not candidate:
        return False
    expected = get_settings().hidden_notes_pin
    if not expected:
        logger.warning("HIDDEN_NOTES_PIN is empty; hidden notes are locked")
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def set_pin_cookie(response: Response, pin: str) -> None:
    """Attach the PIN cookie to a response."""
    app_config = get_app_config()
    cookie = app_config.security.pin_cookie
    response.set_cookie(
        key=cookie.name,
        value=pin,
        max_age=cookie.max_age_seconds,
        httponly=True,
        samesite=cookie.same_site,
        secure=app_config.application.environment == "production",
    )


def clear_pin_cookie(response: Response) -> None:
    """Expire the PIN cookie."""
    cookie = get_app_config().security.pin_cookie
    response.delete_cookie(key=cookie.name, httponly=True, samesite=cookie.same_site)
