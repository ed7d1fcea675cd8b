"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.config import get_app_config
from notekeeper.core.database import get_db_session
from notekeeper.core.exceptions import ApplicationError
from notekeeper.core.rate_limiter import PinAttemptLimiter, get_rate_limiter

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(request: Request) -> str:
    """Request ID assigned by RequestContextMiddleware, or the client's header."""
    import uuid

    request_id = getattr(request.state, "request_id", None)
    return request_id or request.headers.get("X-Request-ID") or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_pin_credential(request: Request) -> str | None:
    """
    Extract the PIN credential sent with the request.

    The auth cookie is preferred; the configured header is accepted
    for clients that do not keep cookies.
    """
    security = get_app_config().security
    return request.cookies.get(security.pin_cookie.name) or request.headers.get(
        security.pin_header
    )


PinCredential = Annotated[str | None, Depends(get_pin_credential)]


async def get_client_ip(request: Request) -> str:
    """
    Get the caller's address for rate limiting.

    Raises:
        ApplicationError: If the transport did not report a client address
    """
    if request.client is None or not request.client.host:
        raise ApplicationError("Could not determine request IP address.")
    return request.client.host


ClientIp = Annotated[str, Depends(get_client_ip)]

PinLimiter = Annotated[PinAttemptLimiter, Depends(get_rate_limiter)]
