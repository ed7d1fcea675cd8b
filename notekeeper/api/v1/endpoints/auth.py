"""
Auth API Endpoints.

PIN login, status and logout. A successful login stores the PIN in an
httpOnly cookie that later note requests present as their credential.
"""

from fastapi import APIRouter, Response

from notekeeper.core.config import get_app_config
from notekeeper.core.dependencies import ClientIp, PinCredential, PinLimiter, RequestId
from notekeeper.core.exceptions import AuthorizationError, RateLimitError
from notekeeper.core.logging import get_logger
from notekeeper.core.security import clear_pin_cookie, set_pin_cookie, verify_pin
from notekeeper.schemas.auth import AuthMessage, AuthStatus, PinLogin
from notekeeper.schemas.base import ApiResponse, ResponseMetadata

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "",
    response_model=ApiResponse[AuthMessage],
    summary="Log in with the PIN",
    description="Check the PIN and set the auth cookie. Repeated failures from one IP are throttled.",
)
async def login(
    data: PinLogin,
    response: Response,
    client_ip: ClientIp,
    limiter: PinLimiter,
    request_id: RequestId,
) -> ApiResponse[AuthMessage]:
    """Log in with the hidden notes PIN."""
    rate_limit_enabled = get_app_config().features.auth_rate_limit_enabled

    if rate_limit_enabled:
        result = limiter.check(client_ip)
        if not result.allowed:
            minutes = -(-result.retry_after_seconds // 60)
            raise RateLimitError(
                f"Too many failed attempts. Please try again in {minutes} minutes.",
                retry_after_seconds=result.retry_after_seconds,
            )

    if not verify_pin(data.pin):
        if rate_limit_enabled:
            limiter.record_failure(client_ip)
        raise AuthorizationError("Invalid PIN")

    limiter.clear(client_ip)
    set_pin_cookie(response, data.pin)
    logger.info("PIN login succeeded")

    return ApiResponse(
        data=AuthMessage(message="Authenticated successfully"),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/status",
    response_model=ApiResponse[AuthStatus],
    summary="Check login status",
)
async def status(
    credential: PinCredential,
    request_id: RequestId,
) -> ApiResponse[AuthStatus]:
    """Report whether the request carries a valid PIN."""
    return ApiResponse(
        data=AuthStatus(logged_in=verify_pin(credential)),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/logout",
    response_model=ApiResponse[AuthMessage],
    summary="Log out",
)
async def logout(
    response: Response,
    request_id: RequestId,
) -> ApiResponse[AuthMessage]:
    """Clear the auth cookie."""
    clear_pin_cookie(response)
    return ApiResponse(
        data=AuthMessage(message="Logged out successfully"),
        metadata=ResponseMetadata(request_id=request_id),
    )
