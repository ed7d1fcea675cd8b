"""
PIN Attempt Rate Limiter.

Tracks failed PIN logins per client IP over a rolling window.
Reads limits from config/settings/security.yaml.
Uses in-memory storage; move to Redis for multi-instance deployments.
"""

import time
from collections.abc import Callable

from notekeeper.core.config import get_app_config
from notekeeper.core.logging import get_logger

logger = get_logger(__name__)


class RateLimitResult:
    """Result of a rate limit check."""

    def __init__(self, allowed: bool, retry_after_seconds: int = 0) -> None:
        self.allowed = allowed
        self.retry_after_seconds = retry_after_seconds


class PinAttemptLimiter:
    """
    Per-IP failed PIN attempt limiter.

    An IP is blocked once it has max_attempts failures inside the
    rolling window. Expired failures are pruned when their IP is seen
    again, and every IP is swept once per window so addresses that never
    return do not accumulate. A successful login clears the IP's history.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        window_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._failures: dict[str, list[float]] = {}
        self._last_sweep = clock()

    def check(self, client_ip: str) -> RateLimitResult:
        """
        Check whether this IP may attempt another login.

        Args:
            client_ip: Caller address

        Returns:
            RateLimitResult indicating whether the attempt is allowed
        """
        now = self._clock()
        self._sweep(now)
        failures = self._prune(client_ip, now)

        if len(failures) >= self.max_attempts:
            oldest = min(failures)
            retry_after = int(self.window_seconds - (now - oldest)) + 1
            logger.warning(
                "PIN attempts exceeded",
                extra={
                    "client_ip": client_ip,
                    "limit": self.max_attempts,
                    "retry_after_seconds": retry_after,
                },
            )
            return RateLimitResult(allowed=False, retry_after_seconds=retry_after)

        return RateLimitResult(allowed=True)

    def record_failure(self, client_ip: str) -> int:
        """Record a failed attempt. Returns failures inside the window."""
        now = self._clock()
        self._sweep(now)
        failures = self._prune(client_ip, now)
        failures.append(now)
        self._failures[client_ip] = failures
        logger.info(
            "Failed PIN attempt recorded",
            extra={"client_ip": client_ip, "failures": len(failures)},
        )
        return len(failures)

    def clear(self, client_ip: str) -> None:
        """Forget failures for an IP after a successful login."""
        self._failures.pop(client_ip, None)

    def failures(self, client_ip: str) -> int:
        """Number of failures currently inside the window."""
        return len(self._prune(client_ip, self._clock()))

    def _sweep(self, now: float) -> None:
        """Prune every IP at most once per window."""
        if now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        for client_ip in list(self._failures):
            self._prune(client_ip, now)

    def _prune(self, client_ip: str, now: float) -> list[float]:
        """Drop failures older than the window."""
        cutoff = now - self.window_seconds
        failures = [ts for ts in self._failures.get(client_ip, []) if ts > cutoff]
        if failures:
            self._failures[client_ip] = failures
        else:
            self._failures.pop(client_ip, None)
        return failures


_rate_limiter: PinAttemptLimiter | None = None


def get_rate_limiter() -> PinAttemptLimiter:
    """Get or create the PIN attempt limiter singleton."""
    global _rate_limiter
    if _rate_limiter is None:
        limits = get_app_config().security.rate_limiting.pin_attempts
        _rate_limiter = PinAttemptLimiter(
            max_attempts=limits.max_attempts,
            window_seconds=limits.window_seconds,
        )
    return _rate_limiter
