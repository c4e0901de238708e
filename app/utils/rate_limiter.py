"""
Rate limiting middleware for API endpoints
"""
import time
from collections import defaultdict, deque
from fastapi import Request, HTTPException
from typing import Deque, Dict, Iterable, Optional
import logging

from app.config import settings

logger = logging.getLogger(__name__)

EXEMPT_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

WINDOW_SECONDS = 3600
CLEANUP_INTERVAL = 60


class RateLimiter:
    """
    In-memory sliding-window rate limiter

    Keeps one timestamp per request for the last hour, per client. State
    lives in the process, so each worker enforces its own budget.
    """

    def __init__(
        self,
        requests_per_minute: int = 60,
        requests_per_hour: int = 1000,
        trusted_proxies: Optional[Iterable[str]] = None
    ):
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour
        self.trusted_proxies = set(trusted_proxies or [])
        self.history: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_cleanup = 0.0

    def _get_client_id(self, request: Request) -> str:
        """
        Identify the caller by the peer address

        X-Forwarded-For is only read when the peer is a trusted proxy; the
        client is then the rightmost address not added by one of them.
        """
        peer = request.client.host if request.client else "unknown"

        forwarded = request.headers.get("x-forwarded-for")
        if forwarded and peer in self.trusted_proxies:
            for address in reversed([part.strip() for part in forwarded.split(",")]):
                if address and address not in self.trusted_proxies:
                    return address

        return peer

    def _cleanup_old_entries(self, now: float) -> None:
        """Drop expired timestamps and forget clients with none left"""
        cutoff = now - WINDOW_SECONDS

        for client_id in list(self.history.keys()):
            window = self.history[client_id]
            while window and window[0] <= cutoff:
                window.popleft()

            if not window:
                del self.history[client_id]

        self._last_cleanup = now

    def reset(self) -> None:
        self.history.clear()
        self._last_cleanup = 0.0

    async def check_rate_limit(self, request: Request) -> None:
        """
        Record the request or reject it

        Raises:
            HTTPException: 429 if the minute or hour budget is spent
        """
        client_id = self._get_client_id(request)
        now = time.monotonic()

        if now - self._last_cleanup >= CLEANUP_INTERVAL:
            self._cleanup_old_entries(now)

        window = self.history[client_id]

        while window and window[0] <= now - WINDOW_SECONDS:
            window.popleft()

        last_minute = sum(1 for ts in window if ts > now - 60)
        if last_minute >= self.requests_per_minute:
            logger.warning(f"Rate limit exceeded (minute): {client_id}")
            raise HTTPException(
                status_code=429,
                detail={
                    "error": "rate_limit_exceeded",
                    "message": f"Too many requests. Limit: {self.requests_per_minute} requests per minute",
                    "retry_after": 60
                }
            )

        if len(window) >= self.requests_per_hour:
            logger.warning(f"Rate limit exceeded (hour): {client_id}")
            raise HTTPException(
                status_code=429,
                detail={
                    "error": "rate_limit_exceeded",
                    "message": f"Too many requests. Limit: {self.requests_per_hour} requests per hour",
                    "retry_after": 3600
                }
            )

        window.append(now)


# Global instance
rate_limiter = RateLimiter(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR,
    trusted_proxies=settings.TRUSTED_PROXIES
)
