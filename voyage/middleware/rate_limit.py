# FILE: voyage/middleware/rate_limit.py
"""
Rate limiting middleware (simple in-memory, sliding 60s window)
"""
import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client request limiter"""

    def __init__(self, app, rpm: int = 120):
        super().__init__(app)
        self.rpm = rpm
        self.requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._last_sweep = time.monotonic()

    def _sweep(self, now: float):
        """Drop clients with no request inside the window"""
        stale = [
            client for client, window in self.requests.items()
            if not window or now - window[-1] >= WINDOW_SECONDS
        ]
        for client in stale:
            del self.requests[client]
        self._last_sweep = now

    async def dispatch(self, request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        now = time.monotonic()

        if now - self._last_sweep >= WINDOW_SECONDS:
            self._sweep(now)

        window = self.requests[client]
        while window and now - window[0] >= WINDOW_SECONDS:
            window.popleft()

        if len(window) >= self.rpm:
            retry_after = int(WINDOW_SECONDS - (now - window[0])) + 1
            logger.warning(f"Rate limit exceeded for {client}")
            return JSONResponse(
                status_code=429,
                content={"message": "Too many requests"},
                headers={"Retry-After": str(retry_after)}
            )

        window.append(now)
        return await call_next(request)
