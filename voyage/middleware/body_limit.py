# FILE: voyage/middleware/body_limit.py
"""
Body size limit middleware

Memory uploads carry a base64 photo, so the limit is checked against the
declared Content-Length before the body is read.
"""
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject uploads whose declared size exceeds max_size bytes"""

    def __init__(self, app, max_size: int):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next):
        if request.method in ["POST", "PUT", "PATCH"]:
            content_length = request.headers.get("content-length")
            if content_length:
                try:
                    size = int(content_length)
                except ValueError:
                    return JSONResponse(
                        status_code=400,
                        content={"message": "Invalid Content-Length header"}
                    )
                if size > self.max_size:
                    logger.warning(f"Upload too large: {size} > {self.max_size} ({request.url.path})")
                    return JSONResponse(
                        status_code=413,
                        content={"message": "Photo or request body too large"}
                    )

        return await call_next(request)
