"""
Request logging middleware.

Writes one line per inbound request before it reaches the routes.
"""
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .logger import get_logger

logger = get_logger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs timestamp, method and original path (with query string) of every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            target = request.url.path
            if request.url.query:
                target = f"{target}?{request.url.query}"
            timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
            logger.info("[%s] %s %s", timestamp, request.method, target)
        except Exception:
            logger.debug("request logging failed", exc_info=True)
        return await call_next(request)
