import json
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .config import settings

access_logger = logging.getLogger("harmony_match.access")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """One JSON line per request when LOGGING_ENABLED is set."""

    async def dispatch(self, request: Request, call_next):
        if not settings.LOGGING_ENABLED:
            return await call_next(request)

        start = time.time()
        response = await call_next(request)
        elapsed = round((time.time() - start) * 1000, 2)
        access_logger.info(json.dumps({
            "ts": time.time(),
            "ip": request.client.host if request.client else None,
            "method": request.method,
            "endpoint": request.url.path,
            "status": response.status_code,
            "latency_ms": elapsed,
        }))
        return response
