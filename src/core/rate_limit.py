"""Rate limiting configuration using slowapi.

Counters live in ``RATE_LIMIT_STORAGE_URI``. The default ``memory://`` is per
process, so each uvicorn worker enforces its own limits.
"""

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

logger = structlog.get_logger()

READ_LIMIT = "60/minute"
WRITE_LIMIT = "30/minute"

# Seconds suggested to clients in Retry-After; every limit is per minute.
RETRY_AFTER_SECONDS = 60

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
    storage_uri=settings.rate_limit_storage_uri,
    key_prefix="fuel:",
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a 429 in the standard error shape."""
    detail = exc.detail if isinstance(exc, RateLimitExceeded) else str(exc)
    logger.warning(
        "rate_limit_exceeded",
        client=get_remote_address(request),
        path=request.url.path,
        limit=str(detail),
    )
    return JSONResponse(
        status_code=429,
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Rate limit exceeded: {detail}",
            "details": {"limit": str(detail)},
        },
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )
