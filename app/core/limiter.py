# File: app/core/limiter.py

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.core.config import settings

# Requests are keyed by client IP; counters live in redis (or memory:// in tests).
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.redis_url,
    default_limits=[settings.redis_rate_limit],
    enabled=settings.rate_limit_enabled,
)


async def custom_rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Return the standard error envelope for rate-limited requests.
    """
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Too Many Requests: rate limit exceeded ({exc.detail})",
        },
    )
