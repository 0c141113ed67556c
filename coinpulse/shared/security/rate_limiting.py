"""
Per-client request limits.

slowapi keyed on the client address. Only the routes that reach the
price provider are decorated, with the heavy limit: CoinGecko's public
tier allows a few dozen calls per minute for the whole server, so one
client must not be able to spend it. The default limit is registered
for any route slowapi is later asked to cover globally.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from coinpulse.core.config import settings

DEFAULT_RATE_LIMIT = settings.rate_limit_default
HEAVY_RATE_LIMIT = settings.rate_limit_heavy

limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT_RATE_LIMIT])


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Reject a client over its limit, naming the limit it hit."""
    return JSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "Rate limit exceeded",
            "detail": f"{exc.detail} on {request.url.path}",
        },
    )
