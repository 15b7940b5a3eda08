from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import settings

# Shared limiter instance; only the login route is limited today
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATELIMIT_ENABLED)

__all__ = [
    "limiter",
    "RateLimitExceeded",
    "SlowAPIMiddleware",
]
