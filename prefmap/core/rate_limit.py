"""
rate_limit.py — Global rate limiter instance.

Uses slowapi (a Starlette-compatible wrapper around the `limits` library).
Requests are keyed by client IP address. Rendering is CPU-bound, so the
map endpoint is the one that opts in.

Usage in routes:
    from fastapi import Request
    from prefmap.core.rate_limit import limiter

    @router.get("/map")
    @limiter.limit(settings.map_rate_limit)
    def render(request: Request, ...):
        ...

Wired into the app in main.py:
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
