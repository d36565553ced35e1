"""Per-client request throttling."""
from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from shopfinder.core.config import get_settings


def get_limiter() -> Limiter:
    """
    Create the rate limiter, keyed by client IP.

    Every search recomputes the full ranking, so the configured
    ``rate_limit`` applies to all routes. Counters live in process memory.
    """
    settings = get_settings()
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        storage_uri="memory://",
    )


__all__ = ["get_limiter"]
