"""
Per-user rate limiting for verification-heavy routes: Redis-backed
(preferred) with in-memory fallback.

Each verification costs three paid provider calls, so POST /listings and
POST /api/v1/verify share one budget per user.

The Redis client is accessed at call-time via the integration module
so it picks up the instance initialized during the FastAPI lifespan.
"""

import time
import logging
from typing import Dict

from fastapi import Depends, HTTPException

from app.config import settings
from app.core.auth import AuthenticatedUser, get_current_user
from app.integrations import redis_client as redis_module

logger = logging.getLogger(__name__)

# In-memory store: {identifier: [timestamp, ...]}
_rate_limits: Dict[str, list] = {}


def check_rate_limit(identifier: str) -> None:
    """Raises HTTP 429 when `identifier` is over its budget."""
    rc = redis_module.client
    if rc:
        _check_rate_limit_redis(rc, identifier)
    else:
        _check_rate_limit_memory(identifier)


async def enforce_verification_rate_limit(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    check_rate_limit(f"verify:{user.uid}")
    return user


def _check_rate_limit_redis(rc, identifier: str) -> None:
    key = f"rate_limit:{identifier}"
    try:
        current_count = rc.incr(key)
        if current_count == 1:
            rc.expire(key, settings.rate_limit_request_window_sec)
    except Exception as e:
        logger.error(f"Redis rate limit error: {e}. Falling back to memory.")
        _check_rate_limit_memory(identifier)
        return

    if current_count > settings.rate_limit_max_requests:
        logger.warning(f"[RATE LIMIT] Redis limit exceeded for {identifier}")
        raise HTTPException(
            status_code=429,
            detail="Too many verification requests. Please try again in a minute."
        )


def _check_rate_limit_memory(identifier: str) -> None:
    """Simple sliding-window in-memory rate limiting."""
    now = time.time()
    window = settings.rate_limit_request_window_sec

    if len(_rate_limits) > settings.rate_limit_memory_limit:
        _cleanup_all_limits(now)

    recent = [t for t in _rate_limits.get(identifier, []) if now - t < window]

    if len(recent) >= settings.rate_limit_max_requests:
        _rate_limits[identifier] = recent
        logger.warning(f"[RATE LIMIT] Memory limit exceeded for {identifier}")
        raise HTTPException(
            status_code=429,
            detail="Too many verification requests. Please try again in a minute."
        )

    recent.append(now)
    _rate_limits[identifier] = recent


def _cleanup_all_limits(now: float) -> None:
    """Remove all identifiers that have been idle for the full window."""
    window = settings.rate_limit_request_window_sec
    expired_keys = [
        k for k, v in _rate_limits.items()
        if not v or now - v[-1] > window
    ]
    for k in expired_keys:
        del _rate_limits[k]
    logger.info(f"Rate limit cleanup: removed {len(expired_keys)} inactive users.")
