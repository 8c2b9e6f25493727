"""
Upstash Redis integration (per-user rate limiting).

`client` starts as None. Call `initialize()` inside the FastAPI lifespan.
Consumers read `redis_client.client` at call time; when it is None the
rate limiter falls back to process memory.
"""

import os
import logging
from upstash_redis import Redis

logger = logging.getLogger(__name__)

client = None  # Redis | None


def initialize() -> None:
    global client

    redis_url = os.getenv("UPSTASH_REDIS_HOST")
    redis_token = os.getenv("UPSTASH_REDIS_PASSWORD")

    if not (redis_url and redis_token):
        logger.warning("[STARTUP] Redis credentials not found. Rate limiting falls back to memory.")
        return

    try:
        client = Redis(url=redis_url, token=redis_token)
        logger.info("[STARTUP] Upstash Redis client initialized")
    except Exception as e:
        logger.error(f"[STARTUP] Redis init failed, using in-memory rate limits: {e}")
        client = None


def is_reachable() -> bool:
    """Best-effort PING used by the health route. Never raises."""
    if client is None:
        return False
    try:
        return bool(client.ping())
    except Exception as e:
        logger.warning(f"[HEALTH] Redis ping failed: {e}")
        return False
