"""
Sightengine integration — generative-image likelihood score.

`get_ai_generated_score` returns `type.ai_generated` in [0.0, 1.0].
Every failure mode raises SightengineError so the caller can decide on a
default; nothing here swallows errors.
"""

import os
import asyncio
import logging

import aiohttp

from app.config import settings
from app.integrations import http_client as http_module

logger = logging.getLogger(__name__)


class SightengineError(Exception):
    pass


async def get_ai_generated_score(image_url: str) -> float:
    api_user = os.getenv("SIGHTENGINE_API_USER")
    api_secret = os.getenv("SIGHTENGINE_API_SECRET")
    if not api_user or not api_secret:
        raise SightengineError("SIGHTENGINE_API_USER / SIGHTENGINE_API_SECRET not set")

    params = {
        "url": image_url,
        "models": "genai",
        "api_user": api_user,
        "api_secret": api_secret,
    }

    try:
        async with http_module.request_session() as sess:
            async with sess.get(settings.sightengine_endpoint, params=params) as response:
                if response.status != 200:
                    body = await response.text()
                    raise SightengineError(f"HTTP {response.status}: {body[:300]}")
                payload = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        raise SightengineError(f"{type(e).__name__}: {e}") from e

    logger.debug(f"[SIGHTENGINE] Response: {payload}")

    type_block = payload.get("type") if isinstance(payload, dict) else None
    if not isinstance(type_block, dict) or "ai_generated" not in type_block:
        raise SightengineError("No ai_generated score in response")

    try:
        return float(type_block["ai_generated"])
    except (TypeError, ValueError) as e:
        raise SightengineError(f"Non-numeric ai_generated score: {type_block['ai_generated']!r}") from e
