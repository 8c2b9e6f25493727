"""
SerpAPI integration — Google reverse image search.

`reverse_image_search` returns the `link` of every entry in `image_results`.
Transport and format problems raise SerpApiError.
"""

import os
import asyncio
import logging

import aiohttp

from app.config import settings
from app.integrations import http_client as http_module

logger = logging.getLogger(__name__)


class SerpApiError(Exception):
    pass


async def reverse_image_search(image_url: str) -> list[str]:
    api_key = os.getenv("SERPAPI_API_KEY")
    if not api_key:
        raise SerpApiError("SERPAPI_API_KEY not set")

    params = {
        "engine": "google_reverse_image",
        "image_url": image_url,
        "api_key": api_key,
        "no_cache": "true",
    }

    try:
        async with http_module.request_session() as sess:
            async with sess.get(settings.serpapi_endpoint, params=params) as response:
                if response.status != 200:
                    body = await response.text()
                    raise SerpApiError(f"HTTP {response.status}: {body[:300]}")
                payload = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        raise SerpApiError(f"{type(e).__name__}: {e}") from e

    if not isinstance(payload, dict):
        raise SerpApiError("Empty or non-object response")

    results = payload.get("image_results")
    if not isinstance(results, list):
        raise SerpApiError("No image_results list in response")

    return [
        item["link"] for item in results
        if isinstance(item, dict) and isinstance(item.get("link"), str)
    ]
