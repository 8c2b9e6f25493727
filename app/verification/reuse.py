"""Reuse check: does the image already exist on a stock/photo-sharing site?"""

import logging
from typing import Iterable
from urllib.parse import urlparse

from app.config import settings
from app.integrations.serpapi import SerpApiError, reverse_image_search
from app.verification.signals import SignalResult

logger = logging.getLogger(__name__)


def is_own_storage_url(image_url: str, own_hosts: Iterable[str]) -> bool:
    host = (urlparse(image_url).hostname or "").lower()
    return any(host == h.lower() or host.endswith("." + h.lower()) for h in own_hosts)


def find_stock_matches(urls: Iterable[str], stock_hosts: Iterable[str]) -> list[str]:
    hosts = [h.lower() for h in stock_hosts]
    return [url for url in urls if any(h in url.lower() for h in hosts)]


async def check_reuse(image_url: str) -> SignalResult:
    """
    Reused when a reverse-search hit lives on a known stock/photo host.
    Images served from our own storage are never reused. Failures and empty
    results yield False.
    """
    try:
        matched_urls = await reverse_image_search(image_url)
    except SerpApiError as e:
        logger.warning(f"[VERIFY] Reverse image search failed, defaulting to not reused: {e}")
        return SignalResult.failure(False, str(e))

    if not matched_urls:
        logger.info("[VERIFY] No visually similar images found online → not reused")
        return SignalResult.success(False)

    stock_matches = find_stock_matches(matched_urls, settings.stock_image_hosts)
    reused = bool(stock_matches)
    logger.info(f"[VERIFY] Reverse image matches: {matched_urls}")

    if reused and is_own_storage_url(image_url, settings.own_storage_hosts):
        logger.info(f"[VERIFY] Image is served from our own storage, ignoring stock matches: {stock_matches}")
        reused = False

    logger.info(f"[VERIFY] Reused (stock/image-host matches found): {reused}")
    return SignalResult.success(reused)


async def is_reused(image_url: str) -> bool:
    return (await check_reuse(image_url)).value
