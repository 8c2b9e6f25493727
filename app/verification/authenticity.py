"""Authenticity check: is the image a genuine photo rather than AI-generated?"""

import logging

from app.config import settings
from app.integrations.sightengine import SightengineError, get_ai_generated_score
from app.verification.signals import SignalResult

logger = logging.getLogger(__name__)


async def check_authenticity(image_url: str) -> SignalResult:
    """
    Authentic when the generative-image score is below `ai_generated_threshold`.
    Any provider failure yields failure(False): not authentic.
    """
    try:
        score = await get_ai_generated_score(image_url)
    except SightengineError as e:
        logger.warning(f"[VERIFY] Authenticity check failed, defaulting to not authentic: {e}")
        return SignalResult.failure(False, str(e))

    authentic = score < settings.ai_generated_threshold
    logger.info(
        f"[VERIFY] AI-generated score: {score:.3f} → "
        f"{'authentic' if authentic else 'AI-generated'}"
    )
    return SignalResult.success(authentic)


async def is_authentic(image_url: str) -> bool:
    return (await check_authenticity(image_url)).value
