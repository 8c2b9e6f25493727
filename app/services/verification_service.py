"""
Request-level wrapper around the verification engine: applies the overall
deadline and builds the user-facing rejection message.
"""

import asyncio
import logging

from fastapi import HTTPException

from app.config import settings
from app.schemas.verification import VerificationResult, WasteType
from app.verification.constants import UNKNOWN_CATEGORY
from app.verification.engine import verify_image

logger = logging.getLogger(__name__)

NOT_AUTHENTIC_MESSAGE = (
    "The uploaded image appears to be AI-generated or reused (found on the internet). "
    "Please upload a real photo of your waste."
)
UNRECOGNISED_MESSAGE = (
    "We could not recognise any waste material in the uploaded image. "
    "Please upload a clearer photo of your waste."
)


async def run_verification(image_url: str, declared_category: WasteType) -> VerificationResult:
    """verify_image bounded by `verification_timeout_sec` (HTTP 504 on expiry)."""
    try:
        return await asyncio.wait_for(
            verify_image(image_url, declared_category),
            timeout=settings.verification_timeout_sec,
        )
    except asyncio.TimeoutError:
        logger.error(f"[VERIFY] Timed out after {settings.verification_timeout_sec}s: {image_url}")
        raise HTTPException(status_code=504, detail="Image verification timed out. Please try again.")


def rejection_message(result: VerificationResult, declared_category: WasteType) -> str:
    """User-facing reason for a verified=False result."""
    if result.detected_category == UNKNOWN_CATEGORY:
        return UNRECOGNISED_MESSAGE
    if not result.is_authentic_image:
        return NOT_AUTHENTIC_MESSAGE
    declared = WasteType(declared_category).value
    if result.detected_category != declared:
        return (
            f"The image looks like {result.detected_category.lower()} waste, "
            f"but the listing is declared as {declared.lower()}."
        )
    return "We could not confidently verify the waste in the uploaded image. Please upload a clearer photo."
