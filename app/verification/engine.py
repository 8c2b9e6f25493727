"""
Verification engine — decides whether a listing image can be trusted.

`verify_image` orchestrates:
  1. Image fetch            (fatal on failure → ImageUnavailableError)
  2. Label detection        (no qualifying label → fixed UNKNOWN result)
  3. Category mapping of the top label
  4. Authenticity + reuse checks, run concurrently
  5. Fusion into a VerificationResult, logged as the audit record

Fusion policy:
    is_authentic_image = authentic and not reused
    verified           = category_match and confidence >= threshold

`verified` deliberately ignores `is_authentic_image`; the listing workflow
decides what to do with an inauthentic but verified image.
"""

import asyncio
import logging

from app.config import settings
from app.schemas.verification import VerificationResult, WasteType
from app.verification.authenticity import check_authenticity
from app.verification.categories import is_category_match, map_label
from app.verification.constants import UNKNOWN_CATEGORY
from app.verification.image_fetcher import fetch_image_bytes
from app.verification.labels import detect_labels, select_top_label
from app.verification.reuse import check_reuse

logger = logging.getLogger(__name__)

UNKNOWN_RESULT = VerificationResult(
    verified=False,
    detected_category=UNKNOWN_CATEGORY,
    confidence_score=0.0,
    is_authentic_image=False,
)


async def verify_image(image_url: str, declared_category: WasteType) -> VerificationResult:
    """
    Runs the full verification for one image.

    Raises ImageUnavailableError when the image cannot be fetched/decoded.
    Every other provider failure degrades to that check's default.
    """
    declared = WasteType(declared_category)
    logger.info(f"[VERIFY] Start: declared={declared.value} url={image_url}")

    image_bytes = await fetch_image_bytes(image_url)

    top_label = select_top_label(await detect_labels(image_bytes))
    if top_label is None:
        logger.info(
            "[VERIFY] Summary → no qualifying labels, returning UNKNOWN",
            extra={"audit": {"declared_category": declared.value, "detected_category": UNKNOWN_CATEGORY}},
        )
        return UNKNOWN_RESULT

    confidence = top_label.confidence
    detected = map_label(top_label.name)

    authenticity, reuse = await asyncio.gather(
        check_authenticity(image_url),
        check_reuse(image_url),
    )

    authentic_image = authenticity.value and not reuse.value
    category_match = is_category_match(detected, declared)
    verified = category_match and confidence >= settings.verification_confidence_threshold

    audit = {
        "authentic_image": authentic_image,
        "reused": reuse.value,
        "category_match": category_match,
        "confidence": confidence,
        "verified": verified,
        "detected_category": detected.value,
        "declared_category": declared.value,
        "top_label": top_label.name,
        "authenticity_check_ok": authenticity.ok,
        "reuse_check_ok": reuse.ok,
    }
    logger.info(
        f"[VERIFY] Summary → Authentic: {authentic_image}, Reused: {reuse.value}, "
        f"Match: {category_match}, Confidence: {confidence:.2f}, Verified: {verified}, "
        f"Detected: {detected.value} (label '{top_label.name}')",
        extra={"audit": audit},
    )
    if not (authenticity.ok and reuse.ok):
        logger.warning(
            f"[VERIFY] Degraded verdict: authenticity_error={authenticity.error!r}, "
            f"reuse_error={reuse.error!r}"
        )

    return VerificationResult(
        verified=verified,
        detected_category=detected.value,
        confidence_score=confidence,
        is_authentic_image=authentic_image,
    )
