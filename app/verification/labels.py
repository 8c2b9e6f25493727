"""Label detection wrapper and top-label selection."""

import io
import asyncio
import logging
from typing import Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError
from PIL import Image

from app.config import settings
from app.integrations import rekognition
from app.schemas.verification import DetectedLabel

logger = logging.getLogger(__name__)

MIN_LABEL_IMAGE_SIDE = 512


def fit_for_labeling(image_bytes: bytes, max_bytes: int, max_side: int) -> bytes:
    """
    Returns image bytes the label provider will accept.

    Images within `max_bytes` pass through untouched. Larger ones are
    re-encoded as JPEG (quality 85), halving the longest side until the
    result fits or the side reaches MIN_LABEL_IMAGE_SIDE.
    """
    if len(image_bytes) <= max_bytes:
        return image_bytes

    with Image.open(io.BytesIO(image_bytes)) as img:
        rgb = img.convert("RGB")

    side = max_side
    while True:
        resized = rgb.copy()
        resized.thumbnail((side, side))
        buffer = io.BytesIO()
        resized.save(buffer, format="JPEG", quality=85)
        if buffer.tell() <= max_bytes or side <= MIN_LABEL_IMAGE_SIDE:
            logger.info(
                f"[VERIFY] Downscaled image for labeling: {len(image_bytes)} → {buffer.tell()} bytes "
                f"({resized.width}x{resized.height})"
            )
            return buffer.getvalue()
        side //= 2


async def detect_labels(image_bytes: bytes) -> list[DetectedLabel]:
    """
    Labels at or above `label_min_confidence`, at most `label_max_labels`.

    A provider failure is logged and reported as "no labels": the engine turns
    that into the UNKNOWN result instead of failing the request.
    """
    try:
        payload = await asyncio.to_thread(
            fit_for_labeling,
            image_bytes,
            settings.rekognition_max_image_bytes,
            settings.label_image_max_side,
        )
    except Exception as e:
        logger.warning(f"[VERIFY] Could not prepare image for labeling, treating as no labels: {e}")
        return []

    try:
        labels = await rekognition.detect_labels(
            payload,
            max_labels=settings.label_max_labels,
            min_confidence=settings.label_min_confidence,
        )
    except (BotoCoreError, ClientError, RuntimeError) as e:
        logger.warning(f"[VERIFY] Label detection failed, treating as no labels: {e}")
        return []

    qualifying = [label for label in labels if label.confidence >= settings.label_min_confidence]
    logger.info(f"[VERIFY] Labels: {[(label.name, round(label.confidence, 2)) for label in qualifying]}")
    return qualifying[:settings.label_max_labels]


def select_top_label(labels: Sequence[DetectedLabel]) -> Optional[DetectedLabel]:
    """Highest confidence wins; on a tie the earliest label is kept."""
    top = None
    for label in labels:
        if top is None or label.confidence > top.confidence:
            top = label
    return top
