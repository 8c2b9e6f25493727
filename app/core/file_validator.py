"""
Upload validation for listing images.

Checks extension, size and that Pillow can actually decode the bytes
before anything is written to storage.
"""

import io
import os
import logging

from fastapi import HTTPException
from PIL import Image

from app.config import settings

# Prevent decompression-bomb attacks
Image.MAX_IMAGE_PIXELS = settings.pil_max_image_pixels

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_FORMATS = {
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
}
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}


def validate_image_upload(filename: str, content: bytes) -> str:
    """
    Validates an uploaded listing image.
    Returns the canonical content type of the decoded image.
    """
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(status_code=415, detail="Unsupported file format. Use JPG, PNG or WEBP.")

    if not content:
        raise HTTPException(status_code=400, detail="Empty file upload.")

    if len(content) > settings.max_image_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Image too large. Max {settings.max_image_upload_mb}MB allowed."
        )

    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
            actual_format = (img.format or "").lower()
    except Exception as e:
        logger.error(f"Corrupted or disguised upload rejected ({filename}): {e}")
        raise HTTPException(status_code=400, detail="Invalid file content or format mismatch.")

    if actual_format not in ALLOWED_IMAGE_FORMATS:
        logger.error(f"Format mismatch for {filename}: {actual_format}")
        raise HTTPException(status_code=400, detail="Invalid file content or format mismatch.")

    return ALLOWED_IMAGE_FORMATS[actual_format]
