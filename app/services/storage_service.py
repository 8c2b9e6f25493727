"""
Listing image persistence in Firebase Cloud Storage.

Uploaded images are kept even when verification later rejects the listing,
so every verdict can be audited against the exact bytes it judged.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone

from fastapi import HTTPException

from app.config import settings
from app.integrations import firebase as firebase_module

logger = logging.getLogger(__name__)

_EXTENSIONS = {"image/jpeg": ".jpg", "image/png": ".png", "image/webp": ".webp"}


def _get_bucket():
    bucket = firebase_module.bucket
    if not bucket:
        raise HTTPException(status_code=503, detail="Image storage unavailable.")
    return bucket


def build_object_path(owner_uid: str, content_type: str) -> str:
    day = datetime.now(timezone.utc).strftime("%Y/%m/%d")
    ext = _EXTENSIONS.get(content_type, ".jpg")
    return f"{settings.listing_image_prefix}/{owner_uid}/{day}/{uuid.uuid4().hex}{ext}"


def _upload_sync(bucket, path: str, content: bytes, content_type: str) -> str:
    blob = bucket.blob(path)
    blob.upload_from_string(content, content_type=content_type)
    blob.make_public()
    return blob.public_url


async def upload_listing_image(content: bytes, content_type: str, owner_uid: str) -> str:
    """Stores the image and returns its stable public URL."""
    bucket = _get_bucket()
    path = build_object_path(owner_uid, content_type)
    try:
        url = await asyncio.to_thread(_upload_sync, bucket, path, content, content_type)
    except Exception as e:
        logger.error(f"[STORAGE] Upload failed for {path}: {e}")
        raise HTTPException(status_code=503, detail="Image upload failed.")
    logger.info(f"[STORAGE] Stored listing image {path} ({len(content)} bytes)")
    return url
