"""
AWS Rekognition integration — image labeling.

`client` starts as None. Call `initialize()` inside the FastAPI lifespan.
boto3 clients are thread-safe, so one client serves all concurrent
verifications; calls run in a worker thread via asyncio.to_thread.
"""

import os
import asyncio
import logging

import boto3
from botocore.config import Config

from app.config import settings
from app.schemas.verification import DetectedLabel

logger = logging.getLogger(__name__)

client = None  # botocore RekognitionClient | None


def initialize() -> None:
    """Create the Rekognition client from AWS_* env vars (or the default credential chain)."""
    global client

    region = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
    if not region:
        logger.warning("[STARTUP] AWS_REGION not set. Label detection is disabled.")
        return

    boto_config = Config(
        connect_timeout=settings.rekognition_connect_timeout_sec,
        read_timeout=settings.rekognition_read_timeout_sec,
        retries={"max_attempts": settings.rekognition_max_attempts, "mode": "standard"},
    )
    access_key = os.getenv("AWS_ACCESS_KEY_ID")
    secret_key = os.getenv("AWS_SECRET_ACCESS_KEY")

    if access_key and secret_key:
        client = boto3.client(
            "rekognition",
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=boto_config,
        )
    else:
        client = boto3.client("rekognition", region_name=region, config=boto_config)
    logger.info(f"[STARTUP] Rekognition client initialized ({region})")


def _detect_labels_sync(image_bytes: bytes, max_labels: int, min_confidence: float) -> list[DetectedLabel]:
    response = client.detect_labels(
        Image={"Bytes": image_bytes},
        MaxLabels=max_labels,
        MinConfidence=min_confidence,
    )
    return [
        DetectedLabel(name=label.get("Name", ""), confidence=float(label.get("Confidence", 0.0)))
        for label in response.get("Labels") or []
    ]


async def detect_labels(image_bytes: bytes, max_labels: int, min_confidence: float) -> list[DetectedLabel]:
    """
    Returns the provider's labels in provider order.
    Raises RuntimeError when the client is not configured; botocore errors propagate.
    """
    if client is None:
        raise RuntimeError("Rekognition client not initialized")
    return await asyncio.to_thread(_detect_labels_sync, image_bytes, max_labels, min_confidence)
