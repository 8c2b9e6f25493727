"""
Unit tests for app/verification/labels.py and the Rekognition adapter.

The boto3 client is replaced with a MagicMock; nothing reaches AWS.
"""

import io
import os
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from PIL import Image

from app.schemas.verification import DetectedLabel
from app.verification.labels import detect_labels, select_top_label


def _rekognition_response(*labels):
    return {"Labels": [{"Name": name, "Confidence": conf} for name, conf in labels]}


@pytest.fixture
def fake_rekognition(monkeypatch):
    from app.integrations import rekognition

    fake = MagicMock()
    monkeypatch.setattr(rekognition, "client", fake)
    return fake


# ---------------------------------------------------------------------------
# select_top_label
# ---------------------------------------------------------------------------


def test_select_top_label_picks_max_confidence():
    labels = [
        DetectedLabel(name="Bottle", confidence=80.0),
        DetectedLabel(name="Plastic", confidence=95.5),
        DetectedLabel(name="Container", confidence=71.0),
    ]
    assert select_top_label(labels).name == "Plastic"


def test_select_top_label_tie_keeps_first():
    labels = [
        DetectedLabel(name="Jar", confidence=90.0),
        DetectedLabel(name="Can", confidence=90.0),
    ]
    assert select_top_label(labels).name == "Jar"


def test_select_top_label_empty():
    assert select_top_label([]) is None


# ---------------------------------------------------------------------------
# detect_labels
# ---------------------------------------------------------------------------


async def test_detect_labels_passes_limits_and_converts(fake_rekognition):
    from app.config import settings

    fake_rekognition.detect_labels.return_value = _rekognition_response(
        ("Bottle", 92.0), ("Plastic", 88.25)
    )

    labels = await detect_labels(b"img")

    fake_rekognition.detect_labels.assert_called_once_with(
        Image={"Bytes": b"img"},
        MaxLabels=settings.label_max_labels,
        MinConfidence=settings.label_min_confidence,
    )
    assert labels == [
        DetectedLabel(name="Bottle", confidence=92.0),
        DetectedLabel(name="Plastic", confidence=88.25),
    ]


async def test_detect_labels_filters_below_minimum(fake_rekognition):
    fake_rekognition.detect_labels.return_value = _rekognition_response(
        ("Bottle", 69.99), ("Plastic", 70.0)
    )

    labels = await detect_labels(b"img")

    assert [label.name for label in labels] == ["Plastic"]


async def test_detect_labels_client_error_returns_empty(fake_rekognition):
    fake_rekognition.detect_labels.side_effect = ClientError(
        {"Error": {"Code": "InvalidImageFormatException", "Message": "bad"}}, "DetectLabels"
    )
    assert await detect_labels(b"img") == []


async def test_detect_labels_connection_error_returns_empty(fake_rekognition):
    fake_rekognition.detect_labels.side_effect = EndpointConnectionError(endpoint_url="https://x")
    assert await detect_labels(b"img") == []


async def test_detect_labels_without_client_returns_empty(monkeypatch):
    from app.integrations import rekognition

    monkeypatch.setattr(rekognition, "client", None)
    assert await detect_labels(b"img") == []


# ---------------------------------------------------------------------------
# Oversized images (Rekognition rejects Image.Bytes above its limit)
# ---------------------------------------------------------------------------


def _noisy_png(side: int = 800) -> bytes:
    # Random pixels barely compress, so the PNG stays large
    img = Image.frombytes("RGB", (side, side), os.urandom(side * side * 3))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


async def test_oversized_image_is_downscaled_before_labeling(fake_rekognition, monkeypatch):
    from app.config import settings

    original = _noisy_png()
    monkeypatch.setattr(settings, "rekognition_max_image_mb", len(original) / (1024 * 1024) / 2)
    fake_rekognition.detect_labels.return_value = _rekognition_response(("Bottle", 92.0))

    labels = await detect_labels(original)

    sent = fake_rekognition.detect_labels.call_args.kwargs["Image"]["Bytes"]
    assert sent != original
    assert len(sent) < len(original)
    with Image.open(io.BytesIO(sent)) as img:
        assert img.format == "JPEG"
    assert [label.name for label in labels] == ["Bottle"]


async def test_small_image_is_sent_unchanged(fake_rekognition):
    fake_rekognition.detect_labels.return_value = _rekognition_response(("Bottle", 92.0))
    png = _noisy_png(side=16)

    await detect_labels(png)

    assert fake_rekognition.detect_labels.call_args.kwargs["Image"]["Bytes"] == png


def test_fit_for_labeling_halves_side_until_minimum():
    from app.verification.labels import fit_for_labeling

    # An unreachable byte budget stops at the first side at or below the minimum
    out = fit_for_labeling(_noisy_png(), max_bytes=10, max_side=600)

    with Image.open(io.BytesIO(out)) as img:
        assert img.size == (300, 300)
