"""
Waste listings: creation workflow (store image → verify → persist) and queries.

The Firebase `db` client is accessed at call-time via the integration module
so it picks up the instance initialized during the FastAPI lifespan.
"""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from app.config import settings
from app.core.auth import AuthenticatedUser
from app.core.file_validator import validate_image_upload
from app.integrations import firebase as firebase_module
from app.schemas.listings import WasteListingRequest
from app.services.storage_service import upload_listing_image
from app.services.verification_service import rejection_message, run_verification

logger = logging.getLogger(__name__)

STATUS_OPEN = "OPEN"


def _get_db():
    db = firebase_module.db
    if not db:
        raise HTTPException(status_code=503, detail="Database service unavailable.")
    return db


def _to_listing(doc) -> dict:
    data = doc.to_dict()
    data["id"] = doc.id
    return data


def _newest_first(listings: list[dict]) -> list[dict]:
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    return sorted(listings, key=lambda item: item.get("created_at") or epoch, reverse=True)


async def create_listing(
    request: WasteListingRequest,
    filename: str,
    content: bytes,
    user: AuthenticatedUser,
) -> dict:
    """
    Validates and stores the image, runs verification and persists the listing.
    Raises HTTP 422 with a user-facing message when the image is not verified.
    """
    db = _get_db()
    content_type = validate_image_upload(filename, content)
    image_url = await upload_listing_image(content, content_type, user.uid)

    result = await run_verification(image_url, request.type)
    if not result.verified:
        logger.info(
            f"[LISTINGS] Rejected listing from {user.identity}: declared={request.type.value}, "
            f"detected={result.detected_category}, confidence={result.confidence_score:.2f}, "
            f"authentic={result.is_authentic_image}"
        )
        raise HTTPException(
            status_code=422,
            detail={
                "code": "IMAGE_NOT_VERIFIED",
                "message": rejection_message(result, request.type),
                "verification": result.model_dump(by_alias=True),
            },
        )

    listing = {
        "title": request.title,
        "description": request.description,
        "pickup_location": request.pickup_location,
        "type": request.type.value,
        "unit": request.unit,
        "weight": request.weight,
        "contact_phone": request.contact_phone,
        "image_url": image_url,
        "status": STATUS_OPEN,
        "owner_uid": user.uid,
        "owner_email": user.identity,
        "ai_verified": result.verified,
        "detected_category": result.detected_category,
        "confidence_score": result.confidence_score,
        "is_authentic_image": result.is_authentic_image,
        "created_at": datetime.now(timezone.utc),
        "updated_at": firestore.SERVER_TIMESTAMP,
    }

    doc_ref = db.collection(settings.listings_collection).document()
    doc_ref.set(listing)
    logger.info(f"[LISTINGS] Created listing {doc_ref.id} for {user.identity} ({request.type.value})")

    listing.pop("updated_at", None)
    listing["id"] = doc_ref.id
    return listing


def get_all_listings() -> list[dict]:
    db = _get_db()
    docs = db.collection(settings.listings_collection).stream()
    return _newest_first([_to_listing(doc) for doc in docs])


def get_open_listings() -> list[dict]:
    db = _get_db()
    docs = (
        db.collection(settings.listings_collection)
        .where(filter=FieldFilter("status", "==", STATUS_OPEN))
        .stream()
    )
    return _newest_first([_to_listing(doc) for doc in docs])


def get_listings_by_owner(owner_uid: str) -> list[dict]:
    db = _get_db()
    docs = (
        db.collection(settings.listings_collection)
        .where(filter=FieldFilter("owner_uid", "==", owner_uid))
        .stream()
    )
    return _newest_first([_to_listing(doc) for doc in docs])
