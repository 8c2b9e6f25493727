"""
Waste listing routes: create (with image verification) and list.

POST /listings takes multipart/form-data with a `data` part (listing JSON as
a string) and a `file` part (the photo).
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from app.core.auth import AuthenticatedUser, get_current_user
from app.core.rate_limiter import enforce_verification_rate_limit
from app.schemas.listings import ListingResponse, WasteListingRequest
from app.services import listings_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/listings", tags=["Waste Listing"])


@router.post("", response_model=ListingResponse, status_code=201)
async def create_listing(
    data: str = Form(..., description="Listing JSON, e.g. "
                     '{"title":"Plastic bottles","description":"10kg of PET bottles",'
                     '"pickupLocation":"Ikeja, Lagos","type":"PLASTIC","unit":1,'
                     '"weight":10,"contactPhone":"08012345678"}'),
    file: UploadFile = File(..., description="Photo of the waste"),
    user: AuthenticatedUser = Depends(enforce_verification_rate_limit),
):
    """
    Creates a listing after verifying its photo.

    The photo is stored first, then checked for category match (label
    detection), AI generation and reuse on stock/photo sites. Unverified
    photos are rejected with 422 and a user-facing message.
    """
    try:
        request = WasteListingRequest.model_validate_json(data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False))

    content = await file.read()
    return await listings_service.create_listing(
        request, file.filename or "upload", content, user
    )


@router.get("", response_model=list[ListingResponse])
async def get_all_listings():
    return listings_service.get_all_listings()


@router.get("/open", response_model=list[ListingResponse])
async def get_open_listings():
    return listings_service.get_open_listings()


@router.get("/me", response_model=list[ListingResponse])
async def get_my_listings(user: AuthenticatedUser = Depends(get_current_user)):
    return listings_service.get_listings_by_owner(user.uid)
