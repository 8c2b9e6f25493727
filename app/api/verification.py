"""
Direct verification route: /api/v1/verify

Runs the verification engine on an already-hosted image, without creating
a listing. Returns the bare VerificationResult.
"""

import logging

from fastapi import APIRouter, Depends

from app.core.auth import AuthenticatedUser
from app.core.rate_limiter import enforce_verification_rate_limit
from app.schemas.verification import VerificationRequest, VerificationResult
from app.services.verification_service import run_verification

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Verification"])


@router.post("/api/v1/verify", response_model=VerificationResult)
async def verify(
    payload: VerificationRequest,
    user: AuthenticatedUser = Depends(enforce_verification_rate_limit),
):
    """
    Checks category, authenticity and reuse for `imageUrl`.
    A `verified: false` answer is a normal 200 response.
    """
    logger.info(f"[ROUTE] Verify requested by {user.identity} ({payload.declared_category.value})")
    return await run_verification(payload.image_url, payload.declared_category)
