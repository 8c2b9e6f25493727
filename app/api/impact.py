"""
Material impact routes.
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.schemas.impact import ImpactEstimate
from app.schemas.verification import WasteType
from app.services.impact_service import estimate_impact

router = APIRouter(tags=["Impact"])


@router.get("/api/v1/impact/{material}", response_model=ImpactEstimate, response_model_exclude_none=True)
async def get_impact(material: WasteType, weight: Optional[float] = Query(None, gt=0)):
    return estimate_impact(material, weight)
