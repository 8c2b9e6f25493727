"""Material impact reference data (per-kg CO2/energy/water/tree savings)."""

import logging
from typing import Optional

from fastapi import HTTPException

from app.config import settings
from app.integrations import firebase as firebase_module
from app.schemas.impact import ImpactEstimate, MaterialImpact
from app.schemas.verification import WasteType

logger = logging.getLogger(__name__)


def _get_db():
    db = firebase_module.db
    if not db:
        raise HTTPException(status_code=503, detail="Database service unavailable.")
    return db


def get_material_impact(material: WasteType) -> MaterialImpact:
    db = _get_db()
    doc = db.collection(settings.material_impact_collection).document(material.value).get()
    if not doc.exists:
        raise HTTPException(status_code=404, detail=f"No impact data for {material.value}")
    data = doc.to_dict()
    data["material_type"] = material.value
    return MaterialImpact.model_validate(data)


def estimate_impact(material: WasteType, weight: Optional[float] = None) -> ImpactEstimate:
    """Impact factors for `material`, scaled to `weight` kg when given."""
    impact = get_material_impact(material)
    if weight is None:
        return ImpactEstimate(material=impact)

    return ImpactEstimate(
        material=impact,
        weight=weight,
        co2_saved=round(impact.co2_per_kg * weight, 3),
        energy_saved=round(impact.energy_per_kg * weight, 3),
        water_saved=round(impact.water_per_kg * weight, 3),
        trees_saved=round(impact.trees_per_kg * weight, 4),
    )
