from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.verification import WasteType


class MaterialImpact(BaseModel):
    """Per-kg environmental savings for one material (static reference data)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    material_type: WasteType
    co2_per_kg: float
    energy_per_kg: float
    water_per_kg: float
    trees_per_kg: float
    co2_percent: int


class ImpactEstimate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    material: MaterialImpact
    weight: Optional[float] = None
    co2_saved: Optional[float] = None
    energy_saved: Optional[float] = None
    water_saved: Optional[float] = None
    trees_saved: Optional[float] = None
