from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.verification import WasteType


class WasteListingRequest(BaseModel):
    """`data` part of the multipart listing upload."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=1, max_length=120)
    description: str = Field("", max_length=2000)
    pickup_location: str = Field(min_length=1, max_length=200)
    type: WasteType
    unit: int = Field(1, ge=1)
    weight: float = Field(gt=0)      # kg
    contact_phone: str = Field(min_length=5, max_length=32)


class ListingResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    pickup_location: str
    type: WasteType
    unit: int
    weight: float
    contact_phone: str
    image_url: str
    status: str
    owner_email: Optional[str] = None
    ai_verified: bool
    detected_category: str
    confidence_score: float
    is_authentic_image: bool
    created_at: Optional[datetime] = None
