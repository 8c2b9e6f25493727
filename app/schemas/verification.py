from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WasteType(str, Enum):
    PLASTIC = "PLASTIC"
    METAL = "METAL"
    GLASS = "GLASS"

    @classmethod
    def _missing_(cls, value):
        # Categories are matched case-insensitively ("plastic" == PLASTIC)
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().upper():
                    return member
        return None


class VerificationRequest(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    image_url: str = Field(min_length=1)
    declared_category: WasteType


class DetectedLabel(BaseModel):
    """One label from the image-labeling provider (confidence is 0-100)."""
    model_config = ConfigDict(frozen=True)

    name: str
    confidence: float = Field(ge=0.0, le=100.0)


class VerificationResult(BaseModel):
    """The only artifact the engine returns; intermediate signals live in the logs."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    verified: bool
    detected_category: str      # WasteType value, or "UNKNOWN" when no label qualified
    confidence_score: float
    is_authentic_image: bool
