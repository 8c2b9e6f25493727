from app.schemas.verification import DetectedLabel, VerificationRequest, VerificationResult, WasteType
from app.schemas.listings import ListingResponse, WasteListingRequest
from app.schemas.impact import ImpactEstimate, MaterialImpact

__all__ = [
    "DetectedLabel",
    "VerificationRequest",
    "VerificationResult",
    "WasteType",
    "ListingResponse",
    "WasteListingRequest",
    "ImpactEstimate",
    "MaterialImpact",
]
