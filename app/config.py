"""
Central application configuration.

Every tunable value lives here as a typed, documented field.
Any field can be overridden at runtime via an environment variable of the
same name (case-insensitive), e.g.:

    VERIFICATION_CONFIDENCE_THRESHOLD=80 uvicorn app.main:app
    export RATE_LIMIT_MAX_REQUESTS=20

List fields take JSON, e.g. STOCK_IMAGE_HOSTS='["pexels", "unsplash"]'.

A `.env` file at the project root is loaded automatically.
Credentials are NOT settings; integration modules read them with os.getenv.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.verification.constants import DEFAULT_OWN_STORAGE_HOSTS, DEFAULT_STOCK_IMAGE_HOSTS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Label detection (Rekognition)                                       #
    # ------------------------------------------------------------------ #
    label_max_labels: int = Field(
        5, description="Max labels requested per image"
    )
    label_min_confidence: float = Field(
        70.0, description="Labels below this confidence (0-100) are ignored"
    )
    rekognition_connect_timeout_sec: float = Field(
        5.0, description="botocore connect timeout"
    )
    rekognition_read_timeout_sec: float = Field(
        10.0, description="botocore read timeout"
    )
    rekognition_max_attempts: int = Field(
        2, description="botocore total attempts (standard retry mode)"
    )
    rekognition_max_image_mb: float = Field(
        5.0, description="Rekognition Image.Bytes limit; larger images are downscaled first"
    )
    label_image_max_side: int = Field(
        4096, description="Longest side (px) of a downscaled image sent for labeling"
    )

    # ------------------------------------------------------------------ #
    # Decision policy                                                     #
    # ------------------------------------------------------------------ #
    verification_confidence_threshold: float = Field(
        75.0, description="Top-label confidence required for verified=True"
    )
    ai_generated_threshold: float = Field(
        0.5, description="Sightengine ai_generated score at or above this → not authentic"
    )

    # ------------------------------------------------------------------ #
    # Authenticity & reuse providers                                      #
    # ------------------------------------------------------------------ #
    sightengine_endpoint: str = Field(
        "https://api.sightengine.com/1.0/check.json",
        description="Sightengine check endpoint",
    )
    serpapi_endpoint: str = Field(
        "https://serpapi.com/search", description="SerpAPI search endpoint"
    )
    stock_image_hosts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_STOCK_IMAGE_HOSTS),
        description="Substrings of stock/photo-sharing hosts that flag an image as reused",
    )
    own_storage_hosts: list[str] = Field(
        default_factory=lambda: list(DEFAULT_OWN_STORAGE_HOSTS),
        description="Hosts of our own image storage; images served from here are never 'reused'",
    )

    # ------------------------------------------------------------------ #
    # HTTP client & timeouts                                              #
    # ------------------------------------------------------------------ #
    http_connect_timeout_sec: float = Field(
        10.0, description="Connect timeout for outbound HTTP calls"
    )
    http_total_timeout_sec: float = Field(
        20.0, description="Total timeout for a single outbound HTTP call"
    )
    verification_timeout_sec: float = Field(
        60.0, description="Upper bound for one complete verification"
    )

    # ------------------------------------------------------------------ #
    # File Size Limits                                                    #
    # ------------------------------------------------------------------ #
    max_image_download_mb: int = Field(
        20, description="Max MB fetched from an image URL"
    )
    max_image_upload_mb: int = Field(
        10, description="Max MB for multipart listing image uploads"
    )
    pil_max_image_pixels: int = Field(
        40_000_000, description="PIL decompression-bomb guard (pixels)"
    )

    # ------------------------------------------------------------------ #
    # Rate Limiting                                                       #
    # ------------------------------------------------------------------ #
    rate_limit_request_window_sec: int = Field(
        60, description="Sliding window for per-user request rate (seconds)"
    )
    rate_limit_max_requests: int = Field(
        10, description="Max verifications allowed within the rate-limit window"
    )
    rate_limit_memory_limit: int = Field(
        1000, description="Max keys before in-memory rate-limit map is pruned"
    )

    # ------------------------------------------------------------------ #
    # Listings & storage                                                  #
    # ------------------------------------------------------------------ #
    listings_collection: str = Field(
        "waste_listings", description="Firestore collection holding listings"
    )
    material_impact_collection: str = Field(
        "material_impact", description="Firestore collection holding impact factors"
    )
    listing_image_prefix: str = Field(
        "listings", description="Storage path prefix for uploaded listing images"
    )

    # ------------------------------------------------------------------ #
    # Derived byte-level properties (computed from MB fields)             #
    # ------------------------------------------------------------------ #
    @property
    def max_image_download_bytes(self) -> int:
        return self.max_image_download_mb * 1024 * 1024

    @property
    def max_image_upload_bytes(self) -> int:
        return self.max_image_upload_mb * 1024 * 1024

    @property
    def rekognition_max_image_bytes(self) -> int:
        return int(self.rekognition_max_image_mb * 1024 * 1024)


# Single shared instance — import this everywhere.
settings = Settings()
