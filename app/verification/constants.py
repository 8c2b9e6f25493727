"""
Reference data for the verification engine.

Kept apart from the decision code so the lists can change without touching
the algorithm. Everything here is immutable and loaded once at import.
"""

from types import MappingProxyType

# Category → keyword substrings, scanned in this order. First hit wins.
CATEGORY_KEYWORDS = MappingProxyType({
    "METAL": (
        "metal", "spoke", "steel", "iron", "aluminum", "aluminium", "can",
        "foil", "scrap", "tin", "screw", "nail", "bolt", "copper", "zinc",
        "bronze",
    ),
    "PLASTIC": (
        "plastic", "bottle", "container", "polyethylene", "wrapper", "bag",
        "cap", "lid", "pet", "packaging", "nylon", "bucket", "jug",
        "dispenser", "straw",
    ),
    "GLASS": (
        "glass", "jar", "cup", "wine", "beer", "mug", "vase", "mirror",
        "window", "goblet", "flask",
    ),
})

# Returned when no keyword matches.
FALLBACK_CATEGORY = "PLASTIC"

# Detected category of the no-signal result.
UNKNOWN_CATEGORY = "UNKNOWN"

# Only these stock/photo-sharing hosts count as "found elsewhere".
DEFAULT_STOCK_IMAGE_HOSTS = (
    "pinterest", "shutterstock", "istock", "gettyimages",
    "unsplash", "pexels", "pixabay", "alamy", "wikimedia",
)

# Public hosts of our own storage bucket (Firebase Storage / GCS).
DEFAULT_OWN_STORAGE_HOSTS = (
    "storage.googleapis.com",
    "firebasestorage.googleapis.com",
)
