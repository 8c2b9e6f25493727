"""Label → waste category mapping by keyword substring."""

import logging

from app.schemas.verification import WasteType
from app.verification.constants import CATEGORY_KEYWORDS, FALLBACK_CATEGORY

logger = logging.getLogger(__name__)


def map_label(label_name: str) -> WasteType:
    """
    Maps a detector label to a category. Total: never raises.

    Categories are tried in table order (METAL, PLASTIC, GLASS); the first one
    with a keyword contained in the lower-cased label wins. Unmatched labels
    fall back to PLASTIC.
    """
    lower = (label_name or "").lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lower for keyword in keywords):
            return WasteType(category)

    logger.debug(f"[CATEGORY] No keyword matched '{label_name}', falling back to {FALLBACK_CATEGORY}")
    return WasteType(FALLBACK_CATEGORY)


def is_category_match(detected: WasteType, declared: str) -> bool:
    return detected.value.lower() == str(getattr(declared, "value", declared)).lower()
