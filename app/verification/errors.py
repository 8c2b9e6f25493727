class ImageUnavailableError(Exception):
    """The image could not be fetched or decoded; no verdict is possible."""

    def __init__(self, image_url: str, reason: str):
        self.image_url = image_url
        self.reason = reason
        super().__init__(f"Image unavailable ({reason}): {image_url}")
