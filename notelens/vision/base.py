from typing import List, Optional, Protocol, Tuple

from PIL import Image

from notelens.domain.classification import BoundingBox


class VisionProvider(Protocol):
    """Protocol for the vision models used to analyse image attachments."""

    def detect_objects(self, image: Image.Image) -> List[Tuple[str, float]]:
        """Return detected object labels with their confidence."""
        ...

    def recognize_text(self, image: Image.Image) -> List[str]:
        """Return one string per recognized line of text."""
        ...

    def classify_scene(self, image: Image.Image) -> Optional[str]:
        """Return the top scene classification label, if any."""
        ...

    def detect_text_regions(self, image: Image.Image) -> List[BoundingBox]:
        """Return text bounding boxes without recognizing the text."""
        ...
