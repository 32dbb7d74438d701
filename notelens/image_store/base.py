from typing import List, Protocol

from notelens.domain.image import ImageBlob


class ImageStore(Protocol):
    """Protocol for image byte storage implementations."""

    def get_image(self, image_id: str) -> ImageBlob:
        """Get an image by its ID."""
        ...

    def get_image_ids(self) -> List[str]:
        """Get all image IDs stored in the image store."""
        ...

    def add_image(self, image: ImageBlob) -> None:
        """Add an image to the store."""
        ...

    def remove_image(self, image_id: str) -> None:
        """Remove an image from the store, if present."""
        ...

    def save(self, filepath: str | None = None) -> None:
        """Save the image store to disk."""
        ...
