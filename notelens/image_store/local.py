import json
from pathlib import Path
from typing import List

from notelens.domain.image import ImageBlob
from notelens.image_store.base import ImageStore


class LocalImageStore(ImageStore):
    """Local image store that saves images to a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalImageStore.

        Args:
            filepath: Path to image store file. If provided and exists, will auto-load.
                     If provided and doesn't exist, will save to this path when save() is called.
                     If not provided, creates empty store in memory only.
        """
        self._filepath = str(filepath) if filepath else None

        if self._filepath and Path(self._filepath).exists():
            with open(self._filepath, "r") as f:
                data = json.load(f)
                self._images = {
                    image_id: ImageBlob(**image_data)
                    for image_id, image_data in data["images"].items()
                }
        else:
            self._images = {}

    def get_image(self, image_id: str) -> ImageBlob:
        """Get an image by its ID."""
        if image_id not in self._images:
            raise KeyError(f"Image {image_id} not found")
        return self._images[image_id]

    def get_image_ids(self) -> List[str]:
        """Get all image IDs stored in the image store."""
        return list(self._images.keys())

    def add_image(self, image: ImageBlob) -> None:
        """Add an image to the store."""
        self._images[image.id] = image

    def remove_image(self, image_id: str) -> None:
        """Remove an image from the store, if present."""
        self._images.pop(image_id, None)

    def save(self, filepath: str | None = None) -> None:
        """Save the image store to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        data = {
            "images": {image_id: image.model_dump() for image_id, image in self._images.items()}
        }
        with open(str(save_path), "w") as f:
            json.dump(data, f)
