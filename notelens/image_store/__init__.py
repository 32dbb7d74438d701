from notelens.image_store.base import ImageStore
from notelens.image_store.local import LocalImageStore

__all__ = ["ImageStore", "LocalImageStore"]
