from notelens.vision.base import VisionProvider

__all__ = ["VisionProvider"]
