"""Vision provider backed by EasyOCR.

EasyOCR ships a text detector and a text recognizer but no object or scene models, so this
provider only populates the text signals. The reader is created once and shared by all
threads; EasyOCR loads its weights lazily on the first call.
"""

import threading
from typing import List, Optional, Tuple

import easyocr
import numpy as np
from loguru import logger
from PIL import Image

from notelens.domain.classification import BoundingBox


class EasyOCRVisionProvider:
    def __init__(self, languages: list[str] | None = None, gpu: bool = False) -> None:
        self.languages = languages or ["en"]
        self.gpu = gpu
        self._reader: Optional[easyocr.Reader] = None
        self._reader_lock = threading.Lock()

    def _get_reader(self) -> easyocr.Reader:
        if self._reader is not None:
            return self._reader
        with self._reader_lock:
            if self._reader is None:
                logger.info(f"Initializing EasyOCR reader for {self.languages}")
                self._reader = easyocr.Reader(self.languages, gpu=self.gpu, verbose=False)
        return self._reader

    def detect_objects(self, image: Image.Image) -> List[Tuple[str, float]]:
        return []

    def recognize_text(self, image: Image.Image) -> List[str]:
        results = self._get_reader().readtext(np.array(image.convert("RGB")))
        return [text for _, text, _ in results]

    def classify_scene(self, image: Image.Image) -> Optional[str]:
        return None

    def detect_text_regions(self, image: Image.Image) -> List[BoundingBox]:
        width, height = image.size
        if not width or not height:
            return []

        horizontal_list, free_list = self._get_reader().detect(np.array(image.convert("RGB")))

        boxes = []
        # Axis-aligned boxes come back as [x_min, x_max, y_min, y_max]
        for x_min, x_max, y_min, y_max in horizontal_list[0]:
            boxes.append(_normalized_box(x_min, x_max, y_min, y_max, width, height))
        # Rotated boxes come back as four corner points
        for corners in free_list[0]:
            xs = [point[0] for point in corners]
            ys = [point[1] for point in corners]
            boxes.append(_normalized_box(min(xs), max(xs), min(ys), max(ys), width, height))
        return boxes


def _normalized_box(
    x_min: float, x_max: float, y_min: float, y_max: float, width: int, height: int
) -> BoundingBox:
    return BoundingBox(
        x=max(float(x_min), 0.0) / width,
        y=max(float(y_min), 0.0) / height,
        width=(float(x_max) - float(x_min)) / width,
        height=(float(y_max) - float(y_min)) / height,
    )
