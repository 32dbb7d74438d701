"""Builds and caches the analysis context of image attachments."""

import io
from collections import Counter
from concurrent.futures import Executor

import numpy as np
from loguru import logger
from PIL import Image

from notelens.domain.image import Color
from notelens.domain.note import Attachment, Note
from notelens.domain.search import ImageSearchContext
from notelens.image_store.base import ImageStore
from notelens.search.cache import AnalysisCache
from notelens.vision.base import VisionProvider

OBJECT_CONFIDENCE_THRESHOLD = 0.3
ANALYSIS_CONFIDENCE = 0.8

COLOR_SAMPLE_SIZE = 50
COLOR_SAMPLE_STRIDE = 4
COLOR_QUANTIZATION_STEP = 64
MAX_CONTEXT_COLORS = 3


def extract_dominant_colors(
    image: Image.Image, max_colors: int = MAX_CONTEXT_COLORS
) -> list[Color]:
    """Return the most frequent quantized colors of an image.

    The image is squashed to a square of at most 50x50 pixels, every 4th pixel is sampled and
    each channel is quantized to steps of 64 before counting.
    """
    width, height = image.size
    sample_size = min(COLOR_SAMPLE_SIZE, width, height)
    if sample_size <= 0:
        return []

    thumbnail = image.convert("RGB").resize((sample_size, sample_size))
    pixels = np.asarray(thumbnail, dtype=np.uint8).reshape(-1, 3)[::COLOR_SAMPLE_STRIDE]
    quantized = (pixels // COLOR_QUANTIZATION_STEP) * COLOR_QUANTIZATION_STEP

    counts = Counter((int(r), int(g), int(b)) for r, g, b in quantized)
    return [Color.from_rgb255(*rgb) for rgb, _ in counts.most_common(max_colors)]


class ImageContextBuilder:
    """Runs the vision provider over one attachment and assembles its search context."""

    def __init__(self, *, vision_provider: VisionProvider, image_store: ImageStore) -> None:
        self.vision_provider = vision_provider
        self.image_store = image_store

    def load_image(self, attachment: Attachment) -> Image.Image:
        blob = self.image_store.get_image(attachment.image_ref)
        image = Image.open(io.BytesIO(blob.content))
        image.load()
        return image

    def build(self, attachment: Attachment, note: Note) -> ImageSearchContext:  # noqa: ARG002
        """Analyse an attachment. Never raises; failures degrade the returned context."""
        try:
            image = self.load_image(attachment)
        except Exception as e:
            logger.warning(f"Could not load image for attachment {attachment.id}: {e}")
            return ImageSearchContext.empty()

        detected_objects: list[str] = []
        try:
            detected_objects = [
                label
                for label, confidence in self.vision_provider.detect_objects(image)
                if confidence > OBJECT_CONFIDENCE_THRESHOLD
            ]
        except Exception as e:
            logger.warning(f"Object detection failed for attachment {attachment.id}: {e}")

        ocr_text = None
        try:
            ocr_text = " ".join(self.vision_provider.recognize_text(image))
        except Exception as e:
            logger.warning(f"Text recognition failed for attachment {attachment.id}: {e}")

        image_description = None
        try:
            image_description = self.vision_provider.classify_scene(image)
        except Exception as e:
            logger.warning(f"Scene classification failed for attachment {attachment.id}: {e}")

        dominant_colors: list[Color] = []
        try:
            dominant_colors = extract_dominant_colors(image)
        except Exception as e:
            logger.warning(f"Color extraction failed for attachment {attachment.id}: {e}")

        return ImageSearchContext(
            detected_objects=tuple(detected_objects),
            ocr_text=ocr_text,
            image_description=image_description,
            dominant_colors=tuple(dominant_colors),
            confidence=ANALYSIS_CONFIDENCE,
        )


class ContextResolver:
    """Looks up contexts through the cache, computing misses on a bounded worker pool."""

    def __init__(
        self, *, cache: AnalysisCache, builder: ImageContextBuilder, executor: Executor
    ) -> None:
        self.cache = cache
        self.builder = builder
        self.executor = executor

    def resolve(self, attachment: Attachment, note: Note) -> ImageSearchContext:
        return self.cache.get_or_compute(
            attachment.id, lambda: self.builder.build(attachment, note)
        )

    def resolve_many(self, items: list[tuple[Note, Attachment]]) -> list[ImageSearchContext]:
        """Resolve contexts for many attachments, in the order given."""
        results: list[ImageSearchContext | None] = []
        pending = {}
        for index, (note, attachment) in enumerate(items):
            cached = self.cache.get(attachment.id)
            results.append(cached)
            if cached is None:
                pending[index] = self.executor.submit(self.resolve, attachment, note)

        if pending:
            logger.debug(f"Analysing {len(pending)} uncached image(s)")
        for index, future in pending.items():
            results[index] = future.result()
        return results  # type: ignore[return-value]
