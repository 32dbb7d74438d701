"""Heuristic document type detection.

Runs before text extraction to pick an OCR strategy. It only uses cheap signals: the image
shape, text-region detection (no recognition) and a coarse color profile.
"""

from loguru import logger
from PIL import Image
from pydantic import BaseModel

from notelens.classification.color_profile import ColorAnalyzer, ColorProfile
from notelens.classification.text_metrics import TextMetrics
from notelens.domain.classification import DocumentCategory, DocumentClassification
from notelens.vision.base import VisionProvider

BUSINESS_CARD_ASPECT_RATIO = (1.5, 1.8)
RECEIPT_ASPECT_RATIO = (2.5, 4.0)
RECEIPT_MAX_PORTRAIT_RATIO = 0.5
SCREENSHOT_ASPECT_RATIO = (0.7, 2.0)  # screenshots fall outside this range

BUSINESS_CARD_REGION_COUNT = (3, 15)
BUSINESS_CARD_DENSITY = (0.05, 0.3)  # exclusive bounds
INVOICE_MIN_REGION_COUNT = 20
INVOICE_MIN_DENSITY = 0.3
HANDWRITTEN_MIN_TEXT_SIZE = 0.05
SPARSE_TEXT_DENSITY = 0.2
WHITEBOARD_MAX_REGION_COUNT = 10

BASE_CONFIDENCE = 0.5
PHOTO_CONFIDENCE = 0.9


class ImageProperties(BaseModel):
    width: int
    height: int
    aspect_ratio: float

    @classmethod
    def of(cls, image: Image.Image) -> "ImageProperties":
        width, height = image.size
        return cls(
            width=width,
            height=height,
            aspect_ratio=width / height if height else 0.0,
        )


def _within(value: float, bounds: tuple[float, float]) -> bool:
    return bounds[0] <= value <= bounds[1]


def determine_category(
    aspect_ratio: float, text_metrics: TextMetrics, color_profile: ColorProfile
) -> DocumentCategory:
    """Apply the category rules in priority order; the first rule that matches wins."""
    has_text = text_metrics.has_text

    if not has_text and not color_profile.is_monochrome:
        return DocumentCategory.PHOTO

    if not _within(aspect_ratio, SCREENSHOT_ASPECT_RATIO):
        if has_text and color_profile.has_high_contrast:
            return DocumentCategory.SCREENSHOT

    if (
        _within(aspect_ratio, BUSINESS_CARD_ASPECT_RATIO)
        and _within(text_metrics.region_count, BUSINESS_CARD_REGION_COUNT)
        and BUSINESS_CARD_DENSITY[0] < text_metrics.density < BUSINESS_CARD_DENSITY[1]
    ):
        return DocumentCategory.BUSINESS_CARD

    if _within(aspect_ratio, RECEIPT_ASPECT_RATIO) or aspect_ratio < RECEIPT_MAX_PORTRAIT_RATIO:
        if has_text and color_profile.is_monochrome:
            return DocumentCategory.RECEIPT

    if (
        text_metrics.region_count > INVOICE_MIN_REGION_COUNT
        and text_metrics.density > INVOICE_MIN_DENSITY
    ):
        return DocumentCategory.INVOICE

    if has_text and text_metrics.average_text_size > HANDWRITTEN_MIN_TEXT_SIZE:
        if not color_profile.is_monochrome or text_metrics.density < SPARSE_TEXT_DENSITY:
            return DocumentCategory.HANDWRITTEN

    background = color_profile.background_color
    if background is not None and background.is_light and has_text:
        if (
            text_metrics.density < SPARSE_TEXT_DENSITY
            and text_metrics.region_count < WHITEBOARD_MAX_REGION_COUNT
        ):
            return DocumentCategory.WHITEBOARD

    if has_text:
        return DocumentCategory.PRINTED_DOCUMENT

    return DocumentCategory.UNKNOWN


def calculate_confidence(
    category: DocumentCategory, aspect_ratio: float, text_metrics: TextMetrics
) -> float:
    confidence = BASE_CONFIDENCE

    if category == DocumentCategory.BUSINESS_CARD:
        if _within(aspect_ratio, BUSINESS_CARD_ASPECT_RATIO):
            confidence += 0.3
        if 5 <= text_metrics.region_count <= 12:
            confidence += 0.2
    elif category == DocumentCategory.RECEIPT:
        if aspect_ratio > RECEIPT_ASPECT_RATIO[0]:
            confidence += 0.3
        if text_metrics.density > 0.2:
            confidence += 0.2
    elif category == DocumentCategory.PHOTO:
        if not text_metrics.has_text:
            confidence = PHOTO_CONFIDENCE
    elif text_metrics.has_text:
        confidence += 0.2

    return min(confidence, 1.0)


class DocumentClassifier:
    """Classifies an image into a document category and recommends an OCR strategy."""

    def __init__(self, vision_provider: VisionProvider) -> None:
        self.vision_provider = vision_provider
        self.color_analyzer = ColorAnalyzer()

    def detect_text_metrics(self, image: Image.Image) -> TextMetrics:
        try:
            regions = self.vision_provider.detect_text_regions(image)
        except Exception as e:
            logger.warning(f"Text region detection failed, assuming no text: {e}")
            return TextMetrics()
        return TextMetrics.from_regions(regions)

    def classify(self, image: Image.Image) -> DocumentClassification:
        properties = ImageProperties.of(image)
        text_metrics = self.detect_text_metrics(image)
        color_profile = self.color_analyzer.analyze(image)

        category = determine_category(properties.aspect_ratio, text_metrics, color_profile)
        logger.debug(
            f"Classified {properties.width}x{properties.height} image as {category.value} "
            f"({text_metrics.region_count} text regions, density {text_metrics.density:.2f})"
        )

        return DocumentClassification(
            category=category,
            confidence=calculate_confidence(category, properties.aspect_ratio, text_metrics),
            aspect_ratio=properties.aspect_ratio,
            dominant_colors=color_profile.dominant_colors,
            has_text=text_metrics.has_text,
            text_density=text_metrics.density,
            suggested_strategy=category.ocr_strategy,
            metadata={
                "width": properties.width,
                "height": properties.height,
                "text_regions": text_metrics.region_count,
                "is_monochrome": color_profile.is_monochrome,
            },
        )
