"""Document classification domain models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel

from notelens.domain.image import Color


class OCRStrategy(str, Enum):
    """Text extraction path recommended for a document category."""

    MINIMAL = "minimal"
    STANDARD = "standard"
    STRUCTURED = "structured"
    BUSINESS_CARD = "business_card"
    RECEIPT = "receipt"
    HANDWRITTEN = "handwritten"


class DocumentCategory(str, Enum):
    BUSINESS_CARD = "business_card"
    RECEIPT = "receipt"
    INVOICE = "invoice"
    HANDWRITTEN = "handwritten"
    PRINTED_DOCUMENT = "printed_document"
    PHOTO = "photo"
    SCREENSHOT = "screenshot"
    WHITEBOARD = "whiteboard"
    UNKNOWN = "unknown"

    @property
    def requires_detailed_ocr(self) -> bool:
        return self in _DETAILED_OCR_CATEGORIES

    @property
    def ocr_strategy(self) -> OCRStrategy:
        return _OCR_STRATEGIES[self]


_DETAILED_OCR_CATEGORIES = {
    DocumentCategory.BUSINESS_CARD,
    DocumentCategory.INVOICE,
    DocumentCategory.HANDWRITTEN,
    DocumentCategory.WHITEBOARD,
}

_OCR_STRATEGIES = {
    DocumentCategory.BUSINESS_CARD: OCRStrategy.BUSINESS_CARD,
    DocumentCategory.RECEIPT: OCRStrategy.RECEIPT,
    DocumentCategory.INVOICE: OCRStrategy.STRUCTURED,
    DocumentCategory.HANDWRITTEN: OCRStrategy.HANDWRITTEN,
    DocumentCategory.PRINTED_DOCUMENT: OCRStrategy.STANDARD,
    DocumentCategory.WHITEBOARD: OCRStrategy.STANDARD,
    DocumentCategory.PHOTO: OCRStrategy.MINIMAL,
    DocumentCategory.SCREENSHOT: OCRStrategy.MINIMAL,
    DocumentCategory.UNKNOWN: OCRStrategy.MINIMAL,
}


class BoundingBox(BaseModel):
    """A detected text region, in coordinates normalized to the image size."""

    x: float
    y: float
    width: float
    height: float


class DocumentClassification(BaseModel):
    """Result of classifying an image before text extraction.

    Attributes:
        category: The detected document category
        confidence: Confidence in the category, in [0, 1]
        aspect_ratio: Image width divided by height
        dominant_colors: Up to five dominant colors, most frequent first
        has_text: Whether any text region was detected
        text_density: Summed area fraction of text regions, not clamped
        suggested_strategy: OCR strategy for the category
        metadata: width, height, text_regions and is_monochrome
    """

    category: DocumentCategory
    confidence: float
    aspect_ratio: float
    dominant_colors: list[Color] = []
    has_text: bool
    text_density: float
    suggested_strategy: OCRStrategy
    metadata: dict[str, Any] = {}
