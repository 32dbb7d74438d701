"""Search domain models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from notelens.domain.image import Color
from notelens.domain.note import Attachment, Note


class MatchType(str, Enum):
    """The signal that produced a search hit."""

    OBJECT_DETECTION = "object_detection"
    OCR_TEXT = "ocr_text"
    FILENAME = "filename"
    NOTE_CONTENT = "note_content"
    SEMANTIC_CONTENT = "semantic_content"
    VISUAL_FEATURES = "visual_features"


class ImageSearchContext(BaseModel):
    """Derived analysis of one image attachment, cached per attachment ID.

    Attributes:
        detected_objects: Object labels detected with confidence above the cutoff
        ocr_text: Recognized text lines joined with single spaces
        image_description: Top scene classification label
        dominant_colors: Most frequent quantized colors, most frequent first
        confidence: 0.8 for an analysed image, 0.0 when analysis failed
    """

    model_config = ConfigDict(frozen=True)

    detected_objects: tuple[str, ...] = ()
    ocr_text: str | None = None
    image_description: str | None = None
    dominant_colors: tuple[Color, ...] = ()
    confidence: float = 0.0

    @classmethod
    def empty(cls) -> "ImageSearchContext":
        return cls()


class SearchHit(BaseModel):
    """One scored match between a query and an image attachment."""

    note: Note
    attachment: Attachment
    relevance_score: float
    match_type: MatchType
    matched_content: str
    search_context: ImageSearchContext
