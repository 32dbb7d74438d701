from notelens.classification.classifier import (
    DocumentClassifier,
    calculate_confidence,
    determine_category,
)
from notelens.classification.color_profile import ColorAnalyzer, ColorProfile
from notelens.classification.text_metrics import TextMetrics

__all__ = [
    "ColorAnalyzer",
    "ColorProfile",
    "DocumentClassifier",
    "TextMetrics",
    "calculate_confidence",
    "determine_category",
]
