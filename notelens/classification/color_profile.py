"""Color profile analysis used by the document classifier."""

from collections import Counter

import numpy as np
from PIL import Image
from pydantic import BaseModel

from notelens.domain.image import Color

PALETTE_SAMPLE_SIZE = 50
PALETTE_MAX_COLORS = 5
MONOCHROME_MAX_VARIANCE = 0.15
HIGH_CONTRAST_MIN_LUMINANCE_GAP = 0.5
CORNER_SAMPLE_SIZE = 10


class ColorProfile(BaseModel):
    dominant_colors: list[Color] = []
    is_monochrome: bool = False
    has_high_contrast: bool = False
    background_color: Color | None = None


def extract_palette(image: Image.Image, max_colors: int = PALETTE_MAX_COLORS) -> list[Color]:
    """Most frequent colors of a downsampled image, each channel rounded to 0.1."""
    width = min(image.width, PALETTE_SAMPLE_SIZE)
    height = min(image.height, PALETTE_SAMPLE_SIZE)
    if width <= 0 or height <= 0:
        return []

    pixels = np.asarray(image.convert("RGB").resize((width, height)), dtype=np.float64)
    quantized = np.round(pixels.reshape(-1, 3) / 255.0 * 10) / 10

    counts = Counter((float(r), float(g), float(b)) for r, g, b in quantized)
    return [Color(r=r, g=g, b=b) for (r, g, b), _ in counts.most_common(max_colors)]


def is_monochrome(colors: list[Color]) -> bool:
    if not colors:
        return False
    return all(
        abs(c.r - c.g) + abs(c.g - c.b) + abs(c.r - c.b) <= MONOCHROME_MAX_VARIANCE
        for c in colors
    )


def has_high_contrast(colors: list[Color]) -> bool:
    """Compare the luminance of the two most dominant colors."""
    if len(colors) < 2:
        return False
    return abs(colors[0].luminance - colors[1].luminance) > HIGH_CONTRAST_MIN_LUMINANCE_GAP


def detect_background_color(image: Image.Image) -> Color | None:
    """Average color of the four corner patches, or None for tiny images."""
    if image.width <= CORNER_SAMPLE_SIZE * 2 or image.height <= CORNER_SAMPLE_SIZE * 2:
        return None

    pixels = np.asarray(image.convert("RGB"), dtype=np.float64)
    size = CORNER_SAMPLE_SIZE
    corners = np.concatenate(
        [
            pixels[:size, :size].reshape(-1, 3),
            pixels[:size, -size:].reshape(-1, 3),
            pixels[-size:, :size].reshape(-1, 3),
            pixels[-size:, -size:].reshape(-1, 3),
        ]
    )
    r, g, b = corners.mean(axis=0) / 255.0
    return Color(r=float(r), g=float(g), b=float(b))


class ColorAnalyzer:
    def analyze(self, image: Image.Image) -> ColorProfile:
        colors = extract_palette(image)
        return ColorProfile(
            dominant_colors=colors,
            is_monochrome=is_monochrome(colors),
            has_high_contrast=has_high_contrast(colors),
            background_color=detect_background_color(image),
        )
