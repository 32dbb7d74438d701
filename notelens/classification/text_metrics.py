from typing import List

from pydantic import BaseModel

from notelens.domain.classification import BoundingBox


class TextMetrics(BaseModel):
    """Summary of detected text regions.

    Attributes:
        has_text: Whether any region was detected
        density: Summed area fraction of all regions; overlapping regions can push it above 1.0
        region_count: Number of detected regions
        average_text_size: Mean normalized region height
    """

    has_text: bool = False
    density: float = 0.0
    region_count: int = 0
    average_text_size: float = 0.0

    @classmethod
    def from_regions(cls, regions: List[BoundingBox]) -> "TextMetrics":
        if not regions:
            return cls()
        return cls(
            has_text=True,
            density=sum(region.width * region.height for region in regions),
            region_count=len(regions),
            average_text_size=sum(region.height for region in regions) / len(regions),
        )
