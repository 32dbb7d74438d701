"""Image domain models."""

import base64
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer


class ImageBlob(BaseModel):
    """Represents the stored bytes of an image attachment.

    Attributes:
        id: The key of the image, referenced by ``Attachment.image_ref``.
        content: The image content, encoded as base64 when serialized.
        mime_type: The MIME type of the image.
    """

    id: str
    content: Annotated[
        bytes,
        BeforeValidator(lambda x: base64.b64decode(x) if isinstance(x, str) else x),
        PlainSerializer(lambda x: base64.b64encode(x).decode(), return_type=str),
    ]
    mime_type: str = "image/png"


class Color(BaseModel):
    """An RGB color with channels in the range [0, 1]."""

    model_config = ConfigDict(frozen=True)

    r: float
    g: float
    b: float

    @classmethod
    def from_rgb255(cls, r: int, g: int, b: int) -> "Color":
        return cls(r=r / 255.0, g=g / 255.0, b=b / 255.0)

    @property
    def luminance(self) -> float:
        return 0.299 * self.r + 0.587 * self.g + 0.114 * self.b

    @property
    def is_light(self) -> bool:
        return self.luminance > 0.7

    def distance(self, other: "Color") -> float:
        """Euclidean distance between two colors in RGB space."""
        return (
            (self.r - other.r) ** 2 + (self.g - other.g) ** 2 + (self.b - other.b) ** 2
        ) ** 0.5

    @property
    def hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(
            round(self.r * 255), round(self.g * 255), round(self.b * 255)
        )
