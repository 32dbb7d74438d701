"""Note domain models."""

from typing import Literal

from pydantic import BaseModel

AttachmentKind = Literal["image", "audio", "pdf", "document", "video", "other"]


class Attachment(BaseModel):
    """Represents a file attached to a note.

    Attributes:
        id: Identifier of the attachment, unique within its note
        file_name: Original file name, including extension
        kind: Attachment type; only ``image`` attachments are analysed
        image_ref: Key of the attachment bytes in the image store
    """

    id: str
    file_name: str
    kind: AttachmentKind = "image"
    image_ref: str = ""


class Note(BaseModel):
    """Represents a note and its attachments.

    Attributes:
        id: Unique identifier
        title: Note title
        body: Full note text
        tags: Unique tags, order is not significant
        ai_summary: Optional generated summary of the note
        key_points: Generated key points
        attachments: Files attached to the note
    """

    id: str
    title: str
    body: str = ""
    tags: list[str] = []
    ai_summary: str | None = None
    key_points: list[str] = []
    attachments: list[Attachment] = []

    def image_attachments(self) -> list[Attachment]:
        return [attachment for attachment in self.attachments if attachment.kind == "image"]
