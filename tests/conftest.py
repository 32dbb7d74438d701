from typing import Generator

import pytest

from notelens.domain.classification import BoundingBox
from notelens.domain.image import ImageBlob
from notelens.domain.note import Attachment, Note
from notelens.search.engine import ImageSearchEngine
from tests.fakes import FakeAnalysis, FakeImageStore, FakeNoteRepository, FakeVisionProvider
from tests.fakes.images import png_bytes


@pytest.fixture
def test_notes() -> list[Note]:
    return [
        Note(
            id="note1",
            title="Invoice",
            body="Scanned paperwork from the accountant.",
            tags=["finance"],
            attachments=[
                Attachment(id="att-scan", file_name="scan.png", image_ref="img-scan"),
                Attachment(id="att-audio", file_name="invoice.m4a", kind="audio"),
            ],
        ),
        Note(
            id="note2",
            title="Weekend hike",
            body="Photos from the trail.",
            tags=["outdoors", "dogs"],
            ai_summary="A hike with the dog near the lake.",
            key_points=["Bring water"],
            attachments=[
                Attachment(id="att-dog", file_name="dog_at_lake.jpg", image_ref="img-dog"),
                Attachment(id="att-trail", file_name="trail.png", image_ref="img-trail"),
            ],
        ),
        Note(
            id="note3",
            title="Broken link",
            body="The image for this note is missing.",
            attachments=[
                Attachment(id="att-missing", file_name="missing.png", image_ref="img-missing"),
            ],
        ),
    ]


@pytest.fixture
def test_images() -> dict[str, ImageBlob]:
    return {
        "img-scan": ImageBlob(
            id="img-scan", content=png_bytes((80, 100), (240, 240, 240), ref="scan")
        ),
        "img-dog": ImageBlob(id="img-dog", content=png_bytes((64, 48), (30, 120, 200), ref="dog")),
        "img-trail": ImageBlob(
            id="img-trail", content=png_bytes((64, 64), (20, 160, 40), ref="trail")
        ),
    }


@pytest.fixture
def fake_analyses() -> dict[str, FakeAnalysis]:
    return {
        "scan": FakeAnalysis(
            objects=[("document", 0.9), ("paper", 0.2)],
            text_lines=["Invoice #102", "Total"],
            scene="document",
            regions=[BoundingBox(x=0.1, y=0.1, width=0.5, height=0.1)],
        ),
        "dog": FakeAnalysis(
            objects=[("dog", 0.95), ("lake", 0.6), ("tree", 0.25)],
            text_lines=[],
            scene="outdoor lake",
        ),
        "trail": FakeAnalysis(
            objects=[("mountain", 0.8)],
            text_lines=["Trail head 2 miles"],
            scene="forest trail",
        ),
    }


@pytest.fixture
def fake_vision(fake_analyses: dict[str, FakeAnalysis]) -> FakeVisionProvider:
    return FakeVisionProvider(fake_analyses)


@pytest.fixture
def fake_image_store(test_images: dict[str, ImageBlob]) -> FakeImageStore:
    return FakeImageStore(test_images)


@pytest.fixture
def fake_note_repository(test_notes: list[Note]) -> FakeNoteRepository:
    return FakeNoteRepository(test_notes)


@pytest.fixture
def engine(
    fake_vision: FakeVisionProvider,
    fake_image_store: FakeImageStore,
    fake_note_repository: FakeNoteRepository,
) -> Generator[ImageSearchEngine, None, None]:
    """Search engine wired to fake collaborators, shut down after the test."""
    with ImageSearchEngine(
        vision_provider=fake_vision,
        image_store=fake_image_store,
        note_repository=fake_note_repository,
    ) as search_engine:
        yield search_engine
