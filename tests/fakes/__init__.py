from tests.fakes.fake_image_store import FakeImageStore
from tests.fakes.fake_note_repository import FakeNoteRepository
from tests.fakes.fake_vision import FakeAnalysis, FakeVisionProvider

__all__ = ["FakeAnalysis", "FakeImageStore", "FakeNoteRepository", "FakeVisionProvider"]
