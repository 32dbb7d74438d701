from notelens.note_repository.base import NoteRepository
from notelens.note_repository.local import LocalNoteRepository

__all__ = ["NoteRepository", "LocalNoteRepository"]
