import json
from pathlib import Path
from typing import Dict, List

from notelens.domain.note import Note
from notelens.note_repository.base import NoteRepository


class LocalNoteRepository(NoteRepository):
    """Local note repository that stores notes in a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalNoteRepository.

        Args:
            filepath: Path to repository file. If provided and exists, will auto-load.
                     If provided and doesn't exist, will save to this path when save() is called.
                     If not provided, creates empty repository in memory only.
        """
        self._filepath = str(filepath) if filepath else None

        if self._filepath and Path(self._filepath).exists():
            with open(self._filepath, "r") as f:
                data = json.load(f)
            self._notes = {
                note_id: Note(**note_data) for note_id, note_data in data["notes"].items()
            }
        else:
            self._notes = {}

    @classmethod
    def from_data(cls, notes: Dict[str, Note] | None = None) -> "LocalNoteRepository":
        """Create LocalNoteRepository from provided notes (useful for testing)."""
        instance = cls(filepath=None)
        instance._notes = notes or {}
        return instance

    def fetch_all_notes(self) -> List[Note]:
        """Get every note in insertion order."""
        return list(self._notes.values())

    def get_note(self, note_id: str) -> Note | None:
        """Get a note by its ID."""
        return self._notes.get(note_id)

    def update_note(self, note: Note) -> None:
        """Add a new note or update an existing one."""
        self._notes[note.id] = note

    def delete_note(self, note_id: str) -> None:
        """Delete a note."""
        self._notes.pop(note_id, None)

    def get_all_note_ids(self) -> set[str]:
        """Get all note IDs in the repository."""
        return set(self._notes.keys())

    def save(self, filepath: str | None = None) -> None:
        """Save the repository to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        data = {"notes": {note_id: note.model_dump() for note_id, note in self._notes.items()}}
        with open(str(save_path), "w") as f:
            json.dump(data, f)

    def clear(self) -> None:
        """Clear all notes from the repository."""
        self._notes.clear()
