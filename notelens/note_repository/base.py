from typing import List, Protocol

from notelens.domain.note import Note


class NoteRepository(Protocol):
    def fetch_all_notes(self) -> List[Note]:
        """Get every note, used as the default candidate set for image search."""
        ...

    def get_note(self, note_id: str) -> Note | None:
        """Get a note by its ID."""
        ...

    def update_note(self, note: Note) -> None:
        """Add a new note or update an existing one."""
        ...

    def delete_note(self, note_id: str) -> None:
        """Delete a note."""
        ...

    def get_all_note_ids(self) -> set[str]:
        """Get all note IDs in the repository."""
        ...

    def save(self, filepath: str | None = None) -> None:
        """Save the repository to disk."""
        ...
