from typing import List, Protocol

from quicknote.domain.note import Category, Note, ReviewState


class NoteStore(Protocol):
    """Protocol for note storage implementations."""

    def next_id(self) -> int:
        """Get the ID the next insert will assign, without reserving it."""
        ...

    def insert(self, title: str, content: str, category: Category, tags: List[str]) -> int:
        """Store a new note and return its assigned ID."""
        ...

    def get(self, note_id: int) -> Note:
        """Get a note by its ID, raising NotFound if it does not exist."""
        ...

    def due_for_review(self, as_of: float) -> List[Note]:
        """Get notes due for review at the given time, earliest due first."""
        ...

    def update_review_state(self, note_id: int, state: ReviewState) -> Note:
        """Replace the review state of a note and return the updated note."""
        ...

    def delete(self, note_id: int) -> None:
        """Delete a note, raising NotFound if it does not exist."""
        ...

    def all_notes(self) -> List[Note]:
        """Get every stored note ordered by ID."""
        ...

    def count(self) -> int:
        """Get the number of stored notes."""
        ...
