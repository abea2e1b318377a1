"""Error types raised by the knowledge store."""


class QuickNoteError(Exception):
    """Base class for all knowledge store errors."""


class NotFound(QuickNoteError, LookupError):
    """Raised when a note id does not exist in the store."""

    def __init__(self, note_id: int) -> None:
        super().__init__(f"Note {note_id} not found")
        self.note_id = note_id


class InvalidRating(QuickNoteError, ValueError):
    """Raised when a rating is not one of again, hard, good or easy."""

    def __init__(self, rating: object) -> None:
        super().__init__(f"Invalid rating: {rating!r}")
        self.rating = rating


class InvalidNote(QuickNoteError, ValueError):
    """Raised when a new note is rejected before it reaches the store."""


class ConstraintViolation(QuickNoteError):
    """A stored value broke an invariant the classifier should guarantee."""


class StorageUnavailable(QuickNoteError):
    """The backing file could not be read, parsed or written."""
