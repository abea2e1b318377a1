import contextlib
import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, List

from pydantic import ValidationError

from quicknote.domain.note import Category, Note, ReviewState
from quicknote.errors import ConstraintViolation, NotFound, StorageUnavailable
from quicknote.note_store.base import NoteStore

logger = logging.getLogger(__name__)


def _validate_category(value: Any) -> Category:
    """Convert persisted or caller-supplied text to a Category."""
    try:
        return Category(value)
    except ValueError as err:
        raise ConstraintViolation(f"Unknown category: {value!r}") from err


class LocalNoteStore(NoteStore):
    """Local note store that keeps notes in a JSON file."""

    def __init__(
        self,
        filepath: str | Path | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize LocalNoteStore.

        Args:
            filepath: Path to the store file. If provided and exists, will auto-load.
                     If provided and doesn't exist, it is created on the first write.
                     If not provided, creates an empty store in memory only.
            clock: Source of the current time in seconds since epoch.
        """
        self._filepath = str(filepath) if filepath else None
        self._clock = clock
        self._notes: Dict[int, Note] = {}
        self._next_id = 1

        if self._filepath and Path(self._filepath).exists():
            self._load(self._filepath)

    def _load(self, filepath: str) -> None:
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as err:
            raise StorageUnavailable(f"Cannot read note store {filepath}: {err}") from err

        try:
            raw_notes = data["notes"]
            next_id = int(data["next_id"])
        except (KeyError, TypeError, ValueError) as err:
            raise StorageUnavailable(f"Malformed note store {filepath}") from err
        if not isinstance(raw_notes, dict) or not all(
            isinstance(note_data, dict) for note_data in raw_notes.values()
        ):
            raise StorageUnavailable(f"Malformed note store {filepath}")

        notes = {}
        for key, note_data in raw_notes.items():
            note_data["category"] = _validate_category(note_data.get("category"))
            try:
                note = Note(**note_data)
            except ValidationError as err:
                raise StorageUnavailable(f"Corrupt note in {filepath}: {err}") from err
            if str(note.id) != key or note.id in notes:
                raise StorageUnavailable(f"Note {key} in {filepath} has mismatched id {note.id}")
            notes[note.id] = note

        self._notes = notes
        # The high-water mark never moves backwards, even if the file says so
        self._next_id = max([next_id, *(note_id + 1 for note_id in notes)])
        logger.info(f"Loaded {len(notes)} notes from {filepath}")

    def save(self, filepath: str | None = None) -> None:
        """Save the note store to a JSON file.

        The file is written next to the target and then moved into place, so
        readers never see a partially written store.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        data = {
            "next_id": self._next_id,
            "notes": {
                str(note_id): note.model_dump(mode="json") for note_id, note in self._notes.items()
            },
        }
        tmp_path = f"{save_path}.tmp"
        try:
            Path(save_path).parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, save_path)
        except OSError as err:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
            raise StorageUnavailable(f"Cannot write note store {save_path}: {err}") from err

    def _persist(self) -> None:
        if self._filepath:
            self.save()

    def next_id(self) -> int:
        """Get the ID the next insert will assign."""
        return self._next_id

    def insert(self, title: str, content: str, category: Category, tags: List[str]) -> int:
        """Store a new note with a pristine review state and return its ID."""
        category = _validate_category(category)
        now = self._clock()
        note = Note(
            id=self._next_id,
            title=title,
            content=content,
            category=category,
            tags=list(tags),
            created_at=now,
            updated_at=now,
            review=ReviewState(due_at=now),
        )

        self._notes[note.id] = note
        self._next_id += 1
        try:
            self._persist()
        except StorageUnavailable:
            del self._notes[note.id]
            raise
        return note.id

    def get(self, note_id: int) -> Note:
        """Get a copy of a note by its ID."""
        if note_id not in self._notes:
            raise NotFound(note_id)
        return self._notes[note_id].model_copy(deep=True)

    def due_for_review(self, as_of: float) -> List[Note]:
        """Get copies of notes due at or before as_of, earliest due first."""
        due = [note for note in self._notes.values() if note.review.due_at <= as_of]
        due.sort(key=lambda note: (note.review.due_at, note.id))
        return [note.model_copy(deep=True) for note in due]

    def update_review_state(self, note_id: int, state: ReviewState) -> Note:
        """Replace the review state of a note and bump its updated_at."""
        if note_id not in self._notes:
            raise NotFound(note_id)

        previous = self._notes[note_id]
        updated = previous.model_copy(
            update={"review": state.model_copy(), "updated_at": self._clock()}
        )
        self._notes[note_id] = updated
        try:
            self._persist()
        except StorageUnavailable:
            self._notes[note_id] = previous
            raise
        return updated.model_copy(deep=True)

    def delete(self, note_id: int) -> None:
        """Delete a note. Its ID is never handed out again."""
        if note_id not in self._notes:
            raise NotFound(note_id)

        removed = self._notes.pop(note_id)
        try:
            self._persist()
        except StorageUnavailable:
            self._notes[note_id] = removed
            raise

    def all_notes(self) -> List[Note]:
        """Get copies of every note ordered by ID."""
        return [self._notes[note_id].model_copy(deep=True) for note_id in sorted(self._notes)]

    def count(self) -> int:
        """Get the number of stored notes."""
        return len(self._notes)
