"""Knowledge store engine composing classification, storage, indexing and scheduling."""

import time
from typing import Callable, List

from loguru import logger

from quicknote.classification.classifier import NoteClassifier
from quicknote.domain.note import Category, Note
from quicknote.domain.rating import Rating
from quicknote.errors import ConstraintViolation, InvalidNote, NotFound, StorageUnavailable
from quicknote.locking import ReadWriteLock
from quicknote.note_store.base import NoteStore
from quicknote.scheduling.scheduler import ReviewScheduler
from quicknote.search_index.base import SearchIndex

WELCOME_TITLE = "Welcome to QuickNote!"
WELCOME_CONTENT = (
    "This is your portable knowledge pocket. Press Ctrl+K to quickly capture thoughts.\n\n"
    "#sql query for finding duplicate emails:\n"
    "SELECT email, COUNT(*) FROM users GROUP BY email HAVING COUNT(*) > 1;"
)


class KnowledgeEngine:
    """Facade over the note store and search index.

    Every public operation leaves each stored note with exactly one matching
    index entry. Reads share a lock; writes hold it exclusively across the
    store and index pair, which also serializes identity assignment and makes
    each rating a single read-apply-write step.
    """

    def __init__(
        self,
        *,
        note_store: NoteStore,
        search_index: SearchIndex,
        classifier: NoteClassifier | None = None,
        scheduler: ReviewScheduler | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the engine and rebuild the search index from the store.

        Args:
            note_store: Store holding the notes
            search_index: Index to keep in step with the store
            classifier: Classifier for new notes
            scheduler: Scheduler applying review ratings
            clock: Source of the current time in seconds since epoch
        """
        self._note_store = note_store
        self._search_index = search_index
        self._classifier = classifier or NoteClassifier()
        self._scheduler = scheduler or ReviewScheduler()
        self._clock = clock
        self._lock = ReadWriteLock()

        self.rebuild_index()

    def rebuild_index(self) -> None:
        """Replace the search index contents with every note in the store."""
        with self._lock.write():
            self._search_index.clear()
            notes = self._note_store.all_notes()
            for note in notes:
                self._search_index.index(note.id, note.title, note.content)
        logger.info(f"Search index rebuilt with {len(notes)} notes")

    def add_note(self, title: str, content: str, category: Category | str | None = None) -> int:
        """Classify, store and index a new note.

        Args:
            title: Note title, must not be blank
            content: Note content
            category: Explicit category overriding the classifier. Snippet,
                Checklist and Note are never detected and can only be set this way.

        Returns:
            The ID of the new note

        Raises:
            InvalidNote: If the title is blank or the category is unknown
        """
        if not title.strip():
            raise InvalidNote("Note title must not be empty")

        detected, tags = self._classifier.classify(title, content)
        if category is None:
            category = detected
        else:
            try:
                category = Category(category)
            except ValueError as err:
                raise InvalidNote(f"Unknown category: {category!r}") from err

        with self._lock.write():
            # Index under the ID the store will assign, so no note is stored
            # without its index entry
            note_id = self._note_store.next_id()
            try:
                self._search_index.index(note_id, title, content)
            except Exception:
                logger.warning(f"Indexing note {note_id} failed, nothing was stored")
                self._search_index.remove(note_id)
                raise

            try:
                self._note_store.insert(title, content, category, tags)
            except ConstraintViolation:
                logger.exception(f"Rejected note {title!r} with category {category!r}")
                self._search_index.remove(note_id)
                raise
            except StorageUnavailable:
                logger.warning(f"Storing note {note_id} failed, dropping its index entry")
                self._search_index.remove(note_id)
                raise

        logger.info(f"Note added: {title} (ID: {note_id}, category: {category.value})")
        return note_id

    def get_note(self, note_id: int) -> Note:
        """Get a note by its ID."""
        with self._lock.read():
            return self._note_store.get(note_id)

    def search(self, query: str) -> List[Note]:
        """Get notes matching every token of the query, newest first.

        An empty or whitespace-only query matches nothing.
        """
        with self._lock.read():
            notes = []
            for note_id in self._search_index.query(query):
                try:
                    notes.append(self._note_store.get(note_id))
                except NotFound:
                    continue
            return notes

    def due_cards(self, as_of: float | None = None) -> List[Note]:
        """Get notes due for review, earliest due first.

        Args:
            as_of: Cut-off time in seconds since epoch, defaults to now
        """
        if as_of is None:
            as_of = self._clock()
        with self._lock.read():
            return self._note_store.due_for_review(as_of)

    def rate(self, note_id: int, rating: Rating | str) -> Note:
        """Apply a review rating to a note.

        Returns:
            The note with its updated review state

        Raises:
            NotFound: If the note does not exist
            InvalidRating: If the rating is not one of again, hard, good or easy
        """
        with self._lock.write():
            note = self._note_store.get(note_id)
            state = self._scheduler.apply(note.review, rating, self._clock())
            updated = self._note_store.update_review_state(note_id, state)

        logger.info(
            f"Note {note_id} rated {Rating.parse(rating).value}: "
            f"next review in {state.interval_days} day(s)"
        )
        return updated

    def delete_note(self, note_id: int) -> None:
        """Delete a note and its search index entry."""
        with self._lock.write():
            self._note_store.delete(note_id)
            self._search_index.remove(note_id)
        logger.info(f"Note deleted: {note_id}")

    def note_count(self) -> int:
        """Get the number of stored notes."""
        with self._lock.read():
            return self._note_store.count()

    def seed_welcome_note(self) -> int | None:
        """Add the welcome note to an empty store.

        Returns:
            The ID of the welcome note, or None if the store already had notes
        """
        if self.note_count():
            return None
        logger.info("Adding welcome note to empty vault")
        return self.add_note(WELCOME_TITLE, WELCOME_CONTENT)
