from typing import List, Protocol


class SearchIndex(Protocol):
    """Protocol for search index implementations.

    An index is a projection of the note store and can always be rebuilt
    from it.
    """

    def index(self, note_id: int, title: str, content: str) -> None:
        """Add or replace the entry for a note."""
        ...

    def remove(self, note_id: int) -> None:
        """Remove the entry for a note. Removing an absent entry is a no-op."""
        ...

    def query(self, text: str) -> List[int]:
        """Get IDs of notes matching every query token, newest first."""
        ...

    def entry_ids(self) -> set[int]:
        """Get the IDs of all indexed notes."""
        ...

    def clear(self) -> None:
        """Remove all entries."""
        ...
