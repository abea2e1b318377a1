from collections import defaultdict
from typing import Dict, List, Set

from quicknote.search_index.base import SearchIndex


def tokenize(text: str) -> Set[str]:
    """Split text into lowercased whitespace-delimited tokens."""
    return set(text.lower().split())


class TokenSearchIndex(SearchIndex):
    """In-memory inverted index from tokens to note IDs.

    A note matches a query when every query token occurs, case-insensitively,
    somewhere in its title or content. A query token contains no whitespace,
    so it occurs in the text exactly when it occurs inside one of the text's
    tokens, and matching only has to scan the vocabulary.
    """

    def __init__(self) -> None:
        self._postings: Dict[str, Set[int]] = defaultdict(set)
        self._note_tokens: Dict[int, Set[str]] = {}

    def index(self, note_id: int, title: str, content: str) -> None:
        """Add or replace the entry for a note."""
        self.remove(note_id)

        tokens = tokenize(title) | tokenize(content)
        self._note_tokens[note_id] = tokens
        for token in tokens:
            self._postings[token].add(note_id)

    def remove(self, note_id: int) -> None:
        """Remove the entry for a note if present."""
        tokens = self._note_tokens.pop(note_id, None)
        if tokens is None:
            return

        for token in tokens:
            ids = self._postings[token]
            ids.discard(note_id)
            if not ids:
                del self._postings[token]

    def query(self, text: str) -> List[int]:
        """Get IDs of notes matching every query token, highest ID first."""
        query_tokens = tokenize(text)
        if not query_tokens:
            return []

        matches: Set[int] | None = None
        # Longest tokens first: they usually narrow the candidates fastest
        for query_token in sorted(query_tokens, key=len, reverse=True):
            token_matches = self._ids_containing(query_token)
            matches = token_matches if matches is None else matches & token_matches
            if not matches:
                return []

        return sorted(matches or (), reverse=True)

    def _ids_containing(self, query_token: str) -> Set[int]:
        ids: Set[int] = set()
        for token, token_ids in self._postings.items():
            if query_token in token:
                ids |= token_ids
        return ids

    def entry_ids(self) -> set[int]:
        """Get the IDs of all indexed notes."""
        return set(self._note_tokens)

    def clear(self) -> None:
        """Remove all entries."""
        self._postings.clear()
        self._note_tokens.clear()
