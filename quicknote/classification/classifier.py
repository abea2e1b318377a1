"""Classification of new notes into a category and a set of tags."""

from typing import List

from quicknote.domain.note import Category

SQL_MARKERS = ("select", "from ", "insert into")
DEBUG_MARKERS = ("error", "exception", "panic")
PROCESS_MIN_LINES = 4


class NoteClassifier:
    """Service for deriving a category and tags from note text."""

    @staticmethod
    def extract_tags(content: str) -> List[str]:
        """Extract #tags from content.

        A whitespace-delimited token is a tag when it starts with '#' and has
        at least one character after it. Duplicates are dropped, keeping the
        order of first appearance.

        Args:
            content: Note content

        Returns:
            List of tags without the leading '#'
        """
        tags: List[str] = []
        for token in content.split():
            if token.startswith("#") and len(token) > 1:
                tag = token[1:]
                if tag not in tags:
                    tags.append(tag)
        return tags

    @staticmethod
    def detect_category(title: str, content: str) -> Category:
        """Detect the category of a note. The first matching rule wins."""
        lower_content = content.lower()

        if any(marker in lower_content for marker in SQL_MARKERS):
            return Category.SQL_QUERY

        if any(marker in lower_content for marker in DEBUG_MARKERS):
            return Category.DEBUG_PATTERN

        # Numbered title with a multi-line body reads as a step-by-step process
        if title[:1].isascii() and title[:1].isdigit():
            if len(content.split("\n")) >= PROCESS_MIN_LINES:
                return Category.PROCESS

        return Category.CONCEPT

    def classify(self, title: str, content: str) -> tuple[Category, List[str]]:
        """Classify a note.

        Args:
            title: Note title
            content: Note content

        Returns:
            Tuple of (category, tags)
        """
        return self.detect_category(title, content), self.extract_tags(content)
