"""Review rating domain model."""

from enum import Enum

from quicknote.errors import InvalidRating


class Rating(str, Enum):
    """How well a note was recalled during review."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @property
    def quality(self) -> int:
        """Ordinal recall quality used by the scheduler."""
        return _QUALITY[self]

    @classmethod
    def parse(cls, value: "Rating | str") -> "Rating":
        """Convert a rating or its case-insensitive name to a Rating.

        Raises:
            InvalidRating: If the value is not one of the four ratings
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidRating(value)


_QUALITY = {
    Rating.AGAIN: 0,
    Rating.HARD: 3,
    Rating.GOOD: 4,
    Rating.EASY: 5,
}
