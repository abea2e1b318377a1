"""Note domain models."""

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_EASINESS = 2.5
MIN_EASINESS = 1.3


class Category(str, Enum):
    """Closed set of knowledge categories a note can belong to."""

    CONCEPT = "Concept"
    SNIPPET = "Snippet"
    CHECKLIST = "Checklist"
    NOTE = "Note"
    PROCESS = "Process"
    SQL_QUERY = "SQLQuery"
    DEBUG_PATTERN = "DebugPattern"


class ReviewState(BaseModel):
    """Spaced-repetition scheduling state of a note.

    Attributes:
        due_at: When the note is next due for review (seconds since epoch)
        interval_days: Current review interval; 0 until the first rating
        streak: Consecutive correct ratings since the last lapse
        easiness: Multiplier controlling interval growth, never below 1.3
    """

    due_at: float
    interval_days: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    easiness: float = Field(default=DEFAULT_EASINESS, ge=MIN_EASINESS)


class Note(BaseModel):
    """Represents a single stored knowledge item.

    Attributes:
        id: Identity assigned by the note store, never reused
        title: Note title
        content: Free text body, may be empty
        category: Classification assigned at creation
        tags: Tags extracted from content, without the leading '#'
        created_at: Creation timestamp (seconds since epoch)
        updated_at: Last modification timestamp (seconds since epoch)
        review: Scheduling state for review mode
    """

    id: int
    title: str
    content: str
    category: Category
    tags: list[str] = []
    created_at: float
    updated_at: float
    review: ReviewState
