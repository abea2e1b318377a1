from pydantic import BaseModel, Field

from quicknote.domain.note import Category


class NoteCreate(BaseModel):
    """Request body for filing a new note."""

    title: str = Field(min_length=1)
    content: str = ""
    category: Category | None = None  # overrides the classifier when set


class NoteCreated(BaseModel):
    id: int


class RatingRequest(BaseModel):
    rating: str


class NoteCount(BaseModel):
    count: int
