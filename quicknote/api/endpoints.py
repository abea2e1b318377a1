from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from loguru import logger

from quicknote.api.auth import verify_credentials
from quicknote.api.schemas import NoteCount, NoteCreate, NoteCreated, RatingRequest
from quicknote.domain.note import Note
from quicknote.engine import KnowledgeEngine
from quicknote.errors import (
    ConstraintViolation,
    InvalidNote,
    InvalidRating,
    NotFound,
    StorageUnavailable,
)


def _storage_error(e: StorageUnavailable) -> HTTPException:
    logger.error(f"Storage unavailable: {str(e)}")
    return HTTPException(status_code=503, detail="Storage unavailable")


def _create_add_note_endpoint(engine: KnowledgeEngine):
    """Create the add note endpoint handler."""

    def add_note(body: NoteCreate, _: str = Depends(verify_credentials)) -> NoteCreated:
        try:
            note_id = engine.add_note(body.title, body.content, category=body.category)
        except InvalidNote as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        except ConstraintViolation as e:
            raise HTTPException(status_code=500, detail="Internal server error") from e
        except StorageUnavailable as e:
            raise _storage_error(e) from e
        return NoteCreated(id=note_id)

    return add_note


def _create_search_endpoint(engine: KnowledgeEngine):
    """Create the notes search endpoint handler."""

    def search_notes(q: str = "", _: str = Depends(verify_credentials)) -> List[Note]:
        return engine.search(q)

    return search_notes


def _create_note_endpoints(engine: KnowledgeEngine):
    """Create the single note read and delete handlers."""

    def get_note(note_id: int, _: str = Depends(verify_credentials)) -> Note:
        try:
            return engine.get_note(note_id)
        except NotFound as e:
            raise HTTPException(status_code=404, detail="Note not found") from e

    def delete_note(note_id: int, _: str = Depends(verify_credentials)) -> Response:
        try:
            engine.delete_note(note_id)
        except NotFound as e:
            raise HTTPException(status_code=404, detail="Note not found") from e
        except StorageUnavailable as e:
            raise _storage_error(e) from e
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return get_note, delete_note


def _create_review_endpoints(engine: KnowledgeEngine):
    """Create the review mode handlers."""

    def due_cards(as_of: float | None = None, _: str = Depends(verify_credentials)) -> List[Note]:
        return engine.due_cards(as_of)

    def rate_note(
        note_id: int, body: RatingRequest, _: str = Depends(verify_credentials)
    ) -> Note:
        try:
            return engine.rate(note_id, body.rating)
        except NotFound as e:
            raise HTTPException(status_code=404, detail="Note not found") from e
        except InvalidRating as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        except StorageUnavailable as e:
            raise _storage_error(e) from e

    return due_cards, rate_note


def get_endpoints_router(*, engine: KnowledgeEngine) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    def health_check():
        return {"status": "healthy"}

    @router.get("/api/notes/count")
    def note_count(_: str = Depends(verify_credentials)) -> NoteCount:
        return NoteCount(count=engine.note_count())

    get_note, delete_note = _create_note_endpoints(engine)
    due_cards, rate_note = _create_review_endpoints(engine)

    # Static paths go before /api/notes/{note_id} so they are not read as IDs
    router.post("/api/notes", status_code=201)(_create_add_note_endpoint(engine))
    router.get("/api/notes/search")(_create_search_endpoint(engine))
    router.get("/api/notes/{note_id}")(get_note)
    router.delete("/api/notes/{note_id}", status_code=204)(delete_note)
    router.get("/api/review/due")(due_cards)
    router.post("/api/review/{note_id}")(rate_note)

    return router
