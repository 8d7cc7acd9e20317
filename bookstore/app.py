from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException

from .dependencies import get_bookstore_service, get_record_store
from .domain.models import Book, BookRequest, SearchPreference, SearchPreferenceRequest
from .percolator.errors import EngineUnavailable, PartialRegistrationFailure
from .percolator.service import BookstoreService
from .records.store import RecordStore

app = FastAPI(title="Bookstore Percolator API", version="1.0.0")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Books ────────────────────────────────────────────────────────────────


@app.get("/api/books", response_model=list[Book])
def list_books(store: RecordStore = Depends(get_record_store)) -> list[Book]:
    return store.list_books()


@app.get("/api/books/{book_id}", response_model=Book)
def get_book(book_id: str, store: RecordStore = Depends(get_record_store)) -> Book:
    book = store.find_book(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@app.post("/api/books", response_model=Book)
def create_book(body: BookRequest, store: RecordStore = Depends(get_record_store)) -> Book:
    return store.save_book(Book(**body.model_dump()))


# ── Search preferences ───────────────────────────────────────────────────


@app.get("/api/searchpreferences", response_model=list[SearchPreference])
def list_search_preferences(
    store: RecordStore = Depends(get_record_store),
) -> list[SearchPreference]:
    return store.list_search_preferences()


@app.get(
    "/api/searchpreferences/find-matching-preferences/{book_id}",
    response_model=list[SearchPreference],
)
def find_matching_preferences(
    book_id: str,
    service: BookstoreService = Depends(get_bookstore_service),
) -> list[SearchPreference]:
    # Unknown book ids give an empty list, not a 404
    try:
        return service.find_matching_preferences(book_id)
    except EngineUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@app.get("/api/searchpreferences/{preference_id}", response_model=SearchPreference)
def get_search_preference(
    preference_id: str,
    store: RecordStore = Depends(get_record_store),
) -> SearchPreference:
    preference = store.find_search_preference(preference_id)
    if preference is None:
        raise HTTPException(status_code=404, detail="Search preference not found")
    return preference


@app.post("/api/searchpreferences", response_model=SearchPreference)
def create_search_preference(
    body: SearchPreferenceRequest,
    service: BookstoreService = Depends(get_bookstore_service),
) -> SearchPreference:
    try:
        return service.create_search_preference(body.title, body.email, body.criteria)
    except PartialRegistrationFailure as exc:
        raise HTTPException(
            status_code=502,
            detail={
                "message": "Search preference saved but not registered for matching",
                "search_preference_id": exc.preference.id,
            },
        ) from exc
