from __future__ import annotations

import threading
import uuid
from abc import ABC, abstractmethod

from ..domain.models import Book, SearchPreference


def _new_id() -> str:
    return uuid.uuid4().hex


class RecordStore(ABC):

    @abstractmethod
    def save_book(self, book: Book) -> Book: ...

    @abstractmethod
    def find_book(self, book_id: str) -> Book | None: ...

    @abstractmethod
    def list_books(self) -> list[Book]: ...

    @abstractmethod
    def save_search_preference(self, preference: SearchPreference) -> SearchPreference: ...

    @abstractmethod
    def find_search_preference(self, preference_id: str) -> SearchPreference | None: ...

    @abstractmethod
    def list_search_preferences(self) -> list[SearchPreference]: ...


class InMemoryRecordStore(RecordStore):
    """Dict-backed store. Records without an id get a fresh one on save."""

    def __init__(self) -> None:
        self._books: dict[str, Book] = {}
        self._preferences: dict[str, SearchPreference] = {}
        self._lock = threading.Lock()

    def save_book(self, book: Book) -> Book:
        if book.id is None:
            book = book.model_copy(update={"id": _new_id()})
        with self._lock:
            self._books[book.id] = book
        return book

    def find_book(self, book_id: str) -> Book | None:
        return self._books.get(book_id)

    def list_books(self) -> list[Book]:
        with self._lock:
            return list(self._books.values())

    def save_search_preference(self, preference: SearchPreference) -> SearchPreference:
        if preference.id is None:
            preference = preference.model_copy(update={"id": _new_id()})
        with self._lock:
            self._preferences[preference.id] = preference
        return preference

    def find_search_preference(self, preference_id: str) -> SearchPreference | None:
        return self._preferences.get(preference_id)

    def list_search_preferences(self) -> list[SearchPreference]:
        with self._lock:
            return list(self._preferences.values())
