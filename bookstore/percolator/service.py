from __future__ import annotations

import logging
from typing import Any

from ..domain.models import Book, Criteria, SearchPreference
from ..records.store import RecordStore
from .compiler import compile_criteria
from .engine import MatchingEngine
from .errors import EngineUnavailable, MatchingEngineError, PartialRegistrationFailure
from .fields import AUTHOR, EMAIL, LANGUAGE, PRICE, TITLE, TYPE

logger = logging.getLogger(__name__)


def build_representative_document(book: Book) -> dict[str, Any]:
    """
    Build the document a book is percolated as.

    Only fields a registered query can filter on are included.
    """
    return {
        AUTHOR.name: book.author,
        LANGUAGE.name: book.language.value,
        PRICE.name: book.price,
        TYPE.name: book.type.value,
    }


class BookstoreService:
    """Registers search preferences and matches books against them."""

    def __init__(self, store: RecordStore, engine: MatchingEngine, collection: str) -> None:
        self.store = store
        self.engine = engine
        self.collection = collection

    def create_search_preference(
        self, title: str, email: str, criteria: Criteria
    ) -> SearchPreference:
        """
        Save a preference and register its compiled query under the same id.

        Raises ``PartialRegistrationFailure`` when the record was saved but
        the matching engine rejected the query. The record is not removed.
        """
        preference = self.store.save_search_preference(
            SearchPreference(title=title, email=email, criteria=criteria)
        )
        expression = compile_criteria(preference.criteria)
        try:
            self.engine.register_query(
                self.collection,
                preference.id,
                expression,
                extra={EMAIL.name: preference.email, TITLE.name: preference.title},
            )
        except MatchingEngineError as exc:
            logger.warning(
                "Search preference %s saved without a registered query",
                preference.id,
                exc_info=True,
            )
            raise PartialRegistrationFailure(preference, exc) from exc

        logger.info("Registered search preference %s", preference.id)
        return preference

    def find_matching_preferences(self, book_id: str) -> list[SearchPreference]:
        """Return every search preference the given book satisfies."""
        book = self.store.find_book(book_id)
        if book is None:
            return []

        document = build_representative_document(book)
        try:
            matched_ids = self.engine.evaluate_document(self.collection, document)
        except MatchingEngineError as exc:
            logger.warning("Percolation failed for book %s", book_id, exc_info=True)
            raise EngineUnavailable(f"Could not evaluate book {book_id}") from exc

        results: list[SearchPreference] = []
        for preference_id in sorted(matched_ids):
            preference = self.store.find_search_preference(preference_id)
            if preference is None:
                # query outlived its record
                logger.warning("Registered query %s has no search preference", preference_id)
                continue
            results.append(preference)

        logger.info("Book %s matched %d search preferences", book_id, len(results))
        return results
