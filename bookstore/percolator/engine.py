"""
Matching engine interface.

A matching engine stores filter queries under an id and, given a document,
answers which stored queries the document satisfies.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from opensearchpy.helpers.query import Query


def query_body(expression: Query | dict[str, Any]) -> dict[str, Any]:
    """Return the JSON form of a compiled expression."""
    if isinstance(expression, dict):
        return expression
    return expression.to_dict()


class MatchingEngine(ABC):

    @abstractmethod
    def register_query(
        self,
        collection: str,
        query_id: str,
        expression: Query | dict[str, Any],
        *,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """
        Store ``expression`` under ``query_id``.

        The write must be visible to the next ``evaluate_document`` call.
        ``extra`` holds denormalized fields stored next to the query; they
        take no part in matching.
        """

    @abstractmethod
    def evaluate_document(self, collection: str, document: dict[str, Any]) -> set[str]:
        """Return the ids of every registered query that ``document`` satisfies."""

    @abstractmethod
    def delete_query(self, collection: str, query_id: str) -> None:
        """Remove a registered query. Unknown ids are ignored."""
