from __future__ import annotations

import logging
import threading
from typing import Any

from opensearchpy.helpers.query import Query

from .engine import MatchingEngine, query_body
from .errors import UnsupportedQueryError
from .fields import QUERY

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _single_item(body: dict[str, Any], kind: str) -> tuple[str, Any]:
    if len(body) != 1:
        raise UnsupportedQueryError(f"{kind} clause must name exactly one field: {body}")
    return next(iter(body.items()))


def _doc_values(document: dict[str, Any], field: str) -> list[Any]:
    return _as_list(document.get(field))


def _match_term(body: dict[str, Any], document: dict[str, Any]) -> bool:
    field, expected = _single_item(body, "term")
    if isinstance(expected, dict):
        expected = expected.get("value")
    return any(value == expected for value in _doc_values(document, field))


def _match_terms(body: dict[str, Any], document: dict[str, Any]) -> bool:
    field, accepted = _single_item(body, "terms")
    accepted = _as_list(accepted)
    return any(value in accepted for value in _doc_values(document, field))


def _match_range(body: dict[str, Any], document: dict[str, Any]) -> bool:
    field, bounds = _single_item(body, "range")
    for value in _doc_values(document, field):
        if value is None:
            continue
        if "gte" in bounds and not value >= bounds["gte"]:
            continue
        if "gt" in bounds and not value > bounds["gt"]:
            continue
        if "lte" in bounds and not value <= bounds["lte"]:
            continue
        if "lt" in bounds and not value < bounds["lt"]:
            continue
        return True
    return False


def _minimum_should_match(value: Any) -> int:
    # percentage and combination forms are not supported
    if isinstance(value, bool):
        raise UnsupportedQueryError(f"Unsupported minimum_should_match: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.lstrip("-").isdigit():
        return int(value)
    raise UnsupportedQueryError(f"Unsupported minimum_should_match: {value!r}")


def _match_bool(body: dict[str, Any], document: dict[str, Any]) -> bool:
    required = _as_list(body.get("filter")) + _as_list(body.get("must"))
    if not all(matches(clause, document) for clause in required):
        return False
    if any(matches(clause, document) for clause in _as_list(body.get("must_not"))):
        return False

    should = _as_list(body.get("should"))
    if not should:
        return True
    minimum = _minimum_should_match(body.get("minimum_should_match", 0 if required else 1))
    if minimum < 0:
        minimum = len(should) + minimum
    hits = sum(1 for clause in should if matches(clause, document))
    return hits >= minimum


_MATCHERS = {
    "bool": _match_bool,
    "term": _match_term,
    "terms": _match_terms,
    "range": _match_range,
    "match_all": lambda body, document: True,
}


def matches(query: dict[str, Any], document: dict[str, Any]) -> bool:
    """Evaluate a query in its JSON form against a flat document."""
    kind, body = _single_item(query, "query")
    matcher = _MATCHERS.get(kind)
    if matcher is None:
        raise UnsupportedQueryError(f"Unsupported query type: {kind}")
    return matcher(body, document)


class InMemoryMatchingEngine(MatchingEngine):
    """
    Process-local matching engine.

    Queries are held in their JSON form, as a search engine would store them,
    and every write is visible as soon as ``register_query`` returns.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def register_query(
        self,
        collection: str,
        query_id: str,
        expression: Query | dict[str, Any],
        *,
        extra: dict[str, Any] | None = None,
    ) -> None:
        entry = {**(extra or {}), QUERY.name: query_body(expression)}
        with self._lock:
            self._collections.setdefault(collection, {})[query_id] = entry
        logger.debug("Registered query %s in %s", query_id, collection)

    def evaluate_document(self, collection: str, document: dict[str, Any]) -> set[str]:
        with self._lock:
            entries = list(self._collections.get(collection, {}).items())
        return {
            query_id
            for query_id, entry in entries
            if matches(entry[QUERY.name], document)
        }

    def delete_query(self, collection: str, query_id: str) -> None:
        with self._lock:
            self._collections.get(collection, {}).pop(query_id, None)

    def get_registration(self, collection: str, query_id: str) -> dict[str, Any] | None:
        """Return the stored source for ``query_id``, or ``None``."""
        with self._lock:
            entry = self._collections.get(collection, {}).get(query_id)
            return dict(entry) if entry is not None else None
