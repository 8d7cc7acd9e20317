from __future__ import annotations

from opensearchpy.helpers.query import Bool, Query, Range, Term, Terms

from ..domain.models import Criteria
from .fields import AUTHOR, LANGUAGE, PRICE, TYPE


def _price_clause(minimum: float | None, maximum: float | None) -> Query | None:
    bounds: dict[str, float] = {}
    if minimum is not None:
        bounds["gte"] = float(minimum)
    if maximum is not None:
        bounds["lte"] = float(maximum)
    if not bounds:
        return None
    # minimum > maximum is passed through as an unsatisfiable range
    return Range(**{PRICE.name: bounds})


def compile_criteria(criteria: Criteria) -> Bool:
    """
    Build the boolean filter query registered for a search preference.

    Each criteria field that is set contributes one filter clause; the
    clauses are AND-ed. A criteria with nothing set yields an empty ``bool``
    query, which matches every document.
    """
    clauses: list[Query] = []

    if criteria.author is not None:
        clauses.append(Term(**{AUTHOR.name: criteria.author}))

    if criteria.types:
        # sorted so equal sets always compile to the same query
        values = sorted(t.value for t in criteria.types)
        clauses.append(Terms(**{TYPE.name: values}))

    if criteria.language is not None:
        clauses.append(Term(**{LANGUAGE.name: criteria.language.value}))

    price = _price_clause(criteria.minimum_price, criteria.maximum_price)
    if price is not None:
        clauses.append(price)

    return Bool(filter=clauses)
