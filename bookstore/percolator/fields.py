"""Fields of the percolator index.

Both the criteria compiler and the representative document read their field
names from here, so a clause and the document it is tested against can never
disagree on a name.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class PercolatorField:
    name: str
    type: str


PERCOLATOR_FIELDS: Mapping[str, PercolatorField] = MappingProxyType({
    "query": PercolatorField("query", "percolator"),
    "email": PercolatorField("email", "keyword"),
    "title": PercolatorField("title", "keyword"),
    "author": PercolatorField("author", "keyword"),
    "sellingPrice": PercolatorField("sellingPrice", "double"),
    "bookType": PercolatorField("bookType", "keyword"),
    "bookLanguage": PercolatorField("bookLanguage", "keyword"),
})

QUERY = PERCOLATOR_FIELDS["query"]
EMAIL = PERCOLATOR_FIELDS["email"]
TITLE = PERCOLATOR_FIELDS["title"]
AUTHOR = PERCOLATOR_FIELDS["author"]
PRICE = PERCOLATOR_FIELDS["sellingPrice"]
TYPE = PERCOLATOR_FIELDS["bookType"]
LANGUAGE = PERCOLATOR_FIELDS["bookLanguage"]


def index_mapping() -> dict[str, Any]:
    """Return the index body that declares every catalog field with its type."""
    return {
        "mappings": {
            "properties": {
                field.name: {"type": field.type} for field in PERCOLATOR_FIELDS.values()
            }
        }
    }
