from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class BookType(str, Enum):
    FICTION = "FICTION"
    NONFICTION = "NONFICTION"
    BIOGRAPHY = "BIOGRAPHY"
    POETRY = "POETRY"
    REFERENCE = "REFERENCE"


class BookLanguage(str, Enum):
    ENGLISH = "ENGLISH"
    DUTCH = "DUTCH"
    FRENCH = "FRENCH"
    GERMAN = "GERMAN"
    SPANISH = "SPANISH"


class BookRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = Field(..., min_length=1)
    isbn: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    price: float = Field(..., ge=0.0)
    type: BookType
    language: BookLanguage


class Book(BookRequest):
    id: str | None = None


class Criteria(BaseModel):
    """What a search preference asks for. Every field is optional."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    author: str | None = None
    minimum_price: float | None = Field(default=None, ge=0.0)
    maximum_price: float | None = Field(default=None, ge=0.0)
    types: frozenset[BookType] | None = Field(
        default=None, description="Match any of these book types"
    )
    language: BookLanguage | None = None


class SearchPreferenceRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    criteria: Criteria

    @model_validator(mode="after")
    def _check_price_bounds(self) -> SearchPreferenceRequest:
        low = self.criteria.minimum_price
        high = self.criteria.maximum_price
        if low is not None and high is not None and low > high:
            raise ValueError("minimum_price must not be greater than maximum_price")
        return self


class SearchPreference(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    title: str
    email: str
    criteria: Criteria
