"""Pydantic models for catalog records and request/response payloads."""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def _decimal_to_number(value: Decimal | None) -> int | float | None:
    """JSON number for a decimal; integral values stay exact, fractions go through float."""
    if value is None:
        return None
    if value.is_finite() and value == value.to_integral_value() and value.adjusted() < 64:
        return int(value)
    return float(value)


class Product(BaseModel):
    title: str = ""
    price: Decimal = Field(..., ge=0)
    sizes: list[str] = Field(default_factory=list)
    description: str = ""

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_as_empty_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("sizes", mode="before")
    @classmethod
    def _none_as_no_sizes(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_serializer("price", when_used="json")
    def _price_as_number(self, value: Decimal) -> int | float | None:
        return _decimal_to_number(value)


def parse_highlight_terms(raw: str | None) -> list[str]:
    """Split a comma separated highlight parameter into trimmed, non-empty terms."""
    if not raw:
        return []
    return [term.strip() for term in raw.split(",") if term.strip()]


class FilterCriteria(BaseModel):
    """Filter and highlight parameters of a single request."""

    model_config = ConfigDict(frozen=True)

    min_price: Decimal | None = None
    max_price: Decimal | None = None
    size: str | None = None
    highlight_terms: tuple[str, ...] = ()

    @classmethod
    def from_query(
        cls,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        size: str | None = None,
        highlight: str | None = None,
    ) -> "FilterCriteria":
        return cls(
            min_price=min_price,
            max_price=max_price,
            size=size or None,
            highlight_terms=tuple(parse_highlight_terms(highlight)),
        )

    @property
    def has_filters(self) -> bool:
        return self.min_price is not None or self.max_price is not None or self.size is not None


class FilterSummary(BaseModel):
    minPrice: Decimal | None = None
    maxPrice: Decimal | None = None
    sizes: list[str] = Field(default_factory=list)
    commonWords: list[str] = Field(default_factory=list)

    @field_serializer("minPrice", "maxPrice", when_used="json")
    def _bound_as_number(self, value: Decimal | None) -> int | float | None:
        return _decimal_to_number(value)


class QueryResult(BaseModel):
    filteredProducts: list[Product]
    filter: FilterSummary


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    expiresIn: int


class ProblemDetails(BaseModel):
    status: int
    title: str
    detail: str | None = None
