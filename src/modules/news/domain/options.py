"""Per-request query option value objects.

Options accept both the upstream camelCase names (``pageSize``, ``sortBy``,
``from``, ``to``) and snake_case field names. Invalid enumerated values raise
InvalidNewsQueryError before any upstream call is made.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.modules.news.domain.entities import (
    Category,
    Country,
    Language,
    SortBy,
    parse_enum,
)
from src.modules.news.domain.exceptions import InvalidNewsQueryError

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20


def clamp_positive_int(value: Any, default: int) -> int:
    """Coerce ``value`` to an int >= 1.

    Missing, blank or non-numeric values take ``default``; numbers below 1
    are raised to 1.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return max(number, 1)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _join_csv(value: Any, field_name: str) -> str | None:
    """Normalize a comma list given as a string or a sequence of strings."""
    if value is None:
        return None
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, list | tuple):
        parts = value
    else:
        raise InvalidNewsQueryError(f"{field_name} must be a string or a list")

    seen: list[str] = []
    for part in parts:
        if not isinstance(part, str):
            raise InvalidNewsQueryError(f"{field_name} entries must be strings")
        cleaned = part.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return ",".join(seen) or None


def _parse_iso_date(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime | date):
        return value.isoformat()
    if not isinstance(value, str):
        raise InvalidNewsQueryError(f"{field_name} must be an ISO-8601 date")
    text = value.strip()
    if not text:
        return None
    try:
        datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidNewsQueryError(
            f"{field_name} must be an ISO-8601 date, got '{text}'"
        ) from None
    return text


class QueryOptions(BaseModel):
    """Base class for query options."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @classmethod
    def parse(cls, raw: "QueryOptions | Mapping[str, Any] | None") -> Self:
        """Build options from a model instance, a plain mapping or ``None``."""
        if isinstance(raw, cls):
            return raw
        if raw is None:
            raw = {}
        if isinstance(raw, QueryOptions):
            raw = raw.model_dump(by_alias=True, exclude_none=True)
        if not isinstance(raw, Mapping):
            raise InvalidNewsQueryError("Options must be a mapping")
        try:
            return cls.model_validate(dict(raw))
        except PydanticValidationError as exc:
            errors = exc.errors()
            location = ".".join(str(p) for p in errors[0]["loc"]) if errors else ""
            message = errors[0]["msg"] if errors else str(exc)
            raise InvalidNewsQueryError(
                f"Invalid option {location}: {message}".strip()
            ) from exc


class PaginatedOptions(QueryOptions):
    page: int = DEFAULT_PAGE
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, alias="pageSize")

    @field_validator("page", mode="before")
    @classmethod
    def _clamp_page(cls, v: Any) -> int:
        return clamp_positive_int(v, DEFAULT_PAGE)

    @field_validator("page_size", mode="before")
    @classmethod
    def _clamp_page_size(cls, v: Any) -> int:
        return clamp_positive_int(v, DEFAULT_PAGE_SIZE)


class HeadlinesOptions(PaginatedOptions):
    """Options for ``/top-headlines``."""

    category: Category | None = None
    country: Country | None = None
    sources: str | None = None
    q: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v: Any) -> Category | None:
        v = _blank_to_none(v)
        return None if v is None else parse_enum(Category, v, "category")

    @field_validator("country", mode="before")
    @classmethod
    def _country(cls, v: Any) -> Country | None:
        v = _blank_to_none(v)
        return None if v is None else parse_enum(Country, v, "country")

    @field_validator("sources", mode="before")
    @classmethod
    def _sources(cls, v: Any) -> str | None:
        return _join_csv(_blank_to_none(v), "sources")

    @field_validator("q", mode="before")
    @classmethod
    def _q(cls, v: Any) -> Any:
        return _blank_to_none(v)


class SearchOptions(PaginatedOptions):
    """Options for ``/everything``; ``q`` is required by the composer."""

    q: str | None = None
    sources: str | None = None
    domains: str | None = None
    from_date: str | None = Field(default=None, alias="from")
    to_date: str | None = Field(default=None, alias="to")
    language: Language | None = None
    sort_by: SortBy = Field(default=SortBy.PUBLISHED_AT, alias="sortBy")

    @field_validator("q", mode="before")
    @classmethod
    def _q(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("sources", mode="before")
    @classmethod
    def _sources(cls, v: Any) -> str | None:
        return _join_csv(_blank_to_none(v), "sources")

    @field_validator("domains", mode="before")
    @classmethod
    def _domains(cls, v: Any) -> str | None:
        return _join_csv(_blank_to_none(v), "domains")

    @field_validator("from_date", mode="before")
    @classmethod
    def _from(cls, v: Any) -> str | None:
        return _parse_iso_date(v, "from")

    @field_validator("to_date", mode="before")
    @classmethod
    def _to(cls, v: Any) -> str | None:
        return _parse_iso_date(v, "to")

    @field_validator("language", mode="before")
    @classmethod
    def _language(cls, v: Any) -> Language | None:
        v = _blank_to_none(v)
        return None if v is None else parse_enum(Language, v, "language")

    @field_validator("sort_by", mode="before")
    @classmethod
    def _sort_by(cls, v: Any) -> SortBy:
        v = _blank_to_none(v)
        if v is None:
            return SortBy.PUBLISHED_AT
        return parse_enum(SortBy, v, "sortBy")


class SourcesOptions(QueryOptions):
    """Options for ``/sources`` (no pagination)."""

    category: Category | None = None
    language: Language | None = None
    country: Country | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, v: Any) -> Category | None:
        v = _blank_to_none(v)
        return None if v is None else parse_enum(Category, v, "category")

    @field_validator("language", mode="before")
    @classmethod
    def _language(cls, v: Any) -> Language | None:
        v = _blank_to_none(v)
        return None if v is None else parse_enum(Language, v, "language")

    @field_validator("country", mode="before")
    @classmethod
    def _country(cls, v: Any) -> Country | None:
        v = _blank_to_none(v)
        return None if v is None else parse_enum(Country, v, "country")


class PersonalizedOptions(PaginatedOptions):
    """Pagination applied after the personalized merge."""
