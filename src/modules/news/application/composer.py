"""Upstream parameter composition.

Each function turns an options object into the outgoing parameter mapping.
Optional fields that are unset are omitted rather than sent empty, which keeps
cache keys stable and avoids upstream rejecting blank parameters.
"""

from enum import Enum
from typing import Any

from src.modules.news.domain.exceptions import InvalidNewsQueryError
from src.modules.news.domain.options import (
    HeadlinesOptions,
    SearchOptions,
    SourcesOptions,
)


def _put_optional(params: dict[str, Any], name: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str) and not value:
        return
    params[name] = value


def compose_headlines(opts: HeadlinesOptions) -> dict[str, Any]:
    """``{pageSize, page, category?, country?, sources?, q?}``"""
    params: dict[str, Any] = {"pageSize": opts.page_size, "page": opts.page}
    _put_optional(params, "category", opts.category)
    _put_optional(params, "country", opts.country)
    _put_optional(params, "sources", opts.sources)
    _put_optional(params, "q", opts.q)
    return params


def compose_search(opts: SearchOptions) -> dict[str, Any]:
    """``{q, pageSize, page, sortBy, sources?, domains?, from?, to?, language?}``

    Raises:
        InvalidNewsQueryError: ``q`` is missing or blank
    """
    if not opts.q:
        raise InvalidNewsQueryError("Search query is required")

    params: dict[str, Any] = {
        "q": opts.q,
        "pageSize": opts.page_size,
        "page": opts.page,
        "sortBy": opts.sort_by.value,
    }
    _put_optional(params, "sources", opts.sources)
    _put_optional(params, "domains", opts.domains)
    _put_optional(params, "from", opts.from_date)
    _put_optional(params, "to", opts.to_date)
    _put_optional(params, "language", opts.language)
    return params


def compose_sources(opts: SourcesOptions) -> dict[str, Any]:
    """``{category?, language?, country?}``"""
    params: dict[str, Any] = {}
    _put_optional(params, "category", opts.category)
    _put_optional(params, "language", opts.language)
    _put_optional(params, "country", opts.country)
    return params
