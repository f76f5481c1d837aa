"""News domain ports."""

from collections.abc import Mapping
from typing import Any, Protocol


class NewsUpstream(Protocol):
    """Port for the external news API.

    Implementations append the service credential, apply their own timeout and
    raise NewsUpstreamError on any failure.
    """

    async def fetch(
        self, endpoint_path: str, params: Mapping[str, Any]
    ) -> dict[str, Any]: ...


class Endpoints:
    """Upstream endpoint paths."""

    TOP_HEADLINES = "/top-headlines"
    EVERYTHING = "/everything"
    SOURCES = "/sources"
