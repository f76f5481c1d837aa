"""News domain exceptions."""

from src.core.domain.exceptions import UpstreamError, ValidationError


class InvalidNewsQueryError(ValidationError):
    """Raised when query options or preferences are invalid."""


class NewsUpstreamError(UpstreamError):
    """Raised when the news API call fails."""

    DEFAULT_MESSAGE = "Failed to fetch news"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        upstream_code: str | None = None,
    ):
        super().__init__(
            message or self.DEFAULT_MESSAGE,
            status_code=status_code,
            upstream_code=upstream_code,
        )
