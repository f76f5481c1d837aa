"""Domain exception hierarchy.

领域层只抛出 DomainException 子类，HTTP 层根据 http_status_code 和 error_code
生成统一的错误响应。
"""

from fastapi import status


class DomainException(Exception):
    """Base exception for all domain errors.

    Class attributes:
    - http_status_code: HTTP 状态码（默认 400）
    - error_code: 机器可读的错误代码
    """

    http_status_code: int = status.HTTP_400_BAD_REQUEST
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "A domain error occurred"):
        self.message = message
        super().__init__(self.message)


class ValidationError(DomainException):
    """Raised when validation fails."""

    http_status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class UpstreamError(DomainException):
    """Raised when an upstream service call fails.

    ``status_code`` is the upstream HTTP status when a response arrived,
    ``upstream_code`` the error code reported in the upstream body.
    """

    http_status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "UPSTREAM_ERROR"

    def __init__(
        self,
        message: str = "Upstream request failed",
        status_code: int | None = None,
        upstream_code: str | None = None,
    ):
        self.status_code = status_code
        self.upstream_code = upstream_code
        if status_code == status.HTTP_429_TOO_MANY_REQUESTS:
            # Instance attribute shadows the class default for rate limits
            self.http_status_code = status.HTTP_429_TOO_MANY_REQUESTS
        super().__init__(message)
