"""NewsAPI HTTP client."""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

import httpx
from loguru import logger

from src.core.config import settings
from src.core.infrastructure.logging import BusinessEvents
from src.modules.news.domain.exceptions import NewsUpstreamError


class NewsApiClient:
    """Perform single parameterized requests against the news API.

    The credential is fixed at construction and appended to every request as
    ``apiKey``. Failures raise NewsUpstreamError immediately: no retries.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_sec: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.NEWS_API_KEY
        self.base_url = (base_url or settings.NEWS_API_BASE_URL).rstrip("/")
        self.timeout_sec = timeout_sec or settings.NEWS_API_TIMEOUT_SEC
        self._transport = transport

    async def fetch(
        self, endpoint_path: str, params: Mapping[str, Any]
    ) -> dict[str, Any]:
        url = f"{self.base_url}{endpoint_path}"
        outgoing = {**params, "apiKey": self.api_key or ""}
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_sec,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    url,
                    params=outgoing,
                    headers={
                        "User-Agent": settings.NEWS_USER_AGENT,
                        "Accept": "application/json",
                    },
                )
        except httpx.TimeoutException as exc:
            raise self._failed(endpoint_path, f"Timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            raise self._failed(endpoint_path, f"Transport error: {exc}") from exc

        duration_ms = int((time.time() - start_time) * 1000)
        body = self._decode_body(response)

        if not response.is_success:
            raise self._failed(
                endpoint_path,
                f"HTTP {response.status_code}",
                message=self._upstream_message(body),
                status_code=response.status_code,
                upstream_code=self._upstream_code(body),
            )

        if not isinstance(body, dict):
            raise self._failed(
                endpoint_path,
                "Response payload is not a JSON object",
                status_code=response.status_code,
            )

        if body.get("status") == "error":
            raise self._failed(
                endpoint_path,
                "Upstream reported error status",
                message=self._upstream_message(body),
                status_code=response.status_code,
                upstream_code=self._upstream_code(body),
            )

        logger.debug(
            f"News API {endpoint_path} ok in {duration_ms}ms "
            f"(totalResults={body.get('totalResults')})"
        )
        return body

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _upstream_message(body: Any) -> str | None:
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
        return None

    @staticmethod
    def _upstream_code(body: Any) -> str | None:
        if isinstance(body, dict):
            code = body.get("code")
            if isinstance(code, str) and code:
                return code
        return None

    @staticmethod
    def _failed(
        endpoint_path: str,
        reason: str,
        *,
        message: str | None = None,
        status_code: int | None = None,
        upstream_code: str | None = None,
    ) -> NewsUpstreamError:
        logger.warning(f"News API {endpoint_path} failed: {reason} {message or ''}")
        BusinessEvents.upstream_request_failed(
            endpoint=endpoint_path,
            error=message or reason,
            status_code=status_code,
            upstream_code=upstream_code,
        )
        return NewsUpstreamError(
            message, status_code=status_code, upstream_code=upstream_code
        )
