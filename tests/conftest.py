"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不访问真实上游 API）

使用方法：
    # 运行所有测试
    uv run pytest

    # 运行带覆盖率
    uv run pytest --cov=src --cov-report=html
"""

from collections.abc import AsyncGenerator, Callable, Mapping
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.modules.news.domain.exceptions import NewsUpstreamError
from src.modules.news.infrastructure.cache import InMemoryCacheStore

# ============================================
# 配置 Fixtures
# ============================================


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# 时间与缓存 Fixtures
# ============================================


class ManualClock:
    """可控时钟，测试中手动推进时间。"""

    def __init__(self, start: float = 1_700_000_000.0):
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def cache_store(clock: ManualClock) -> InMemoryCacheStore:
    """每个测试独立的缓存实例。"""
    return InMemoryCacheStore(clock=clock)


# ============================================
# 上游 Fake
# ============================================


class FakeNewsUpstream:
    """Records every call; answers through ``responder``."""

    def __init__(
        self,
        responder: Callable[[str, dict[str, Any]], dict[str, Any]] | None = None,
    ):
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.responder = responder or (
            lambda endpoint, params: {"status": "ok", "totalResults": 0, "articles": []}
        )

    async def fetch(
        self, endpoint_path: str, params: Mapping[str, Any]
    ) -> dict[str, Any]:
        self.calls.append((endpoint_path, dict(params)))
        return self.responder(endpoint_path, dict(params))

    def calls_to(self, endpoint_path: str) -> list[dict[str, Any]]:
        return [params for endpoint, params in self.calls if endpoint == endpoint_path]


@pytest.fixture
def fake_upstream() -> FakeNewsUpstream:
    return FakeNewsUpstream()


@pytest.fixture
def failing_upstream() -> FakeNewsUpstream:
    def _fail(endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        raise NewsUpstreamError("rate limited", status_code=429, upstream_code="rateLimited")

    return FakeNewsUpstream(_fail)


# ============================================
# 领域对象 Fixtures
# ============================================


@pytest.fixture
def sample_headlines_payload() -> dict[str, Any]:
    return {
        "status": "ok",
        "totalResults": 2,
        "articles": [
            {"url": "https://example.com/a", "title": "A", "publishedAt": "2024-03-01T08:00:00Z"},
            {"url": "https://example.com/b", "title": "B", "publishedAt": "2024-02-01T08:00:00Z"},
        ],
    }


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
async def async_client(
    fake_upstream: FakeNewsUpstream, cache_store: InMemoryCacheStore
) -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（用于 API 测试），上游和缓存替换为测试实例。"""
    from main import app
    from src.core.application.security import get_current_user_id
    from src.modules.news.application.dependencies import (
        get_cache_store,
        get_news_upstream,
    )
    from src.modules.users.application.dependencies import (
        get_preferences_repository,
    )
    from src.modules.users.infrastructure.repositories import (
        InMemoryPreferencesRepository,
    )

    preferences_repository = InMemoryPreferencesRepository()
    original_overrides = dict(app.dependency_overrides)

    app.dependency_overrides[get_news_upstream] = lambda: fake_upstream
    app.dependency_overrides[get_cache_store] = lambda: cache_store
    app.dependency_overrides[get_preferences_repository] = (
        lambda: preferences_repository
    )
    app.dependency_overrides[get_current_user_id] = lambda: "user-123"

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)
