"""News / preferences HTTP 接口测试。

上游、缓存、偏好仓储和当前用户都由 conftest 的 async_client 替换为测试实例。
"""

import pytest

from src.modules.news.domain.exceptions import NewsUpstreamError

pytestmark = pytest.mark.anyio

API = "/api/v1"


class TestNewsEndpoints:
    async def test_headlines_passthrough(
        self, async_client, fake_upstream, sample_headlines_payload
    ):
        fake_upstream.responder = lambda endpoint, params: sample_headlines_payload

        response = await async_client.get(
            f"{API}/news/headlines", params={"country": "us", "pageSize": "2"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalResults"] == 2
        assert [a["url"] for a in data["articles"]] == [
            "https://example.com/a",
            "https://example.com/b",
        ]
        assert fake_upstream.calls == [
            ("/top-headlines", {"pageSize": 2, "page": 1, "country": "us"})
        ]

    async def test_bad_page_size_falls_back_to_default(
        self, async_client, fake_upstream
    ):
        response = await async_client.get(
            f"{API}/news/headlines", params={"pageSize": "lots", "page": "-1"}
        )

        assert response.status_code == 200
        assert fake_upstream.calls_to("/top-headlines") == [
            {"pageSize": 20, "page": 1}
        ]

    async def test_search_requires_query(self, async_client, fake_upstream):
        response = await async_client.get(f"{API}/news/search")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert fake_upstream.calls == []

    async def test_search(self, async_client, fake_upstream):
        response = await async_client.get(
            f"{API}/news/search",
            params={"q": "mars", "sortBy": "relevancy", "from": "2024-01-01"},
        )

        assert response.status_code == 200
        assert fake_upstream.calls_to("/everything") == [
            {
                "q": "mars",
                "pageSize": 20,
                "page": 1,
                "sortBy": "relevancy",
                "from": "2024-01-01",
            }
        ]

    async def test_sources(self, async_client, fake_upstream):
        fake_upstream.responder = lambda endpoint, params: {
            "status": "ok",
            "sources": [{"id": "bbc-news", "name": "BBC News", "country": "gb"}],
        }

        response = await async_client.get(
            f"{API}/news/sources", params={"country": "gb"}
        )

        assert response.status_code == 200
        assert response.json()["sources"][0]["id"] == "bbc-news"

    async def test_invalid_category_path(self, async_client, fake_upstream):
        response = await async_client.get(f"{API}/news/category/weather")

        assert response.status_code == 400
        assert "Invalid category" in response.json()["error"]["message"]
        assert fake_upstream.calls == []

    async def test_country_path(self, async_client, fake_upstream):
        response = await async_client.get(
            f"{API}/news/country/GB", params={"category": "sports"}
        )

        assert response.status_code == 200
        assert fake_upstream.calls_to("/top-headlines") == [
            {"pageSize": 20, "page": 1, "category": "sports", "country": "gb"}
        ]

    async def test_upstream_failure_is_502(self, async_client, fake_upstream):
        def _fail(endpoint, params):
            raise NewsUpstreamError("upstream exploded", status_code=500)

        fake_upstream.responder = _fail

        response = await async_client.get(f"{API}/news/headlines")

        assert response.status_code == 502
        assert response.json()["error"] == {
            "code": "UPSTREAM_ERROR",
            "message": "upstream exploded",
        }

    async def test_upstream_rate_limit_is_429(self, async_client, fake_upstream):
        def _fail(endpoint, params):
            raise NewsUpstreamError(status_code=429)

        fake_upstream.responder = _fail

        response = await async_client.get(f"{API}/news/sources")

        assert response.status_code == 429
        assert response.json()["error"]["message"] == "Failed to fetch news"


class TestPersonalizedEndpoint:
    async def test_default_preferences_fan_out(self, async_client, fake_upstream):
        response = await async_client.get(f"{API}/news/personalized")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "totalResults": 0, "articles": []}
        assert sorted(p["category"] for p in fake_upstream.calls_to("/top-headlines")) == [
            "business",
            "general",
            "technology",
        ]

    async def test_uses_saved_preferences(self, async_client, fake_upstream):
        await async_client.put(
            f"{API}/users/me/preferences",
            json={"categories": ["science"], "countries": ["gb", "de", "fr"]},
        )

        response = await async_client.get(f"{API}/news/personalized")

        assert response.status_code == 200
        assert sorted(
            p["country"] for p in fake_upstream.calls_to("/top-headlines")
        ) == ["de", "gb"]

    async def test_partial_failure_still_succeeds(self, async_client, fake_upstream):
        def _respond(endpoint, params):
            if params["category"] == "technology":
                raise NewsUpstreamError()
            return {
                "status": "ok",
                "articles": [
                    {
                        "url": f"https://example.com/{params['category']}",
                        "publishedAt": "2024-01-01T00:00:00Z",
                    }
                ],
            }

        fake_upstream.responder = _respond

        response = await async_client.get(f"{API}/news/personalized")

        assert response.status_code == 200
        assert response.json()["totalResults"] == 2


class TestPreferencesEndpoints:
    async def test_get_defaults(self, async_client):
        response = await async_client.get(f"{API}/users/me/preferences")

        assert response.status_code == 200
        assert response.json() == {
            "categories": ["general", "technology", "business"],
            "countries": ["us"],
            "language": "en",
        }

    async def test_partial_update_keeps_other_fields(self, async_client):
        response = await async_client.put(
            f"{API}/users/me/preferences", json={"language": "de"}
        )

        assert response.status_code == 200
        assert response.json()["language"] == "de"
        assert response.json()["countries"] == ["us"]

    async def test_invalid_update_rejected(self, async_client):
        response = await async_client.put(
            f"{API}/users/me/preferences", json={"categories": ["weather"]}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestHealth:
    async def test_health(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert "response_cache" in response.json()["components"]
