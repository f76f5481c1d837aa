"""News facade service.

Composes parameters, consults the response cache and calls upstream on a miss.
Personalized requests go through the aggregator, whose headline sub-calls use
the same cached headlines path.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from src.core.config import settings
from src.core.infrastructure.logging import BusinessEvents
from src.modules.news.application.aggregator import PersonalizedNewsAggregator
from src.modules.news.application.composer import (
    compose_headlines,
    compose_search,
    compose_sources,
)
from src.modules.news.domain.cache import CacheKeys, CacheStore
from src.modules.news.domain.entities import (
    Category,
    Country,
    Preferences,
    parse_enum,
)
from src.modules.news.domain.options import (
    HeadlinesOptions,
    PersonalizedOptions,
    SearchOptions,
    SourcesOptions,
)
from src.modules.news.domain.ports import Endpoints, NewsUpstream

OptionsInput = Mapping[str, Any] | None


class NewsService:
    """新闻门面服务。

    四个公开操作：头条、搜索、来源、个性化。前三个走缓存，个性化结果本身不缓存。
    """

    def __init__(
        self,
        upstream: NewsUpstream,
        cache: CacheStore,
        *,
        cache_ttl_sec: float | None = None,
        aggregator: PersonalizedNewsAggregator | None = None,
    ):
        self.upstream = upstream
        self.cache = cache
        self.cache_ttl_sec = cache_ttl_sec or settings.NEWS_CACHE_TTL_SEC
        self.aggregator = aggregator or PersonalizedNewsAggregator(
            self.get_top_headlines
        )

    async def get_top_headlines(
        self, options: HeadlinesOptions | OptionsInput = None
    ) -> dict[str, Any]:
        opts = HeadlinesOptions.parse(options)
        return await self._cached_fetch(Endpoints.TOP_HEADLINES, compose_headlines(opts))

    async def search_everything(
        self, options: SearchOptions | OptionsInput = None
    ) -> dict[str, Any]:
        opts = SearchOptions.parse(options)
        return await self._cached_fetch(Endpoints.EVERYTHING, compose_search(opts))

    async def get_sources(
        self, options: SourcesOptions | OptionsInput = None
    ) -> dict[str, Any]:
        opts = SourcesOptions.parse(options)
        return await self._cached_fetch(Endpoints.SOURCES, compose_sources(opts))

    async def get_personalized_news(
        self,
        preferences: Preferences | Mapping[str, Any],
        options: PersonalizedOptions | OptionsInput = None,
    ) -> dict[str, Any]:
        prefs = Preferences.from_mapping(
            dict(preferences) if isinstance(preferences, Mapping) else preferences
        )
        opts = PersonalizedOptions.parse(options)
        return await self.aggregator.aggregate(prefs, opts)

    async def get_headlines_by_category(
        self, category: str, options: HeadlinesOptions | OptionsInput = None
    ) -> dict[str, Any]:
        """Headlines for one category; ``category`` overrides any option value."""
        parsed = parse_enum(Category, category, "category")
        opts = HeadlinesOptions.parse(options).model_copy(update={"category": parsed})
        return await self.get_top_headlines(opts)

    async def get_headlines_by_country(
        self, country: str, options: HeadlinesOptions | OptionsInput = None
    ) -> dict[str, Any]:
        """Headlines for one country; ``country`` overrides any option value."""
        parsed = parse_enum(Country, country, "country code")
        opts = HeadlinesOptions.parse(options).model_copy(update={"country": parsed})
        return await self.get_top_headlines(opts)

    async def _cached_fetch(
        self, endpoint: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        cache_key = CacheKeys.news(endpoint, params)
        now = self.cache.now()
        entry = self.cache.get(cache_key)

        if entry is not None and self.cache.is_valid(entry, self.cache_ttl_sec, now):
            BusinessEvents.news_cache_hit(
                endpoint=endpoint, cache_key=cache_key, age_sec=entry.age(now)
            )
            return entry.value

        BusinessEvents.news_cache_miss(
            endpoint=endpoint, cache_key=cache_key, stale=entry is not None
        )
        logger.debug(f"Cache miss for {endpoint}, fetching upstream")

        # Errors propagate and leave the cache untouched
        payload = await self.upstream.fetch(endpoint, params)
        self.cache.put(cache_key, payload)
        return payload
