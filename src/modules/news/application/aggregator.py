"""Personalized news aggregation.

Fans headline requests out across the user's preferred category × country
combinations, then merges, deduplicates by URL, sorts by recency and slices
the requested page.
"""

import asyncio
import itertools
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from loguru import logger

from src.core.config import settings
from src.core.infrastructure.logging import BusinessEvents
from src.modules.news.domain.entities import Category, Country, Preferences
from src.modules.news.domain.options import HeadlinesOptions, PersonalizedOptions

HeadlinesFetcher = Callable[[HeadlinesOptions], Awaitable[dict[str, Any]]]

# Articles with missing or unparseable dates sort after every dated article
OLDEST = datetime.min.replace(tzinfo=UTC)


@dataclass(frozen=True)
class FanoutCombination:
    category: Category
    country: Country


def parse_published_at(value: Any) -> datetime:
    """Parse an ISO-8601 ``publishedAt`` value; anything else maps to OLDEST."""
    if not isinstance(value, str) or not value.strip():
        return OLDEST
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return OLDEST
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def dedupe_by_url(articles: Iterable[Any]) -> list[dict[str, Any]]:
    """Keep the first article for each URL, preserving order.

    Entries that are not objects or carry no URL are dropped.
    """
    seen_urls: set[str] = set()
    unique: list[dict[str, Any]] = []
    for article in articles:
        if not isinstance(article, dict):
            continue
        url = article.get("url")
        if not isinstance(url, str) or not url:
            continue
        if url in seen_urls:
            continue
        seen_urls.add(url)
        unique.append(article)
    return unique


def sort_by_recency(articles: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Most recent first; the sort is stable so ties keep merge order."""
    return sorted(
        articles,
        key=lambda article: parse_published_at(article.get("publishedAt")),
        reverse=True,
    )


class PersonalizedNewsAggregator:
    """个性化新闻聚合器。

    职责：
    - 根据偏好生成扇出组合（分类 × 国家，各取前若干项）
    - 并发请求头条，单个组合失败不影响整体
    - 合并、按 URL 去重、按发布时间倒序、分页
    """

    def __init__(
        self,
        fetch_headlines: HeadlinesFetcher,
        *,
        max_categories: int | None = None,
        max_countries: int | None = None,
        fanout_page_size: int | None = None,
        true_pagination: bool | None = None,
    ):
        self.fetch_headlines = fetch_headlines
        self.max_categories = max_categories or settings.PERSONALIZED_MAX_CATEGORIES
        self.max_countries = max_countries or settings.PERSONALIZED_MAX_COUNTRIES
        self.fanout_page_size = (
            fanout_page_size or settings.PERSONALIZED_FANOUT_PAGE_SIZE
        )
        self.true_pagination = (
            settings.PERSONALIZED_TRUE_PAGINATION
            if true_pagination is None
            else true_pagination
        )

    def plan(self, preferences: Preferences) -> list[FanoutCombination]:
        categories = preferences.categories[: self.max_categories]
        countries = preferences.countries[: self.max_countries]
        return [
            FanoutCombination(category=category, country=country)
            for category, country in itertools.product(categories, countries)
        ]

    async def aggregate(
        self, preferences: Preferences, options: PersonalizedOptions
    ) -> dict[str, Any]:
        """Run the fan-out and return ``{status, totalResults, articles}``."""
        combinations = self.plan(preferences)
        # Fan-out requests never inherit the caller's pagination
        results = await asyncio.gather(
            *(
                self.fetch_headlines(
                    HeadlinesOptions(
                        category=combo.category,
                        country=combo.country,
                        page=1,
                        page_size=self.fanout_page_size,
                    )
                )
                for combo in combinations
            ),
            return_exceptions=True,
        )

        merged: list[Any] = []
        failed = 0
        for combo, result in zip(combinations, results, strict=True):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                failed += 1
                logger.warning(
                    f"Personalized fan-out {combo.category.value}/{combo.country.value} "
                    f"failed: {result}"
                )
                BusinessEvents.fanout_combination_failed(
                    category=combo.category.value,
                    country=combo.country.value,
                    error=str(result),
                )
                continue
            articles = result.get("articles") if isinstance(result, dict) else None
            if isinstance(articles, list):
                merged.extend(articles)

        unique = sort_by_recency(dedupe_by_url(merged))
        page_articles = self._slice(unique, options)

        BusinessEvents.personalized_news_served(
            combinations=len(combinations),
            failed=failed,
            total_results=len(unique),
            returned=len(page_articles),
        )
        return {
            "status": "ok",
            "totalResults": len(unique),
            "articles": page_articles,
        }

    def _slice(
        self, articles: list[dict[str, Any]], options: PersonalizedOptions
    ) -> list[dict[str, Any]]:
        start = 0
        if self.true_pagination:
            start = (options.page - 1) * options.page_size
        return articles[start : start + options.page_size]
