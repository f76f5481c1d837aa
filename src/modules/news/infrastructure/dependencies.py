"""News module infrastructure providers.

The upstream client and the response cache are process-wide: the credential
is read once at startup and cached entries live as long as the process.
"""

from src.modules.news.infrastructure.cache import InMemoryCacheStore
from src.modules.news.infrastructure.upstream import NewsApiClient

news_api_client = NewsApiClient()
response_cache = InMemoryCacheStore()


def get_news_upstream() -> NewsApiClient:
    return news_api_client


def get_cache_store() -> InMemoryCacheStore:
    return response_cache
