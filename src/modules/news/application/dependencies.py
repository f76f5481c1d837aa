"""News module application dependencies.

Ports are stubs here; main.py overrides them with infrastructure providers.
"""

from typing import NoReturn

from fastapi import Depends

from src.modules.news.application.services import NewsService
from src.modules.news.domain.cache import CacheStore
from src.modules.news.domain.ports import NewsUpstream


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_news_upstream() -> NewsUpstream:
    _missing_dependency("NewsUpstream")


async def get_cache_store() -> CacheStore:
    _missing_dependency("CacheStore")


async def get_news_service(
    upstream: NewsUpstream = Depends(get_news_upstream),
    cache: CacheStore = Depends(get_cache_store),
) -> NewsService:
    return NewsService(upstream, cache)
