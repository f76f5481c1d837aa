"""News API routes."""

from typing import Any

from fastapi import APIRouter, Depends, Query

from src.core.application.security import get_current_user_id
from src.modules.news.application.dependencies import get_news_service
from src.modules.news.application.services import NewsService
from src.modules.news.interfaces.schemas import ArticlesResponse, SourcesResponse
from src.modules.users.application.dependencies import get_preferences_repository
from src.modules.users.domain.repository import PreferencesRepository

router = APIRouter(prefix="/news", tags=["news"])

# Pagination arrives as raw strings: the options layer clamps them, so a bad
# value falls back to the default instead of failing the request.
_PAGE = Query(None, description="页码（默认 1）")
_PAGE_SIZE = Query(None, alias="pageSize", description="每页数量（默认 20）")


@router.get(
    "/headlines",
    response_model=ArticlesResponse,
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    summary="获取头条新闻",
)
async def get_headlines(
    category: str | None = Query(None, description="分类"),
    country: str | None = Query(None, description="国家代码"),
    sources: str | None = Query(None, description="来源ID，逗号分隔"),
    q: str | None = Query(None, description="关键词"),
    page: str | None = _PAGE,
    page_size: str | None = _PAGE_SIZE,
    service: NewsService = Depends(get_news_service),
) -> dict[str, Any]:
    return await service.get_top_headlines(
        {
            "category": category,
            "country": country,
            "sources": sources,
            "q": q,
            "page": page,
            "pageSize": page_size,
        }
    )


@router.get(
    "/search",
    response_model=ArticlesResponse,
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    summary="搜索新闻",
)
async def search_news(
    q: str | None = Query(None, description="搜索关键词（必填）"),
    sources: str | None = Query(None),
    domains: str | None = Query(None),
    from_date: str | None = Query(None, alias="from"),
    to_date: str | None = Query(None, alias="to"),
    language: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    page: str | None = _PAGE,
    page_size: str | None = _PAGE_SIZE,
    service: NewsService = Depends(get_news_service),
) -> dict[str, Any]:
    return await service.search_everything(
        {
            "q": q,
            "sources": sources,
            "domains": domains,
            "from": from_date,
            "to": to_date,
            "language": language,
            "sortBy": sort_by,
            "page": page,
            "pageSize": page_size,
        }
    )


@router.get(
    "/sources",
    response_model=SourcesResponse,
    response_model_exclude_unset=True,
    summary="获取新闻来源",
)
async def get_sources(
    category: str | None = Query(None),
    language: str | None = Query(None),
    country: str | None = Query(None),
    service: NewsService = Depends(get_news_service),
) -> dict[str, Any]:
    return await service.get_sources(
        {"category": category, "language": language, "country": country}
    )


@router.get(
    "/personalized",
    response_model=ArticlesResponse,
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    summary="获取个性化新闻",
    description="按当前用户偏好的分类和国家聚合头条，去重后按发布时间倒序",
)
async def get_personalized(
    page: str | None = _PAGE,
    page_size: str | None = _PAGE_SIZE,
    user_id: str = Depends(get_current_user_id),
    preferences_repository: PreferencesRepository = Depends(
        get_preferences_repository
    ),
    service: NewsService = Depends(get_news_service),
) -> dict[str, Any]:
    preferences = await preferences_repository.get(user_id)
    return await service.get_personalized_news(
        preferences, {"page": page, "pageSize": page_size}
    )


@router.get(
    "/category/{category}",
    response_model=ArticlesResponse,
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    summary="按分类获取头条",
)
async def get_category_headlines(
    category: str,
    country: str | None = Query(None),
    page: str | None = _PAGE,
    page_size: str | None = _PAGE_SIZE,
    service: NewsService = Depends(get_news_service),
) -> dict[str, Any]:
    return await service.get_headlines_by_category(
        category, {"country": country, "page": page, "pageSize": page_size}
    )


@router.get(
    "/country/{country}",
    response_model=ArticlesResponse,
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    summary="按国家获取头条",
)
async def get_country_headlines(
    country: str,
    category: str | None = Query(None),
    page: str | None = _PAGE,
    page_size: str | None = _PAGE_SIZE,
    service: NewsService = Depends(get_news_service),
) -> dict[str, Any]:
    return await service.get_headlines_by_country(
        country, {"category": category, "page": page, "pageSize": page_size}
    )
