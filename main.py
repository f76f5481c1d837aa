"""newsLens Backend - 个性化新闻聚合服务入口。"""

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.routing import APIRoute
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.core.application import security as app_security
from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.logging import setup_logging
from src.core.infrastructure.security import jwt as infra_jwt
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
)
from src.core.interfaces.http.routers import api_router
from src.modules.news.application import dependencies as news_app_deps
from src.modules.news.infrastructure import dependencies as news_infra_deps
from src.modules.users.application import dependencies as users_app_deps
from src.modules.users.infrastructure import dependencies as users_infra_deps


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting newsLens backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    if not settings.news_api_configured:
        logger.warning("NEWS_API_KEY is not set; upstream calls will be rejected")

    yield

    logger.info("Shutting down newsLens backend...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "个性化新闻聚合服务 - 按用户偏好扇出请求、去重合并，并缓存上游响应\n\n"
        "个性化接口需要 **JWT Bearer** 认证。"
    ),
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[app_security.get_current_user_id] = (
    infra_jwt.get_current_user_id
)

app.dependency_overrides[news_app_deps.get_news_upstream] = (
    news_infra_deps.get_news_upstream
)
app.dependency_overrides[news_app_deps.get_cache_store] = (
    news_infra_deps.get_cache_store
)

app.dependency_overrides[users_app_deps.get_preferences_repository] = (
    users_infra_deps.get_preferences_repository
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# CORS middleware
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint.

    上游 API 不做主动探测（避免消耗配额），只报告配置与缓存状态。
    """
    news_configured = settings.news_api_configured
    return {
        "status": "healthy" if news_configured else "degraded",
        "environment": settings.ENVIRONMENT,
        "version": "0.1.0",
        "components": {
            "news_api": {
                "configured": news_configured,
                "base_url": settings.NEWS_API_BASE_URL,
            },
            "response_cache": {
                "entries": len(news_infra_deps.response_cache),
                "ttl_sec": settings.NEWS_CACHE_TTL_SEC,
            },
        },
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to newsLens API",
        "docs": f"{settings.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
