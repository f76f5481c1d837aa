"""API router configuration."""

from fastapi import APIRouter

from src.modules.news.interfaces.router import router as news_router
from src.modules.users.interfaces.router import router as users_router

api_router = APIRouter()

# News
api_router.include_router(news_router)

# User preferences
api_router.include_router(users_router)
