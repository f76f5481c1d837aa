"""User preference routes."""

from fastapi import APIRouter, Depends

from src.core.application.security import get_current_user_id
from src.modules.news.domain.entities import Preferences
from src.modules.users.application.dependencies import get_preferences_repository
from src.modules.users.domain.repository import PreferencesRepository
from src.modules.users.interfaces.schemas import (
    PreferencesResponse,
    UpdatePreferencesRequest,
)

router = APIRouter(prefix="/users", tags=["users"])


def _to_preferences_response(preferences: Preferences) -> PreferencesResponse:
    return PreferencesResponse.model_validate(preferences.to_dict())


@router.get(
    "/me/preferences",
    response_model=PreferencesResponse,
    summary="获取我的新闻偏好",
)
async def get_my_preferences(
    user_id: str = Depends(get_current_user_id),
    repository: PreferencesRepository = Depends(get_preferences_repository),
) -> PreferencesResponse:
    return _to_preferences_response(await repository.get(user_id))


@router.put(
    "/me/preferences",
    response_model=PreferencesResponse,
    summary="更新我的新闻偏好",
)
async def update_my_preferences(
    request: UpdatePreferencesRequest,
    user_id: str = Depends(get_current_user_id),
    repository: PreferencesRepository = Depends(get_preferences_repository),
) -> PreferencesResponse:
    current = await repository.get(user_id)
    updated = Preferences.from_values(
        categories=(
            request.categories
            if request.categories is not None
            else current.categories
        ),
        countries=(
            request.countries if request.countries is not None else current.countries
        ),
        language=request.language if request.language is not None else current.language,
    )
    return _to_preferences_response(await repository.update(user_id, updated))
