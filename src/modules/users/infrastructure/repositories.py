"""In-process preferences store."""

from loguru import logger

from src.modules.news.domain.entities import Preferences
from src.modules.users.domain.repository import PreferencesRepository


class InMemoryPreferencesRepository(PreferencesRepository):
    """Preferences keyed by user id, held for the process lifetime."""

    def __init__(self, initial: dict[str, Preferences] | None = None):
        self._records: dict[str, Preferences] = dict(initial or {})

    async def get(self, user_id: str) -> Preferences:
        return self._records.get(user_id, Preferences())

    async def update(self, user_id: str, preferences: Preferences) -> Preferences:
        self._records[user_id] = preferences
        logger.info(f"Updated preferences for user {user_id}")
        return preferences
