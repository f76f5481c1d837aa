"""User preferences repository interface."""

from abc import ABC, abstractmethod

from src.modules.news.domain.entities import Preferences


class PreferencesRepository(ABC):
    """Port to the user store's preference records."""

    @abstractmethod
    async def get(self, user_id: str) -> Preferences:
        """Get preferences for a user; unknown users get the defaults."""
        pass

    @abstractmethod
    async def update(self, user_id: str, preferences: Preferences) -> Preferences:
        """Replace a user's preferences."""
        pass
