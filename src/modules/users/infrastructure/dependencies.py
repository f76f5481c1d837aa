"""User module infrastructure providers."""

from src.modules.users.infrastructure.repositories import (
    InMemoryPreferencesRepository,
)

preferences_repository = InMemoryPreferencesRepository()


def get_preferences_repository() -> InMemoryPreferencesRepository:
    return preferences_repository
