"""User module application dependencies.

Defines dependency providers for interfaces layer without importing infrastructure.
"""

from typing import NoReturn

from src.modules.users.domain.repository import PreferencesRepository


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_preferences_repository() -> PreferencesRepository:
    _missing_dependency("PreferencesRepository")
