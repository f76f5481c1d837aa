"""Application-level security dependencies.

Defines auth dependencies without importing infrastructure.
The actual implementation is injected via FastAPI dependency_overrides in main.py.
"""

from typing import NoReturn


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_current_user_id() -> str:
    """Get the current authenticated user ID.

    Overridden in main.py with the JWT bearer implementation.
    """
    _missing_dependency("get_current_user_id")
