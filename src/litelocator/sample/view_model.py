from __future__ import annotations

import logging
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from .repository import UserRepository


logger = logging.getLogger(__name__)


class UserViewModel:
    """Holds the user list shown by the users screen."""

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository
        self.users: list[str] = []
        self.is_loading = False
        self.error: Exception | None = None

    async def load_users(self) -> list[str]:
        self.is_loading = True
        self.error = None
        try:
            self.users = await self._repository.fetch_users()
        except Exception as exc:  # noqa: BLE001
            logger.exception("Failed to load users")
            self.error = exc
            self.users = []
        finally:
            self.is_loading = False
        return self.users
