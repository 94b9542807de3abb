from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from .api import ApiService


class UserRepository(ABC):
    """Source of the user list.

    Registrations under this token are checked with isinstance, so fakes used in
    tests must subclass it or be built with `MagicMock(spec=UserRepository)`.
    """

    @abstractmethod
    async def fetch_users(self) -> list[str]: ...


class RepositoryImpl(UserRepository):
    def __init__(self, api: ApiService) -> None:
        self._api = api

    async def fetch_users(self) -> list[str]:
        return await self._api.fetch_users()
