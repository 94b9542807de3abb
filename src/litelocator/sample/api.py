from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable


DEFAULT_USERS = ("Alice", "Bob", "Charlie")


@runtime_checkable
class ApiService(Protocol):
    async def fetch_users(self) -> list[str]: ...


class DemoApiService:
    """Stands in for the remote API: waits `delay` seconds, then returns the configured users."""

    def __init__(self, users: tuple[str, ...] = DEFAULT_USERS, delay: float = 0.5) -> None:
        self._users = users
        self._delay = delay

    async def fetch_users(self) -> list[str]:
        await asyncio.sleep(self._delay)
        return list(self._users)
