from __future__ import annotations

from typing import TYPE_CHECKING

from .api import ApiService, DemoApiService
from .repository import RepositoryImpl, UserRepository
from .view_model import UserViewModel


if TYPE_CHECKING:
    from litelocator import Registry


def setup_locator(registry: Registry) -> Registry:
    """Register the sample app's services. Call once at startup, before anything resolves.

    - `ApiService`: singleton, shared by every repository.
    - `UserRepository`: factory, a fresh `RepositoryImpl` per resolve.
    - `UserViewModel`: factory, one per screen.
    """
    registry.register_singleton(ApiService, DemoApiService)
    registry.register_factory(UserRepository, lambda: RepositoryImpl(registry.resolve(ApiService)))
    registry.register_factory(UserViewModel, lambda: UserViewModel(registry.resolve(UserRepository)))

    registry.verify(ApiService, UserRepository, UserViewModel)
    return registry
