"""Sample app wiring an API client, a user repository and a view model through a `Registry`."""

from .api import ApiService, DemoApiService
from .repository import RepositoryImpl, UserRepository
from .view_model import UserViewModel
from .wiring import setup_locator


__all__ = ["ApiService", "DemoApiService", "RepositoryImpl", "UserRepository", "UserViewModel", "setup_locator"]
