import asyncio
import logging
import unittest
from unittest.mock import AsyncMock, MagicMock

import pytest

from litelocator import DuplicateRegistrationError, Lifetime, NotRegisteredError, Registry
from litelocator.sample import (
    ApiService,
    DemoApiService,
    RepositoryImpl,
    UserRepository,
    UserViewModel,
    setup_locator,
)


class FakeApiService:
    async def fetch_users(self) -> list[str]:
        return ["MockUser1", "MockUser2"]


class TestRepositoryWithFakeApi(unittest.TestCase):
    reg: Registry

    def setUp(self):
        self.reg = Registry()
        self.reg.reset()
        self.reg.register(ApiService, FakeApiService, lifetime=Lifetime.SINGLETON)
        self.reg.register(
            UserRepository,
            lambda: RepositoryImpl(self.reg.resolve(ApiService)),
            lifetime=Lifetime.FACTORY,
        )

    def test_fetch_users_returns_mock_data(self):
        repository = self.reg.resolve(UserRepository)

        users = asyncio.run(repository.fetch_users())

        assert users == ["MockUser1", "MockUser2"]
        assert len(users) == 2

    def test_repositories_share_the_api_singleton(self):
        repo1 = self.reg.resolve(UserRepository)
        repo2 = self.reg.resolve(UserRepository)

        assert repo1 is not repo2
        assert repo1._api is repo2._api  # noqa: SLF001

    def test_reset_removes_sample_registrations(self):
        self.reg.reset()
        with pytest.raises(NotRegisteredError):
            self.reg.resolve(UserRepository)


class TestSetupLocator(unittest.TestCase):
    reg: Registry

    def setUp(self):
        self.reg = setup_locator(Registry())

    def test_registers_every_sample_service(self):
        assert ApiService in self.reg
        assert UserRepository in self.reg
        assert UserViewModel in self.reg

    def test_api_service_is_demo_singleton(self):
        api = self.reg.resolve(ApiService)
        assert isinstance(api, DemoApiService)
        assert self.reg.resolve(ApiService) is api

    def test_view_models_are_fresh_per_resolve(self):
        assert self.reg.resolve(UserViewModel) is not self.reg.resolve(UserViewModel)

    def test_test_setup_can_swap_in_a_fake(self):
        self.reg.register(ApiService, FakeApiService)

        view_model = self.reg.resolve(UserViewModel)
        users = asyncio.run(view_model.load_users())

        assert users == ["MockUser1", "MockUser2"]

    def test_repository_fake_must_subclass_or_spec_the_abc(self):
        class DuckTypedRepository:
            async def fetch_users(self) -> list[str]:
                return []

        self.reg.register(UserRepository, DuckTypedRepository, lifetime=Lifetime.FACTORY)
        with pytest.raises(TypeError):
            self.reg.resolve(UserRepository)

        spec_fake = MagicMock(spec=UserRepository)
        spec_fake.fetch_users = AsyncMock(return_value=["Spec"])
        self.reg.register_instance(UserRepository, spec_fake)

        view_model = self.reg.resolve(UserViewModel)
        assert asyncio.run(view_model.load_users()) == ["Spec"]

    def test_strict_registry_rejects_second_setup(self):
        reg = setup_locator(Registry(strict=True))
        with pytest.raises(DuplicateRegistrationError):
            setup_locator(reg)


class TestDemoApiService(unittest.TestCase):
    def test_returns_configured_users(self):
        api = DemoApiService(users=("Ann", "Ben"), delay=0)
        assert asyncio.run(api.fetch_users()) == ["Ann", "Ben"]

    def test_returns_a_new_list_each_call(self):
        api = DemoApiService(delay=0)
        first = asyncio.run(api.fetch_users())
        first.append("Mallory")
        assert "Mallory" not in asyncio.run(api.fetch_users())


class TestUserViewModel(unittest.TestCase):
    def test_load_users_fills_state(self):
        repository = MagicMock(spec=UserRepository)
        repository.fetch_users = AsyncMock(return_value=["A", "B"])
        view_model = UserViewModel(repository)

        users = asyncio.run(view_model.load_users())

        assert users == ["A", "B"]
        assert view_model.users == ["A", "B"]
        assert view_model.is_loading is False
        assert view_model.error is None
        repository.fetch_users.assert_awaited_once()

    def test_is_loading_while_fetching(self):
        seen = []

        class ObservingRepository(UserRepository):
            async def fetch_users(self) -> list[str]:
                seen.append(view_model.is_loading)
                return []

        view_model = UserViewModel(ObservingRepository())
        asyncio.run(view_model.load_users())

        assert seen == [True]
        assert view_model.is_loading is False

    def test_load_users_records_error(self):
        error = ConnectionError("offline")
        repository = MagicMock(spec=UserRepository)
        repository.fetch_users = AsyncMock(side_effect=error)
        view_model = UserViewModel(repository)
        view_model.users = ["stale"]

        with self.assertLogs("litelocator.sample.view_model", level=logging.ERROR):
            users = asyncio.run(view_model.load_users())

        assert users == []
        assert view_model.error is error
        assert view_model.is_loading is False
