from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._validation import check_instance


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    T = TypeVar("T")

    Token = type[T] | str


class Lifetime(Enum):
    SINGLETON = "singleton"
    FACTORY = "factory"


class _Missing:
    def __repr__(self) -> str:
        return "<not built>"


_MISSING: Any = _Missing()


@dataclass
class Registration:
    provider: Callable[[], object] | None
    lifetime: Lifetime
    cached_instance: object = _MISSING  # cached singleton

    @property
    def is_built(self) -> bool:
        return self.cached_instance is not _MISSING


class RegistryError(RuntimeError):
    """Base exception raised for registry-related issues."""


class NotRegisteredError(RegistryError):
    """Raised when resolving (or strictly removing) a token that has no registration."""


class DuplicateRegistrationError(RegistryError):
    """Raised by a strict registry when a token is registered twice."""


def _describe(token: object) -> str:
    return getattr(token, "__qualname__", None) or repr(token)


class Registry:
    """Service locator registry.

    - register zero-argument providers for a token (a type or a string)
    - lifetimes: singleton / factory
    - resolve by token, reset everything or remove a single token.

    A permissive registry (the default) lets the last registration win; a strict
    one raises `DuplicateRegistrationError` instead.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self._registrations: dict[Any, Registration] = {}
        self._lock = threading.RLock()
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def register(
        self,
        token: Token[T],
        provider: Callable[[], T],
        *,
        lifetime: Lifetime = Lifetime.SINGLETON,
        eager: bool = False,
    ) -> None:
        """Register a zero-argument provider for a token.

        Example:
          registry.register(ApiService, DemoApiService)
          registry.register(UserRepository, lambda: RepositoryImpl(registry.resolve(ApiService)),
                            lifetime=Lifetime.FACTORY)

        With `eager=True` a singleton is built right away instead of on first resolve.
        """
        if not callable(provider):
            msg = f"Provider for {_describe(token)} must be callable, got {type(provider).__name__}."
            raise TypeError(msg)

        if eager and lifetime is not Lifetime.SINGLETON:
            msg = "Only singleton registrations can be built eagerly."
            raise ValueError(msg)

        with self._lock:
            self._store(token, Registration(provider=provider, lifetime=lifetime))
            if eager:
                self.resolve(token)

    def register_singleton(self, token: Token[T], provider: Callable[[], T], *, eager: bool = False) -> None:
        self.register(token, provider, lifetime=Lifetime.SINGLETON, eager=eager)

    def register_factory(self, token: Token[T], provider: Callable[[], T]) -> None:
        self.register(token, provider, lifetime=Lifetime.FACTORY)

    def register_instance(self, token: Token[T], instance: T) -> None:
        """Register a pre-built instance (always singleton)."""
        check_instance(token, instance)

        with self._lock:
            self._store(
                token,
                Registration(provider=None, lifetime=Lifetime.SINGLETON, cached_instance=instance),
            )

    def _store(self, token: object, registration: Registration) -> None:
        if token in self._registrations:
            if self._strict:
                msg = f"Token {_describe(token)} is already registered. Unregister or reset it first."
                raise DuplicateRegistrationError(msg)
            logger.debug("Replacing registration for %s", _describe(token))

        self._registrations[token] = registration
        logger.debug("Registered %s (%s)", _describe(token), registration.lifetime.value)

    @overload
    def resolve(self, token: type[T]) -> T: ...

    @overload
    def resolve(self, token: str) -> object: ...

    def resolve(self, token: Token[T]) -> object:
        """Resolve the token to an instance.

        - singleton: build on first use, then return the cached instance.
        - factory: call the provider every time.

        Provider errors propagate unchanged and a failed singleton is never cached,
        so the next resolve tries again.
        """
        with self._lock:
            reg = self._registrations.get(token)
            if reg is None:
                msg = f"No registration found for token: {_describe(token)}"
                raise NotRegisteredError(msg)

            if reg.lifetime is Lifetime.SINGLETON and reg.is_built:
                return reg.cached_instance

            # pre-built instances are always cached
            assert reg.provider is not None  # noqa: S101
            instance = reg.provider()
            check_instance(token, instance)

            if reg.lifetime is Lifetime.SINGLETON:
                # a provider may have replaced its own registration while running
                if self._registrations.get(token) is reg:
                    reg.cached_instance = instance
                logger.debug("Built singleton %s", _describe(token))

            return instance

    def unregister(self, token: Token[T]) -> None:
        """Remove a single registration together with its cached instance."""
        with self._lock:
            if self._registrations.pop(token, None) is None:
                if self._strict:
                    msg = f"Cannot unregister {_describe(token)}: no registration found"
                    raise NotRegisteredError(msg)
                return
            logger.debug("Unregistered %s", _describe(token))

    def reset_instance(self, token: Token[T]) -> None:
        """Drop a cached singleton but keep its provider, so the next resolve rebuilds it."""
        with self._lock:
            reg = self._registrations.get(token)
            if reg is None:
                msg = f"No registration found for token: {_describe(token)}"
                raise NotRegisteredError(msg)
            if reg.provider is None:
                msg = f"Token {_describe(token)} holds a pre-built instance and cannot be rebuilt"
                raise RegistryError(msg)
            reg.cached_instance = _MISSING

    def reset(self) -> None:
        """Discard every registration and cached instance."""
        with self._lock:
            count = len(self._registrations)
            self._registrations.clear()
        logger.debug("Registry reset (%d registrations discarded)", count)

    def is_registered(self, token: object) -> bool:
        with self._lock:
            return token in self._registrations

    def verify(self, *tokens: object) -> None:
        """Check that every token is registered before anything is resolved.

        Raises `NotRegisteredError` listing all missing tokens.
        """
        with self._lock:
            missing = [_describe(t) for t in tokens if t not in self._registrations]
        if missing:
            msg = f"Missing registrations: {', '.join(missing)}"
            raise NotRegisteredError(msg)

    def __contains__(self, token: object) -> bool:
        return self.is_registered(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)

    def __iter__(self) -> Iterator[Any]:
        with self._lock:
            return iter(list(self._registrations))
