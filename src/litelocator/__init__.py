"""Minimal service locator.

This package provides a small typed dependency registry for Python. Application
startup code registers zero-argument providers against a token (an interface,
a class or a string key); consumers resolve the token to get an instance.

Exports:
- `Registry`: The registry. Supports register/resolve/unregister/reset and an
  optional strict mode that rejects duplicate registrations.
- `Lifetime`: Enum for controlling object lifetimes (singleton or factory).
- `RegistryError`: Base class for registry errors.
- `NotRegisteredError`: Raised when a token has no registration.
- `DuplicateRegistrationError`: Raised by strict registries on re-registration.
"""

from ._registry import DuplicateRegistrationError, Lifetime, NotRegisteredError, Registry, RegistryError


__all__ = ["DuplicateRegistrationError", "Lifetime", "NotRegisteredError", "Registry", "RegistryError"]
