from __future__ import annotations

import inspect
import typing
from typing import Generic, Protocol, cast


def is_protocol(tp: object) -> bool:
    """Detect whether 'tp' is a typing.Protocol subclass (safe)."""
    if not inspect.isclass(tp):
        return False
    if hasattr(typing, "is_protocol"):
        # https://docs.python.org/3/library/typing.html#typing.is_protocol
        return typing.is_protocol(tp)
    return issubclass(tp, cast("type", Protocol)) and bool(getattr(tp, "_is_protocol", False))


def is_runtime_checkable_protocol(tp: type) -> bool:
    if not is_protocol(tp):
        return False

    try:
        isinstance(None, tp)
    except TypeError:
        return False
    else:
        return True


def check_instance(token: object, instance: object) -> None:
    """Check that 'instance' satisfies a class token.

    - Non-type tokens (like strings): nothing to check.
    - Normal classes/ABCs: require isinstance(instance, token).
    - Runtime-checkable protocols: isinstance.
    - Other protocols: nominal via MRO, otherwise structural conformance.

    Raise TypeError on mismatch.
    """
    if not inspect.isclass(token):
        return

    if not is_protocol(token):
        if not isinstance(instance, token):
            msg = f"Resolved instance {type(instance).__name__} is not an instance of {token.__name__}"
            raise TypeError(msg)
        return

    if is_runtime_checkable_protocol(token):
        if not isinstance(instance, token):
            msg = f"Resolved instance {type(instance).__name__} does not implement runtime protocol {token.__name__}"
            raise TypeError(msg)
        return

    if token in type(instance).__mro__:
        return

    missing = missing_protocol_members(token, instance)
    if missing:
        msg = (
            f"Resolved instance {type(instance).__name__} does not conform to protocol "
            f"{token.__name__}: missing members: {', '.join(missing)}"
        )
        raise TypeError(msg)


def missing_protocol_members(proto_cls: type, instance: object) -> list[str]:
    """Best-effort structural conformance: public protocol methods must exist and be callable.

    Members declared on parent protocols count too.
    """
    missing: list[str] = []
    seen: set[str] = set()

    for base in proto_cls.__mro__:
        if base in (Protocol, Generic, object) or not is_protocol(base):
            continue

        for name, proto_attr in base.__dict__.items():
            if name in seen or name.startswith("_") or not inspect.isfunction(proto_attr):
                continue
            seen.add(name)

            impl_attr = getattr(instance, name, None)
            if impl_attr is None or not callable(impl_attr):
                missing.append(name)

    return missing
