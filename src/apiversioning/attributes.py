"""Decorators declaring API versions directly on controller classes and action functions.

The decorators only record declarations as metadata on the decorated object;
:mod:`apiversioning.discovery` translates that metadata into calls against the
convention builders.

Example:
    >>> @api_version("1.0")
    ... @api_version("2.0")
    ... @advertises_api_version("0.9", deprecated=True)
    ... class OrdersController:
    ...     @map_to_api_version("2.0")
    ...     def put(self, order_id): ...
    ...
    ...     @api_version_neutral
    ...     def delete(self, order_id): ...
"""

import inspect
from dataclasses import dataclass, replace
from typing import Any, Callable, Union

from apiversioning.domain import ApiVersion
from apiversioning.errors import InvalidArgumentError

__all__ = [
    "Declarations",
    "api_version",
    "advertises_api_version",
    "map_to_api_version",
    "api_version_neutral",
    "declarations_of",
]

_METADATA_ATTRIBUTE = "__api_version_declarations__"

VersionLike = Union[ApiVersion, str]


@dataclass(frozen=True)
class Declarations:
    """Versions declared on one class or function through decorators."""

    version_neutral: bool = False
    supported: tuple[ApiVersion, ...] = ()
    deprecated: tuple[ApiVersion, ...] = ()
    advertised: tuple[ApiVersion, ...] = ()
    deprecated_advertised: tuple[ApiVersion, ...] = ()
    mapped: tuple[ApiVersion, ...] = ()


def declarations_of(target: Any) -> Declarations:
    """Return the declarations recorded on ``target``.

    Only declarations made on ``target`` itself are returned; a subclass does
    not inherit the declarations of its base classes.
    """
    return getattr(target, "__dict__", {}).get(_METADATA_ATTRIBUTE, Declarations())


def _to_version(version: VersionLike) -> ApiVersion:
    if isinstance(version, ApiVersion):
        return version
    if isinstance(version, str):
        return ApiVersion.parse(version)
    raise InvalidArgumentError(
        f"Expected an ApiVersion or version text, got {version!r}"
    )


def _declare(target: Any, **changes) -> Any:
    if not (inspect.isclass(target) or inspect.isfunction(target)):
        raise InvalidArgumentError(f"{target!r} is not a class or function")

    current = declarations_of(target)
    updated = replace(
        current,
        **{
            name: value if isinstance(value, bool) else getattr(current, name) + value
            for name, value in changes.items()
        },
    )
    setattr(target, _METADATA_ATTRIBUTE, updated)
    return target


def api_version(version: VersionLike, deprecated: bool = False) -> Callable:
    """Declare a version implemented by the decorated controller or action."""
    resolved = _to_version(version)

    def decorator(target):
        if deprecated:
            return _declare(target, deprecated=(resolved,))
        return _declare(target, supported=(resolved,))

    return decorator


def advertises_api_version(version: VersionLike, deprecated: bool = False) -> Callable:
    """Declare a version advertised, but not implemented, by the decorated target."""
    resolved = _to_version(version)

    def decorator(target):
        if deprecated:
            return _declare(target, deprecated_advertised=(resolved,))
        return _declare(target, advertised=(resolved,))

    return decorator


def map_to_api_version(version: VersionLike) -> Callable:
    """Pin the decorated action function to ``version``."""
    resolved = _to_version(version)

    def decorator(target):
        if not inspect.isfunction(target):
            raise InvalidArgumentError(
                f"map_to_api_version applies to action functions, not {target!r}"
            )
        return _declare(target, mapped=(resolved,))

    return decorator


def api_version_neutral(target: Any) -> Any:
    """Mark the decorated controller or action as matching any requested version."""
    return _declare(target, version_neutral=True)
