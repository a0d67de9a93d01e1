"""State shared by the controller and action convention builders."""

from typing import Any

from apiversioning.domain import ApiVersion
from apiversioning.errors import InvalidArgumentError

__all__ = ["VersionDeclarations", "require_version"]


def require_version(version: Any, argument: str = "version") -> ApiVersion:
    """Return ``version`` unchanged, or raise if it is not an :class:`ApiVersion`.

    Raises:
        InvalidArgumentError: If ``version`` is ``None`` or of another type.
    """
    if version is None:
        raise InvalidArgumentError(f"Argument '{argument}' must not be None")
    if not isinstance(version, ApiVersion):
        raise InvalidArgumentError(
            f"Argument '{argument}' must be an ApiVersion, got {type(version).__name__}"
        )
    return version


class VersionDeclarations:
    """Accumulates the version facts declared for a controller or an action.

    Subclasses expose fluent methods that each add to exactly one of these
    sets, or set the neutral flag. Adding a version twice has no effect.
    """

    def __init__(self):
        self.version_neutral = False
        self.supported_versions: set[ApiVersion] = set()
        self.deprecated_versions: set[ApiVersion] = set()
        self.advertised_versions: set[ApiVersion] = set()
        self.deprecated_advertised_versions: set[ApiVersion] = set()

    def mark_version_neutral(self):
        """Declare that the unit matches any requested version."""
        self.version_neutral = True
        return self

    def declare_supported(self, version: ApiVersion):
        """Declare a version implemented by the unit."""
        self.supported_versions.add(require_version(version))
        return self

    def declare_deprecated(self, version: ApiVersion):
        """Declare a version implemented by the unit but deprecated."""
        self.deprecated_versions.add(require_version(version))
        return self

    def declare_advertised(self, version: ApiVersion):
        """Declare a version the unit advertises without implementing it."""
        self.advertised_versions.add(require_version(version))
        return self

    def declare_deprecated_advertised(self, version: ApiVersion):
        """Declare a deprecated version the unit advertises without implementing it."""
        self.deprecated_advertised_versions.add(require_version(version))
        return self
