"""Value types shared by the convention builders and the profile resolver."""

import re
from dataclasses import dataclass, field
from datetime import date
from functools import total_ordering
from typing import FrozenSet, Optional

from apiversioning.errors import InvalidArgumentError

__all__ = ["ApiVersion", "VersionProfile"]


_VERSION_PATTERN = re.compile(
    r"^(?P<group>\d{4}-\d{2}-\d{2})?"
    r"(?:(?(group)\.)(?P<major>\d+)(?:\.(?P<minor>\d+))?)?"
    r"(?:-(?P<status>[A-Za-z0-9]+))?$"
)
_STATUS_PATTERN = re.compile(r"^[A-Za-z0-9]+$")


@total_ordering
@dataclass(frozen=True, eq=False)
class ApiVersion:
    """An API version identifier.

    A version is made up of an optional group version (a date), an optional
    major and minor version number and an optional status label such as
    ``beta``. At least one of the group version or the major version must be
    present.

    Versions compare by value: an unset minor version equals ``0`` and status
    labels are compared case-insensitively. Within the same numeric version,
    a version carrying a status sorts before the release without one.

    Attributes:
        major: The major version number.
        minor: The minor version number; requires a major version.
        status: An alphanumeric status label.
        group_version: The date of the version group.

    Example:
        >>> ApiVersion(1, 0) == ApiVersion.parse("1.0")
        True
        >>> ApiVersion.parse("2.0-beta") < ApiVersion(2, 0)
        True
    """

    major: Optional[int] = None
    minor: Optional[int] = None
    status: Optional[str] = None
    group_version: Optional[date] = None

    def __post_init__(self):
        if self.group_version is None and self.major is None:
            raise InvalidArgumentError(
                "An API version requires a group version or a major version"
            )
        if self.minor is not None and self.major is None:
            raise InvalidArgumentError(
                f"Minor version {self.minor} given without a major version"
            )
        for name, number in (("major", self.major), ("minor", self.minor)):
            if number is None:
                continue
            if not isinstance(number, int) or isinstance(number, bool) or number < 0:
                raise InvalidArgumentError(
                    f"The {name} version must be a non-negative integer, got {number!r}"
                )
        if self.status is not None and (
            not isinstance(self.status, str) or not _STATUS_PATTERN.match(self.status)
        ):
            raise InvalidArgumentError(
                f"The version status must be alphanumeric, got {self.status!r}"
            )
        if self.group_version is not None and not isinstance(self.group_version, date):
            raise InvalidArgumentError(
                f"The group version must be a date, got {self.group_version!r}"
            )

    @staticmethod
    def parse(text: str) -> "ApiVersion":
        """Parse the textual form of a version.

        Accepted forms are ``major[.minor][-status]``, ``YYYY-MM-DD[-status]``
        and ``YYYY-MM-DD.major[.minor][-status]``.

        Raises:
            InvalidArgumentError: If the text is not a well-formed version.
        """
        if not isinstance(text, str):
            raise InvalidArgumentError(f"Cannot parse {text!r} as an API version")

        match = _VERSION_PATTERN.match(text.strip())
        if not match or not (match["group"] or match["major"]):
            raise InvalidArgumentError(f"'{text}' is not a valid API version")

        group_version = None
        if match["group"]:
            try:
                group_version = date.fromisoformat(match["group"])
            except ValueError as e:
                raise InvalidArgumentError(
                    f"'{text}' has an invalid group version"
                ) from e

        return ApiVersion(
            int(match["major"]) if match["major"] else None,
            int(match["minor"]) if match["minor"] else None,
            match["status"],
            group_version,
        )

    def _equality_key(self):
        return (
            self.group_version,
            self.major or 0,
            self.minor or 0,
            self.status.casefold() if self.status else None,
        )

    def _sort_key(self):
        return (
            self.group_version is not None,
            self.group_version or date.min,
            self.major or 0,
            self.minor or 0,
            self.status is None,
            self.status.casefold() if self.status else "",
        )

    def __eq__(self, other):
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self._equality_key() == other._equality_key()

    def __lt__(self, other):
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self):
        return hash(self._equality_key())

    def __str__(self):
        text = self.group_version.isoformat() if self.group_version else ""
        if self.major is not None:
            if text:
                text += "."
            text += str(self.major)
            if self.minor is not None:
                text += f".{self.minor}"
        if self.status:
            text += f"-{self.status}"
        return text


@dataclass(frozen=True)
class VersionProfile:
    """The resolved version declarations of a single action or controller.

    When ``version_neutral`` is set the dispatch layer must treat the unit as
    matching any requested version; the remaining sets are kept as declared.
    """

    version_neutral: bool = False
    mapped_versions: FrozenSet[ApiVersion] = field(default_factory=frozenset)
    supported_versions: FrozenSet[ApiVersion] = field(default_factory=frozenset)
    deprecated_versions: FrozenSet[ApiVersion] = field(default_factory=frozenset)
    advertised_versions: FrozenSet[ApiVersion] = field(default_factory=frozenset)
    deprecated_advertised_versions: FrozenSet[ApiVersion] = field(
        default_factory=frozenset
    )

    @property
    def implemented_versions(self) -> FrozenSet[ApiVersion]:
        """Versions directly implemented, whether deprecated or not."""
        return self.supported_versions | self.deprecated_versions

    @property
    def declared_versions(self) -> FrozenSet[ApiVersion]:
        return (
            self.mapped_versions
            | self.implemented_versions
            | self.advertised_versions
            | self.deprecated_advertised_versions
        )

    def is_mapped_to(self, version: ApiVersion) -> bool:
        return version in self.mapped_versions
