"""
Resolution of accumulated declarations into immutable version profiles.

An action's profile is computed from its own declarations and those of its
controller:

- the action is version-neutral if either the action or the controller is;
- for supported, deprecated, advertised and deprecated-advertised versions,
  the action's own set is used when it declared any, otherwise the
  controller's set is inherited. Sets are never merged;
- mapped versions come from the action alone.

No consistency checks are made between categories: a version may be both
supported and deprecated. Resolution only reads builder state, so it may run
concurrently once configuration has finished.
"""

import logging
from typing import Any, FrozenSet, Hashable, Optional

from apiversioning.controller_builder import ControllerConventionBuilder
from apiversioning.declarations import require_version
from apiversioning.domain import ApiVersion, VersionProfile
from apiversioning.errors import InvalidStateError

__all__ = ["resolve_profile", "resolve_controller_profile", "resolve_profiles"]

logger = logging.getLogger(__name__)


def resolve_profile(
    controller: ControllerConventionBuilder,
    action_identity: Any,
    default_version: Optional[ApiVersion] = None,
) -> VersionProfile:
    """Compute the effective profile of one action.

    Args:
        controller: The builder of the controller owning the action.
        action_identity: The action's name, or the function implementing it.
        default_version: If given, a non-neutral action that ends up with no
            versions at all is treated as supporting this version.

    Returns:
        The resolved :class:`VersionProfile`.

    Raises:
        InvalidStateError: If the action was never registered with the controller.
    """
    action = controller.find_action(action_identity)
    if action is None:
        raise InvalidStateError(
            f"Action {action_identity!r} is not registered with controller {controller.identity!r}"
        )

    profile = _apply_default_version(
        VersionProfile(
            action.version_neutral or controller.version_neutral,
            frozenset(action.mapped_versions),
            _effective(action.supported_versions, controller.supported_versions),
            _effective(action.deprecated_versions, controller.deprecated_versions),
            _effective(action.advertised_versions, controller.advertised_versions),
            _effective(
                action.deprecated_advertised_versions,
                controller.deprecated_advertised_versions,
            ),
        ),
        default_version,
    )
    logger.debug("Resolved %s.%s to %s", controller.identity, action_identity, profile)
    return profile


def resolve_controller_profile(
    controller: ControllerConventionBuilder,
    default_version: Optional[ApiVersion] = None,
) -> VersionProfile:
    """Compute the profile declared for the controller as a whole."""
    return _apply_default_version(
        VersionProfile(
            controller.version_neutral,
            frozenset(),
            frozenset(controller.supported_versions),
            frozenset(controller.deprecated_versions),
            frozenset(controller.advertised_versions),
            frozenset(controller.deprecated_advertised_versions),
        ),
        default_version,
    )


def resolve_profiles(
    controller: ControllerConventionBuilder,
    default_version: Optional[ApiVersion] = None,
) -> dict[Hashable, VersionProfile]:
    """Resolve every action registered with ``controller``, keyed by action identity."""
    return {
        identity: resolve_profile(controller, identity, default_version)
        for identity in controller.action_identities()
    }


def _apply_default_version(
    profile: VersionProfile, default_version: Optional[ApiVersion]
) -> VersionProfile:
    if default_version is None:
        return profile
    require_version(default_version, "default_version")
    if profile.version_neutral or profile.declared_versions:
        return profile
    return VersionProfile(supported_versions=frozenset({default_version}))


def _effective(
    action_versions: set[ApiVersion], controller_versions: set[ApiVersion]
) -> FrozenSet[ApiVersion]:
    return frozenset(action_versions if action_versions else controller_versions)
