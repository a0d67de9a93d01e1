"""Registry of controller convention builders and the resolved profiles built from it."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, FrozenSet, Hashable, Mapping, Optional

from apiversioning.controller_builder import ControllerConventionBuilder, action_key
from apiversioning.domain import ApiVersion, VersionProfile
from apiversioning.errors import InvalidArgumentError, InvalidStateError
from apiversioning.resolver import resolve_controller_profile, resolve_profiles

__all__ = ["ApiVersionConventionBuilder", "ConventionProfiles"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConventionProfiles:
    """Resolved profiles of every registered controller and action.

    This is the read side handed to a dispatch layer once configuration has
    finished. It holds no reference to any builder, and its mappings are
    read-only views.

    Attributes:
        controller_profiles: Profile declared by each controller as a whole.
        action_profiles: Per controller, the resolved profile of each action.
    """

    controller_profiles: Mapping[Hashable, VersionProfile]
    action_profiles: Mapping[Hashable, Mapping[Hashable, VersionProfile]]

    def __post_init__(self):
        object.__setattr__(
            self, "controller_profiles", MappingProxyType(dict(self.controller_profiles))
        )
        object.__setattr__(
            self,
            "action_profiles",
            MappingProxyType(
                {
                    controller: MappingProxyType(dict(actions))
                    for controller, actions in self.action_profiles.items()
                }
            ),
        )

    @property
    def controller_identities(self) -> FrozenSet[Hashable]:
        return frozenset(self.controller_profiles)

    def controller_profile(self, controller: Hashable) -> VersionProfile:
        if controller not in self.controller_profiles:
            raise InvalidStateError(f"Controller {controller!r} is not registered")
        return self.controller_profiles[controller]

    def action_identities(self, controller: Hashable) -> FrozenSet[Hashable]:
        """Identities of the actions under ``controller``, for enumerating candidates."""
        return frozenset(self._actions_of(controller))

    def profile_for(self, controller: Hashable, action: Any) -> VersionProfile:
        """Return the resolved profile of an action.

        Raises:
            InvalidStateError: If the controller or the action is not registered.
        """
        actions = self._actions_of(controller)
        key = action_key(action)
        if key not in actions:
            raise InvalidStateError(
                f"Action {action!r} is not registered with controller {controller!r}"
            )
        return actions[key]

    def __contains__(self, item) -> bool:
        try:
            controller, action = item
            return (
                controller in self.action_profiles
                and action_key(action) in self.action_profiles[controller]
            )
        except (TypeError, ValueError):
            return False

    def _actions_of(self, controller: Hashable) -> Mapping[Hashable, VersionProfile]:
        if controller not in self.action_profiles:
            raise InvalidStateError(f"Controller {controller!r} is not registered")
        return self.action_profiles[controller]


class ApiVersionConventionBuilder:
    """Registry of controller convention builders, one per controller identity.

    Example:
        >>> conventions = ApiVersionConventionBuilder()
        >>> orders = conventions.controller(OrdersController)
        >>> orders.declare_supported(ApiVersion(1, 0))
        >>> orders.action(OrdersController.delete).mark_version_neutral()
        >>> profiles = conventions.build()
        >>> profiles.profile_for(OrdersController, "delete").version_neutral
        True
    """

    def __init__(self):
        self._controllers: dict[Hashable, ControllerConventionBuilder] = {}

    def controller(self, identity: Hashable) -> ControllerConventionBuilder:
        """Return the builder for a controller, creating it on first request.

        Raises:
            InvalidArgumentError: If ``identity`` is ``None``.
        """
        if identity is None:
            raise InvalidArgumentError("Argument 'identity' must not be None")
        builder = self._controllers.get(identity)
        if builder is None:
            logger.debug("Creating convention builder for controller %s", identity)
            builder = ControllerConventionBuilder(identity)
            self._controllers[identity] = builder
        return builder

    def has_controller(self, identity: Hashable) -> bool:
        return identity in self._controllers

    def controller_identities(self) -> FrozenSet[Hashable]:
        return frozenset(self._controllers)

    def build(self, default_version: Optional[ApiVersion] = None) -> ConventionProfiles:
        """Resolve every registered controller and action.

        Args:
            default_version: Version assumed by any controller or action that
                is not neutral and declares no versions at all.

        Returns:
            The resolved :class:`ConventionProfiles`.
        """
        profiles = ConventionProfiles(
            {
                identity: resolve_controller_profile(controller, default_version)
                for identity, controller in self._controllers.items()
            },
            {
                identity: resolve_profiles(controller, default_version)
                for identity, controller in self._controllers.items()
            },
        )
        logger.info(
            "Resolved version profiles for %d controllers and %d actions",
            len(profiles.controller_profiles),
            sum(len(actions) for actions in profiles.action_profiles.values()),
        )
        return profiles
