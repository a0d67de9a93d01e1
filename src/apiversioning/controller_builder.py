"""Convention builder for a controller and the registry of its actions."""

import inspect
import logging
from typing import Any, FrozenSet, Hashable

from apiversioning.action_builder import ActionConventionBuilder
from apiversioning.declarations import VersionDeclarations
from apiversioning.errors import InvalidArgumentError

__all__ = ["ControllerConventionBuilder", "action_key"]

logger = logging.getLogger(__name__)


def action_key(identity: Any) -> Hashable:
    """Normalise an action identity to the key actions are registered under.

    Functions and methods are keyed by their name, so an action can be
    referred to either by the function defining it or by its name.

    Example:
        >>> action_key(OrdersController.get)  # Returns "get"
        >>> action_key("get")                 # Returns "get"
    """
    if identity is None:
        raise InvalidArgumentError("Argument 'identity' must not be None")
    if inspect.isroutine(identity):
        return identity.__name__
    try:
        hash(identity)
    except TypeError as e:
        raise InvalidArgumentError(
            f"Action identity {identity!r} is not hashable"
        ) from e
    return identity


class ControllerConventionBuilder(VersionDeclarations):
    """Collects controller-wide version declarations and owns the builders of its actions.

    Declarations made here apply to every action that does not declare the
    same kind of fact itself. Mapped versions only exist on actions.

    Builders are meant to be configured from a single thread during startup;
    :meth:`get_or_create_action` is not synchronised.

    Attributes:
        identity: The controller this builder configures, typically its class.
    """

    def __init__(self, identity: Hashable):
        super().__init__()
        if identity is None:
            raise InvalidArgumentError("Argument 'identity' must not be None")
        self.identity = identity
        self._actions: dict[Hashable, ActionConventionBuilder] = {}

    def get_or_create_action(self, identity: Any) -> ActionConventionBuilder:
        """Return the builder for an action, creating it on first request.

        Args:
            identity: The action's name, or the function implementing it.

        Returns:
            The same :class:`ActionConventionBuilder` for every call with an
            equal identity.

        Raises:
            InvalidArgumentError: If ``identity`` is ``None`` or unhashable.
        """
        key = action_key(identity)
        builder = self._actions.get(key)
        if builder is None:
            logger.debug("Creating convention builder for action %s of %s", key, self.identity)
            builder = ActionConventionBuilder(self)
            self._actions[key] = builder
        return builder

    def action(self, identity: Any) -> ActionConventionBuilder:
        return self.get_or_create_action(identity)

    def find_action(self, identity: Any):
        """Return the builder registered for ``identity``, or ``None``."""
        return self._actions.get(action_key(identity))

    def has_action(self, identity: Any) -> bool:
        return action_key(identity) in self._actions

    def action_identities(self) -> FrozenSet[Hashable]:
        return frozenset(self._actions)

    def __repr__(self):
        return f"ControllerConventionBuilder({self.identity!r}, actions={sorted(map(str, self._actions))})"
