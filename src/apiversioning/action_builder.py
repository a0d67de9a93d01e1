"""Convention builder for a single controller action."""

from typing import TYPE_CHECKING, Hashable

from apiversioning.declarations import VersionDeclarations, require_version
from apiversioning.domain import ApiVersion

if TYPE_CHECKING:
    from apiversioning.controller_builder import ControllerConventionBuilder

__all__ = ["ActionConventionBuilder"]


class ActionConventionBuilder(VersionDeclarations):
    """Collects the version declarations of one action.

    Instances are created and owned by a
    :class:`~apiversioning.controller_builder.ControllerConventionBuilder`;
    use :meth:`ControllerConventionBuilder.get_or_create_action` rather than
    constructing one directly.

    Example:
        >>> controller.action("put").declare_supported(v2).map_to_version(v2)
    """

    def __init__(self, controller: "ControllerConventionBuilder"):
        super().__init__()
        self._controller = controller
        self.mapped_versions: set[ApiVersion] = set()

    @property
    def controller(self) -> "ControllerConventionBuilder":
        return self._controller

    def action(self, identity: Hashable) -> "ActionConventionBuilder":
        """Get or create the builder of a sibling action on the same controller."""
        return self._controller.get_or_create_action(identity)

    def map_to_version(self, version: ApiVersion) -> "ActionConventionBuilder":
        """Pin the action to ``version`` for direct route selection."""
        self.mapped_versions.add(require_version(version))
        return self
