"""Adapters feeding discovered controllers and actions into the convention builders."""

import inspect
import logging
from typing import Any, Hashable, Iterable, Union

from apiversioning.action_builder import ActionConventionBuilder
from apiversioning.attributes import Declarations, declarations_of
from apiversioning.controller_builder import ControllerConventionBuilder
from apiversioning.conventions import ApiVersionConventionBuilder
from apiversioning.errors import InvalidArgumentError

__all__ = ["seed", "apply_declarations", "discover", "action_functions"]

logger = logging.getLogger(__name__)


def seed(
    conventions: ApiVersionConventionBuilder, pairs: Iterable[tuple[Hashable, Any]]
) -> ApiVersionConventionBuilder:
    """Register every ``(controller, action)`` pair with ``conventions``.

    Existing builders, and whatever was already declared on them, are kept.
    """
    for controller, action in pairs:
        conventions.controller(controller).get_or_create_action(action)
    return conventions


def action_functions(controller_cls: type) -> dict[str, Any]:
    """Public functions defined directly on ``controller_cls``, keyed by name."""
    return {
        name: member
        for name, member in vars(controller_cls).items()
        if inspect.isfunction(member) and not name.startswith("_")
    }


def apply_declarations(
    conventions: ApiVersionConventionBuilder, controller_cls: type
) -> ControllerConventionBuilder:
    """Translate the decorator declarations of a controller class into builder calls.

    The class's own declarations are applied to its controller builder, and
    each public function on the class is registered as an action carrying its
    declarations.

    Raises:
        InvalidArgumentError: If ``controller_cls`` is not a class.
    """
    if not inspect.isclass(controller_cls):
        raise InvalidArgumentError(f"{controller_cls!r} is not a class")

    controller = conventions.controller(controller_cls)
    _apply(controller, declarations_of(controller_cls))

    for name, function in action_functions(controller_cls).items():
        action = controller.get_or_create_action(name)
        declarations = declarations_of(function)
        _apply(action, declarations)
        for version in declarations.mapped:
            action.map_to_version(version)

    logger.debug(
        "Applied declarations of %s with actions %s",
        controller_cls.__name__,
        sorted(map(str, controller.action_identities())),
    )
    return controller


def discover(
    conventions: ApiVersionConventionBuilder, *controller_classes: type
) -> ApiVersionConventionBuilder:
    for controller_cls in controller_classes:
        apply_declarations(conventions, controller_cls)
    return conventions


def _apply(
    builder: Union[ControllerConventionBuilder, ActionConventionBuilder],
    declarations: Declarations,
):
    if declarations.version_neutral:
        builder.mark_version_neutral()
    for version in declarations.supported:
        builder.declare_supported(version)
    for version in declarations.deprecated:
        builder.declare_deprecated(version)
    for version in declarations.advertised:
        builder.declare_advertised(version)
    for version in declarations.deprecated_advertised:
        builder.declare_deprecated_advertised(version)
