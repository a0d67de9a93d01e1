"""API version conventions for HTTP controllers and their actions.

Service authors declare which API versions a controller and each of its
actions support, deprecate, advertise or are mapped to. Declarations are
accumulated by fluent convention builders and resolved once, at startup, into
immutable per-action version profiles that a request dispatcher can consult.

Resolution rules:
    - An action is version-neutral if either it or its controller is
    - An action's own supported, deprecated, advertised and deprecated-advertised
      versions replace the controller's; when it declares none, it inherits them
    - Mapped versions are declared on actions only

Basic Usage:
    >>> from apiversioning.conventions import ApiVersionConventionBuilder
    >>> from apiversioning.domain import ApiVersion
    >>>
    >>> conventions = ApiVersionConventionBuilder()
    >>> orders = conventions.controller("orders")
    >>> orders.declare_supported(ApiVersion(1, 0)).declare_supported(ApiVersion(2, 0))
    >>> orders.action("put").declare_supported(ApiVersion(2, 0)).map_to_version(ApiVersion(2, 0))
    >>> orders.action("delete").mark_version_neutral()
    >>>
    >>> profiles = conventions.build()
    >>> profiles.profile_for("orders", "put").mapped_versions
    frozenset({ApiVersion(major=2, minor=0, status=None, group_version=None)})

The package consists of these modules:
    - domain: ApiVersion and VersionProfile value types
    - declarations: State shared by the controller and action builders
    - action_builder: Per-action convention builder
    - controller_builder: Per-controller convention builder and action registry
    - resolver: Resolution of builders into version profiles
    - conventions: Controller registry and the resolved profiles read side
    - attributes: Decorators declaring versions on classes and functions
    - discovery: Adapters applying discovered controllers to the builders
    - errors: Package-specific exceptions
"""
