import pytest

from apiversioning.controller_builder import ControllerConventionBuilder
from apiversioning.domain import ApiVersion, VersionProfile
from apiversioning.errors import InvalidArgumentError, InvalidStateError
from apiversioning.resolver import (
    resolve_controller_profile,
    resolve_profile,
    resolve_profiles,
)

V1 = ApiVersion(1, 0)
V2 = ApiVersion(2, 0)
V3 = ApiVersion(3, 0)


@pytest.fixture
def controller():
    return ControllerConventionBuilder("orders").declare_supported(V1).declare_supported(V2)


def test_action_without_declarations_inherits_from_controller(controller):
    controller.action("a")

    profile = resolve_profile(controller, "a")

    assert profile == VersionProfile(supported_versions=frozenset({V1, V2}))


def test_action_declarations_replace_controller_declarations(controller):
    controller.action("c").declare_supported(V3)

    assert resolve_profile(controller, "c").supported_versions == {V3}


def test_each_category_is_inherited_independently(controller):
    controller.declare_deprecated(ApiVersion(0, 9)).declare_advertised(V3)
    controller.action("a").declare_advertised(ApiVersion(4, 0))

    profile = resolve_profile(controller, "a")

    assert profile.supported_versions == {V1, V2}
    assert profile.deprecated_versions == {ApiVersion(0, 9)}
    assert profile.advertised_versions == {ApiVersion(4, 0)}
    assert profile.deprecated_advertised_versions == frozenset()


@pytest.mark.parametrize("neutral_controller, neutral_action", [(True, False), (False, True), (True, True)])
def test_version_neutrality_is_absorbing(controller, neutral_controller, neutral_action):
    action = controller.action("b").declare_supported(V3).map_to_version(V3)
    if neutral_controller:
        controller.mark_version_neutral()
    if neutral_action:
        action.mark_version_neutral()

    profile = resolve_profile(controller, "b")

    assert profile.version_neutral
    assert profile.supported_versions == {V3}
    assert profile.mapped_versions == {V3}


def test_mapped_versions_are_action_local(controller):
    controller.action("a").map_to_version(V2)
    controller.action("b")

    assert resolve_profile(controller, "a").mapped_versions == {V2}
    assert resolve_profile(controller, "b").mapped_versions == frozenset()


def test_supported_and_deprecated_may_overlap():
    controller = ControllerConventionBuilder("orders")
    controller.action("a").declare_supported(V1).declare_deprecated(V1)

    profile = resolve_profile(controller, "a")

    assert profile.supported_versions == {V1}
    assert profile.deprecated_versions == {V1}


def test_resolution_is_repeatable(controller):
    controller.action("a").declare_deprecated(V1).map_to_version(V2)

    assert resolve_profile(controller, "a") == resolve_profile(controller, "a")


def test_resolution_snapshots_builder_state(controller):
    action = controller.action("a")
    profile = resolve_profile(controller, "a")

    action.declare_supported(V3)

    assert profile.supported_versions == {V1, V2}


def test_unregistered_action_raises(controller):
    with pytest.raises(InvalidStateError, match="'missing' is not registered"):
        resolve_profile(controller, "missing")


def test_declared_version_counted_once(controller):
    action = controller.action("a")
    for _ in range(3):
        action.declare_supported(V3)

    assert resolve_profile(controller, "a").supported_versions == frozenset({V3})


def test_end_to_end():
    controller = ControllerConventionBuilder("orders").declare_supported(V1).declare_supported(V2)
    controller.action("a")
    controller.action("b").mark_version_neutral()
    controller.action("c").declare_supported(V3).map_to_version(V3)

    profiles = resolve_profiles(controller)

    assert profiles["a"].supported_versions == {V1, V2}
    assert not profiles["a"].version_neutral
    assert profiles["b"].version_neutral
    assert profiles["c"].supported_versions == {V3}
    assert profiles["c"].mapped_versions == {V3}
    assert not profiles["c"].version_neutral


def test_default_version_fills_only_empty_profiles(controller):
    empty = ControllerConventionBuilder("health")
    empty.action("get")
    empty.action("ping").mark_version_neutral()
    controller.action("a")

    assert resolve_profile(empty, "get", V1).supported_versions == {V1}
    assert resolve_profile(empty, "get").supported_versions == frozenset()
    assert resolve_profile(empty, "ping", V1) == VersionProfile(version_neutral=True)
    assert resolve_profile(controller, "a", V3).supported_versions == {V1, V2}


def test_default_version_must_be_a_version(controller):
    controller.action("a")

    with pytest.raises(InvalidArgumentError):
        resolve_profile(controller, "a", "1.0")


def test_controller_profile(controller):
    controller.declare_deprecated(ApiVersion(0, 9))

    profile = resolve_controller_profile(controller)

    assert profile.supported_versions == {V1, V2}
    assert profile.deprecated_versions == {ApiVersion(0, 9)}
    assert profile.mapped_versions == frozenset()
    assert resolve_controller_profile(ControllerConventionBuilder("x"), V1).supported_versions == {V1}


def test_non_string_action_identities_resolve(controller):
    controller.action(42).declare_deprecated(V1)

    assert resolve_profiles(controller) == {
        42: VersionProfile(
            supported_versions=frozenset({V1, V2}),
            deprecated_versions=frozenset({V1}),
        )
    }
