"""Tests for component registration and processing order."""

import pytest

from casper.components import DEFAULT_COMPONENTS, build_registry
from casper.resolution import (
    ComponentCycleError,
    ComponentDescriptor,
    ComponentRegistry,
    ConfigurationError,
)


def _keys(registry: ComponentRegistry) -> list[str]:
    return [d.key for d in registry.order()]


class TestOrder:
    def test_registration_order_breaks_ties(self):
        registry = ComponentRegistry(
            [ComponentDescriptor("c"), ComponentDescriptor("a"), ComponentDescriptor("b")]
        )
        assert _keys(registry) == ["c", "a", "b"]

    def test_requires_and_wait_for_come_first(self):
        registry = ComponentRegistry(
            [
                ComponentDescriptor("armor", requires=("item",)),
                ComponentDescriptor("properties", wait_for=("property",)),
                ComponentDescriptor("item"),
                ComponentDescriptor("property"),
            ]
        )
        order = _keys(registry)
        assert order.index("item") < order.index("armor")
        assert order.index("property") < order.index("properties")

    def test_hoisted_components_go_first(self):
        registry = ComponentRegistry(
            [ComponentDescriptor("description"), ComponentDescriptor("id", hoist=True)]
        )
        assert _keys(registry) == ["id", "description"]

    def test_sinks_go_last(self):
        registry = ComponentRegistry(
            [
                ComponentDescriptor("type", sink=True),
                ComponentDescriptor("item"),
                ComponentDescriptor("name", hoist=True),
            ]
        )
        assert _keys(registry) == ["name", "item", "type"]

    def test_sink_may_depend_on_regular_component(self):
        registry = ComponentRegistry(
            [ComponentDescriptor("summary", sink=True, wait_for=("item",)), ComponentDescriptor("item")]
        )
        assert _keys(registry) == ["item", "summary"]

    def test_order_is_stable(self, registry):
        assert _keys(registry) == _keys(build_registry())

    def test_order_recomputed_after_register(self):
        registry = ComponentRegistry([ComponentDescriptor("a")])
        assert _keys(registry) == ["a"]
        registry.register(ComponentDescriptor("b"))
        assert _keys(registry) == ["a", "b"]


class TestBuiltinOrder:
    def test_every_builtin_is_ordered(self, registry):
        assert len(registry.order()) == len(DEFAULT_COMPONENTS)

    def test_identity_first_type_last(self, registry):
        order = _keys(registry)
        assert order[:2] == ["id", "name"]
        assert order[-1] == "type"

    def test_dependencies_satisfied(self, registry):
        order = _keys(registry)
        for descriptor in registry:
            for dep in descriptor.dependencies:
                assert order.index(dep) < order.index(descriptor.key), descriptor.key


class TestRegister:
    def test_same_descriptor_twice_is_noop(self):
        descriptor = ComponentDescriptor("item")
        registry = ComponentRegistry()
        registry.register(descriptor)
        registry.register(descriptor)
        assert len(registry) == 1

    def test_conflicting_key_raises(self):
        registry = ComponentRegistry([ComponentDescriptor("item")])
        with pytest.raises(ConfigurationError, match="already registered"):
            registry.register(ComponentDescriptor("item"))

    def test_reset(self, registry):
        registry.reset()
        assert len(registry) == 0
        assert registry.order() == []
        assert "id" not in registry

    def test_lookup(self, registry):
        assert registry.get("properties").wait_for == ("property",)
        assert registry.get("nope") is None
        assert "item" in registry


class TestConfigurationErrors:
    def test_cycle(self):
        registry = ComponentRegistry(
            [
                ComponentDescriptor("a", requires=("b",)),
                ComponentDescriptor("b", wait_for=("a",)),
                ComponentDescriptor("c"),
            ]
        )
        with pytest.raises(ComponentCycleError) as exc_info:
            registry.order()
        assert exc_info.value.components == ["a", "b"]
        assert isinstance(exc_info.value, ConfigurationError)

    def test_unregistered_dependency(self):
        registry = ComponentRegistry([ComponentDescriptor("armor", requires=("item",))])
        with pytest.raises(ConfigurationError, match="unregistered component 'item'"):
            registry.order()

    def test_hoisted_depending_on_regular(self):
        registry = ComponentRegistry(
            [ComponentDescriptor("id", hoist=True, requires=("x",)), ComponentDescriptor("x")]
        )
        with pytest.raises(ConfigurationError, match="non-hoisted"):
            registry.order()

    def test_regular_depending_on_sink(self):
        registry = ComponentRegistry(
            [ComponentDescriptor("type", sink=True), ComponentDescriptor("x", wait_for=("type",))]
        )
        with pytest.raises(ConfigurationError, match="sink component 'type'"):
            registry.order()

    def test_hoist_and_sink(self):
        registry = ComponentRegistry([ComponentDescriptor("x", hoist=True, sink=True)])
        with pytest.raises(ConfigurationError):
            registry.order()


class TestDescriptor:
    def test_plural_keys_map_elements(self):
        assert ComponentDescriptor("properties").maps_elements
        assert not ComponentDescriptor("item").maps_elements

    def test_each_overrides_naming(self):
        assert not ComponentDescriptor("categories", each=False).maps_elements
        assert ComponentDescriptor("tag", each=True).maps_elements

    def test_dependencies_deduplicated(self):
        descriptor = ComponentDescriptor("x", requires=["a", "b"], wait_for=["b", "c"])
        assert descriptor.requires == ("a", "b")
        assert descriptor.dependencies == ["a", "b", "c"]
