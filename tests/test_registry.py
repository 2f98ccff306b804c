"""
Tests for controlspec.registry - controller registration and naming.
"""

import pytest

from controlspec.registry import (
    ControllerRegistry,
    camelize,
    controller_path_for,
    default_registry,
    register_controller,
    underscore,
)

import sampleapp


class WidgetsController:
    pass


class AdminReportsController:
    pass


class NotAController:
    pass


@pytest.fixture
def registry():
    reg = ControllerRegistry()
    reg.register(WidgetsController)
    reg.register(AdminReportsController)
    return reg


class TestNaming:

    @pytest.mark.parametrize("name,expected", [
        ("ThingsController", "things_controller"),
        ("AdminThingsController", "admin_things_controller"),
        ("HTMLPagesController", "html_pages_controller"),
        ("already_snake", "already_snake"),
    ])
    def test_underscore(self, name, expected):
        assert underscore(name) == expected

    def test_camelize(self):
        assert camelize("admin_things_controller") == "AdminThingsController"
        assert camelize("thing") == "Thing"

    def test_controller_path(self):
        assert controller_path_for(WidgetsController) == "widgets"
        assert controller_path_for(AdminReportsController) == "admin_reports"
        assert controller_path_for(NotAController) == "not_a"


class TestRegistration:

    def test_is_controller(self, registry):
        assert registry.is_controller(WidgetsController)
        assert not registry.is_controller(NotAController)
        assert not registry.is_controller("WidgetsController")
        assert not registry.is_controller(None)

    def test_register_returns_class(self):
        reg = ControllerRegistry()
        assert reg.register(NotAController) is NotAController

    def test_register_under_alias(self):
        reg = ControllerRegistry()
        reg.register(WidgetsController, name="Gizmos")
        assert reg.get("Gizmos") is WidgetsController
        assert reg.get("WidgetsController") is None

    def test_unregister(self, registry):
        registry.unregister(WidgetsController)
        assert not registry.is_controller(WidgetsController)
        assert "WidgetsController" not in registry
        assert len(registry) == 1

    def test_clear(self, registry):
        registry.clear()
        assert len(registry) == 0
        assert list(registry) == []

    def test_container_protocol(self, registry):
        assert "WidgetsController" in registry
        assert WidgetsController in registry
        assert NotAController not in registry
        assert set(registry) == {WidgetsController, AdminReportsController}
        assert registry.names() == ["AdminReportsController", "WidgetsController"]

    def test_register_controller_decorator(self):
        @register_controller
        class DecoratedController:
            pass

        try:
            assert default_registry.is_controller(DecoratedController)
        finally:
            default_registry.unregister(DecoratedController)


class TestResolveName:

    @pytest.mark.parametrize("name", [
        "widgets", "widgets_controller", "WidgetsController",
    ])
    def test_short_and_full_names(self, registry, name):
        assert registry.resolve_name(name) is WidgetsController

    def test_multi_word_name(self, registry):
        assert registry.resolve_name("admin_reports") is AdminReportsController

    def test_unknown_name(self, registry):
        assert registry.resolve_name("gadgets") is None

    def test_import_string(self, registry):
        assert registry.resolve_name("sampleapp.app:ThingController") is sampleapp.ThingController

    def test_unimportable_string(self, registry):
        assert registry.resolve_name("nope.mod:ThingController") is None
        assert registry.resolve_name("sampleapp.app:Nothing") is None

    def test_framework_registers_subclasses(self):
        assert sampleapp.registry.is_controller(sampleapp.ThingsController)
        assert sampleapp.registry.resolve_name("thing") is sampleapp.ThingController
        assert not sampleapp.registry.is_controller(sampleapp.Controller)
