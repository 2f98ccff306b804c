"""
controlspec - dual-mode controller testing.

Runs controller tests in isolation mode (views are never rendered; the
harness records what the action tried to render) or integration mode
(views render as in production), chosen per test group.

Usage:
    from controlspec import ControllerTestCase

    class TestThingsController(ControllerTestCase):

        def test_show(self):
            self.get("show", id=1)
            self.assert_rendered("things/show")

        def test_routes(self):
            assert self.route_for(controller="things", action="show", id=1) == "/things/1"

Components:
    - ControllerTestCase:  Test case bound to a controller, with mode switching
    - RecordingRenderer:   Isolation-mode render strategy
    - PassThroughRenderer: Integration-mode render strategy
    - RenderRecord:        What an action tried to render
    - RouteTranslator:     Route generation / recognition helper
    - RouteForMatcher:     ``route_for(...) == path`` assertions
    - ControllerRegistry:  Explicit registry of controller types
    - HarnessConfig:       Harness configuration
    - JinjaTemplateView:   Jinja2 view adapter
"""

__version__ = "0.3.0"

from .cases import ControllerTestCase
from .config import (
    HarnessConfig,
    configure,
    get_active_config,
    override_harness,
    set_active_config,
)
from .expectations import RenderExpectations
from .faults import (
    ConfigMissingFault,
    ControllerBindingFault,
    Fault,
    FaultDomain,
    RouteGenerationFault,
    RouteMismatchFault,
    RouteNotFoundFault,
    Severity,
    UnmetRenderExpectationFault,
)
from .jinja import JinjaTemplateView
from .mail import MailTestMixin, reset_deliveries
from .matchers import RouteForMatcher
from .registry import ControllerRegistry, default_registry, register_controller
from .rendering import (
    InertTemplate,
    PassThroughRenderer,
    RecordingRenderer,
    RenderMode,
    RenderRecord,
    build_renderer,
)
from .routing import RouteTranslator
from .simulation import TestRequest, TestResponse

__all__ = [
    # Test case
    "ControllerTestCase",
    # Config
    "HarnessConfig",
    "configure",
    "get_active_config",
    "set_active_config",
    "override_harness",
    # Rendering
    "RenderMode",
    "RenderRecord",
    "RenderExpectations",
    "InertTemplate",
    "PassThroughRenderer",
    "RecordingRenderer",
    "build_renderer",
    "JinjaTemplateView",
    # Routing
    "RouteTranslator",
    "RouteForMatcher",
    # Registry
    "ControllerRegistry",
    "default_registry",
    "register_controller",
    # Simulation
    "TestRequest",
    "TestResponse",
    # Mail
    "reset_deliveries",
    "MailTestMixin",
    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "ConfigMissingFault",
    "ControllerBindingFault",
    "RouteGenerationFault",
    "RouteNotFoundFault",
    "RouteMismatchFault",
    "UnmetRenderExpectationFault",
]
