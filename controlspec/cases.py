"""
controlspec - Controller test case.

Controller tests run in one of two modes, freely switching from group to
group:

Isolation mode (default)
    No dependencies on views because none are ever rendered. The action
    runs; the harness records which template and partials it tried to
    render. Combined with separate view tests this gives better fault
    isolation.

Integration mode
    Declare ``integrate_views = True`` on the group. Actions render their
    templates exactly as in production, so each test covers both the
    controller and its views.

Usage::

    class TestThingsController(ControllerTestCase):

        def test_show(self):
            self.get("show", id=1)
            self.assert_rendered("things/show")
            self.assert_partial_rendered("thing", count=2)


    class TestThingsPages(ControllerTestCase):
        controller_name = "things"
        integrate_views = True

        def test_show(self):
            self.get("show", id=1)
            self.assert_body_contains("<h1>")

Errors raised inside controller actions are not rescued by the harness;
they propagate into the test.
"""

from __future__ import annotations

import logging
import unittest
from typing import Any, Dict, Mapping, Optional, Type, Union

from . import querystring
from .assertions import RenderAssertions
from .config import HarnessConfig, get_active_config
from .expectations import RenderExpectations
from .faults import ControllerBindingFault
from .mail import MailTestMixin, reset_deliveries
from .matchers import RouteForMatcher
from .registry import ControllerRegistry, controller_path_for
from .rendering import RenderMode, RenderRecord, build_renderer
from .routing import RouteTranslator
from .simulation import TestRequest, TestResponse


logger = logging.getLogger("controlspec.cases")

# Attributes the harness or the framework put on every controller instance.
_HARNESS_ATTRIBUTES = frozenset({
    "view", "template_renderer", "session", "controller_path",
    "request", "response", "params",
})


class ControllerTestCase(unittest.TestCase, RenderAssertions, MailTestMixin):
    """
    Test case bound to one controller type.

    Subclass attributes:
        controller_class:  Controller type under test.
        controller_name:   Controller name (``"thing"`` -> ``ThingController``)
                           or import string (``"app.controllers:ThingController"``).
        describe:          Described subject: a controller type, or its name.
        integrate_views:   ``True`` renders views (integration mode),
                           ``False`` forces isolation, ``None`` inherits.

    When nothing is bound, the group's class name is tried:
    ``TestThingController`` and ``ThingControllerTest`` both bind
    ``ThingController``.
    """

    # ── Overridable class-level config ──────────────────────────────
    controller_class: Optional[Type] = None
    controller_name: Optional[str] = None
    describe: Optional[Union[str, Type]] = None
    integrate_views: Optional[bool] = None

    # ── Group state (one node per class) ────────────────────────────
    _mode_override: Optional[bool] = None
    _binding: Optional[Union[str, Type]] = None

    # ── Per-test state ──────────────────────────────────────────────
    harness_config: HarnessConfig
    controller: Any
    session: Any
    render_expectations: RenderExpectations
    render_record: Optional[RenderRecord] = None
    request: Optional[TestRequest] = None
    response: Optional[TestResponse] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        own = cls.__dict__
        cls._mode_override = own.get("integrate_views")
        if own.get("controller_class") is not None:
            cls._binding = own["controller_class"]
        elif own.get("controller_name") is not None:
            cls._binding = own["controller_name"]
        else:
            cls._binding = None

    # ------------------------------------------------------------------
    # Group-level declarations
    # ------------------------------------------------------------------

    @classmethod
    def set_integration_mode(cls, integrate_views: bool = True) -> None:
        """Render views for this group (and subclasses that set nothing)."""
        cls._mode_override = bool(integrate_views)

    @classmethod
    def is_integration_mode(cls) -> bool:
        return cls.render_mode() is RenderMode.INTEGRATION

    @classmethod
    def render_mode(cls) -> RenderMode:
        """Nearest explicit setting up the class hierarchy, else the config default."""
        override = _nearest(cls, "_mode_override")
        if override is None:
            override = get_active_config().integrate_views
        return RenderMode.from_flag(override)

    @classmethod
    def bind_controller(cls, controller_class: Type) -> None:
        cls._binding = controller_class

    @classmethod
    def bind_controller_by_name(cls, name: str) -> None:
        cls._binding = name

    @classmethod
    def resolve_controller(cls, registry: Optional[ControllerRegistry] = None) -> Optional[Type]:
        """
        Resolve the controller type this group tests.

        Order: explicit binding, described subject, group class name.
        """
        if registry is None:
            registry = get_active_config().registry

        binding = _nearest(cls, "_binding")
        if binding is not None:
            if isinstance(binding, str):
                return registry.resolve_name(binding)
            return binding

        described = cls.describe
        if isinstance(described, str):
            found = registry.resolve_name(described)
            if found is not None:
                return found
        elif registry.is_controller(described):
            return described

        for name in _group_names(cls.__name__):
            found = registry.get(name)
            if found is not None:
                logger.debug("Bound %s to %s by name", cls.__qualname__, name)
                return found
        return None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def setUp(self) -> None:
        super().setUp()
        config = get_active_config()
        self.harness_config = config

        if config.mailer is not None:
            self.deliveries = reset_deliveries(config.mailer)

        group = type(self)
        controller_class = group.resolve_controller(config.registry)
        if controller_class is None or not config.registry.is_controller(controller_class):
            raise ControllerBindingFault(group.__qualname__, controller_class)

        controller = config.controller_factory(controller_class)
        controller.controller_path = controller_path_for(controller_class)

        mode = group.render_mode()
        self.render_expectations = RenderExpectations()
        self.render_record = RenderRecord() if mode is RenderMode.ISOLATION else None
        controller.template_renderer = build_renderer(
            mode,
            controller.view,
            record=self.render_record,
            expectations=self.render_expectations,
            layout_prefix=config.layout_prefix,
        )

        self.session = config.session_factory()
        controller.session = self.session
        self.controller = controller
        self.request = None
        self.response = None

        self.addCleanup(self.render_expectations.verify)
        logger.debug(
            "%s: %s in %s mode",
            self.id(), controller_class.__name__, mode.value,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def process(
        self,
        action: str,
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
        *,
        headers: Optional[Mapping[str, str]] = None,
        path: str = "",
        **extra: Any,
    ) -> TestResponse:
        """Run *action* on the controller with a simulated request."""
        merged = dict(params or {})
        merged.update(extra)
        self.request = TestRequest(
            method, action, merged,
            session=self.session, headers=headers, path=path,
        )
        self.response = TestResponse()
        self.controller.process(self.request, self.response)
        return self.response

    def get(self, action: str, params: Optional[Mapping[str, Any]] = None, **extra: Any) -> TestResponse:
        return self.process(action, "GET", params, **extra)

    def post(self, action: str, params: Optional[Mapping[str, Any]] = None, **extra: Any) -> TestResponse:
        return self.process(action, "POST", params, **extra)

    def put(self, action: str, params: Optional[Mapping[str, Any]] = None, **extra: Any) -> TestResponse:
        return self.process(action, "PUT", params, **extra)

    def patch(self, action: str, params: Optional[Mapping[str, Any]] = None, **extra: Any) -> TestResponse:
        return self.process(action, "PATCH", params, **extra)

    def delete(self, action: str, params: Optional[Mapping[str, Any]] = None, **extra: Any) -> TestResponse:
        return self.process(action, "DELETE", params, **extra)

    def head(self, action: str, params: Optional[Mapping[str, Any]] = None, **extra: Any) -> TestResponse:
        return self.process(action, "HEAD", params, **extra)

    # ------------------------------------------------------------------
    # Render state
    # ------------------------------------------------------------------

    @property
    def rendered_template(self) -> Optional[str]:
        """First template the action tried to render (isolation mode only)."""
        return self.render_record.first_template if self.render_record else None

    def partial_count(self, name: str) -> int:
        return self.render_record.partial_count(name) if self.render_record else 0

    def expect_render(self, return_value: Any = "", **options: Any):
        """Expect ``render(**options)``; the call is claimed, not recorded."""
        return self.render_expectations.expect(return_value, **options)

    def stub_render(self, return_value: Any = "", **options: Any):
        """Stub ``render(**options)``; the call is claimed, not recorded."""
        return self.render_expectations.stub(return_value, **options)

    def assigns(self, name: Optional[str] = None) -> Any:
        """
        Instance state the action left on the controller.

        ``assigns("thing")`` returns one value; ``assigns()`` returns all
        public attributes the action set.
        """
        if name is not None:
            return getattr(self.controller, name, None)
        return {
            key: value for key, value in vars(self.controller).items()
            if not key.startswith("_") and key not in _HARNESS_ATTRIBUTES
        }

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    @property
    def route_translator(self) -> RouteTranslator:
        routes = get_active_config().require(
            "routes", "Call controlspec.configure(routes=...) in conftest.py",
        )
        return RouteTranslator(routes)

    def route_for(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> RouteForMatcher:
        """
        Matcher asserting that a path recognises to *options*.

        Example:
            assert self.route_for(controller="things", action="edit", id=1) == "/things/1/edit"
        """
        merged = dict(options or {})
        merged.update(kwargs)
        return RouteForMatcher(self, merged)

    def params_from(self, method: str, path: str) -> Dict[str, Any]:
        """
        Params the routing table recognises for *method* and *path*.

        Example:
            params_from("get", "/things/1/edit")
                -> {"controller": "things", "action": "edit", "id": "1"}
        """
        return self.route_translator.params_for(method, path)

    def params_from_querystring(self, qs: Optional[str]) -> Dict[str, Optional[str]]:
        return querystring.decode(qs)

    def path_for(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> str:
        merged = dict(options or {})
        merged.update(kwargs)
        return self.route_translator.path_for(merged)


def _nearest(cls: type, attr: str) -> Any:
    for klass in cls.__mro__:
        value = klass.__dict__.get(attr)
        if value is not None:
            return value
    return None


def _group_names(class_name: str):
    if class_name.startswith("Test") and len(class_name) > 4:
        yield class_name[4:]
    for suffix in ("Tests", "Test"):
        if class_name.endswith(suffix) and len(class_name) > len(suffix):
            yield class_name[: -len(suffix)]
            break
    yield class_name
