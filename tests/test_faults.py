"""
Tests for controlspec.faults - fault taxonomy and concrete faults.
"""

import pytest

from controlspec.faults import (
    DOMAIN_DEFAULTS,
    ConfigMissingFault,
    ControllerBindingFault,
    Fault,
    FaultDomain,
    RouteGenerationFault,
    RouteMismatchFault,
    RouteNotFoundFault,
    RoutingFault,
    Severity,
    UnmetRenderExpectationFault,
)


class TestSeverity:

    def test_values(self):
        assert Severity.INFO.value == "info"
        assert Severity.WARN.value == "warn"
        assert Severity.ERROR.value == "error"
        assert Severity.FATAL.value == "fatal"


class TestFaultDomain:

    def test_standard_domains(self):
        assert FaultDomain.CONFIG.name == "config"
        assert FaultDomain.BINDING.name == "binding"
        assert FaultDomain.ROUTING.name == "routing"
        assert FaultDomain.RENDER.name == "render"

    def test_domain_equality(self):
        assert FaultDomain("routing") == FaultDomain.ROUTING
        assert FaultDomain.ROUTING == "routing"
        assert FaultDomain.ROUTING != FaultDomain.RENDER

    def test_domain_hashable(self):
        assert {FaultDomain.CONFIG: 1}[FaultDomain("config")] == 1

    def test_defaults(self):
        assert DOMAIN_DEFAULTS[FaultDomain.BINDING] == Severity.FATAL
        assert DOMAIN_DEFAULTS[FaultDomain.ROUTING] == Severity.ERROR


class TestFault:

    def test_basic_fault(self):
        fault = Fault(code="X", message="broken", domain=FaultDomain.RENDER)
        assert fault.code == "X"
        assert fault.severity == Severity.ERROR
        assert fault.metadata == {}
        assert str(fault) == "[X] broken"

    def test_custom_severity(self):
        fault = Fault("X", "m", domain=FaultDomain.ROUTING, severity=Severity.WARN)
        assert fault.severity == Severity.WARN

    def test_missing_required_raises(self):
        with pytest.raises(TypeError):
            Fault(code="X", message="no domain")

    def test_to_dict(self):
        fault = Fault("X", "m", domain=FaultDomain.CONFIG, metadata={"k": 1})
        assert fault.to_dict() == {
            "code": "X",
            "message": "m",
            "domain": "config",
            "severity": "fatal",
            "metadata": {"k": 1},
        }

    def test_repr(self):
        fault = Fault("X", "m", domain=FaultDomain.RENDER)
        assert repr(fault) == "Fault(code='X', domain=render, severity=error)"


class TestConcreteFaults:

    def test_config_missing(self):
        fault = ConfigMissingFault("routes", "Configure it")
        assert fault.code == "CONFIG_MISSING"
        assert fault.message == "Harness configuration key 'routes' is not set. Configure it"
        assert fault.severity == Severity.FATAL

    def test_binding_without_controller(self):
        fault = ControllerBindingFault("TestWidgets")
        assert fault.code == "CONTROLLER_NOT_BOUND"
        assert "No controller is bound to TestWidgets" in fault.message
        assert 'controller_name = "example"' in fault.message

    def test_binding_with_non_controller(self):
        fault = ControllerBindingFault("TestWidgets", resolved=dict)
        assert "is not a registered controller" in fault.message
        assert fault.metadata["resolved"] == repr(dict)

    def test_generation_fault(self):
        fault = RouteGenerationFault({"controller": "x"}, "no route")
        assert isinstance(fault, RoutingFault)
        assert fault.domain == FaultDomain.ROUTING
        assert fault.message.endswith(": no route")
        assert fault.metadata == {"options": {"controller": "x"}}

    def test_not_found_fault(self):
        fault = RouteNotFoundFault("GET", "/x")
        assert fault.message == "No route matches '/x' with method GET"

    def test_mismatch_is_assertion_error(self):
        fault = RouteMismatchFault("differs", expected={"a": "1"}, actual={"a": "2"})
        assert isinstance(fault, AssertionError)
        assert isinstance(fault, Fault)
        with pytest.raises(AssertionError):
            raise fault

    def test_unmet_render_expectation(self):
        fault = UnmetRenderExpectationFault([{"template": "things/show"}, {}])
        assert isinstance(fault, AssertionError)
        assert fault.domain == FaultDomain.RENDER
        assert fault.message == (
            "Expected render(template='things/show'), render(*) but it was not called"
        )
        assert fault.metadata["unmet"] == [{"template": "things/show"}, {}]
