"""
controlspec Faults - Core types and fault taxonomy.

Defines:
- Fault base class (structured fault objects)
- FaultDomain (explicit fault domains)
- Severity levels
- Concrete faults for controller binding, routing, render expectations
  and configuration
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional


# ============================================================================
# Severity & Domain
# ============================================================================

class Severity(str, Enum):
    """
    Fault severity levels.
    """
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain:
    """
    Fault domains (taxonomy).

    Identifies the functional area of the harness where a fault occurred.
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.value = name
        self.description = description

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain(name='{self.name}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(self.name)


# Standard Domains
FaultDomain.CONFIG = FaultDomain("config", "Harness configuration errors")
FaultDomain.BINDING = FaultDomain("binding", "Controller binding errors")
FaultDomain.ROUTING = FaultDomain("routing", "Route generation and recognition errors")
FaultDomain.RENDER = FaultDomain("render", "Render expectation errors")


DOMAIN_DEFAULTS = {
    FaultDomain.CONFIG: Severity.FATAL,
    FaultDomain.BINDING: Severity.FATAL,
    FaultDomain.ROUTING: Severity.ERROR,
    FaultDomain.RENDER: Severity.ERROR,
}


# ============================================================================
# Fault - Base Class
# ============================================================================

class Fault(Exception):
    """
    Base fault class - structured, typed fault object.

    Attributes:
        code: Stable machine-readable identifier (e.g., "ROUTE_NOT_FOUND")
        message: Human-readable summary
        severity: Fault severity (INFO, WARN, ERROR, FATAL)
        domain: Fault domain (CONFIG, BINDING, ROUTING, RENDER)
        metadata: Additional context data
    """

    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        domain: FaultDomain | None = None,
        severity: Optional[Severity] = None,
        metadata: Optional[dict[str, Any]] = None,
    ):
        self.code = code if code is not None else getattr(self, "code", None)
        self.message = message if message is not None else getattr(self, "message", None)
        self.domain = domain if domain is not None else getattr(self, "domain", None)

        if self.code is None or self.message is None or self.domain is None:
            raise TypeError(f"{self.__class__.__name__} missing required code, message, or domain")

        super().__init__(self.message)

        self.severity = severity or DOMAIN_DEFAULTS.get(self.domain, Severity.ERROR)
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code!r}, "
            f"domain={self.domain.value}, severity={self.severity.value})"
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize fault to dictionary.

        Returns:
            Dictionary representation suitable for logging/serialization
        """
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "metadata": self.metadata,
        }


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigMissingFault(Fault):
    """A service the harness needs has not been configured."""

    def __init__(self, key: str, hint: str = ""):
        message = f"Harness configuration key '{key}' is not set"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(
            code="CONFIG_MISSING",
            message=message,
            domain=FaultDomain.CONFIG,
            metadata={"key": key},
        )


# ============================================================================
# BINDING Faults
# ============================================================================

_BINDING_HINT = """You have to declare the controller in controller tests. For example:

    class TestExample(ControllerTestCase):
        controller_name = "example"  # binds ExampleController
"""


class ControllerBindingFault(Fault):
    """A test group does not resolve to a registered controller type."""

    def __init__(self, group: str, resolved: Any = None):
        if resolved is None:
            detail = f"No controller is bound to {group}."
        else:
            detail = f"{resolved!r} bound to {group} is not a registered controller."
        super().__init__(
            code="CONTROLLER_NOT_BOUND",
            message=f"{detail}\n{_BINDING_HINT}",
            domain=FaultDomain.BINDING,
            metadata={"group": group, "resolved": repr(resolved)},
        )


# ============================================================================
# ROUTING Faults
# ============================================================================

class RoutingFault(Fault):
    """Base class for routing faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.ROUTING,
            metadata=metadata,
        )


class RouteGenerationFault(RoutingFault):
    """The routing service cannot produce a path from the given options."""

    def __init__(self, options: Mapping[str, Any], reason: str = ""):
        message = f"No route generates a path from {dict(options)!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            code="ROUTE_GENERATION_FAILED",
            message=message,
            metadata={"options": dict(options)},
        )


class RouteNotFoundFault(RoutingFault):
    """No route matches a method and path."""

    def __init__(self, method: str, path: str):
        super().__init__(
            code="ROUTE_NOT_FOUND",
            message=f"No route matches {path!r} with method {method}",
            metadata={"method": method, "path": path},
        )


class RouteMismatchFault(RoutingFault, AssertionError):
    """Expected and recognised route options disagree."""

    def __init__(self, message: str, *, expected: Any = None, actual: Any = None):
        super().__init__(
            code="ROUTE_MISMATCH",
            message=message,
            metadata={"expected": expected, "actual": actual},
        )


# ============================================================================
# RENDER Faults
# ============================================================================

class UnmetRenderExpectationFault(Fault, AssertionError):
    """One or more expected renders never happened."""

    def __init__(self, unmet: list):
        listing = ", ".join(f"render({_format_options(o)})" for o in unmet)
        super().__init__(
            code="RENDER_EXPECTATION_UNMET",
            message=f"Expected {listing} but it was not called",
            domain=FaultDomain.RENDER,
            metadata={"unmet": [dict(o) for o in unmet]},
        )


def _format_options(options: Mapping[str, Any]) -> str:
    return ", ".join(f"{k}={v!r}" for k, v in options.items()) or "*"
