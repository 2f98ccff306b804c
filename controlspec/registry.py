"""
Controller Registry - explicit "is a controller" facts.

The web framework registers its controller types once (typically from its
controller base class's ``__init_subclass__``). The harness then asks the
registry instead of walking inheritance chains at test time.
"""

from __future__ import annotations

import importlib
import logging
import re
from typing import Dict, Iterator, List, Optional, Type

logger = logging.getLogger("controlspec.registry")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """``"AdminThingsController"`` -> ``"admin_things_controller"``."""
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def camelize(name: str) -> str:
    """``"admin_things_controller"`` -> ``"AdminThingsController"``."""
    return "".join(part[:1].upper() + part[1:] for part in re.split(r"[_\-\s]+", name) if part)


def controller_path_for(controller_class: Type) -> str:
    """
    Derive the template directory a controller renders from.

    ``ThingsController`` -> ``"things"``, ``AdminThingsController`` ->
    ``"admin_things"``.
    """
    path = underscore(controller_class.__name__)
    if path.endswith("_controller"):
        path = path[: -len("_controller")]
    elif path == "controller":
        path = ""
    return path


class ControllerRegistry:
    """
    Registry of controller types, keyed by class name.

    Usage::

        registry = ControllerRegistry()
        registry.register(ThingController)

        registry.is_controller(ThingController)   # True
        registry.get("ThingController")           # ThingController
        registry.resolve_name("thing")            # ThingController
    """

    def __init__(self):
        self._by_name: Dict[str, Type] = {}
        self._controllers: set = set()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, controller_class: Type, name: Optional[str] = None) -> Type:
        """Record *controller_class* as a controller. Usable as a decorator."""
        key = name or controller_class.__name__
        self._by_name[key] = controller_class
        self._controllers.add(controller_class)
        logger.debug("Registered controller %s as %r", controller_class.__qualname__, key)
        return controller_class

    def unregister(self, controller_class: Type) -> None:
        self._controllers.discard(controller_class)
        for key in [k for k, v in self._by_name.items() if v is controller_class]:
            del self._by_name[key]

    def clear(self) -> None:
        self._by_name.clear()
        self._controllers.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_controller(self, candidate) -> bool:
        """True if *candidate* is a registered controller type."""
        return isinstance(candidate, type) and candidate in self._controllers

    def get(self, name: str) -> Optional[Type]:
        """Look up a controller by its exact registered name."""
        return self._by_name.get(name)

    def resolve_name(self, name: str) -> Optional[Type]:
        """
        Resolve a controller from a short or full name.

        Accepts ``"thing"``, ``"thing_controller"``, ``"ThingController"``
        and import strings such as ``"myapp.controllers:ThingController"``.
        """
        if ":" in name:
            return _import_string(name)

        candidates = [name]
        base = name if underscore(name).endswith("controller") else f"{name}_controller"
        candidates.append(camelize(base))
        for candidate in candidates:
            found = self._by_name.get(candidate)
            if found is not None:
                return found
        return None

    def names(self) -> List[str]:
        return sorted(self._by_name)

    def __contains__(self, candidate) -> bool:
        if isinstance(candidate, str):
            return candidate in self._by_name
        return self.is_controller(candidate)

    def __iter__(self) -> Iterator[Type]:
        return iter(list(self._by_name.values()))

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"<ControllerRegistry controllers={self.names()}>"


def _import_string(path: str) -> Optional[Type]:
    module_name, _, attr = path.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        logger.debug("Cannot import %s: %s", module_name, exc)
        return None
    return getattr(module, attr, None)


# Process-wide default registry used when the harness config names none.
default_registry = ControllerRegistry()


def register_controller(controller_class: Type) -> Type:
    """Decorator registering *controller_class* in the default registry."""
    return default_registry.register(controller_class)
