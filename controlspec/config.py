"""
controlspec Config - harness configuration and overrides.

Provides :class:`HarnessConfig`, the process-wide active-config registry,
and the ``override_harness`` context manager / decorator for replacing
configuration during a test.

Keys (dot-notation):
    routes:              Routing service (see ``contracts.RoutingService``)
    registry:            :class:`ControllerRegistry` of controller types
    mailer:              Mail facility exposing a ``deliveries`` list
    session_factory:     Callable returning a fresh session container
    controller_factory:  Callable ``(controller_class) -> controller``
    views.integrate:     Default render mode for groups that set none
    views.layout_prefix: Template-name prefix marking layouts
"""

from __future__ import annotations

import contextlib
import copy
import json
import logging
import os
from typing import Any, Callable, Dict, Optional

from .faults import ConfigMissingFault
from .registry import ControllerRegistry, default_registry

logger = logging.getLogger("controlspec.config")

ENV_PREFIX = "CONTROLSPEC_"


def _default_controller_factory(controller_class):
    return controller_class()


def _defaults() -> Dict[str, Any]:
    return {
        "routes": None,
        "registry": None,
        "mailer": None,
        "session_factory": dict,
        "controller_factory": _default_controller_factory,
        "views": {
            "integrate": False,
            "layout_prefix": "layouts/",
        },
    }


class HarnessConfig:
    """
    Layered harness configuration.

    Override values take precedence over the defaults; nested keys are
    addressed with dot-notation.

    Usage::

        cfg = HarnessConfig(routes=route_set, mailer=mailer)
        cfg.set("views.integrate", True)
        assert cfg.get("views.layout_prefix") == "layouts/"
    """

    __slots__ = ("_data",)

    def __init__(self, base: Optional[Dict[str, Any]] = None, **overrides: Any):
        self._data = _defaults()
        if base:
            _deep_merge(self._data, base)
        if overrides:
            _deep_merge(self._data, overrides)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **overrides: Any) -> "HarnessConfig":
        """
        Build a config with ``CONTROLSPEC_*`` environment variables folded in.

        ``CONTROLSPEC_VIEWS__INTEGRATE=true`` sets ``views.integrate``.
        Explicit *overrides* win over the environment.
        """
        cfg = cls()
        for key, value in os.environ.items():
            if key.startswith(prefix):
                dot_key = key[len(prefix):].lower().replace("__", ".")
                cfg.set(dot_key, _parse_value(value))
                logger.debug("Config %s set from environment", dot_key)
        for key, value in overrides.items():
            cfg.set(key, value)
        return cfg

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a config value using dot-notation."""
        ref: Any = self._data
        for part in key.split("."):
            if isinstance(ref, dict) and part in ref:
                ref = ref[part]
            else:
                return default
        return ref

    def set(self, key: str, value: Any) -> None:
        """Set a config value using dot-notation."""
        _set_nested(self._data, key, value)

    def has(self, key: str) -> bool:
        return self.get(key, _SENTINEL) is not _SENTINEL

    def to_dict(self) -> dict:
        return copy.copy(self._data)

    def require(self, key: str, hint: str = "") -> Any:
        """Return a configured value or raise :class:`ConfigMissingFault`."""
        value = self.get(key)
        if value is None:
            raise ConfigMissingFault(key, hint)
        return value

    # -- Typed accessors -------------------------------------------------

    @property
    def routes(self):
        return self.get("routes")

    @property
    def registry(self) -> ControllerRegistry:
        registry = self.get("registry")
        return default_registry if registry is None else registry

    @property
    def mailer(self):
        return self.get("mailer")

    @property
    def session_factory(self) -> Callable[[], Any]:
        return self.get("session_factory") or dict

    @property
    def controller_factory(self) -> Callable[[type], Any]:
        return self.get("controller_factory") or _default_controller_factory

    @property
    def integrate_views(self) -> bool:
        return bool(self.get("views.integrate", False))

    @property
    def layout_prefix(self) -> str:
        return self.get("views.layout_prefix") or "layouts/"

    # -- Dict-like interface ---------------------------------------------

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __getitem__(self, key: str) -> Any:
        val = self.get(key, _SENTINEL)
        if val is _SENTINEL:
            raise KeyError(key)
        return val

    def __repr__(self) -> str:
        return f"<HarnessConfig keys={list(self._data)}>"


_SENTINEL = object()


# -----------------------------------------------------------------------
# Module-level active config registry
# -----------------------------------------------------------------------

_active_config: Optional[HarnessConfig] = None


def set_active_config(cfg: Optional[HarnessConfig]) -> None:
    """Register the config used by controller test cases."""
    global _active_config
    _active_config = cfg


def get_active_config() -> HarnessConfig:
    """Return the active config, creating one from the environment if unset."""
    global _active_config
    if _active_config is None:
        _active_config = HarnessConfig.from_env()
    return _active_config


def configure(**options: Any) -> HarnessConfig:
    """
    Install a new active config.

    Usage in ``conftest.py``::

        from controlspec.config import configure
        configure(routes=app.routes, mailer=app.mailer)
    """
    cfg = HarnessConfig.from_env(**options)
    set_active_config(cfg)
    return cfg


# -----------------------------------------------------------------------
# Temporary overrides
# -----------------------------------------------------------------------

class override_harness(contextlib.ContextDecorator):
    """
    Temporarily override keys of the active config.

    Keyword names map to dot-notation keys (``VIEWS__INTEGRATE`` ->
    ``views.integrate``). Usable as ``with override_harness(...)`` or as a
    decorator.
    """

    def __init__(self, **overrides: Any):
        self._overrides = {
            name.lower().replace("__", "."): value for name, value in overrides.items()
        }
        self._previous: Dict[str, Any] = {}
        self._target: Optional[HarnessConfig] = None

    def __enter__(self) -> "override_harness":
        self._target = get_active_config()
        for key, value in self._overrides.items():
            self._previous[key] = self._target.get(key, _SENTINEL)
            self._target.set(key, value)
        return self

    def __exit__(self, *exc_info) -> None:
        target, self._target = self._target, None
        for key, value in self._previous.items():
            if value is _SENTINEL:
                _unset(target._data, key)
            else:
                target.set(key, value)
        self._previous = {}


# -----------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------

def _deep_merge(base: dict, overrides: dict) -> dict:
    for key, value in overrides.items():
        current = base.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            _deep_merge(current, value)
        else:
            base[key] = value
    return base


def _set_nested(data: dict, dot_key: str, value: Any) -> None:
    *parents, leaf = dot_key.split(".")
    for part in parents:
        data = data.setdefault(part, {})
    data[leaf] = value


def _unset(data: dict, dot_key: str) -> None:
    *parents, leaf = dot_key.split(".")
    for part in parents:
        data = data.get(part)
        if not isinstance(data, dict):
            return
    data.pop(leaf, None)


_BOOLEANS = {"true": True, "yes": True, "false": False, "no": False}


def _parse_value(raw: str) -> Any:
    """Environment strings become bool, int, float or JSON where they parse as one."""
    if raw.lower() in _BOOLEANS:
        return _BOOLEANS[raw.lower()]
    for convert in (int, float, json.loads):
        try:
            return convert(raw)
        except ValueError:
            continue
    return raw
