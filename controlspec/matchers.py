"""
Route assertion matcher.

``route_for(...)`` returns a :class:`RouteForMatcher`; comparing it with a
path asserts that the path recognises to the given route options::

    assert self.route_for(controller="things", action="show", id=1) == "/things/1"
    assert self.route_for(controller="things", action="update", id=1) == {
        "path": "/things/1", "method": "put",
    }

A mismatch raises :class:`RouteMismatchFault` instead of returning False.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple, Union

from . import querystring
from .faults import RouteMismatchFault, RoutingFault

RouteQuery = Union[str, Mapping[str, Any]]


class RouteForMatcher:
    """
    Compare fixed route options against a path or path mapping.

    Args:
        example: The requesting test context; must expose ``route_translator``.
        options: Route options the expected path should recognise to.
    """

    __hash__ = None

    def __init__(self, example: Any, options: Mapping[str, Any]):
        self.example = example
        self.options = dict(options)

    def __eq__(self, expected: RouteQuery) -> bool:
        return self.matches(expected)

    def __ne__(self, expected: RouteQuery) -> bool:
        return not self.matches(expected)

    def matches(self, expected: RouteQuery) -> bool:
        method, path, extras = _normalize(expected)
        # Extra params never take part in recognition; the path params must
        # match the remaining options exactly.
        expected_params = {
            key: value for key, value in _stringify(self.options).items()
            if key not in extras
        }

        translator = self.example.route_translator
        try:
            recognized = _stringify(translator.params_for(method, path))
        except RoutingFault as exc:
            raise RouteMismatchFault(
                f"The recognized options could not be determined for {path!r}: "
                f"{exc.message}. Expected <{expected_params!r}>",
                expected=expected_params,
                actual=None,
            ) from exc

        if recognized != expected_params:
            raise RouteMismatchFault(
                f"The recognized options <{recognized!r}> did not match "
                f"<{expected_params!r}>, difference: "
                f"<{_difference(expected_params, recognized)!r}>",
                expected=expected_params,
                actual=recognized,
            )
        return True

    def __repr__(self) -> str:
        return f"route_for({self.options!r})"


def _normalize(expected: RouteQuery) -> Tuple[str, str, Dict[str, Any]]:
    """Reduce *expected* to ``(method, bare_path, extra_params)``."""
    if isinstance(expected, Mapping):
        remaining = dict(expected)
        combined = remaining.pop("path", None)
        if combined is None:
            raise TypeError("route_for(...) == {...} requires a 'path' key")
        method = str(remaining.pop("method", "GET"))
        extras = _stringify(remaining)
    elif isinstance(expected, str):
        combined = expected
        method = "GET"
        extras = {}
    else:
        raise TypeError(
            f"route_for(...) can only be compared with a path or a mapping, "
            f"not {type(expected).__name__}"
        )

    path, qs = querystring.split_path(combined)
    extras.update(querystring.decode(qs))
    return method.upper(), path, extras


def _stringify(options: Mapping[str, Any]) -> Dict[str, Any]:
    return {str(k): (v if v is None or isinstance(v, str) else str(v)) for k, v in options.items()}


def _difference(left: Mapping[str, Any], right: Mapping[str, Any]) -> Dict[str, Any]:
    diff: Dict[str, Any] = {}
    for key in set(left) | set(right):
        if left.get(key, _MISSING) != right.get(key, _MISSING):
            diff[key] = right.get(key) if key in right else left.get(key)
    return diff


_MISSING = object()
