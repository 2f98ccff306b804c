"""
Explicit ``render`` expectations and stubs.

A test can claim a render call before the harness's recording logic sees
it::

    template = self.expect_render(template="things/show")
    self.stub_render(partial="sidebar", return_value="<aside/>")
    self.get("show", id=1)
    template.assert_called_once()

A hook with no options matches every call; otherwise each option the hook
names must equal the call's value for that key.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from unittest.mock import Mock

from .faults import UnmetRenderExpectationFault


class RenderHook:
    """One registered expectation or stub."""

    __slots__ = ("options", "mock", "kind")

    def __init__(self, options: Mapping[str, Any], mock: Mock, kind: str):
        self.options = dict(options)
        self.mock = mock
        self.kind = kind

    def matches(self, options: Mapping[str, Any]) -> bool:
        for key, value in self.options.items():
            if key not in options or options[key] != value:
                return False
        return True

    def __call__(self, options: Mapping[str, Any]) -> Any:
        return self.mock(dict(options))

    def __repr__(self) -> str:
        return f"<RenderHook {self.kind} {self.options!r}>"


class RenderExpectations:
    """
    Per-test registry of render expectations and stubs.

    Lookup follows the mock proxy protocol: expectations are searched
    first, then stubs; the most recently registered hook wins.
    """

    def __init__(self):
        self._expectations: List[RenderHook] = []
        self._stubs: List[RenderHook] = []

    def expect(self, return_value: Any = "", **options: Any) -> Mock:
        """Register an expected render; verified when the test finishes."""
        mock = Mock(name=f"render[{_label(options)}]", return_value=return_value)
        self._expectations.append(RenderHook(options, mock, "expectation"))
        return mock

    def stub(self, return_value: Any = "", **options: Any) -> Mock:
        """Register a render stub; it may or may not be called."""
        mock = Mock(name=f"render_stub[{_label(options)}]", return_value=return_value)
        self._stubs.append(RenderHook(options, mock, "stub"))
        return mock

    def find_matching_expectation(self, options: Mapping[str, Any]) -> Optional[RenderHook]:
        return _find(self._expectations, options)

    def find_matching_stub(self, options: Mapping[str, Any]) -> Optional[RenderHook]:
        return _find(self._stubs, options)

    def find(self, options: Mapping[str, Any]) -> Optional[RenderHook]:
        return self.find_matching_expectation(options) or self.find_matching_stub(options)

    @property
    def unmet(self) -> List[RenderHook]:
        return [hook for hook in self._expectations if not hook.mock.called]

    def verify(self) -> None:
        """Raise if any expectation was never matched."""
        unmet = self.unmet
        if unmet:
            raise UnmetRenderExpectationFault([hook.options for hook in unmet])

    def reset(self) -> None:
        self._expectations.clear()
        self._stubs.clear()

    def __bool__(self) -> bool:
        return bool(self._expectations or self._stubs)


def _find(hooks: List[RenderHook], options: Mapping[str, Any]) -> Optional[RenderHook]:
    for hook in reversed(hooks):
        if hook.matches(options):
            return hook
    return None


def _label(options: Mapping[str, Any]) -> str:
    return ",".join(f"{k}={v}" for k, v in options.items()) or "*"
