"""
Simulated request/response objects handed to ``controller.process``.

The controller under test reads the request and writes status, headers
and body to the response; the test then asserts against the response.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, MutableMapping, Optional


class TestRequest:
    """
    A request dispatched straight to a controller action.

    Attributes:
        method: HTTP method (upper case).
        action: Name of the controller action to run.
        params: Request parameters; values are strings as they would be
            on the wire.
        session: Session container shared with the controller.
        headers: Lower-cased request headers.
        path: Request path, when the test supplies one.
    """

    __test__ = False  # not a pytest test class

    __slots__ = ("method", "action", "params", "session", "headers", "path")

    def __init__(
        self,
        method: str = "GET",
        action: str = "index",
        params: Optional[Mapping[str, Any]] = None,
        *,
        session: Optional[MutableMapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        path: str = "",
    ):
        self.method = method.upper()
        self.action = action
        self.params: Dict[str, Any] = {
            str(k): _wire_value(v) for k, v in (params or {}).items()
        }
        self.session = session if session is not None else {}
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.path = path

    @property
    def is_xhr(self) -> bool:
        return self.headers.get("x-requested-with", "").lower() == "xmlhttprequest"

    def __repr__(self) -> str:
        return f"<TestRequest {self.method} {self.action} params={self.params!r}>"


class TestResponse:
    """
    Response filled in by the controller.

    Provides a friendly API for assertions in tests.
    """

    __test__ = False

    __slots__ = ("status_code", "headers", "body", "template")

    def __init__(self):
        self.status_code = 200
        self.headers: Dict[str, str] = {}
        self.body = ""
        self.template: Optional[str] = None

    # -- Convenience accessors -------------------------------------------

    @property
    def text(self) -> str:
        return self.body

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def location(self) -> Optional[str]:
        """Return Location header (useful for redirects)."""
        return self.headers.get("location")

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name.lower(), default)

    def set_header(self, name: str, value: str) -> None:
        self.headers[name.lower()] = value

    def redirect_to(self, location: str, status: int = 302) -> None:
        self.status_code = status
        self.set_header("location", location)

    def __repr__(self) -> str:
        return f"<TestResponse [{self.status_code}] {len(self.body)} chars>"


def _wire_value(value: Any) -> Any:
    if value is None or isinstance(value, (str, list, dict)):
        return value
    return str(value)
