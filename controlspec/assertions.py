"""
controlspec Assertions - render and response assertion helpers.

Mixed into :class:`controlspec.cases.ControllerTestCase`. Render
assertions read the test's render record, so they apply to isolation
mode; response assertions work in both modes.
"""

from __future__ import annotations

from typing import Optional


class RenderAssertions:
    """
    Mixin providing assertions over rendered templates and responses.

    Expects the host class to provide ``render_record`` and ``response``.
    """

    render_record = None
    response = None

    # ------------------------------------------------------------------
    # Render assertions
    # ------------------------------------------------------------------

    def assert_rendered(self, template: str, msg: str = ""):
        """Assert the first template the action tried to render."""
        record = self._require_record("assert_rendered")
        actual = record.first_template
        assert actual == template, (
            f"Expected template {template!r} to be rendered, got {actual!r}. {msg}"
        )

    def assert_partial_rendered(self, partial: str, count: Optional[int] = None, msg: str = ""):
        """Assert *partial* was rendered (exactly *count* times, if given)."""
        record = self._require_record("assert_partial_rendered")
        actual = record.partial_count(partial)
        if count is None:
            assert actual > 0, (
                f"Expected partial {partial!r} to be rendered. "
                f"Rendered partials: {dict(record.partial_counts)}. {msg}"
            )
        else:
            assert actual == count, (
                f"Expected partial {partial!r} rendered {count} times, "
                f"got {actual}. {msg}"
            )

    def assert_nothing_rendered(self, msg: str = ""):
        record = self._require_record("assert_nothing_rendered")
        assert record.is_empty, f"Expected no render, got {record!r}. {msg}"

    def _require_record(self, name: str):
        if self.render_record is None:
            raise AssertionError(
                f"{name} needs isolation mode; this group integrates views. "
                f"Assert on the response body instead."
            )
        return self.render_record

    # ------------------------------------------------------------------
    # Response assertions
    # ------------------------------------------------------------------

    def assert_status(self, expected: int, msg: str = ""):
        """Assert HTTP status code of the last response."""
        actual = self._require_response().status_code
        assert actual == expected, (
            f"Expected status {expected}, got {actual}. {msg}"
        )

    def assert_success(self, msg: str = ""):
        """Assert 2xx status."""
        response = self._require_response()
        assert response.is_success, (
            f"Expected 2xx, got {response.status_code}. {msg}"
        )

    def assert_redirected_to(self, location: str, msg: str = ""):
        """Assert 3xx redirect to *location*."""
        response = self._require_response()
        assert response.is_redirect, (
            f"Expected 3xx redirect, got {response.status_code}. {msg}"
        )
        assert response.location == location, (
            f"Expected redirect to {location!r}, got {response.location!r}. {msg}"
        )

    def assert_body_contains(self, text: str, msg: str = ""):
        body = self._require_response().body
        assert text in body, (
            f"Expected body to contain {text!r}. Body: {body[:200]!r}. {msg}"
        )

    def _require_response(self):
        if self.response is None:
            raise AssertionError("No request has been dispatched in this test")
        return self.response
