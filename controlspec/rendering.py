"""
Render interception strategies.

A controller renders through ``controller.template_renderer``. At test
setup the harness installs one of two strategies there:

- :class:`PassThroughRenderer` (integration mode): every call reaches the
  real view untouched.
- :class:`RecordingRenderer` (isolation mode): templates are never loaded.
  The first non-layout template and a tally of partials are written to a
  :class:`RenderRecord` for the test to assert against.

Both strategies honour explicit render expectations and stubs first; a
matching hook replaces the rest of the render for that call.
"""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from .expectations import RenderExpectations

logger = logging.getLogger("controlspec.rendering")


class RenderMode(str, Enum):
    """Fidelity mode of a controller test group."""
    ISOLATION = "isolation"
    INTEGRATION = "integration"

    @classmethod
    def from_flag(cls, integrate_views: bool) -> "RenderMode":
        return cls.INTEGRATION if integrate_views else cls.ISOLATION


class RenderRecord:
    """What a controller attempted to render during one test."""

    __slots__ = ("first_template", "partial_counts")

    def __init__(self):
        self.first_template: Optional[str] = None
        self.partial_counts: Counter = Counter()

    def note_template(self, name: Optional[str]) -> None:
        if self.first_template is None and name:
            self.first_template = name

    def note_partial(self, name: str) -> None:
        self.partial_counts[name] += 1

    def partial_count(self, name: str) -> int:
        return self.partial_counts[name]

    @property
    def is_empty(self) -> bool:
        return self.first_template is None and not self.partial_counts

    def __repr__(self) -> str:
        return (
            f"<RenderRecord template={self.first_template!r} "
            f"partials={dict(self.partial_counts)}>"
        )


class InertTemplate:
    """Returned by ``pick_template`` in isolation mode."""

    def render_template(self, *args, **kwargs) -> None:
        return None

    def render_partial(self, *args, **kwargs) -> None:
        return None


class TemplateRenderer:
    """
    Base strategy: escape-hatch handling shared by both modes.

    Args:
        view: The controller's real template view.
        expectations: Render expectations/stubs registered by the test.
    """

    mode: RenderMode

    def __init__(self, view: Any, expectations: Optional[RenderExpectations] = None):
        self.view = view
        self.expectations = expectations if expectations is not None else RenderExpectations()
        self.performed_render = False

    def intercept(
        self,
        options: Mapping[str, Any],
        proceed: Callable[[Mapping[str, Any]], Any],
    ) -> Any:
        """
        Controller-level render entry.

        A matching expectation runs its mock with *options*; a matching
        stub returns its value. Either marks the render as performed and
        skips *proceed*. Otherwise *proceed* (the framework's own render)
        runs.
        """
        hook = self.expectations.find_matching_expectation(options)
        if hook is None:
            hook = self.expectations.find_matching_stub(options)
        if hook is not None:
            logger.debug("render(%r) claimed by %s", dict(options), hook.kind)
            self.performed_render = True
            return hook(options)
        return proceed(options)

    def file_exists(self, name: str) -> bool:
        return self.view.file_exists(name)

    def pick_template(self, name: str) -> Any:
        return self.view.pick_template(name)

    def render(self, options: Mapping[str, Any]) -> str:
        return self.view.render(options)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} view={self.view!r}>"


class PassThroughRenderer(TemplateRenderer):
    """Integration mode: the real render pipeline executes."""

    mode = RenderMode.INTEGRATION


class RecordingRenderer(TemplateRenderer):
    """
    Isolation mode: record render attempts without executing templates.

    Args:
        view: The controller's real template view (only reached when no
            record is attached).
        record: The test's :class:`RenderRecord`.
        expectations: Render expectations/stubs registered by the test.
        layout_prefix: Template-name prefix identifying layouts.
    """

    mode = RenderMode.ISOLATION

    def __init__(
        self,
        view: Any,
        record: Optional[RenderRecord] = None,
        expectations: Optional[RenderExpectations] = None,
        *,
        layout_prefix: str = "layouts/",
    ):
        super().__init__(view, expectations)
        self.record = record
        self.layout_prefix = layout_prefix

    def is_layout(self, name: Optional[str]) -> bool:
        return bool(name) and str(name).startswith(self.layout_prefix)

    def file_exists(self, name: str) -> bool:
        # Nothing is ever loaded, so every template "exists".
        return True

    def pick_template(self, name: str) -> InertTemplate:
        if self.record is not None and not self.is_layout(name):
            self.record.note_template(name)
        return InertTemplate()

    def render(self, options: Mapping[str, Any]) -> str:
        if self.record is None:
            return super().render(options)

        template = options.get("file")
        if template and not self.is_layout(template):
            self.record.note_template(template)
        partial = options.get("partial")
        if partial:
            self.record.note_partial(partial)
        return ""


def build_renderer(
    mode: RenderMode,
    view: Any,
    *,
    record: Optional[RenderRecord] = None,
    expectations: Optional[RenderExpectations] = None,
    layout_prefix: str = "layouts/",
) -> TemplateRenderer:
    """Create the strategy for *mode*."""
    if mode is RenderMode.INTEGRATION:
        renderer: TemplateRenderer = PassThroughRenderer(view, expectations)
    else:
        renderer = RecordingRenderer(
            view, record, expectations, layout_prefix=layout_prefix,
        )
    logger.debug("Installed %s (%s mode)", renderer.__class__.__name__, mode.value)
    return renderer
