"""
Contracts the harness consumes from the web framework.

The harness never imports a framework directly. Anything that satisfies
these protocols (a routing table, a controller base type, a template view,
a mailer) can be driven by :class:`controlspec.cases.ControllerTestCase`.
"""

from __future__ import annotations

from typing import Any, Callable, List, Mapping, MutableMapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class RoutingService(Protocol):
    """Routing table: generation, recognition and (re)loading."""

    def generate(self, options: Mapping[str, Any]) -> Optional[str]:
        ...

    def recognize(self, path: str, method: str) -> Optional[Mapping[str, Any]]:
        ...

    def is_empty(self) -> bool:
        ...

    def reload(self) -> None:
        ...


class PickedTemplate(Protocol):
    """A selected, loaded template."""

    def render_template(self, local_assigns: Optional[Mapping[str, Any]] = None) -> Any:
        ...

    def render_partial(self, local_assigns: Optional[Mapping[str, Any]] = None) -> Any:
        ...


@runtime_checkable
class TemplateView(Protocol):
    """
    View-level rendering surface.

    ``render`` receives normalised options: ``file`` (template name),
    ``partial`` (partial name), ``layout`` and ``locals``.
    """

    def file_exists(self, name: str) -> bool:
        ...

    def pick_template(self, name: str) -> PickedTemplate:
        ...

    def render(self, options: Mapping[str, Any]) -> str:
        ...


class TemplateRenderer(TemplateView, Protocol):
    """The strategy a controller renders through."""

    performed_render: bool

    def intercept(
        self,
        options: Mapping[str, Any],
        proceed: Callable[[Mapping[str, Any]], Any],
    ) -> Any:
        ...


class Controller(Protocol):
    """What the harness needs from a controller instance."""

    view: TemplateView
    template_renderer: TemplateRenderer
    session: MutableMapping[str, Any]
    controller_path: str

    def process(self, request: Any, response: Any) -> Any:
        ...


class Mailer(Protocol):
    """A mail facility that appends sent messages to ``deliveries``."""

    deliveries: List[Any]
