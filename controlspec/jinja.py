"""
Jinja2 view adapter.

Lets an application that renders with Jinja2 expose the view surface the
harness drives (``file_exists`` / ``pick_template`` / ``render``). All
template work is Jinja2's; this module only maps render options onto it.

Template name conventions:
    - ``"things/show"``  -> ``things/show.html``
    - partial ``"thing"`` -> ``<controller_path>/_thing.html``
    - partial ``"shared/thing"`` -> ``shared/_thing.html``
    - layouts receive the rendered body as ``content``

Templates can render partials themselves with the ``partial`` helper::

    {% for thing in things %}{{ partial("thing", thing=thing) }}{% endfor %}
"""

from typing import Any, Dict, List, Mapping, Optional

from jinja2 import Environment, Template, TemplateNotFound
from markupsafe import Markup


class JinjaPickedTemplate:
    """A loaded Jinja2 template bound to the view that picked it."""

    __slots__ = ("view", "template", "name")

    def __init__(self, view: "JinjaTemplateView", template: Template, name: str):
        self.view = view
        self.template = template
        self.name = name

    def render_template(self, local_assigns: Optional[Mapping[str, Any]] = None) -> Markup:
        return Markup(self.template.render(**self.view.template_context(local_assigns)))

    def render_partial(self, local_assigns: Optional[Mapping[str, Any]] = None) -> Markup:
        return self.render_template(local_assigns)

    def __repr__(self) -> str:
        return f"<JinjaPickedTemplate {self.name!r}>"


class JinjaTemplateView:
    """
    View backed by a Jinja2 :class:`Environment`.

    Args:
        environment: Jinja2 environment (loader, autoescape, filters).
        controller_path: Directory for relative partial names.
        extension: Template file extension.
        layout: Default layout for template renders.

    Attributes:
        loaded: Names of every template this view has loaded, in order.
    """

    def __init__(
        self,
        environment: Environment,
        *,
        controller_path: str = "",
        extension: str = ".html",
        layout: Optional[str] = None,
    ):
        self.env = environment
        self.controller_path = controller_path
        self.extension = extension
        self.layout = layout
        self.loaded: List[str] = []

    # ------------------------------------------------------------------
    # Name resolution
    # ------------------------------------------------------------------

    def template_path(self, name: str) -> str:
        if self.extension and not name.endswith(self.extension):
            return f"{name}{self.extension}"
        return name

    def partial_path(self, name: str) -> str:
        directory, _, base = name.rpartition("/")
        if not directory:
            directory = self.controller_path
        return f"{directory}/_{base}" if directory else f"_{base}"

    # ------------------------------------------------------------------
    # View surface
    # ------------------------------------------------------------------

    def file_exists(self, name: str) -> bool:
        path = self.template_path(name)
        try:
            self.env.loader.get_source(self.env, path)
        except TemplateNotFound:
            return False
        return True

    def pick_template(self, name: str) -> JinjaPickedTemplate:
        template = self.env.get_template(self.template_path(name))
        self.loaded.append(name)
        return JinjaPickedTemplate(self, template, name)

    def render(self, options: Mapping[str, Any]) -> Markup:
        """
        Render from normalised options.

        Options:
            file:    Template name.
            partial: Partial name.
            layout:  Layout name; ``None`` or ``False`` renders without one.
            locals:  Template variables.
            text:    Literal body, rendered without a template.
        """
        local_assigns = dict(options.get("locals") or {})

        partial = options.get("partial")
        if partial:
            return self.pick_template(self.partial_path(partial)).render_partial(local_assigns)

        name = options.get("file")
        if name is None:
            if "text" in options:
                return Markup.escape(options["text"])
            raise ValueError(f"Nothing to render in {dict(options)!r}")

        body = self.pick_template(name).render_template(local_assigns)
        layout = options.get("layout", self.layout)
        if layout:
            local_assigns["content"] = body
            body = self.pick_template(layout).render_template(local_assigns)
        return body

    def template_context(self, local_assigns: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        context = dict(local_assigns or {})
        context.setdefault("partial", self._partial_helper)
        return context

    def _partial_helper(self, name: str, **local_assigns: Any) -> Markup:
        return self.render({"partial": name, "locals": local_assigns})

    def __repr__(self) -> str:
        return f"<JinjaTemplateView controller_path={self.controller_path!r}>"
