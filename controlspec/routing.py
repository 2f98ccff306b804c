"""
Route translation between route options and paths.

:class:`RouteTranslator` is a stateless service over the application's
routing table. The table itself is a process-lifetime resource loaded
lazily the first time a path is recognised. The "reload if empty"
check-then-act assumes tests run one at a time; a parallel runner must
load the table once at process start instead.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from . import querystring
from .contracts import RoutingService
from .faults import RouteGenerationFault, RouteNotFoundFault

logger = logging.getLogger("controlspec.routing")


class RouteTranslator:
    """
    Generate paths from route options and recognise params from paths.

    Args:
        routes: The routing service (see :class:`contracts.RoutingService`).

    Example:
        translator = RouteTranslator(app.routes)
        translator.path_for({"controller": "things", "action": "show", "id": 1})
            -> "/things/1"
        translator.params_for("get", "/things/1/edit?flag=true")
            -> {"controller": "things", "action": "edit", "id": "1", "flag": "true"}
    """

    __slots__ = ("routes",)

    def __init__(self, routes: RoutingService):
        self.routes = routes

    def ensure_routes_loaded(self) -> None:
        """Load the routing table if it reports itself empty."""
        if self.routes.is_empty():
            logger.info("Routing table empty; reloading")
            self.routes.reload()

    def path_for(self, options: Mapping[str, Any]) -> str:
        """
        Generate the canonical path for *options*.

        Raises:
            RouteGenerationFault: If no route produces a path.
        """
        self.ensure_routes_loaded()
        try:
            path = self.routes.generate(dict(options))
        except Exception as exc:
            raise RouteGenerationFault(options, str(exc)) from exc
        if not path:
            raise RouteGenerationFault(options)
        logger.debug("Generated %s from %r", path, dict(options))
        return path

    def params_for(self, method: str, path: str) -> Dict[str, Any]:
        """
        Recognise *path* for *method*, merging in any query string params.

        Raises:
            RouteNotFoundFault: If no route matches.
        """
        self.ensure_routes_loaded()
        method = method.upper()
        bare_path, qs = querystring.split_path(path)
        try:
            recognized = self.routes.recognize(bare_path, method)
        except Exception as exc:
            raise RouteNotFoundFault(method, bare_path) from exc
        if recognized is None:
            raise RouteNotFoundFault(method, bare_path)

        params = dict(recognized)
        params.update(querystring.decode(qs))
        logger.debug("Recognised %s %s as %r", method, path, params)
        return params
