"""
controlspec - Pytest Fixtures.

Import the fixtures in your ``conftest.py`` to make them available::

    from controlspec.fixtures import (  # noqa: F401
        harness_config,
        route_translator,
        render_record,
        mail_deliveries,
    )
"""

from __future__ import annotations

import pytest

from .config import HarnessConfig, get_active_config, set_active_config
from .mail import reset_deliveries
from .rendering import RenderRecord
from .routing import RouteTranslator


@pytest.fixture
def harness_config():
    """
    A private copy of the active :class:`HarnessConfig`.

    Changes made during the test are discarded afterwards.
    """
    previous = get_active_config()
    cfg = HarnessConfig(previous.to_dict())
    set_active_config(cfg)
    yield cfg
    set_active_config(previous)


@pytest.fixture
def route_translator(harness_config):
    """A :class:`RouteTranslator` over the configured routing table."""
    routes = harness_config.require("routes", "Configure routes before using route_translator")
    return RouteTranslator(routes)


@pytest.fixture
def render_record():
    """An empty :class:`RenderRecord`."""
    return RenderRecord()


@pytest.fixture
def mail_deliveries(harness_config):
    """
    Fresh delivery buffer attached to the configured mailer.

    Use ``assert len(mail_deliveries) == 1`` to verify mail was sent.
    """
    mailer = harness_config.mailer
    if mailer is None:
        yield []
        return
    deliveries = reset_deliveries(mailer)
    yield deliveries
    deliveries.clear()
