"""
Shared test fixtures and helpers for the controlspec test suite.
"""

import pytest

from controlspec.config import configure, set_active_config

# Import fixtures so pytest can discover them
from controlspec.fixtures import (  # noqa: F401
    harness_config,
    route_translator,
    render_record,
    mail_deliveries,
)

import sampleapp


@pytest.fixture(autouse=True)
def sample_harness():
    """Point the harness at the sample application for every test."""
    cfg = configure(
        routes=sampleapp.routes,
        registry=sampleapp.registry,
        mailer=sampleapp.mailer,
    )
    yield cfg
    set_active_config(None)


@pytest.fixture
def fresh_routes():
    """An unloaded routing table drawing the sample routes."""
    return sampleapp.RouteSet(sampleapp.draw)
