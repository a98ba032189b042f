import json
from datetime import date

import pytest

from jobclip.core.page import PageSnapshot

TODAY = date(2024, 6, 15)

DESCRIPTION = (
    "We are looking for an engineer to join our platform team. You will design, "
    "build and operate services used by millions of people, work closely with "
    "product and design, and mentor other engineers on the team."
)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def description():
    """Plain-text description long enough to be kept (over 100 chars)."""
    assert 100 < len(DESCRIPTION) < 1000
    return DESCRIPTION


@pytest.fixture
def make_page():
    """Build a PageSnapshot pinned to a fixed reference date."""
    def _make(url, html="", state=None, today=TODAY):
        return PageSnapshot(url, html, state=state, today=today)
    return _make


@pytest.fixture
def jsonld_script():
    """Render an object as an application/ld+json script tag."""
    def _script(data):
        return f'<script type="application/ld+json">{json.dumps(data)}</script>'
    return _script
