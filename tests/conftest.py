"""
Shared test fixtures and helpers for the AquilAdmin test suite.
"""

import pytest
from unittest.mock import MagicMock

from aquiladmin.admin.base import AdminInterface
from aquiladmin.admin.pool import Pool
from aquiladmin.di.core import Container
from aquiladmin.di.testing import InMemoryLocator


def make_admin_mock(code: str = "admin", *, show_in: bool = True) -> MagicMock:
    """Admin double with the capabilities the pool relies on."""
    admin = MagicMock(spec=AdminInterface)
    admin.code = code
    admin.show_in.return_value = show_in
    admin.has_child.return_value = False
    return admin


def item(service_id: str) -> dict:
    """Group item in the shape the pool expects."""
    return {
        "admin": service_id,
        "label": "",
        "route": "",
        "route_params": {},
    }


@pytest.fixture
def locator():
    """Locator handing out a fresh admin double for every id."""
    return InMemoryLocator(lambda service_id: make_admin_mock(service_id))


@pytest.fixture
def pool(locator):
    return Pool(locator, "Aquilia Admin", "/path/to/pic.png", {"foo": "bar"})


@pytest.fixture
def container():
    return Container(scope="app")
