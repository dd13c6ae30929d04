"""
Shared test fixtures: default catalog, trade context, API test client.
"""

import pytest
from fastapi.testclient import TestClient

from takeoff.calculators.base import TakeoffContext
from takeoff.calculators.material_lookup import build_catalog
from takeoff.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def catalog():
    """Catalog built from the default tables only, no override file."""
    return build_catalog()


@pytest.fixture
def ctx(catalog):
    return TakeoffContext(catalog)
