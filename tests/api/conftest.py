"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="function")
def client(recording_invoker):
    """
    Create a test client with a recording invoker in app state.
    Each test gets a fresh client to avoid state contamination.
    """
    from main import app

    app.state.invoker = recording_invoker
    app.state.config = {}

    # No context manager: the lifespan would replace the invoker
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client

    del app.state.invoker


@pytest.fixture
def batch_request(version_specs):
    """Plan/run request body for the horizontal test image"""
    return {
        "image": {"path": "./assets/horizontal.jpg", "width": 5184, "height": 2623},
        "output": {"versions": version_specs[:3]},
    }
