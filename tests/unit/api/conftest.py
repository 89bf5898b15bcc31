"""
Common fixtures for API unit tests.

Provides:
- FastAPI TestClient with the listing handler backed by the in-memory
  repository (no Redis needed)
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.api.routers.applications import get_list_applications_handler
from src.application.queries.list_applications import ListApplicationsQueryHandler


@pytest.fixture
def client(repository):
    """
    FastAPI TestClient for testing endpoints.

    The listing handler reads from the shared `repository` fixture, so
    tests seed data with `create_application`.
    """
    app.dependency_overrides[get_list_applications_handler] = (
        lambda: ListApplicationsQueryHandler(repository)
    )
    yield TestClient(app)
    app.dependency_overrides.clear()
