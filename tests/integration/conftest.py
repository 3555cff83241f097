import pytest
from fastapi.testclient import TestClient

from app.api import pages_router
from app.http_handler import app


@pytest.fixture
def test_client() -> TestClient:
    pages_router.page_service.store.clear()
    return TestClient(app, raise_server_exceptions=True)
