"""
API test fixtures.

Builds the app with mocked services and a switchable signed-in user so
routes can be exercised without a database.

Dependencies: pytest, fastapi.testclient
System role: HTTP layer test infrastructure
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api_factories import ADMIN_USER, STUDENT_USER
from backend.api.deps import (
    get_auth_service,
    get_current_user,
    get_dashboard_service,
    get_invoice_service,
    get_student_service,
    get_transaction_service,
    get_video_service,
)
from backend.api.main import create_app


@pytest.fixture
def services() -> dict[str, MagicMock]:
    """One mock per service; AuthService.sign_out is synchronous."""
    auth = AsyncMock()
    auth.sign_out = MagicMock()
    dashboard = AsyncMock()
    dashboard.get_revision = MagicMock()
    return {
        "student": AsyncMock(),
        "transaction": AsyncMock(),
        "invoice": AsyncMock(),
        "video": AsyncMock(),
        "dashboard": dashboard,
        "auth": auth,
    }


@pytest.fixture
def app(services):
    app = create_app()
    app.dependency_overrides[get_student_service] = lambda: services["student"]
    app.dependency_overrides[get_transaction_service] = lambda: services["transaction"]
    app.dependency_overrides[get_invoice_service] = lambda: services["invoice"]
    app.dependency_overrides[get_video_service] = lambda: services["video"]
    app.dependency_overrides[get_dashboard_service] = lambda: services["dashboard"]
    app.dependency_overrides[get_auth_service] = lambda: services["auth"]
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """Client signed in as an admin."""
    app.dependency_overrides[get_current_user] = lambda: ADMIN_USER
    return TestClient(app)


@pytest.fixture
def student_client(app) -> TestClient:
    """Client signed in as a student."""
    app.dependency_overrides[get_current_user] = lambda: STUDENT_USER
    return TestClient(app)


@pytest.fixture
def anonymous_client(app) -> TestClient:
    """Client without a current-user override; bearer tokens go through the auth service mock."""
    return TestClient(app)
