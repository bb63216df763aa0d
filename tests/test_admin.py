"""Tests for admin authentication."""

from fastapi.testclient import TestClient

from nutrilog.api.app import create_app
from nutrilog.containers import AppContainer


def test_admin_health_requires_token(container: AppContainer) -> None:
    app = create_app(container)
    client = TestClient(app)

    response = client.get("/admin/health")
    wrong = client.get("/admin/health", headers={"X-Admin-Token": "guess"})

    assert response.status_code == 401
    assert wrong.status_code == 401


def test_admin_health_accepts_valid_token(container: AppContainer) -> None:
    app = create_app(container)
    client = TestClient(app)

    response = client.get("/admin/health", headers={"X-Admin-Token": "admin-token"})

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_user_token_does_not_open_admin_endpoints(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    token = container.auth_service.tokens.issue("ann1")

    response = client.get("/admin/users", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
