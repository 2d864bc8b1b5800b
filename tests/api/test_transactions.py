"""
API tests for the per-request transaction.

System role: Verification that writes are committed before the response
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from explorely.main import create_app

PAYLOAD = {
    "email": "traveler1@example.com",
    "password": "Passw0rdOK",
    "name": "Tess",
    "username": "traveler1",
}


@pytest.fixture
def lenient_client(test_settings):
    """Client that returns 500 responses instead of re-raising server errors."""
    app = create_app(test_settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def _lost_connection() -> OperationalError:
    return OperationalError("COMMIT", {}, Exception("connection lost"))


def test_failed_commit_is_500_and_nothing_persists(lenient_client: TestClient):
    with patch.object(AsyncSession, "commit", side_effect=_lost_connection()):
        response = lenient_client.post("/auth/register", json=PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}

    login = lenient_client.post(
        "/auth/login", json={"email": PAYLOAD["email"], "password": PAYLOAD["password"]}
    )
    assert login.status_code == 401


def test_write_is_visible_to_the_next_request(lenient_client: TestClient):
    created = lenient_client.post("/auth/register", json=PAYLOAD)

    login = lenient_client.post(
        "/auth/login", json={"email": PAYLOAD["email"], "password": PAYLOAD["password"]}
    )

    assert created.status_code == 201
    assert login.status_code == 200

