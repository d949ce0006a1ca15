from __future__ import annotations

from tests.api.support import api_test_client


def test_health_endpoint() -> None:
    with api_test_client() as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
