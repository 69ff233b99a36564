"""Tests for the health endpoint."""

from datetime import datetime


def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["timestamp"].endswith("Z")
    datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
    assert data["uptime"] >= 0


def test_uptime_does_not_decrease(client):
    first = client.get("/api/health").json()["uptime"]
    second = client.get("/api/health").json()["uptime"]

    assert second >= first
