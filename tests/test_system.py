"""Tests for GET /health and GET /robots.txt."""


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["dependencies"]["firestore"] is True
    assert body["dependencies"]["storage"] is True
    assert body["dependencies"]["redis"] is True


def test_health_reports_missing_redis(client, monkeypatch):
    from app.integrations import redis_client as rc

    monkeypatch.setattr(rc, "client", None)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["dependencies"]["redis"] is False


def test_robots_txt(client):
    response = client.get("/robots.txt")
    assert response.status_code == 200
    assert "User-agent: *" in response.text
    assert "Disallow: /" in response.text
