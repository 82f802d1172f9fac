# backend/tests/routes/test_health_routes.py
from carwash.middleware.prometheus_middleware import normalize_path


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "ok"
    assert body["cache"] == "memory"
    assert set(body["pool"]) == {"size", "checked_in", "checked_out", "overflow"}


def test_metrics_exposition(client, test_service):
    client.get("/api/v1/services")
    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "carwash_http_requests_total" in response.text


def test_path_normalization():
    assert normalize_path("/api/v1/workers/01HZX3Q4M0V6K2P8R9S7T5W1YB/stats") == "/api/v1/workers/:id/stats"
    assert normalize_path("/api/v1/services") == "/api/v1/services"
