"""
Health endpoints and error handling at the request boundary.

Covers:
- service info and health check with store connectivity
- unmatched routes (404 with a route listing)
- unexpected exceptions (generic 500)
- store outages during a request (503)
- request id headers from the logging middleware
"""

from fastapi.testclient import TestClient

from services.auth_service import AuthService
from test_fixtures import UnreachableCollection, auth_headers, register_user


def test_service_info_reports_database(client):
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "running"
    assert body["database"] == "connected"
    assert "POST /api/meal-plan" in body["endpoints"]


def test_health_check_connected(client):
    r = client.get("/api/test")
    assert r.status_code == 200
    assert r.json()["message"] == "Backend is working!"
    assert r.json()["database"] == "connected"


def test_health_check_reports_disconnected_store(client, store):
    store.go_down()
    r = client.get("/api/test")
    assert r.status_code == 200
    assert r.json()["database"] == "disconnected"


def test_unknown_route_lists_available_routes(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Route not found"
    assert "GET /api/auth/me" in body["availableRoutes"]
    assert "DELETE /api/meal-plan/{plan_id}" in body["availableRoutes"]
    assert "POST /api/auth/register" in body["availableRoutes"]
    assert "GET /" in body["availableRoutes"]
    assert not any("/docs" in route or "openapi" in route for route in body["availableRoutes"])


def test_register_store_down_is_503(client, store):
    store.go_down()
    r = client.post("/api/auth/register", json={"email": "a@b.com", "password": "pw"})
    assert r.status_code == 503
    assert r.json()["error"] == "Database not available"


def test_unexpected_error_is_generic_500(app, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr(AuthService, "login", boom)
    client = TestClient(app, raise_server_exceptions=False)

    r = client.post("/api/auth/login", json={"email": "a@b.com", "password": "pw"})
    assert r.status_code == 500
    assert r.json()["error"] == "Internal server error"
    assert "connection reset" not in r.text


def test_store_dropping_mid_request_is_503(client, store):
    token = register_user(client)["token"]
    store._db["meal_plans"] = UnreachableCollection()

    r = client.get("/api/meal-plan", headers=auth_headers(token))
    assert r.status_code == 503
    assert r.json()["error"] == "Database not available"
    assert "timed out" not in r.text


def test_register_with_store_dropping_is_503(client, store):
    store._db["users"] = UnreachableCollection()
    r = client.post("/api/auth/register", json={"email": "a@b.com", "password": "pw"})
    assert r.status_code == 503


def test_request_id_header(client):
    r = client.get("/api/test")
    assert r.headers.get("x-request-id")
    assert r.headers["x-request-id"] != client.get("/api/test").headers["x-request-id"]


def test_incoming_request_id_is_echoed(client):
    r = client.get("/api/test", headers={"X-Request-ID": "trace-42"})
    assert r.headers["x-request-id"] == "trace-42"

    r = client.get("/nowhere", headers={"X-Request-ID": "trace-43"})
    assert r.status_code == 404
    assert r.headers["x-request-id"] == "trace-43"
