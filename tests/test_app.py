import inspect
from collections import deque

from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

import app.main as main_module
from app.main import app
from app.utils.cache import CacheService
from app.utils.rate_limiter import RateLimiter, rate_limiter


def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"] == "http_error"
    assert response.json()["status_code"] == 404


def test_malformed_json_is_422(client, auth_headers, chapter):
    response = client.post(
        f"/api/chapters/{chapter.id}/progress",
        content="{not json",
        headers={**auth_headers("reader"), "Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_path_parameter_type_is_validated(client, auth_headers):
    response = client.get("/api/chapters/abc", headers=auth_headers("reader"))

    assert response.status_code == 422
    assert response.json()["fields"][0]["field"] == "path.chapter_id"


def test_rate_limit_returns_429(client, monkeypatch):
    monkeypatch.setattr(rate_limiter, "requests_per_minute", 2)

    assert client.get("/").status_code == 200
    assert client.get("/").status_code == 200

    response = client.get("/")
    assert response.status_code == 429
    assert response.json()["error"] == "rate_limit_exceeded"
    assert response.json()["retry_after"] == 60

    # health checks are never throttled
    assert client.get("/health").status_code == 200


def test_rate_limiter_defaults():
    limiter = RateLimiter()

    assert limiter.requests_per_minute == 60
    assert limiter.requests_per_hour == 1000


def test_disabled_cache_is_a_miss():
    cache = CacheService("redis://localhost:6379/0", enabled=False)

    assert cache.enabled is False
    assert cache.get("content:chapters") is None
    cache.set("content:chapters", [{"id": 1}])
    assert cache.get("content:chapters") is None


def test_forwarded_for_is_ignored_from_untrusted_peers(client, monkeypatch):
    monkeypatch.setattr(rate_limiter, "requests_per_minute", 2)

    statuses = [
        client.get("/", headers={"X-Forwarded-For": f"10.0.0.{n}"}).status_code
        for n in range(5)
    ]

    assert statuses == [200, 200, 429, 429, 429]
    assert list(rate_limiter.history) == ["testclient"]


def test_forwarded_for_is_read_behind_a_trusted_proxy(client, monkeypatch):
    monkeypatch.setattr(rate_limiter, "requests_per_minute", 1)
    monkeypatch.setattr(rate_limiter, "trusted_proxies", {"testclient"})

    first = client.get("/", headers={"X-Forwarded-For": "203.0.113.7"})
    other = client.get("/", headers={"X-Forwarded-For": "198.51.100.2"})
    # a spoofed leftmost entry does not change the identity
    again = client.get("/", headers={"X-Forwarded-For": "1.2.3.4, 203.0.113.7"})

    assert [first.status_code, other.status_code, again.status_code] == [200, 200, 429]


def test_cleanup_forgets_idle_clients():
    limiter = RateLimiter()
    limiter.history["idle"] = deque([10.0, 20.0])
    limiter.history["active"] = deque([10.0, 3700.0])

    limiter._cleanup_old_entries(now=3800.0)

    assert list(limiter.history) == ["active"]
    assert list(limiter.history["active"]) == [3700.0]


def test_api_handlers_run_in_threadpool():
    handlers = [
        route.endpoint for route in app.routes
        if isinstance(route, APIRoute) and route.path.startswith("/api")
    ]

    assert handlers
    assert [h.__name__ for h in handlers if inspect.iscoroutinefunction(h)] == []


def test_lifespan_initializes_database(monkeypatch):
    calls = []
    monkeypatch.setattr(main_module, "init_db", lambda: calls.append("init"))

    with TestClient(app) as managed:
        assert calls == ["init"]
        assert managed.get("/health").status_code == 200

    assert app.router.on_startup == []
