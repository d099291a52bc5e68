"""Security test suite: response headers, rate limiting, system endpoints.

Covers:
1. Standard security headers on every response
2. Rate limiting on the login endpoint and the global default windows
3. Unauthenticated root and health endpoints
"""

from __future__ import annotations

import pytest

from hr_api.common.rate_limit import limiter
from hr_api.common.security import SECURITY_HEADERS
from hr_api.config import settings


# ═════════════════════════════════════════════════════════════════════
# 1. SECURITY HEADERS
# ═════════════════════════════════════════════════════════════════════


class TestSecurityHeaders:

    async def test_headers_on_public_endpoint(self, client):
        resp = await client.get("/api/v1/health")
        for name, value in SECURITY_HEADERS.items():
            assert resp.headers[name] == value

    async def test_headers_on_error_responses(self, client):
        resp = await client.get("/api/v1/employees")
        assert resp.status_code == 401
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"

    async def test_problem_detail_media_type(self, client, auth_headers):
        resp = await client.get(
            "/api/v1/companies/00000000-0000-0000-0000-000000000000", headers=auth_headers,
        )
        assert resp.status_code == 404
        assert resp.headers["content-type"].startswith("application/problem+json")
        body = resp.json()
        assert body["status"] == 404
        assert body["type"].endswith("/not-found")
        assert body["instance"] == "/api/v1/companies/00000000-0000-0000-0000-000000000000"


# ═════════════════════════════════════════════════════════════════════
# 2. RATE LIMITING
# ═════════════════════════════════════════════════════════════════════


class TestRateLimiting:
    """Verify the login limit and that counting happens before the handler."""

    @pytest.fixture(autouse=True)
    def _enable_limiter(self):
        original = limiter.enabled
        limiter.enabled = True
        limiter.reset()
        yield
        limiter.enabled = original
        limiter.reset()

    async def test_login_limited_at_5_per_minute(self, client, admin_user):
        assert settings.LOGIN_RATE_LIMIT == "5/minute"
        for i in range(5):
            resp = await client.post(
                "/api/v1/auth/login",
                json={"email": "admin@example.com", "password": "Passw0rd!"},
            )
            assert resp.status_code == 200, f"Request {i + 1} should succeed"

        resp = await client.post(
            "/api/v1/auth/login",
            json={"email": "admin@example.com", "password": "Passw0rd!"},
        )
        assert resp.status_code == 429

    async def test_failed_logins_count_toward_limit(self, client):
        for i in range(5):
            resp = await client.post(
                "/api/v1/auth/login",
                json={"email": "nobody@example.com", "password": f"guess-{i}"},
            )
            assert resp.status_code == 401

        resp = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "guess-overflow"},
        )
        assert resp.status_code == 429
        assert "rate limit" in resp.text.lower()

    async def test_other_routes_unaffected_by_login_limit(self, client):
        for i in range(6):
            await client.post(
                "/api/v1/auth/login",
                json={"email": "nobody@example.com", "password": f"guess-{i}"},
            )
        resp = await client.get("/api/v1/health")
        assert resp.status_code == 200


async def test_limiter_disabled_in_tests(client):
    """With RATE_LIMIT_ENABLED=false the login limit is not enforced."""
    for i in range(7):
        resp = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": f"guess-{i}"},
        )
        assert resp.status_code == 401


# ═════════════════════════════════════════════════════════════════════
# 3. SYSTEM ENDPOINTS
# ═════════════════════════════════════════════════════════════════════


async def test_health_check(client):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["version"] == settings.APP_VERSION


@pytest.mark.parametrize("path", ["/", "/api/v1"])
async def test_root_info_lists_endpoints(client, path):
    resp = await client.get(path)
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == settings.APP_NAME
    assert body["status"] == "running"
    assert body["endpoints"]["employees"] == "/api/v1/employees"
    assert body["endpoints"]["time_tracking"] == "/api/v1/time-tracking"


async def test_unknown_route_is_404(client):
    resp = await client.get("/api/v1/does-not-exist")
    assert resp.status_code == 404
