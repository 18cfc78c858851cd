"""
Unit tests for AuthService token resolution and the public endpoints.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.main import app
from app.modules.auth import service as auth_service_module
from app.modules.auth.schemas import LoginRequest, RegisterRequest
from app.modules.auth.service import AuthService


@pytest.fixture(autouse=True)
def clear_cache():
    auth_service_module._AUTH_USER_CACHE.clear()
    yield
    auth_service_module._AUTH_USER_CACHE.clear()


@pytest.fixture
def supabase():
    client = MagicMock()
    client.auth.get_user.return_value = SimpleNamespace(user=SimpleNamespace(
        id="kim", email="kim@example.com", user_metadata={"full_name": "Kim"}, app_metadata={},
    ))
    return client


class TestGetCurrentUser:
    def test_resolves_principal(self, supabase):
        user = AuthService(supabase).get_current_user("token-1")
        assert user["id"] == "kim"
        assert user["user_metadata"] == {"full_name": "Kim"}

    def test_principal_is_cached_per_token(self, supabase):
        service = AuthService(supabase)
        service.get_current_user("token-1")
        service.get_current_user("token-1")
        assert supabase.auth.get_user.call_count == 1

    def test_logout_drops_cached_principal(self, supabase):
        service = AuthService(supabase)
        service.get_current_user("token-1")
        assert service.logout("token-1") is True
        service.get_current_user("token-1")
        assert supabase.auth.get_user.call_count == 2

    def test_expired_token_is_401(self, supabase):
        supabase.auth.get_user.side_effect = Exception("JWT expired")
        with pytest.raises(HTTPException) as exc_info:
            AuthService(supabase).get_current_user("stale")
        assert exc_info.value.status_code == 401

    def test_missing_user_is_401(self, supabase):
        supabase.auth.get_user.return_value = SimpleNamespace(user=None)
        with pytest.raises(HTTPException) as exc_info:
            AuthService(supabase).get_current_user("token-2")
        assert exc_info.value.status_code == 401


class TestLogin:
    def test_bad_credentials_are_401(self, supabase):
        supabase.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")
        with pytest.raises(HTTPException) as exc_info:
            AuthService(supabase).login(LoginRequest(email="kim@orchestra.org", password="wrong"))
        assert exc_info.value.status_code == 401


class TestRegister:
    def test_register_passes_name_as_metadata(self, supabase):
        supabase.auth.sign_up.return_value = SimpleNamespace(
            user=SimpleNamespace(id="kim", email="kim@orchestra.org"), session=None,
        )
        response = AuthService(supabase).register(
            RegisterRequest(email="kim@orchestra.org", password="secret1", name="  Kim "),
        )

        payload = supabase.auth.sign_up.call_args.args[0]
        assert payload["options"]["data"] == {"name": "Kim"}
        assert response.needs_confirmation is True

    def test_duplicate_email_is_400(self, supabase):
        supabase.auth.sign_up.side_effect = Exception("User already registered")
        with pytest.raises(HTTPException) as exc_info:
            AuthService(supabase).register(RegisterRequest(email="kim@orchestra.org", password="secret1"))
        assert exc_info.value.status_code == 400


class TestPublicEndpoints:
    def test_health_and_root(self):
        client = TestClient(app)
        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/").json()["status"] == "healthy"
        assert client.get("/ready").status_code == 200

    def test_security_headers(self):
        response = TestClient(app).get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_protected_route_requires_bearer_token(self):
        response = TestClient(app).get("/api/v1/schedules/me")
        assert response.status_code in (401, 403)
