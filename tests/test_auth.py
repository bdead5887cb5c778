"""Admin route guard"""
import asyncio

import httpx
import pytest
from fastapi import HTTPException

from barberdesk import auth
from barberdesk.models import AdminProfile

ADMIN_ROUTES = [
    "/admin/dashboard",
    "/admin/reservations",
    "/admin/services",
    "/admin/clients",
    "/admin/work-registry",
    "/admin/work-registry/export",
]


@pytest.fixture
def identity(monkeypatch):
    """Resolve 'good-token' to user-1; anything else is rejected"""

    async def fake_verify(token):
        if token != "good-token":
            raise HTTPException(status_code=401, detail="Sesión inválida o expirada")
        return {"id": "user-1", "email": "admin@302barber.com"}

    monkeypatch.setattr(auth, "verify_supabase_token", fake_verify)


def _mock_identity_provider(monkeypatch, handler):
    real_client = httpx.AsyncClient

    def client_factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(auth.httpx, "AsyncClient", client_factory)


@pytest.mark.parametrize("path", ADMIN_ROUTES)
def test_admin_routes_require_a_token(client, path):
    assert client.get(path).status_code == 401


def test_public_routes_are_open(client):
    assert client.get("/catalog").status_code == 200
    assert client.get("/booking/availability", params={"date": "2030-01-01"}).status_code == 200


def test_invalid_token_is_rejected(client, identity):
    response = client.get("/admin/dashboard", headers={"Authorization": "Bearer bad-token"})
    assert response.status_code == 401


def test_authenticated_user_without_admin_profile_is_forbidden(client, identity):
    response = client.get("/admin/dashboard", headers={"Authorization": "Bearer good-token"})
    assert response.status_code == 403


def test_admin_profile_grants_access(client, identity, db_session):
    db_session.add(AdminProfile(user_id="user-1", full_name="Dueño"))
    db_session.commit()

    response = client.get("/admin/dashboard", headers={"Authorization": "Bearer good-token"})

    assert response.status_code == 200


def test_token_is_checked_against_the_identity_provider(monkeypatch):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["authorization"] = request.headers["authorization"]
        return httpx.Response(200, json={"id": "user-1"})

    _mock_identity_provider(monkeypatch, handler)

    user = asyncio.run(auth.verify_supabase_token("abc"))

    assert user["id"] == "user-1"
    assert seen["url"] == "https://example.supabase.co/auth/v1/user"
    assert seen["authorization"] == "Bearer abc"


def test_expired_token_maps_to_401(monkeypatch):
    _mock_identity_provider(monkeypatch, lambda request: httpx.Response(401, json={"msg": "expired"}))

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(auth.verify_supabase_token("abc"))
    assert exc_info.value.status_code == 401


def test_unreachable_identity_provider_maps_to_503(monkeypatch):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    _mock_identity_provider(monkeypatch, handler)

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(auth.verify_supabase_token("abc"))
    assert exc_info.value.status_code == 503
