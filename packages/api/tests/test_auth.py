# This project was developed with assistance from AI tools.
"""Tests for JWT authentication and role guards."""

import pytest
from db.enums import UserRole
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient

from barangay_docs.core.config import settings
from barangay_docs.middleware.auth import (
    SIGNING_ROLES,
    CurrentUser,
    get_current_user,
    require_roles,
    resolve_role,
)
from barangay_docs.schemas.auth import TokenPayload, UserContext

# ---------------------------------------------------------------------------
# AUTH_DISABLED bypass
# ---------------------------------------------------------------------------


def test_auth_disabled_returns_dev_admin(monkeypatch):
    """When AUTH_DISABLED=true, any request gets a dev admin user."""
    monkeypatch.setattr(settings, "AUTH_DISABLED", True)

    app = FastAPI()

    @app.get("/me")
    async def me(user: CurrentUser):
        return {"user_id": user.user_id, "role": user.role.value}

    resp = TestClient(app).get("/me")
    assert resp.status_code == 200
    assert resp.json() == {"user_id": "dev-user", "role": "admin"}


# ---------------------------------------------------------------------------
# Missing / malformed token
# ---------------------------------------------------------------------------


def test_missing_token_returns_401(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)

    app = FastAPI()

    @app.get("/me")
    async def me(user: CurrentUser):
        return {}

    resp = TestClient(app).get("/me")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"
    assert "Missing authentication token" in resp.json()["detail"]


def test_garbage_token_returns_401(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_DISABLED", False)

    app = FastAPI()

    @app.get("/me")
    async def me(user: CurrentUser):
        return {}

    resp = TestClient(app).get("/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Role resolution
# ---------------------------------------------------------------------------


def test_resolve_role_ignores_keycloak_builtins():
    payload = TokenPayload(
        sub="user-1",
        realm_access={"roles": ["offline_access", "clerk", "uma_authorization"]},
    )
    assert resolve_role(payload) == UserRole.CLERK


def test_resolve_role_prefers_highest_authority():
    payload = TokenPayload(sub="user-1", realm_access={"roles": ["clerk", "captain"]})
    assert resolve_role(payload) == UserRole.CAPTAIN


def test_resolve_role_without_staff_role_is_forbidden():
    payload = TokenPayload(sub="user-1", realm_access={"roles": ["offline_access"]})

    with pytest.raises(HTTPException) as exc_info:
        resolve_role(payload)
    assert exc_info.value.status_code == 403


# ---------------------------------------------------------------------------
# Role guards
# ---------------------------------------------------------------------------


def _guarded_app(role: UserRole) -> FastAPI:
    app = FastAPI()

    @app.post("/sign", dependencies=[Depends(require_roles(*SIGNING_ROLES))])
    async def sign():
        return {"ok": True}

    app.dependency_overrides[get_current_user] = lambda: UserContext(
        user_id="u-1", role=role, email="u@barangay.local", name="U"
    )
    return app


@pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.CAPTAIN, UserRole.SECRETARY])
def test_signing_roles_allowed(role):
    assert TestClient(_guarded_app(role)).post("/sign").status_code == 200


def test_clerk_cannot_sign():
    resp = TestClient(_guarded_app(UserRole.CLERK)).post("/sign")
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Insufficient permissions"


def test_actor_label_includes_role():
    user = UserContext(user_id="u-9", role=UserRole.SECRETARY, email="", name="Ana Lopez")
    assert user.actor == "Ana Lopez (secretary)"
