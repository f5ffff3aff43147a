"""Tests for sign-up, sign-in, identity resolution and role checks."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from littlebridge.config import settings
from littlebridge.core.errors import DataAccessError, ErrorKind
from littlebridge.database import supabase_client
from littlebridge.database.demo_data import DEMO_FAMILY_USER_ID
from littlebridge.modules.auth.schemas import SignInRequest, SignUpRequest
from littlebridge.modules.auth.service import AuthService
from conftest import bearer


def _auth_user(user_id="u1", email="lisa@example.com"):
    return SimpleNamespace(id=user_id, email=email)


# ---- demo mode ----

def test_demo_sign_in_sets_cookie_and_infers_role(demo_client):
    response = demo_client.post("/api/auth/signin", json={"email": "center@example.com", "password": "x"})

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "center"
    assert "token" in response.cookies

    me = demo_client.get("/api/auth/me").json()["user"]
    assert me["role"] == "center"
    assert me["center_profile"]["slug"] == "little-stars-chatswood"


def test_demo_family_identity_carries_family_profile(demo_client):
    response = demo_client.get("/api/auth/me", headers=bearer("family"))
    user = response.json()["user"]
    assert user["id"] == DEMO_FAMILY_USER_ID
    assert user["family_profile"]["family_name"] == "Lisa Chen"
    assert "center_profile" not in user


def test_sign_out_clears_cookie(demo_client):
    demo_client.post("/api/auth/signin", json={"email": "family@example.com", "password": "x"})
    response = demo_client.post("/api/auth/signout")
    assert response.status_code == 200
    assert demo_client.get("/api/auth/me").status_code == 401


def test_me_without_token_is_unauthenticated(demo_client):
    response = demo_client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated", "kind": "unauthenticated"}


def test_malformed_demo_token_is_rejected(demo_client):
    response = demo_client.get("/api/auth/me", headers={"Authorization": "Bearer demo:wizard:x@y.co"})
    assert response.status_code == 401


def test_admin_routes_require_admin(demo_client):
    response = demo_client.get("/api/admin/stats", headers=bearer("family"))
    assert response.status_code == 403
    assert response.json()["error"] == "Admin access required"


def test_sign_up_validation_error_uses_error_field(demo_client):
    response = demo_client.post("/api/auth/signup", json={"email": "not-an-email", "password": "pw", "role": "family"})
    assert response.status_code == 400
    assert response.json()["kind"] == "validation"
    assert "email" in response.json()["error"]


# ---- live mode ----

@pytest.fixture
def session_client():
    """Stands in for the per-call client that Supabase Auth sign-in runs on."""
    return MagicMock()


@pytest.fixture
def auth_service(fake_supabase, session_client):
    return AuthService(fake_supabase, session_client_factory=lambda: session_client)


def test_sign_up_rejects_existing_email(fake_supabase, session_client, auth_service):
    fake_supabase.queue("profiles", [{"id": "u0"}])

    with pytest.raises(DataAccessError) as exc_info:
        auth_service.sign_up(SignUpRequest(email="lisa@example.com", password="secret123", role="family"))

    assert exc_info.value.kind == ErrorKind.DUPLICATE
    assert exc_info.value.message == "Email already registered"
    session_client.auth.sign_up.assert_not_called()


def test_sign_up_creates_profile_row(fake_supabase, session_client, auth_service):
    fake_supabase.queue("profiles", [])
    fake_supabase.queue("profiles", [{"id": "u1", "email": "lisa@example.com", "role": "family"}])
    session_client.auth.sign_up.return_value = SimpleNamespace(
        user=_auth_user(), session=SimpleNamespace(access_token="jwt-1")
    )

    account, token = auth_service.sign_up(
        SignUpRequest(email="lisa@example.com", password="secret123", role="family")
    )

    assert token == "jwt-1"
    assert account.role == "family"
    upsert_call = fake_supabase.calls_for("profiles")[1][0]
    assert upsert_call[0] == "upsert"
    assert upsert_call[1][0]["role"] == "family"
    assert upsert_call[2] == {"on_conflict": "id"}


def test_sign_in_with_bad_password(session_client, auth_service):
    session_client.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")

    with pytest.raises(DataAccessError) as exc_info:
        auth_service.sign_in(SignInRequest(email="lisa@example.com", password="nope"))

    assert exc_info.value.kind == ErrorKind.UNAUTHENTICATED
    assert exc_info.value.message == "Invalid email or password"


def test_sign_in_deactivated_account(fake_supabase, session_client, auth_service):
    session_client.auth.sign_in_with_password.return_value = SimpleNamespace(
        user=_auth_user(), session=SimpleNamespace(access_token="jwt-1")
    )
    fake_supabase.queue("profiles", [{"id": "u1", "email": "lisa@example.com", "role": "family", "is_active": False}])

    with pytest.raises(DataAccessError) as exc_info:
        auth_service.sign_in(SignInRequest(email="lisa@example.com", password="pw"))

    assert exc_info.value.kind == ErrorKind.FORBIDDEN


def test_sign_in_leaves_shared_client_headers_alone(fake_supabase, session_client, auth_service):
    session_client.auth.sign_in_with_password.return_value = SimpleNamespace(
        user=_auth_user(), session=SimpleNamespace(access_token="jwt-1")
    )
    fake_supabase.queue("profiles", [{"id": "u1", "email": "lisa@example.com", "role": "admin"}])

    account, token = auth_service.sign_in(SignInRequest(email="lisa@example.com", password="pw"))

    assert token == "jwt-1"
    session_client.auth.sign_in_with_password.assert_called_once()
    fake_supabase.auth.sign_in_with_password.assert_not_called()
    fake_supabase.auth.sign_up.assert_not_called()


def test_each_auth_call_gets_a_fresh_client(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "https://project.supabase.co")
    monkeypatch.setattr(settings, "supabase_key", "anon-key")
    monkeypatch.setattr(supabase_client, "create_client", lambda url, key: MagicMock())

    shared = supabase_client.SupabaseClient.get_client()
    first = supabase_client.SupabaseClient.create_session_client()
    second = supabase_client.SupabaseClient.create_session_client()

    assert first is not second
    assert shared not in (first, second)


def test_resolve_user_is_cached(fake_supabase):
    fake_supabase.auth.get_user.return_value = SimpleNamespace(user=_auth_user("u9", "c@example.com"))
    fake_supabase.queue("profiles", [{"id": "u9", "email": "c@example.com", "role": "center"}])
    service = AuthService(fake_supabase)

    first = service.resolve_user("jwt-9")
    second = service.resolve_user("jwt-9")

    assert first == second == {"id": "u9", "email": "c@example.com", "role": "center"}
    fake_supabase.auth.get_user.assert_called_once_with(jwt="jwt-9")


def test_demo_token_is_refused_by_live_backend(fake_supabase):
    with pytest.raises(DataAccessError) as exc_info:
        AuthService(fake_supabase).resolve_user("demo:admin:admin@example.com")
    assert exc_info.value.kind == ErrorKind.UNAUTHENTICATED


def test_center_account_includes_listing(fake_supabase):
    fake_supabase.queue("center_profiles", [{"id": "c1", "center_name": "Little Stars", "slug": "little-stars"}])
    profile = {"id": "u1", "email": "c@example.com", "role": "center"}

    account = AuthService(fake_supabase).get_account({"id": "u1"}, profile)

    assert account.center_profile.slug == "little-stars"
