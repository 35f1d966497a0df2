import pytest

from ffmaxarena.helpers.auth import AuthError, sign_in_with_password
from tests.conftest import FakeResponse


def _fake_grant(monkeypatch, response, calls=None):
    def fake_post(url, params=None, json=None, headers=None, timeout=None, **kwargs):
        if calls is not None:
            calls.append({"url": url, "params": params, "json": json})
        return response

    monkeypatch.setattr("ffmaxarena.helpers.auth.requests.post", fake_post)


def test_password_grant(app, monkeypatch):
    calls = []
    _fake_grant(monkeypatch, FakeResponse(200, {"access_token": "tok"}), calls)

    data = sign_in_with_password("admin@ffmaxarena.in", "pw")

    assert data["access_token"] == "tok"
    assert calls[0]["url"] == "https://demo.supabase.co/auth/v1/token"
    assert calls[0]["params"] == {"grant_type": "password"}
    assert calls[0]["json"] == {"email": "admin@ffmaxarena.in", "password": "pw"}


def test_rejected_credentials(app, monkeypatch):
    _fake_grant(monkeypatch, FakeResponse(400, {"error_description": "Invalid login credentials"}))
    with pytest.raises(AuthError, match="Invalid login credentials"):
        sign_in_with_password("admin@ffmaxarena.in", "wrong")


def test_unknown_failure(app, monkeypatch):
    _fake_grant(monkeypatch, FakeResponse(500, None, "oops"))
    with pytest.raises(AuthError, match="An unknown error occurred."):
        sign_in_with_password("admin@ffmaxarena.in", "pw")


def test_login_route_sets_session(client, monkeypatch):
    _fake_grant(monkeypatch, FakeResponse(200, {"access_token": "tok"}))

    resp = client.post("/login", data={"email": "Admin@FFMaxArena.in", "password": "pw"})

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin")
    with client.session_transaction() as sess:
        assert sess["admin_ok"] is True
        assert sess["admin_email"] == "admin@ffmaxarena.in"
        assert set(sess.keys()) <= {"admin_ok", "admin_email", "_flashes"}


def test_login_route_failure(client, monkeypatch):
    _fake_grant(monkeypatch, FakeResponse(400, {"msg": "Email not confirmed"}))

    resp = client.post("/login", data={"email": "admin@ffmaxarena.in", "password": "pw"})

    assert resp.status_code == 401
    assert b"Email not confirmed" in resp.data
    with client.session_transaction() as sess:
        assert "admin_ok" not in sess


def test_login_requires_both_fields(client):
    resp = client.post("/login", data={"email": "admin@ffmaxarena.in"})
    assert resp.status_code == 400


def test_logged_in_user_skips_login_page(admin_client):
    resp = admin_client.get("/login")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin")


def test_logout(admin_client):
    resp = admin_client.post("/logout")
    assert resp.status_code == 302
    with admin_client.session_transaction() as sess:
        assert "admin_ok" not in sess
