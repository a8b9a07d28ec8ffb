from fastapi import FastAPI, Depends
from fastapi.testclient import TestClient
import pytest

from storefront.utils.security import get_current_user, require_admin
from storefront.utils.tokens import issue_token

def _make_app():
    app = FastAPI()

    @app.get("/me")
    def me(user=Depends(get_current_user)):
        return user

    @app.get("/admin")
    def admin(user=Depends(require_admin)):
        return {"ok": True}

    return app

@pytest.fixture
def local_client():
    return TestClient(_make_app())

def test_missing_header(local_client):
    r = local_client.get("/me")
    assert r.status_code == 401
    assert r.json()["detail"] == "Access denied. No token provided"

def test_invalid_token(local_client):
    r = local_client.get("/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid token"

@pytest.mark.parametrize("prefix", ["Bearer ", ""])
def test_valid_token_with_or_without_bearer(local_client, prefix):
    token = issue_token("user-1")
    r = local_client.get("/me", headers={"Authorization": prefix + token})
    assert r.status_code == 200
    assert r.json()["_id"] == "user-1"

def _admin_get(local_client, monkeypatch, lookup):
    monkeypatch.setattr("storefront.auth.repository.get_user_by_id", lookup)
    return local_client.get("/admin", headers={"Authorization": "Bearer " + issue_token("user-1")})

def test_admin_allowed(local_client, monkeypatch):
    r = _admin_get(local_client, monkeypatch, lambda uid: {"id": uid, "role": 1})
    assert r.status_code == 200

def test_admin_rejects_regular_user(local_client, monkeypatch):
    r = _admin_get(local_client, monkeypatch, lambda uid: {"id": uid, "role": 0})
    assert r.status_code == 401
    assert r.json()["detail"] == "Unauthorized Access"

def test_admin_unknown_user(local_client, monkeypatch):
    r = _admin_get(local_client, monkeypatch, lambda uid: None)
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"

def test_admin_lookup_error(local_client, monkeypatch):
    def boom(uid):
        raise Exception("db down")
    r = _admin_get(local_client, monkeypatch, boom)
    assert r.status_code == 500
    assert r.json()["detail"] == "Error in admin middleware"
