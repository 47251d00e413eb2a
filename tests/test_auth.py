"""Signup, login and bearer-token tests."""
from datetime import timedelta

import pytest
from conftest import login_headers
from flask_jwt_extended import create_access_token, decode_token

from weedwatch import auth, store
from weedwatch.config import load_config
from weedwatch.errors import AuthError, Conflict
from weedwatch.models import User

PROTECTED = [
    ("post", "/logs"),
    ("get", "/logs"),
    ("post", "/water"),
    ("get", "/water"),
    ("delete", "/water/1"),
]


class TestSignup:

    def test_signup_creates_user(self, client):
        resp = client.post("/signup", json={"email": "a@x.com", "password": "p"})

        assert resp.status_code == 201
        assert resp.get_json() == {"message": "User created successfully"}
        user = User.query.filter_by(email="a@x.com").one()
        assert user.password_hash != "p"

    def test_duplicate_email_rejected_regardless_of_password(self, client):
        client.post("/signup", json={"email": "a@x.com", "password": "p"})

        for password in ("p", "other"):
            resp = client.post("/signup", json={"email": "a@x.com", "password": password})
            assert resp.status_code == 400
            assert resp.get_json() == {"error": "Email already exists"}
        assert User.query.count() == 1

    @pytest.mark.parametrize("body", [None, {}, {"email": "a@x.com"}, {"password": "p"},
                                      {"email": "", "password": "p"}, ["a@x.com", "p"]])
    def test_missing_fields_rejected(self, client, body):
        resp = client.post("/signup", json=body)

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Email and password required"}

    def test_racing_duplicate_insert_is_conflict(self, app):
        store.create_user("a@x.com", "hash")
        with pytest.raises(Conflict):
            store.create_user("a@x.com", "hash")

    def test_default_bcrypt_cost_is_ten(self):
        assert load_config()["BCRYPT_LOG_ROUNDS"] == 10


class TestLogin:

    def test_login_returns_token(self, client):
        client.post("/signup", json={"email": "a@x.com", "password": "p"})

        resp = client.post("/login", json={"email": "a@x.com", "password": "p"})

        assert resp.status_code == 200
        assert "token" in resp.get_json()

    def test_unknown_email_and_wrong_password_look_the_same(self, client):
        client.post("/signup", json={"email": "a@x.com", "password": "p"})

        wrong_pw = client.post("/login", json={"email": "a@x.com", "password": "nope"})
        unknown = client.post("/login", json={"email": "b@x.com", "password": "p"})

        assert wrong_pw.status_code == unknown.status_code == 400
        assert wrong_pw.get_json() == unknown.get_json() == {"error": "Invalid credentials"}

    def test_token_expires_after_one_hour(self, client):
        client.post("/signup", json={"email": "a@x.com", "password": "p"})
        token = client.post("/login", json={"email": "a@x.com", "password": "p"}).get_json()["token"]

        claims = decode_token(token)
        user = User.query.filter_by(email="a@x.com").one()
        assert claims["exp"] - claims["iat"] == 3600
        assert int(claims["sub"]) == user.id


class TestAuthenticate:

    def test_valid_token_yields_user_id(self, app):
        token = create_access_token(identity="42")
        assert auth.authenticate(token) == 42

    @pytest.mark.parametrize("token", ["", None, "garbage", "a.b.c"])
    def test_bad_tokens_rejected(self, app, token):
        with pytest.raises(AuthError):
            auth.authenticate(token)

    def test_expired_token_rejected(self, app):
        token = create_access_token(identity="42", expires_delta=timedelta(seconds=-1))
        with pytest.raises(AuthError):
            auth.authenticate(token)

    def test_foreign_signature_rejected(self, app):
        token = create_access_token(identity="42")
        app.config["JWT_SECRET_KEY"] = "a-completely-different-secret-key-value"
        with pytest.raises(AuthError):
            auth.authenticate(token)


class TestProtectedRoutes:

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_missing_token(self, client, method, path):
        resp = getattr(client, method)(path)

        assert resp.status_code == 401
        assert "error" in resp.get_json()

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_malformed_token(self, client, method, path):
        resp = getattr(client, method)(path, headers={"Authorization": "Bearer not-a-jwt"})

        assert resp.status_code == 401
        assert "error" in resp.get_json()

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_expired_token(self, client, method, path):
        login_headers(client)
        user = User.query.filter_by(email="a@x.com").one()
        token = create_access_token(identity=str(user.id), expires_delta=timedelta(hours=-1))

        resp = getattr(client, method)(path, headers={"Authorization": f"Bearer {token}"})

        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Token expired"}

    def test_authenticate_agrees_with_route_messages(self, client):
        login_headers(client)
        user = User.query.filter_by(email="a@x.com").one()
        expired = create_access_token(identity=str(user.id), expires_delta=timedelta(hours=-1))

        for token, header in [(expired, f"Bearer {expired}"),
                              ("not-a-jwt", "Bearer not-a-jwt"),
                              ("", None)]:
            headers = {"Authorization": header} if header else {}
            resp = client.get("/water", headers=headers)
            with pytest.raises(AuthError) as excinfo:
                auth.authenticate(token)

            assert resp.status_code == excinfo.value.status_code == 401
            assert resp.get_json() == excinfo.value.to_dict()
