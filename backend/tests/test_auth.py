"""
Tests for authentication endpoints and password hashing.
"""

import time

import jwt
import pytest

from shared.config.settings import settings
from shared.security.auth import sign_jwt, verify_jwt
from shared.security.password import hash_password, verify_password


class TestPasswordHashing:
    """Test password hashing utilities."""

    def test_hash_password_returns_bcrypt_hash(self):
        hashed = hash_password("mypassword")
        assert hashed.startswith("$2b$")

    def test_verify_password_correct(self):
        hashed = hash_password("mypassword")
        assert verify_password("mypassword", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("mypassword")
        assert verify_password("wrongpassword", hashed) is False

    def test_plain_text_hash_is_rejected(self):
        """Only bcrypt hashes are accepted."""
        assert verify_password("plaintext", "plaintext") is False


class TestTokens:
    def test_round_trip_claims(self):
        token = sign_jwt({"sub": "user-1", "email": "a@b.it"})
        payload = verify_jwt(token)
        assert payload["sub"] == "user-1"
        assert payload["email"] == "a@b.it"
        assert payload["type"] == "access"

    def test_expired_token_rejected(self, client):
        token = sign_jwt({"sub": "user-1", "email": "a@b.it"}, ttl_seconds=-10)
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_foreign_signature_rejected(self, client):
        now = int(time.time())
        token = jwt.encode(
            {
                "sub": "user-1",
                "iss": settings.jwt_issuer,
                "aud": settings.jwt_audience,
                "iat": now,
                "exp": now + 60,
                "type": "access",
            },
            "another-secret-that-is-long-enough-000",
            algorithm="HS256",
        )
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestAuthEndpoints:
    """Test authentication API endpoints."""

    def test_register_returns_token(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "New@Test.com", "password": "longenough", "full_name": "Mario"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "Bearer"
        assert data["user"]["email"] == "new@test.com"
        assert data["expires_in"] == settings.jwt_access_token_expire_minutes * 60

        me = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"}
        )
        assert me.status_code == 200
        assert me.json()["full_name"] == "Mario"

    def test_register_duplicate_email(self, client, owner):
        response = client.post(
            "/api/auth/register",
            json={"email": "owner@test.com", "password": "longenough"},
        )
        assert response.status_code == 409

    def test_register_short_password(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "short@test.com", "password": "abc"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request body"
        assert response.json()["errors"]

    def test_login_success(self, client, owner):
        response = client.post(
            "/api/auth/login",
            json={"email": "owner@test.com", "password": "testpass123"},
        )
        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert data["user"]["id"] == owner.id

    def test_login_is_case_insensitive_on_email(self, client, owner):
        response = client.post(
            "/api/auth/login",
            json={"email": "OWNER@test.com", "password": "testpass123"},
        )
        assert response.status_code == 200

    @pytest.mark.parametrize(
        "email,password",
        [("nobody@test.com", "testpass123"), ("owner@test.com", "wrongpass")],
    )
    def test_login_invalid_credentials(self, client, owner, email, password):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_me_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401

    def test_me_rejects_malformed_header(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_me_returns_owner(self, client, auth_headers, owner):
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["email"] == owner.email
