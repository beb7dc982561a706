"""
Auth tests: token handling, the caller-resolution dependency, ownership
guards, login and signup.
"""

import asyncpg
import jwt
import pytest

from auth import ownership, security
from auth.service import email_from_authorization


class TestTokens:
    def test_token_carries_identity_claims(self, make_token):
        payload = security.decode_access_token(make_token(user_id=5, email="a@b.co"))
        assert payload["email"] == "a@b.co"
        assert payload["userId"] == 5

    def test_forged_signature_is_rejected(self):
        forged = jwt.encode({"email": "a@b.co"}, "some-other-secret", algorithm="HS256")
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(forged)

    def test_token_without_email_is_rejected(self):
        token = jwt.encode({"userId": 1}, security.jwt_secret(), algorithm="HS256")
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)

    def test_authorization_header_needs_bearer_and_token(self, make_token):
        assert email_from_authorization(None) is None
        assert email_from_authorization(make_token()) is None
        assert email_from_authorization(f"Bearer {make_token()}") == "parent@example.com"


class TestPasswordPolicy:
    def test_short_password(self):
        assert security.password_problem("Ab1!") == "Password should be at least 8 characters long"

    def test_missing_special_character(self):
        assert security.password_problem("Abcdefg1") == "Password should contain at least one special character"

    def test_acceptable_password(self):
        assert security.password_problem("Abcdefg1!") is None

    def test_hash_verifies(self):
        hashed = security.hash_password("Abcdefg1!")
        assert security.verify_password("Abcdefg1!", hashed)
        assert not security.verify_password("wrong", hashed)


class TestCallerResolution:
    """Every protected route resolves the caller the same way."""

    async def test_missing_header(self, client, fake_db):
        response = await client.get("/v1/babies")
        assert response.status_code == 401
        assert response.json() == {
            "status": "error",
            "error": {"code": 401, "message": "No authorization token provided"},
        }
        assert fake_db.calls == []

    async def test_garbage_token(self, client, fake_db):
        response = await client.get("/v1/babies", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid token format"
        assert fake_db.calls == []

    async def test_token_for_unknown_user(self, client, fake_db, make_token):
        headers = {"Authorization": f"Bearer {make_token(email='ghost@example.com')}"}
        response = await client.get("/v1/babies", headers=headers)
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "User not found"
        assert fake_db.queries("FROM users WHERE email = $1")[0][2] == ("ghost@example.com",)


class TestOwnershipGuards:
    async def test_owned(self, fake_db):
        db = fake_db.when("FROM user_baby", {"baby_id": 1})
        assert await ownership.baby_belongs_to_user(db, 1, 7)
        assert db.calls[0][2] == (1, 7)

    async def test_not_owned(self, fake_db):
        assert not await ownership.baby_belongs_to_user(fake_db, 1, 7)

    async def test_database_error_fails_closed(self, fake_db):
        db = fake_db.when("FROM forumpost", RuntimeError("connection lost"))
        assert not await ownership.post_belongs_to_user(db, 3, 7)


class TestLoginSignup:
    async def test_login_unknown_email(self, client):
        response = await client.post("/v1/login", json={"email": "x@example.com", "password": "pw"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "User doesn't exist"

    async def test_login_returns_token(self, client, fake_db):
        fake_db.when("FROM authentication", {"email": "p@example.com", "password": security.hash_password("Abcdefg1!")})
        fake_db.when(
            "FROM users WHERE lower(email)",
            {"user_id": 4, "first_name": "P", "last_name": "Q", "email": "p@example.com", "role": "Parent"},
        )
        response = await client.post("/v1/login", json={"email": "p@example.com", "password": "Abcdefg1!"})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["userId"] == 4
        assert security.decode_access_token(body["token"])["email"] == "p@example.com"

    async def test_login_wrong_password(self, client, fake_db):
        fake_db.when("FROM authentication", {"email": "p@example.com", "password": security.hash_password("Abcdefg1!")})
        response = await client.post("/v1/login", json={"email": "p@example.com", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid credentials"

    async def test_signup_rejects_weak_password(self, client, fake_db):
        response = await client.post(
            "/v1/signup",
            json={"firstName": "A", "lastName": "B", "email": "a@b.co", "password": "short"},
        )
        assert response.status_code == 400
        assert fake_db.calls == []

    async def test_signup_duplicate_email(self, client, fake_db):
        fake_db.when("FROM users WHERE lower(email)", {"user_id": 1, "email": "a@b.co"})
        response = await client.post(
            "/v1/signup",
            json={"firstName": "A", "lastName": "B", "email": "a@b.co", "password": "Abcdefg1!"},
        )
        assert response.status_code == 409
        assert response.json()["error"]["message"] == "Email is already registered"

    async def test_signup_race_on_same_email(self, client, fake_db):
        fake_db.when("INSERT INTO users", asyncpg.UniqueViolationError("duplicate key"))
        response = await client.post(
            "/v1/signup",
            json={"firstName": "A", "lastName": "B", "email": "a@b.co", "password": "Abcdefg1!"},
        )
        assert response.status_code == 409
        assert response.json()["error"]["message"] == "Email is already registered"
        assert fake_db.queries("INSERT INTO authentication") == []
