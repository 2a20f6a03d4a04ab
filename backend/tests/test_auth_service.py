"""
SurfSpots Backend — Authentication Unit Tests
===============================================

What we test:
    ✅ Password hashing round trip and bcrypt input limit
    ✅ Token signing, decoding, tampering and expiry
    ✅ Every login failure looks the same to the caller
    ✅ User creation: aggregated validation, hashing, taken e-mail
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from surfspots.config import settings
from surfspots.exceptions import AuthenticationError, ConflictError, ValidationError, Violation
from surfspots.security import (
    Role,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from surfspots.services.auth_service import AuthService, UserService
from surfspots.stores.user_store import EmailTakenError, User, UserNotFoundError

PASSWORD = "correct-horse-battery"


@pytest.fixture(scope="module")
def password_hash():
    return hash_password(PASSWORD)


@pytest.fixture
def user(password_hash):
    return User(
        id="7d0c1f0e-1a2b-4c3d-8e9f-112233445566",
        email="admin@surfspots.io",
        role=Role.ADMIN,
        password_hash=password_hash,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def user_store():
    store = AsyncMock()
    store.user_by_email = AsyncMock()
    store.create_user = AsyncMock()
    return store


class TestPasswords:
    def test_hash_verifies(self, password_hash):
        assert password_hash != PASSWORD
        assert verify_password(PASSWORD, password_hash)
        assert not verify_password("wrong-password", password_hash)

    def test_over_long_password_never_matches(self, password_hash):
        assert not verify_password(PASSWORD + "x" * 80, password_hash)

    def test_malformed_hash_does_not_raise(self):
        assert not verify_password(PASSWORD, "not-a-bcrypt-hash")


class TestTokens:
    def test_round_trip(self):
        now = datetime.now(timezone.utc)
        token = create_access_token("user-1", "admin@surfspots.io", Role.ADMIN, now=now)

        claims = decode_access_token(token)

        assert claims.subject == "user-1"
        assert claims.email == "admin@surfspots.io"
        assert claims.has_role(Role.ADMIN)
        assert claims.expires_at > claims.issued_at

    def test_tampered_token(self):
        token = create_access_token("user-1", "admin@surfspots.io", Role.ADMIN)
        header, payload, signature = token.split(".")

        with pytest.raises(AuthenticationError):
            decode_access_token(".".join([header, payload, signature[::-1]]))

    def test_expired_token(self):
        issued = datetime.now(timezone.utc) - timedelta(days=2)
        token = create_access_token("user-1", "admin@surfspots.io", Role.ADMIN, now=issued)

        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_garbage(self):
        with pytest.raises(AuthenticationError):
            decode_access_token("not.a.token")

    def test_no_tokens_without_signing_key(self, monkeypatch):
        token = create_access_token("user-1", "admin@surfspots.io", Role.ADMIN)
        monkeypatch.setattr(settings, "jwt_secret", "")

        with pytest.raises(AuthenticationError):
            create_access_token("user-1", "admin@surfspots.io", Role.ADMIN)
        with pytest.raises(AuthenticationError):
            decode_access_token(token)


class TestAuthService:
    @pytest.mark.asyncio
    async def test_issues_token(self, user_store, user):
        user_store.user_by_email.return_value = user

        token = await AuthService(user_store).token("  admin@surfspots.io ", PASSWORD)

        claims = decode_access_token(token)
        assert claims.subject == user.id
        assert claims.role == "admin"
        user_store.user_by_email.assert_awaited_once_with("admin@surfspots.io")

    @pytest.mark.asyncio
    async def test_wrong_password(self, user_store, user):
        user_store.user_by_email.return_value = user

        with pytest.raises(AuthenticationError) as exc_info:
            await AuthService(user_store).token(user.email, "wrong-password")

        assert exc_info.value.message == "Invalid credentials."

    @pytest.mark.asyncio
    async def test_unknown_email(self, user_store):
        user_store.user_by_email.side_effect = UserNotFoundError("ghost@surfspots.io")

        with pytest.raises(AuthenticationError) as exc_info:
            await AuthService(user_store).token("ghost@surfspots.io", PASSWORD)

        assert exc_info.value.message == "Invalid credentials."

    @pytest.mark.asyncio
    async def test_malformed_credentials_skip_lookup(self, user_store):
        with pytest.raises(AuthenticationError):
            await AuthService(user_store).token("not-an-email", "")

        user_store.user_by_email.assert_not_awaited()


class TestUserService:
    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(self, user_store, user):
        user_store.create_user.return_value = user

        created = await UserService(user_store).create_user(
            " admin@surfspots.io ", PASSWORD, " Admin "
        )

        assert created == user
        entry = user_store.create_user.await_args.args[0]
        assert entry.email == "admin@surfspots.io"
        assert entry.role is Role.ADMIN
        assert entry.password_hash != PASSWORD
        assert verify_password(PASSWORD, entry.password_hash)

    @pytest.mark.asyncio
    async def test_reports_every_invalid_field(self, user_store):
        with pytest.raises(ValidationError) as exc_info:
            await UserService(user_store).create_user("nope", "short", "surfer")

        assert exc_info.value.errors == [
            Violation.INVALID_EMAIL,
            Violation.INVALID_PASSWORD,
            Violation.INVALID_ROLE,
        ]
        user_store.create_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_taken_email(self, user_store):
        user_store.create_user.side_effect = EmailTakenError("admin@surfspots.io")

        with pytest.raises(ConflictError) as exc_info:
            await UserService(user_store).create_user("admin@surfspots.io", PASSWORD, "admin")

        assert exc_info.value.message == "This e-mail has already been taken."
