"""Tests for password hashing, session tokens and credential checks."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from tokyo_events.auth.passwords import hash_password, verify_password
from tokyo_events.auth.service import LoginError, LoginErrorKind, authenticate, register
from tokyo_events.auth.session import (
    ALGORITHM,
    create_session_token,
    start_session,
    verify_session_token,
)
from tokyo_events.storage import SessionRegistry, UsernameTakenError, UserStore


class TestPasswords:
    """Tests for bcrypt hashing."""

    def test_hash_is_not_plaintext(self):
        """Test the stored hash differs from the password."""
        password_hash = hash_password("secret1", rounds=4)

        assert password_hash != "secret1"
        assert password_hash.startswith("$2")

    def test_verify(self):
        """Test verification accepts only the right password."""
        password_hash = hash_password("secret1", rounds=4)

        assert verify_password("secret1", password_hash) is True
        assert verify_password("wrongpass", password_hash) is False

    def test_same_password_different_salts(self):
        """Test two hashes of one password differ."""
        assert hash_password("secret1", rounds=4) != hash_password("secret1", rounds=4)

    def test_long_password(self):
        """Test passwords beyond bcrypt's 72-byte limit still verify."""
        password = "パスワード" * 20
        password_hash = hash_password(password, rounds=4)

        assert verify_password(password, password_hash) is True

    def test_malformed_hash(self):
        """Test a corrupt stored hash fails verification instead of raising."""
        assert verify_password("secret1", "not-a-bcrypt-hash") is False


class TestSessionTokens:
    """Tests for signed session tokens."""

    def test_round_trip(self):
        """Test a created token verifies to the same user and session."""
        expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
        token = create_session_token(42, "sid-1", expires_at=expires_at)

        session = verify_session_token(token)
        assert session is not None
        assert session.user_id == 42
        assert session.session_id == "sid-1"
        assert session.is_expired is False

    def test_expired_token(self):
        """Test an expired token is rejected."""
        now = datetime.now(timezone.utc)
        token = create_session_token(
            42, "sid-1", expires_at=now - timedelta(seconds=10), issued_at=now - timedelta(hours=1)
        )

        assert verify_session_token(token) is None

    def test_foreign_signature(self):
        """Test a token signed with another key is rejected."""
        payload = {
            "sub": "42",
            "sid": "sid-1",
            "iat": int(datetime.now(timezone.utc).timestamp()),
            "exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp()),
            "type": "session",
        }
        token = jwt.encode(payload, "another-secret-key-that-is-long-enough", algorithm=ALGORITHM)

        assert verify_session_token(token) is None

    def test_garbage_token(self):
        """Test a non-JWT string is rejected."""
        assert verify_session_token("not-a-token") is None

    def test_start_session_registers(self):
        """Test starting a session registers its id."""
        registry = SessionRegistry()
        token = start_session(registry, 5)

        session = verify_session_token(token)
        assert session is not None
        record = registry.get(session.session_id)
        assert record is not None
        assert record.user_id == 5


class TestLoginService:
    """Tests for authenticate and register."""

    @pytest.fixture
    def users(self):
        return UserStore()

    @pytest.mark.asyncio
    async def test_register_stores_hash(self, users):
        """Test registration never stores the plaintext password."""
        user = await register(users, "alice", "secret1")

        assert user.password_hash != "secret1"
        assert users.get_user_by_username("alice").id == user.id

    @pytest.mark.asyncio
    async def test_register_duplicate(self, users):
        """Test registering a taken username fails."""
        await register(users, "alice", "secret1")

        with pytest.raises(UsernameTakenError):
            await register(users, "alice", "secret2")

    @pytest.mark.asyncio
    async def test_login_not_registered(self, users):
        """Test unknown usernames are reported as not registered."""
        with pytest.raises(LoginError) as exc_info:
            await authenticate(users, "nobody", "secret1")

        assert exc_info.value.kind is LoginErrorKind.NOT_REGISTERED
        assert str(exc_info.value) == "User is not registered"

    @pytest.mark.asyncio
    async def test_login_incorrect_password(self, users):
        """Test a wrong password is reported as incorrect."""
        await register(users, "alice", "secret1")

        with pytest.raises(LoginError) as exc_info:
            await authenticate(users, "alice", "wrongpass")

        assert exc_info.value.kind is LoginErrorKind.INCORRECT_PASSWORD
        assert str(exc_info.value) == "Incorrect password"

    @pytest.mark.asyncio
    async def test_login_success(self, users):
        """Test the right password returns the user."""
        created = await register(users, "alice", "secret1")

        user = await authenticate(users, "alice", "secret1")
        assert user.id == created.id
