"""Tests for the bcrypt hasher, JWT token service and token blacklist."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from motoin.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from motoin.adapters.in_memory_token_blacklist import InMemoryTokenBlacklist
from motoin.adapters.jwt_token_service import ALGORITHM, JwtTokenService
from motoin.domain.errors import TokenExpiredError, UnauthorizedError

SECRET = "test-secret-with-enough-length-for-hs256"


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


# ==============================================================================
# BcryptPasswordHasher
# ==============================================================================


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    """Low cost factor keeps the suite fast."""
    return BcryptPasswordHasher(rounds=4)


def test_hash_and_verify(hasher: BcryptPasswordHasher) -> None:
    password_hash = hasher.hash("secret1")

    assert password_hash != "secret1"
    assert hasher.verify("secret1", password_hash) is True
    assert hasher.verify("secret2", password_hash) is False


def test_hashes_are_salted(hasher: BcryptPasswordHasher) -> None:
    assert hasher.hash("secret1") != hasher.hash("secret1")


def test_verify_against_non_bcrypt_hash(hasher: BcryptPasswordHasher) -> None:
    assert hasher.verify("secret1", "plain-text") is False


# ==============================================================================
# JwtTokenService
# ==============================================================================


def test_issue_and_decode() -> None:
    service = JwtTokenService(secret=SECRET, expires_hours=24)

    issued = service.issue("user-1")
    claims = service.decode(issued.token)

    assert claims.user_id == "user-1"
    assert abs((claims.expires_at - issued.expires_at).total_seconds()) < 1


def test_token_carries_user_id_as_subject() -> None:
    issued = JwtTokenService(secret=SECRET, expires_hours=1).issue("user-1")

    payload = jwt.decode(issued.token, SECRET, algorithms=[ALGORITHM])

    assert payload["sub"] == "user-1"


def test_expires_after_configured_hours() -> None:
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    service = JwtTokenService(secret=SECRET, expires_hours=168, clock=lambda: now)

    assert service.issue("user-1").expires_at == now + timedelta(days=7)


def test_expired_token() -> None:
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    service = JwtTokenService(secret=SECRET, expires_hours=1, clock=lambda: past)
    token = service.issue("user-1").token

    with pytest.raises(TokenExpiredError):
        service.decode(token)


def test_wrong_secret() -> None:
    token = JwtTokenService(secret=SECRET, expires_hours=1).issue("user-1").token

    with pytest.raises(UnauthorizedError) as exc_info:
        JwtTokenService(secret="another-secret-of-sufficient-length", expires_hours=1).decode(token)

    assert not isinstance(exc_info.value, TokenExpiredError)


def test_malformed_token() -> None:
    with pytest.raises(UnauthorizedError):
        JwtTokenService(secret=SECRET, expires_hours=1).decode("not.a.token")


def test_token_without_subject_is_rejected() -> None:
    expires = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"exp": expires}, SECRET, algorithm=ALGORITHM)

    with pytest.raises(UnauthorizedError):
        JwtTokenService(secret=SECRET, expires_hours=1).decode(token)


# ==============================================================================
# InMemoryTokenBlacklist
# ==============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


def test_revoked_token_is_reported(clock: FakeClock) -> None:
    blacklist = InMemoryTokenBlacklist(clock=clock)

    blacklist.revoke("token-a", clock.now + timedelta(hours=1))

    assert blacklist.is_revoked("token-a") is True
    assert blacklist.is_revoked("token-b") is False


def test_entries_expire_with_token(clock: FakeClock) -> None:
    blacklist = InMemoryTokenBlacklist(clock=clock)
    blacklist.revoke("token-a", clock.now + timedelta(hours=1))
    blacklist.revoke("token-b", clock.now + timedelta(hours=3))

    clock.advance(hours=2)

    assert blacklist.is_revoked("token-a") is False
    assert len(blacklist) == 1


def test_already_expired_token_is_not_stored(clock: FakeClock) -> None:
    blacklist = InMemoryTokenBlacklist(clock=clock)

    blacklist.revoke("token-a", clock.now - timedelta(seconds=1))

    assert len(blacklist) == 0
