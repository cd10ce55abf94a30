"""
tests/test_auth.py -- Unit tests for the credential store, password helpers,
tokens and session holders.

Covers:
  - UserStore lookups and the UNIQUE(email) constraint
  - bcrypt hash/verify, per-call salt, malformed hash handling, 72-byte limit
  - JWT round trip and tamper/garbage rejection
  - GlobalSession shares one slot; RequestSession does not
"""

from __future__ import annotations

import pytest
from jose import jwt
from sqlalchemy.exc import IntegrityError

from auth.models import SessionIdentity, User
from auth.session import GlobalSession, RequestSession, get_global_session, identity_from_user
from auth.store import UserStore
from auth.tokens import (
    create_access_token,
    decode_access_token,
    dummy_hash,
    hash_password,
    password_too_long,
    verify_password,
)


def _user(email: str = "a@x.com") -> User:
    return User(username="ann", email=email, hashed_password=hash_password("secret"))


class TestUserStore:
    def test_create_and_get_by_email(self, user_store: UserStore) -> None:
        uid = user_store.create_user(_user())
        found = user_store.get_by_email("a@x.com")
        assert found is not None
        assert found.id == uid
        assert found.username == "ann"
        assert found.created_at is not None and found.created_at.tzinfo is not None

    def test_get_by_email_unknown(self, user_store: UserStore) -> None:
        assert user_store.get_by_email("nobody@x.com") is None

    def test_get_by_id(self, user_store: UserStore) -> None:
        uid = user_store.create_user(_user())
        assert user_store.get_by_id(uid).email == "a@x.com"
        assert user_store.get_by_id(uid + 100) is None

    def test_duplicate_email_rejected_by_database(self, user_store: UserStore) -> None:
        """The UNIQUE constraint, not a pre-check, is what blocks the second insert."""
        user_store.create_user(_user())
        with pytest.raises(IntegrityError):
            user_store.create_user(_user())

    def test_ping(self, user_store: UserStore) -> None:
        assert user_store.ping() is True


class TestPasswords:
    def test_verify_correct_and_wrong(self) -> None:
        hashed = hash_password("secret")
        assert verify_password("secret", hashed) is True
        assert verify_password("Secret", hashed) is False

    def test_hash_is_salted_per_call(self) -> None:
        assert hash_password("secret") != hash_password("secret")

    def test_hash_never_contains_plaintext(self) -> None:
        assert "secret" not in hash_password("secret")

    def test_malformed_hash_is_a_mismatch(self) -> None:
        assert verify_password("secret", "not-a-bcrypt-hash") is False

    def test_hash_refuses_more_than_72_bytes(self) -> None:
        assert password_too_long("é" * 37) is True
        assert password_too_long("é" * 36) is False
        with pytest.raises(ValueError):
            hash_password("x" * 73)

    def test_verify_overlong_password_is_a_mismatch(self) -> None:
        assert verify_password("x" * 100, hash_password("x" * 72)) is False

    def test_dummy_hash_is_computed_once(self) -> None:
        assert dummy_hash() is dummy_hash()
        assert verify_password("anything", dummy_hash()) is False


class TestTokens:
    def test_round_trip(self) -> None:
        token = create_access_token("17")
        assert decode_access_token(token) == "17"

    def test_garbage_token(self) -> None:
        assert decode_access_token("not.a.jwt") is None

    def test_token_signed_with_another_key(self) -> None:
        forged = jwt.encode({"sub": "17"}, "x" * 64, algorithm="HS256")
        assert decode_access_token(forged) is None


class TestSessionHolders:
    IDENTITY = SessionIdentity(id="1", username="ann", email="a@x.com", created_at="2024-01-01T00:00:00.000Z")

    def test_global_session_starts_empty_and_keeps_last_login(self) -> None:
        session = GlobalSession()
        assert session.get() is None
        session.set(self.IDENTITY)
        other = SessionIdentity(id="2", username="bob", email="b@x.com", created_at="2024-01-01T00:00:00.000Z")
        session.set(other)
        assert session.get() == other

    def test_process_wide_session_is_one_object(self) -> None:
        assert get_global_session() is get_global_session()

    def test_request_sessions_are_isolated(self) -> None:
        first = RequestSession()
        second = RequestSession()
        first.set(self.IDENTITY)
        assert first.changed is True
        assert second.get() is None
        assert second.changed is False

    def test_identity_from_user_omits_credential(self, user_store: UserStore) -> None:
        uid = user_store.create_user(_user())
        identity = identity_from_user(user_store.get_by_id(uid))
        assert identity.id == str(uid)
        assert identity.created_at.endswith("Z")
        assert not hasattr(identity, "hashed_password")
