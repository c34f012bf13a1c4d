"""Tests for password hashing and JWT helpers."""

import uuid
from datetime import UTC, datetime, timedelta

import jwt
import pytest

from vidtube.auth.security import TokenType, create_token, decode_token, hash_password, verify_password
from vidtube.config import get_settings
from vidtube.constants import JWT_ALGORITHM
from vidtube.errors import Unauthenticated


@pytest.fixture
def settings():
    return get_settings()


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("correct horse")
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_malformed_hash(self):
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestTokens:
    def test_round_trip(self, settings):
        user_id = uuid.uuid4()
        token = create_token(user_id, TokenType.ACCESS, settings)
        assert decode_token(token, TokenType.ACCESS, settings) == user_id

    def test_claims(self, settings):
        token = create_token(uuid.uuid4(), TokenType.ACCESS, settings)
        payload = jwt.decode(token, settings.access_token_secret, algorithms=[JWT_ALGORITHM])
        assert set(payload) == {"sub", "type", "iat", "exp", "jti"}
        assert payload["type"] == "access"

    def test_tokens_are_unique(self, settings):
        user_id = uuid.uuid4()
        first = create_token(user_id, TokenType.REFRESH, settings)
        second = create_token(user_id, TokenType.REFRESH, settings)
        assert first != second

    def test_wrong_type_rejected(self, settings):
        """Test that a refresh token cannot be used as an access token."""
        token = create_token(uuid.uuid4(), TokenType.REFRESH, settings)
        with pytest.raises(Unauthenticated):
            decode_token(token, TokenType.ACCESS, settings)

    def test_tampered_token_rejected(self, settings):
        token = create_token(uuid.uuid4(), TokenType.ACCESS, settings)
        with pytest.raises(Unauthenticated):
            decode_token(token[:-2] + "xx", TokenType.ACCESS, settings)

    def test_expired_token_rejected(self, settings):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "type": "access", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
            settings.access_token_secret,
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(Unauthenticated, match="expired"):
            decode_token(token, TokenType.ACCESS, settings)

    def test_malformed_subject_rejected(self, settings):
        token = jwt.encode(
            {"sub": "not-a-uuid", "type": "access", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            settings.access_token_secret,
            algorithm=JWT_ALGORITHM,
        )
        with pytest.raises(Unauthenticated):
            decode_token(token, TokenType.ACCESS, settings)
