"""
Tests for bearer extraction, access tokens and password hashing
"""

import uuid
from datetime import timedelta

import jwt
import pytest

from tubely.core.auth import (
    AuthError,
    check_password_hash,
    get_bearer_token,
    hash_password,
    make_jwt,
    make_refresh_token,
    validate_jwt,
)


class TestBearerToken:

    def test_extracts_token(self):
        assert get_bearer_token({"Authorization": "Bearer abc.def.ghi"}) == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert get_bearer_token({"Authorization": "bearer token123"}) == "token123"

    def test_missing_header(self):
        with pytest.raises(AuthError, match="missing"):
            get_bearer_token({})

    @pytest.mark.parametrize("value", ["Bearer", "Bearer   ", "Basic dXNlcjpwYXNz", "token-only"])
    def test_malformed_header(self, value):
        with pytest.raises(AuthError):
            get_bearer_token({"Authorization": value})


class TestJWT:

    def test_round_trip_returns_user_id(self):
        user_id = uuid.uuid4()
        token = make_jwt(user_id, "secret", timedelta(minutes=5))

        assert validate_jwt(token, "secret") == user_id

    def test_wrong_secret_rejected(self):
        token = make_jwt(uuid.uuid4(), "secret", timedelta(minutes=5))

        with pytest.raises(AuthError):
            validate_jwt(token, "other-secret")

    def test_expired_token_rejected(self):
        token = make_jwt(uuid.uuid4(), "secret", timedelta(seconds=-1))

        with pytest.raises(AuthError):
            validate_jwt(token, "secret")

    def test_wrong_issuer_rejected(self):
        token = jwt.encode(
            {"iss": "someone-else", "sub": str(uuid.uuid4()), "exp": 9999999999},
            "secret",
            algorithm="HS256",
        )

        with pytest.raises(AuthError):
            validate_jwt(token, "secret")

    def test_non_uuid_subject_rejected(self):
        token = jwt.encode(
            {"iss": "tubely-access", "sub": "not-a-uuid", "exp": 9999999999},
            "secret",
            algorithm="HS256",
        )

        with pytest.raises(AuthError, match="subject"):
            validate_jwt(token, "secret")

    def test_garbage_rejected(self):
        with pytest.raises(AuthError):
            validate_jwt("not a token", "secret")


class TestPasswords:

    def test_hash_and_check(self):
        hashed = hash_password("correct horse")

        assert hashed != "correct horse"
        assert check_password_hash("correct horse", hashed)
        assert not check_password_hash("battery staple", hashed)

    def test_check_against_non_bcrypt_value(self):
        assert not check_password_hash("anything", "plain-text")


def test_refresh_tokens_are_random_hex():
    first, second = make_refresh_token(), make_refresh_token()

    assert len(first) == 64
    int(first, 16)
    assert first != second
