"""Unit tests for security utilities (password hashing and JWT tokens)."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import JWTError, jwt

from subsentinel.config import settings
from subsentinel.core.security import (
    ADMIN_ROLE,
    create_admin_token,
    create_user_token,
    decode_admin_token,
    decode_user_token,
    get_admin_id_from_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Test password hashing functions."""

    def test_hash_password(self):
        """Test that password is hashed (not stored in plain text)."""
        password = "MySecurePassword123!"
        hashed = hash_password(password)

        assert hashed != password
        # Argon2 hashes start with $argon2
        assert hashed.startswith("$argon2")

    def test_verify_password_correct(self):
        hashed = hash_password("MySecurePassword123!")
        assert verify_password("MySecurePassword123!", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("MySecurePassword123!")
        assert verify_password("WrongPassword456!", hashed) is False

    def test_hash_same_password_different_hashes(self):
        """Hashing the same password twice produces different hashes (salt)."""
        hash1 = hash_password("MySecurePassword123!")
        hash2 = hash_password("MySecurePassword123!")

        assert hash1 != hash2
        assert verify_password("MySecurePassword123!", hash1) is True
        assert verify_password("MySecurePassword123!", hash2) is True


class TestUserTokens:
    """Test user JWT creation and validation."""

    def test_user_token_claims(self):
        user_id = uuid4()
        payload = decode_user_token(create_user_token(user_id))

        assert payload["userId"] == str(user_id)
        assert payload["sub"] == str(user_id)
        assert payload["iss"] == settings.jwt_issuer
        assert payload["aud"] == settings.jwt_user_audience
        assert "exp" in payload
        assert "iat" in payload

    def test_get_user_id_from_token(self):
        user_id = uuid4()
        assert get_user_id_from_token(create_user_token(user_id)) == user_id

    def test_default_expiry_is_seven_days(self):
        payload = decode_user_token(create_user_token(uuid4()))
        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())

    def test_expired_token_rejected(self):
        token = create_user_token(uuid4(), expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            get_user_id_from_token(token)

    def test_tampered_token_rejected(self):
        token = create_user_token(uuid4())
        with pytest.raises(JWTError):
            get_user_id_from_token(token[:-2] + ("AA" if token[-2:] != "AA" else "BB"))

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"userId": str(uuid4()), "aud": settings.jwt_user_audience, "iss": settings.jwt_issuer},
            "another-secret",
            algorithm="HS256",
        )
        with pytest.raises(JWTError):
            get_user_id_from_token(token)

    def test_admin_token_is_not_a_user_token(self):
        with pytest.raises(JWTError):
            get_user_id_from_token(create_admin_token(uuid4()))


class TestAdminTokens:
    def test_admin_token_claims(self):
        admin_id = uuid4()
        payload = decode_admin_token(create_admin_token(admin_id))

        assert payload["adminId"] == str(admin_id)
        assert payload["role"] == ADMIN_ROLE
        assert payload["aud"] == settings.jwt_admin_audience

    def test_default_expiry_is_24_hours(self):
        payload = decode_admin_token(create_admin_token(uuid4()))
        assert payload["exp"] - payload["iat"] == int(timedelta(hours=24).total_seconds())

    def test_get_admin_id_from_token(self):
        admin_id = uuid4()
        assert get_admin_id_from_token(create_admin_token(admin_id)) == admin_id

    def test_user_token_is_not_an_admin_token(self):
        with pytest.raises(JWTError):
            get_admin_id_from_token(create_user_token(uuid4()))

    def test_admin_audience_without_role_rejected(self):
        token = jwt.encode(
            {
                "adminId": str(uuid4()),
                "aud": settings.jwt_admin_audience,
                "iss": settings.jwt_issuer,
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(JWTError):
            get_admin_id_from_token(token)
