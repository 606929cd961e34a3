from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from bloodbank.config import settings
from bloodbank.utils.security import (
    TokenManager,
    get_password_hash,
    needs_rehash,
    verify_password,
)


class TestTokenManager:
    """Test cases for TokenManager class"""

    def test_create_access_token_default_expiry(self):
        token = TokenManager.create_access_token({"sub": "7"})

        decoded = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert decoded["sub"] == "7"
        assert decoded["type"] == "access"

        exp_time = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)
        expected = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
        assert abs((exp_time - expected).total_seconds()) < 60

    def test_create_access_token_custom_expiry(self):
        expires_delta = timedelta(minutes=5)
        token = TokenManager.create_access_token({"sub": "7"}, expires_delta)

        decoded = TokenManager.decode_token(token)
        exp_time = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)
        expected = datetime.now(timezone.utc) + expires_delta
        assert abs((exp_time - expected).total_seconds()) < 60

    def test_create_user_token_subject_is_string(self):
        decoded = TokenManager.decode_token(TokenManager.create_user_token(12))
        assert decoded["sub"] == "12"

    def test_decode_expired_token(self):
        token = TokenManager.create_access_token(
            {"sub": "1"}, expires_delta=timedelta(seconds=-10)
        )
        with pytest.raises(ValueError):
            TokenManager.decode_token(token)

    def test_decode_token_signed_with_other_key(self):
        token = jwt.encode({"sub": "1", "type": "access"}, "other-key", algorithm="HS256")
        with pytest.raises(ValueError):
            TokenManager.decode_token(token)


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("Rahasia123!")
        assert hashed != "Rahasia123!"
        assert hashed.startswith("$argon2")

    def test_verify(self):
        hashed = get_password_hash("Rahasia123!")
        assert verify_password("Rahasia123!", hashed) is True
        assert verify_password("salah", hashed) is False

    def test_verify_against_invalid_hash(self):
        assert verify_password("anything", "not-a-hash") is False

    def test_fresh_hash_needs_no_rehash(self):
        assert needs_rehash(get_password_hash("Rahasia123!")) is False
