from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, HashingError, VerificationError, InvalidHashError
from jose import JWTError, jwt

from bloodbank.config import settings
from bloodbank.utils.exceptions import BloodBankError
from bloodbank.utils.logging_config import get_logger

logger = get_logger(__name__)

# Argon2 password hashing configuration
ph = PasswordHasher(
    time_cost=3,
    memory_cost=65536,
    parallelism=1,
    hash_len=32,
    salt_len=16,
)


class TokenManager:
    """Signs and verifies the bearer tokens issued at login"""

    @staticmethod
    def create_access_token(
        data: dict, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a JWT access token"""
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        to_encode.update({"exp": expire, "type": "access"})

        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def create_user_token(user_id: int) -> str:
        return TokenManager.create_access_token({"sub": str(user_id)})

    @staticmethod
    def decode_token(token: str) -> dict:
        """Decode and verify a JWT token"""
        try:
            return jwt.decode(
                token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
            )
        except JWTError as e:
            raise ValueError("Invalid or expired token") from e


def get_password_hash(password: str) -> str:
    """Hash a plaintext password using Argon2"""
    try:
        return ph.hash(password)
    except HashingError as e:
        logger.error(
            "Password hashing failed",
            extra={"extra_fields": {"event_type": "password_hashing_failed", "error": str(e)}},
        )
        raise BloodBankError("Password hashing failed", error=str(e)) from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against an Argon2 hashed password"""
    try:
        ph.verify(hashed_password, plain_password)
        return True
    except VerifyMismatchError:
        return False
    except (VerificationError, InvalidHashError) as e:
        logger.error(
            "Password verification error",
            extra={
                "extra_fields": {
                    "event_type": "password_verification_error",
                    "error": str(e),
                }
            },
        )
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash checked on logins for unknown emails so both paths cost one Argon2 verify"""
    return get_password_hash("unused-dummy-password")


def needs_rehash(hashed_password: str) -> bool:
    """Check if password hash needs to be updated with current parameters"""
    try:
        return ph.check_needs_rehash(hashed_password)
    except InvalidHashError:
        return True
