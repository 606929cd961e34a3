from typing import Tuple

from bloodbank.services.user_service import UserService
from bloodbank.utils.exceptions import InvalidCredentialsError
from bloodbank.utils.logging_config import get_logger, log_security_event
from bloodbank.utils.security import (
    TokenManager,
    dummy_password_hash,
    get_password_hash,
    needs_rehash,
    verify_password,
)

logger = get_logger(__name__)


class AuthService:
    def __init__(self, db):
        self.db = db
        self.user_service = UserService(db)

    async def register(self, username: str, email: str, password: str) -> dict:
        """Create an account and return only its id and email."""
        user = await self.user_service.create_user(username, email, password)

        log_security_event(
            event_type="user_registered",
            user_id=str(user["id_user"]),
            details={"email": email},
        )
        return {"id_user": user["id_user"], "email": user["email"]}

    async def login(self, email: str, password: str) -> Tuple[dict, str]:
        """
        Verify credentials and issue an access token.

        Unknown email and wrong password raise the same
        ``InvalidCredentialsError`` so callers cannot tell them apart.
        """
        user = await self.user_service.users.get_by_email(email)
        stored_hash = user["password"] if user else dummy_password_hash()

        if not verify_password(password, stored_hash) or user is None:
            log_security_event(
                event_type="failed_login_attempt",
                user_id=str(user["id_user"]) if user else None,
                details={
                    "reason": "wrong_password" if user else "user_not_found",
                    "email": email,
                },
            )
            raise InvalidCredentialsError()

        if needs_rehash(user["password"]):
            await self.user_service.users.update(
                user["id_user"], {"password": get_password_hash(password)}
            )
            logger.info(
                "Password rehashed with updated parameters",
                extra={
                    "extra_fields": {
                        "event_type": "password_rehashed",
                        "user_id": str(user["id_user"]),
                    }
                },
            )

        token = TokenManager.create_user_token(user["id_user"])
        log_security_event(
            event_type="successful_login", user_id=str(user["id_user"])
        )
        return user, token
