import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.services.user_service import UserRepository
from bloodbank.utils.exceptions import AuthenticationError, NotFoundError
from bloodbank.utils.ip_address_finder import get_client_ip
from bloodbank.utils.logging_config import log_security_event, user_id
from bloodbank.utils.security import TokenManager

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions from the process-wide
    ``Database`` on ``app.state``. Any transaction left open is rolled back.
    """
    database = request.app.state.database
    async with database.session() as session:
        logger.debug("Database session created")
        try:
            yield session
        except SQLAlchemyError as e:
            logger.error(f"Database error in get_db: {type(e).__name__}: {e}")
            raise
        finally:
            if session.in_transaction():
                await session.rollback()
                logger.debug("Open transaction rolled back")


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """Resolve the bearer token to a user row; 401 otherwise."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    try:
        payload = TokenManager.decode_token(credentials.credentials)
    except ValueError as e:
        logger.warning(
            "Invalid authentication credentials",
            extra={
                "extra_fields": {
                    "event_type": "invalid_auth_credentials",
                    "error": str(e),
                }
            },
        )
        raise AuthenticationError() from e

    if payload.get("type") != "access" or payload.get("sub") is None:
        raise AuthenticationError("Invalid token type")

    try:
        subject = int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise AuthenticationError() from e

    try:
        user = await UserRepository(db).get_by_id(subject)
    except NotFoundError as e:
        raise AuthenticationError("User not found") from e

    user_id.set(str(user["id_user"]))
    return user


async def require_write_auth(
    request: Request,
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[dict]:
    """
    Guard for write endpoints. Only enforced when ``REQUIRE_AUTH`` is set;
    reads are never guarded.
    """
    if not request.app.state.settings.REQUIRE_AUTH:
        return None
    if request.method in ("GET", "HEAD", "OPTIONS"):
        return None
    if credentials is None:
        log_security_event(
            event_type="write_without_token",
            ip_address=get_client_ip(request),
            details={"http_method": request.method, "path": request.url.path},
        )
    return await get_current_user(db=db, credentials=credentials)
