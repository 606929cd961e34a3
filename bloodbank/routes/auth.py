from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.dependencies import get_current_user, get_db
from bloodbank.schemas.base_schema import ResponseWrapper
from bloodbank.schemas.user import (
    LoginSchema,
    RegisterResponse,
    RegisterSchema,
    TokenResponse,
    UserResponse,
)
from bloodbank.services.auth import AuthService
from bloodbank.utils.ip_address_finder import get_client_ip, get_user_agent
from bloodbank.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(user_data: RegisterSchema, db: AsyncSession = Depends(get_db)):
    user = await AuthService(db).register(
        user_data.username, user_data.email, user_data.password
    )
    return {"message": "User registered successfully", "user": user}


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginSchema,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Exchange email and password for a bearer token."""
    logger.info(
        "Login attempt",
        extra={
            "extra_fields": {
                "event_type": "login_attempt",
                "email": credentials.email,
                "client_ip": get_client_ip(request),
                "user_agent": get_user_agent(request),
            }
        },
    )
    _, token = await AuthService(db).login(credentials.email, credentials.password)
    return {"message": "Login successful", "token": token}


@router.get("/me", response_model=ResponseWrapper[UserResponse])
async def get_me(current_user: dict = Depends(get_current_user)):
    """Get current user profile"""
    return {"message": "Successfully fetched current user", "data": current_user}
