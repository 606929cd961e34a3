from typing import Optional

from pydantic import BaseModel, Field

from bloodbank.models.user import UserRole
from bloodbank.schemas.base_schema import BaseSchema, RowSchema


class RegisterSchema(BaseSchema):
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)


class LoginSchema(BaseSchema):
    email: str
    password: str


class UserCreate(RegisterSchema):
    role: int = Field(
        UserRole.DEFAULT,
        description="1 = blood bank staff, 2 = hospital staff, 3 = default",
    )


class UserUpdate(BaseSchema):
    username: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=100)
    password: Optional[str] = Field(
        None, min_length=1, max_length=128, description="Re-hashed when supplied"
    )
    role: Optional[int] = None


class UserResponse(RowSchema):
    id_user: int
    username: str
    email: str
    role: int


class RegisteredUser(RowSchema):
    id_user: int
    email: str


class RegisterResponse(BaseModel):
    message: str
    user: RegisteredUser


class TokenResponse(BaseModel):
    message: str
    token: str
