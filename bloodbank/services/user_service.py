from typing import Any, Dict, Optional

from sqlalchemy import select

from bloodbank.models.user import User, UserRole
from bloodbank.services.repository import BaseRepository, Row
from bloodbank.utils.exceptions import ConflictError
from bloodbank.utils.security import get_password_hash

EMAIL_TAKEN = "Email already registered"


class UserRepository(BaseRepository):
    model = User
    pk_name = "id_user"
    label = "User"
    not_found_template = "{label} with id {id} not found."

    async def get_by_email(self, email: str) -> Optional[Row]:
        return await self.fetch_one(
            select(self.table).where(self.table.c.email == email),
            "Failed to fetch users data!",
        )


class UserService:
    """User accounts. Passwords are stored as Argon2 hashes only."""

    def __init__(self, db):
        self.db = db
        self.users = UserRepository(db)

    async def create_user(
        self,
        username: str,
        email: str,
        password: str,
        role: int = UserRole.DEFAULT,
    ) -> Row:
        if await self.users.get_by_email(email) is not None:
            raise ConflictError(EMAIL_TAKEN)

        fields = {
            "username": username,
            "email": email,
            "password": get_password_hash(password),
            "role": role,
        }
        async with self.users.write(
            "Internal server error",
            conflict_message=EMAIL_TAKEN,
            failure_status=500,
        ):
            result = await self.db.execute(self.users.insert_stmt(fields))
            row = dict(result.mappings().one())
        return row

    async def update_user(self, user_id: int, data: Dict[str, Any]) -> Row:
        fields = {k: v for k, v in data.items() if v is not None}
        if "password" in fields:
            fields["password"] = get_password_hash(fields["password"])
        return await self.users.update(user_id, fields)
