from enum import IntEnum
from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column
from bloodbank.db.base import Base


class UserRole(IntEnum):
    BLOOD_BANK_STAFF = 1
    HOSPITAL_STAFF = 2
    DEFAULT = 3


class User(Base):
    __tablename__ = "users"

    # --- Columns ---
    id_user: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[int] = mapped_column(Integer, nullable=False, default=UserRole.DEFAULT)

    # --- Methods ---
    def __str__(self) -> str:
        return f"{self.username} <{self.email}>"
