from datetime import date
from typing import Optional
from sqlalchemy import Date, String, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from bloodbank.db.base import Base


class Donor(Base):
    __tablename__ = "donor"

    # --- Columns ---
    id_donor: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    phonenumber: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    province: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    bloodtype: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)
    rhesus: Mapped[Optional[str]] = mapped_column(String(1), nullable=True)
    lastdonordate: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # --- Relationships ---
    blood_units = relationship("BloodUnit", back_populates="donor")

    def __str__(self) -> str:
        return f"{self.firstname} {self.lastname or ''}".strip()
