from typing import Optional
from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship
from bloodbank.db.base import Base


class Hospital(Base):
    __tablename__ = "hospital"

    id_hospital: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hospitalname: Mapped[str] = mapped_column(String(150), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    phonenumber: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    doctors = relationship("Doctor", back_populates="hospital")
    patients = relationship("Patient", back_populates="hospital")

    def __str__(self) -> str:
        return f"{self.hospitalname} ({self.id_hospital})"
