from datetime import date
from typing import Optional
from sqlalchemy import Date, String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from bloodbank.db.base import Base


class Patient(Base):
    __tablename__ = "patient"

    id_patient: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_hospital: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("hospital.id_hospital", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    bloodtype: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)
    rhesus: Mapped[Optional[str]] = mapped_column(String(1), nullable=True)
    dateofbirth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    hospital = relationship("Hospital", back_populates="patients")
