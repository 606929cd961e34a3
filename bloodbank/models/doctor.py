from typing import Optional
from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from bloodbank.db.base import Base


class Doctor(Base):
    __tablename__ = "doctor"

    id_doctor: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_hospital: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("hospital.id_hospital", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    doctorname: Mapped[str] = mapped_column(String(150), nullable=False)
    specialization: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    hospital = relationship("Hospital", back_populates="doctors")

    def __str__(self) -> str:
        return f"{self.doctorname} ({self.id_doctor})"
