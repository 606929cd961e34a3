from datetime import date, datetime
from enum import IntEnum
from typing import Optional
from sqlalchemy import Date, DateTime, Integer, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from bloodbank.db.base import Base


class BloodUnitStatus(IntEnum):
    IN_STOCK = 1
    OUT = 2


class BloodUnit(Base):
    """A single donated quantity of blood, from intake to dispensation."""

    __tablename__ = "bloodunit"

    # --- Columns ---
    id_unit: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    volume: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # millilitres
    bloodtype: Mapped[Optional[str]] = mapped_column(String(2), nullable=True, index=True)
    rhesus: Mapped[Optional[str]] = mapped_column(String(1), nullable=True, index=True)
    status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=BloodUnitStatus.IN_STOCK, index=True
    )
    donordate: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    expirydate: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # --- Relationships ---
    id_donor: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("donor.id_donor", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    donor = relationship("Donor", back_populates="blood_units")
