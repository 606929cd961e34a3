from datetime import datetime
from enum import IntEnum
from typing import Optional
from sqlalchemy import DateTime, Integer, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column
from bloodbank.db.base import Base


class RequestStatus(IntEnum):
    WAITING = 0
    APPROVED = 1
    REJECTED = 2

    @property
    def is_terminal(self) -> bool:
        return self in (RequestStatus.APPROVED, RequestStatus.REJECTED)


class BloodRequest(Base):
    """A pending ask for blood, mutable until it is approved or rejected."""

    __tablename__ = "request"

    # --- Columns ---
    id_request: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_patient: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("patient.id_patient"), nullable=True, index=True
    )
    id_doctor: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("doctor.id_doctor"), nullable=True, index=True
    )
    bloodtype: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)
    rhesus: Mapped[Optional[str]] = mapped_column(String(1), nullable=True)
    quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    urgency: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=RequestStatus.WAITING, index=True
    )
    requestedat: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class ConfirmedRequest(Base):
    """Archived copy of a request that was approved or rejected."""

    __tablename__ = "confirmed"

    # --- Columns ---
    id_confirmed: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Origin id only; the request row is gone once it is archived
    id_request: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    id_patient: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("patient.id_patient"), nullable=True, index=True
    )
    id_doctor: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("doctor.id_doctor"), nullable=True, index=True
    )
    bloodtype: Mapped[Optional[str]] = mapped_column(String(2), nullable=True)
    rhesus: Mapped[Optional[str]] = mapped_column(String(1), nullable=True)
    quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    urgency: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    requestedat: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    confirmedat: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
