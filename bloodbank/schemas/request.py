from datetime import datetime
from typing import Optional

from pydantic import Field

from bloodbank.models.request import RequestStatus
from bloodbank.schemas.base_schema import BaseSchema, RowSchema


class BloodRequestCreate(BaseSchema):
    id_patient: Optional[int] = None
    id_doctor: Optional[int] = None
    bloodtype: Optional[str] = Field(None, max_length=2, description="O, A, B or AB")
    rhesus: Optional[str] = Field(None, max_length=1, description="+ or -")
    quantity: Optional[int] = None
    urgency: Optional[int] = Field(None, description="1 (low) to 3 (high)")
    status: int = Field(
        RequestStatus.WAITING, description="0 = waiting, 1 = approved, 2 = rejected"
    )


class BloodRequestUpdate(BloodRequestCreate):
    """Full replacement of a request. A status of 1 or 2 archives the request."""


class BloodRequestResponse(RowSchema):
    id_request: int
    id_patient: Optional[int] = None
    id_doctor: Optional[int] = None
    bloodtype: Optional[str] = None
    rhesus: Optional[str] = None
    quantity: Optional[int] = None
    urgency: Optional[int] = None
    status: int
    requestedat: Optional[datetime] = None


class BloodRequestDetail(BloodRequestResponse):
    patient_name: Optional[str] = None
    doctorname: Optional[str] = None
    hospital_name: Optional[str] = None


class ConfirmedResponse(RowSchema):
    id_confirmed: int
    id_request: Optional[int] = None
    id_patient: Optional[int] = None
    id_doctor: Optional[int] = None
    bloodtype: Optional[str] = None
    rhesus: Optional[str] = None
    quantity: Optional[int] = None
    urgency: Optional[int] = None
    status: int
    requestedat: Optional[datetime] = None
    confirmedat: Optional[datetime] = None
