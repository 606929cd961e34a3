from datetime import date
from typing import Optional

from pydantic import Field

from bloodbank.schemas.base_schema import BaseSchema, RowSchema


class HospitalCreate(BaseSchema):
    hospitalname: str = Field(..., max_length=150)
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    phonenumber: Optional[str] = Field(None, max_length=20)


class HospitalResponse(RowSchema):
    id_hospital: int
    hospitalname: str
    address: Optional[str] = None
    city: Optional[str] = None
    phonenumber: Optional[str] = None


class DoctorCreate(BaseSchema):
    id_hospital: Optional[int] = None
    doctorname: str = Field(..., max_length=150)
    specialization: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=100)


class DoctorResponse(RowSchema):
    id_doctor: int
    id_hospital: Optional[int] = None
    doctorname: str
    specialization: Optional[str] = None
    email: Optional[str] = None


class PatientCreate(BaseSchema):
    id_hospital: Optional[int] = None
    firstname: str = Field(..., max_length=100)
    lastname: Optional[str] = Field(None, max_length=100)
    bloodtype: Optional[str] = Field(None, max_length=2)
    rhesus: Optional[str] = Field(None, max_length=1)
    dateofbirth: Optional[date] = None
    gender: Optional[str] = Field(None, max_length=10)


class PatientResponse(RowSchema):
    id_patient: int
    id_hospital: Optional[int] = None
    firstname: str
    lastname: Optional[str] = None
    fullname: Optional[str] = None
    bloodtype: Optional[str] = None
    rhesus: Optional[str] = None
    dateofbirth: Optional[date] = None
    gender: Optional[str] = None
