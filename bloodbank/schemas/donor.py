from datetime import date
from typing import Optional

from pydantic import AliasChoices, Field

from bloodbank.schemas.base_schema import BaseSchema, RowSchema


class DonorCreate(BaseSchema):
    """
    Donor payload. The camelCase keys used by existing clients
    (``firstName``, ``bloodType``, ...) are accepted next to the column names.
    """

    firstname: str = Field(
        ...,
        max_length=100,
        validation_alias=AliasChoices("firstName", "firstname"),
    )
    lastname: Optional[str] = Field(
        None, max_length=100, validation_alias=AliasChoices("lastName", "lastname")
    )
    email: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    province: Optional[str] = Field(None, max_length=100)
    bloodtype: Optional[str] = Field(
        None,
        max_length=2,
        validation_alias=AliasChoices("bloodType", "bloodtype"),
        description="O, A, B or AB",
    )
    rhesus: Optional[str] = Field(None, max_length=1, description="+ or -")
    phonenumber: Optional[str] = Field(
        None,
        max_length=20,
        validation_alias=AliasChoices("phoneNumber", "phonenumber"),
    )
    lastdonordate: Optional[date] = Field(
        None, validation_alias=AliasChoices("lastDonorDate", "lastdonordate")
    )


class DonorUpdate(DonorCreate):
    pass


class DonorResponse(RowSchema):
    id_donor: int
    firstname: str
    lastname: Optional[str] = None
    email: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    bloodtype: Optional[str] = None
    rhesus: Optional[str] = None
    phonenumber: Optional[str] = None
    lastdonordate: Optional[date] = None
