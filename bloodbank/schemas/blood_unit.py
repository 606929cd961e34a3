from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, Field

from bloodbank.models.blood_unit import BloodUnitStatus
from bloodbank.schemas.base_schema import BaseSchema, RowSchema


class BloodUnitCreate(BaseSchema):
    id_donor: Optional[int] = None
    volume: Optional[int] = Field(None, description="Volume in millilitres")
    bloodtype: Optional[str] = Field(
        None, max_length=2, validation_alias=AliasChoices("bloodType", "bloodtype")
    )
    rhesus: Optional[str] = Field(None, max_length=1)
    status: int = Field(
        BloodUnitStatus.IN_STOCK, description="1 = in stock, 2 = out of stock"
    )
    expirydate: Optional[date] = Field(
        None, validation_alias=AliasChoices("expiryDate", "expirydate")
    )


class BloodUnitUpdate(BloodUnitCreate):
    pass


class BloodUnitResponse(RowSchema):
    id_unit: int
    id_donor: Optional[int] = None
    volume: Optional[int] = None
    bloodtype: Optional[str] = None
    rhesus: Optional[str] = None
    status: int
    donordate: Optional[datetime] = None
    expirydate: Optional[date] = None


class StockSummary(RowSchema):
    """In-stock units of one blood type and rhesus."""

    bloodtype: Optional[str] = None
    rhesus: Optional[str] = None
    quantity: int
    total_volume: Optional[int] = None
