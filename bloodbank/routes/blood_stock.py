from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.dependencies import get_db, require_write_auth
from bloodbank.schemas.base_schema import ListResponseWrapper, ResponseWrapper
from bloodbank.schemas.blood_unit import (
    BloodUnitCreate,
    BloodUnitResponse,
    BloodUnitUpdate,
    StockSummary,
)
from bloodbank.services.blood_unit import BloodUnitRepository
from bloodbank.utils.logging_config import log_audit_event

router = APIRouter(
    prefix="/stock",
    tags=["Blood Stock"],
    dependencies=[Depends(require_write_auth)],
)


def query_rhesus(rhesus: Optional[str]) -> Optional[str]:
    # An unencoded "+" in a query string decodes to a space
    if rhesus is not None and rhesus.isspace():
        return "+"
    return rhesus


@router.get("/total", response_model=ListResponseWrapper[StockSummary])
async def stock_total(db: AsyncSession = Depends(get_db)):
    """Count and volume of in-stock units per blood type and rhesus."""
    rows = await BloodUnitRepository(db).stock_total()
    return {"message": "Succesfully get all blood stocks available!", "data": rows}


@router.get("/type", response_model=ListResponseWrapper[StockSummary])
async def stock_by_type(
    type: str = Query(..., description="Blood type: O, A, B or AB"),
    rhesus: Optional[str] = Query(
        None, description="+ or - (an unencoded + is accepted)"
    ),
    db: AsyncSession = Depends(get_db),
):
    rows = await BloodUnitRepository(db).stock_by_type(type, query_rhesus(rhesus))
    return {"message": "Succesfully get all blood stocks available!", "data": rows}


@router.get("/", response_model=ListResponseWrapper[BloodUnitResponse])
async def list_blood_units(db: AsyncSession = Depends(get_db)):
    rows = await BloodUnitRepository(db).list()
    return {"message": "Succesfully Fetched all blood unit data!", "data": rows}


@router.get("/{unit_id}", response_model=ResponseWrapper[BloodUnitResponse])
async def get_blood_unit(unit_id: int, db: AsyncSession = Depends(get_db)):
    row = await BloodUnitRepository(db).get_by_id(unit_id)
    return {"message": "Succesfully Fetched a blood unit data!", "data": row}


@router.post(
    "/",
    response_model=ResponseWrapper[BloodUnitResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_blood_unit(
    unit_data: BloodUnitCreate, db: AsyncSession = Depends(get_db)
):
    row = await BloodUnitRepository(db).create(unit_data.model_dump())
    log_audit_event(
        action="create", resource_type="blood_unit", resource_id=str(row["id_unit"])
    )
    return {"message": "Succesfully created a new blood data!", "data": row}


@router.put("/{unit_id}", response_model=ResponseWrapper[BloodUnitResponse])
async def update_blood_unit(
    unit_id: int, unit_data: BloodUnitUpdate, db: AsyncSession = Depends(get_db)
):
    row = await BloodUnitRepository(db).update(unit_id, unit_data.model_dump())
    return {"message": "Succesfully updated a blood data!", "data": row}


@router.delete("/{unit_id}", response_model=ResponseWrapper[BloodUnitResponse])
async def delete_blood_unit(unit_id: int, db: AsyncSession = Depends(get_db)):
    row = await BloodUnitRepository(db).delete(unit_id)
    log_audit_event(action="delete", resource_type="blood_unit", resource_id=str(unit_id))
    return {"message": "Succesfully deleted a blood data!", "data": row}
