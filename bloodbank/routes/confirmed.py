from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.dependencies import get_db
from bloodbank.schemas.base_schema import ListResponseWrapper, ResponseWrapper
from bloodbank.schemas.request import ConfirmedResponse
from bloodbank.services.confirmed import ConfirmedRepository

router = APIRouter(prefix="/confirmed", tags=["Confirmed"])


@router.get("/", response_model=ListResponseWrapper[ConfirmedResponse])
async def list_confirmed(db: AsyncSession = Depends(get_db)):
    rows = await ConfirmedRepository(db).list()
    return {"message": "Succesfully Fetch Confirmed Data!", "data": rows}


@router.get("/{confirmed_id}", response_model=ResponseWrapper[ConfirmedResponse])
async def get_confirmed(confirmed_id: int, db: AsyncSession = Depends(get_db)):
    row = await ConfirmedRepository(db).get_by_id(confirmed_id)
    return {"message": "Succesfully Fetch Confirmed Data!", "data": row}
