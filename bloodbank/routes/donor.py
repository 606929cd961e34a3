from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.dependencies import get_db, require_write_auth
from bloodbank.schemas.base_schema import ListResponseWrapper, ResponseWrapper
from bloodbank.schemas.donor import DonorCreate, DonorResponse, DonorUpdate
from bloodbank.services.donor import DonorRepository
from bloodbank.utils.logging_config import log_audit_event

router = APIRouter(
    prefix="/donor",
    tags=["Donor"],
    dependencies=[Depends(require_write_auth)],
)


@router.get("/", response_model=ListResponseWrapper[DonorResponse])
async def list_donors(db: AsyncSession = Depends(get_db)):
    rows = await DonorRepository(db).list()
    return {"message": "Succesfully Fetched All Donor Data!", "data": rows}


@router.get("/{donor_id}", response_model=ResponseWrapper[DonorResponse])
async def get_donor(donor_id: int, db: AsyncSession = Depends(get_db)):
    row = await DonorRepository(db).get_by_id(donor_id)
    return {"message": "Successfuly Fetch Donor ID", "data": row}


@router.post(
    "/",
    response_model=ResponseWrapper[DonorResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_donor(donor_data: DonorCreate, db: AsyncSession = Depends(get_db)):
    row = await DonorRepository(db).create(donor_data.model_dump())
    log_audit_event(
        action="create", resource_type="donor", resource_id=str(row["id_donor"])
    )
    return {"message": "Successfully created new donor!", "data": row}


@router.put("/{donor_id}", response_model=ResponseWrapper[DonorResponse])
async def update_donor(
    donor_id: int, donor_data: DonorUpdate, db: AsyncSession = Depends(get_db)
):
    row = await DonorRepository(db).update(donor_id, donor_data.model_dump())
    return {"message": "Successfully Updated donor!", "data": row}


@router.delete("/{donor_id}", response_model=ResponseWrapper[DonorResponse])
async def delete_donor(donor_id: int, db: AsyncSession = Depends(get_db)):
    row = await DonorRepository(db).delete(donor_id)
    log_audit_event(action="delete", resource_type="donor", resource_id=str(donor_id))
    return {"message": "Succesfully Deleted donor!", "data": row}
