from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.dependencies import get_db, require_write_auth
from bloodbank.schemas.base_schema import ListResponseWrapper, ResponseWrapper
from bloodbank.schemas.request import (
    BloodRequestCreate,
    BloodRequestDetail,
    BloodRequestResponse,
    BloodRequestUpdate,
)
from bloodbank.services.request import BloodRequestRepository, RequestLifecycleService
from bloodbank.utils.logging_config import log_audit_event

router = APIRouter(
    prefix="/request",
    tags=["Request"],
    dependencies=[Depends(require_write_auth)],
)


@router.get("/", response_model=ListResponseWrapper[BloodRequestDetail])
async def list_requests(db: AsyncSession = Depends(get_db)):
    """Pending requests with patient, doctor and hospital names."""
    rows = await BloodRequestRepository(db).list_details()
    return {"message": "Succesfully Fetch Request Data!", "data": rows}


@router.get("/details", response_model=ListResponseWrapper[BloodRequestDetail])
async def list_request_details(db: AsyncSession = Depends(get_db)):
    rows = await BloodRequestRepository(db).list_details()
    return {"message": "Succesfully Fetch Request Data!", "data": rows}


@router.get("/{request_id}", response_model=ResponseWrapper[BloodRequestDetail])
async def get_request(request_id: int, db: AsyncSession = Depends(get_db)):
    row = await BloodRequestRepository(db).get_detail(request_id)
    return {"message": "Succesfully Fetch Request Data!", "data": row}


@router.post(
    "/",
    response_model=ResponseWrapper[BloodRequestResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_request(
    request_data: BloodRequestCreate, db: AsyncSession = Depends(get_db)
):
    row = await BloodRequestRepository(db).create(request_data.model_dump())
    log_audit_event(
        action="create",
        resource_type="blood_request",
        resource_id=str(row["id_request"]),
        new_values={"bloodtype": row["bloodtype"], "quantity": row["quantity"]},
    )
    return {"message": "Succesfully Created a Request Data!", "data": row}


@router.put("/{request_id}", response_model=ResponseWrapper[BloodRequestResponse])
async def update_request(
    request_id: int,
    request_data: BloodRequestUpdate,
    db: AsyncSession = Depends(get_db),
):
    """
    Replace a request. Approving (1) or rejecting (2) it moves it to the
    confirmed archive; the response carries the row as updated.
    """
    row = await RequestLifecycleService(db).update_request(
        request_id, request_data.model_dump()
    )
    return {"message": "Succesfully updated a Request Data!", "data": row}


@router.delete("/{request_id}", response_model=ResponseWrapper[BloodRequestResponse])
async def delete_request(request_id: int, db: AsyncSession = Depends(get_db)):
    row = await BloodRequestRepository(db).delete(request_id)
    log_audit_event(
        action="delete", resource_type="blood_request", resource_id=str(request_id)
    )
    return {"message": "Succesfully deleted Request Data!", "data": row}
