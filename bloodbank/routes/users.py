from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.dependencies import get_db, require_write_auth
from bloodbank.schemas.base_schema import ListResponseWrapper, ResponseWrapper
from bloodbank.schemas.user import UserCreate, UserResponse, UserUpdate
from bloodbank.services.user_service import UserRepository, UserService
from bloodbank.utils.logging_config import log_audit_event

router = APIRouter(
    prefix="/user",
    tags=["users"],
    dependencies=[Depends(require_write_auth)],
)


@router.get("/", response_model=ListResponseWrapper[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    rows = await UserRepository(db).list()
    return {"message": "Succesfully Fetch All users data!", "data": rows}


@router.get("/{user_id}", response_model=ResponseWrapper[UserResponse])
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    row = await UserRepository(db).get_by_id(user_id)
    return {"message": "Succesfully Fetch users data!", "data": row}


@router.post(
    "/",
    response_model=ResponseWrapper[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    row = await UserService(db).create_user(
        user_data.username, user_data.email, user_data.password, user_data.role
    )
    log_audit_event(
        action="create", resource_type="user", resource_id=str(row["id_user"])
    )
    return {"message": "Succesfully Created users data!", "data": row}


@router.put("/{user_id}", response_model=ResponseWrapper[UserResponse])
async def update_user(
    user_id: int, user_data: UserUpdate, db: AsyncSession = Depends(get_db)
):
    row = await UserService(db).update_user(user_id, user_data.model_dump())
    log_audit_event(
        action="update",
        resource_type="user",
        resource_id=str(user_id),
        new_values={"password_changed": user_data.password is not None},
    )
    return {"message": "Succesfully Updated users data!", "data": row}


@router.delete("/{user_id}", response_model=ResponseWrapper[UserResponse])
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)):
    row = await UserRepository(db).delete(user_id)
    log_audit_event(action="delete", resource_type="user", resource_id=str(user_id))
    return {"message": "Succesfully Deleted users data!", "data": row}
