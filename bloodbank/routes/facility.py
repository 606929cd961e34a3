from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.dependencies import get_db, require_write_auth
from bloodbank.schemas.base_schema import ListResponseWrapper, ResponseWrapper
from bloodbank.schemas.hospital import (
    DoctorCreate,
    DoctorResponse,
    HospitalCreate,
    HospitalResponse,
    PatientCreate,
    PatientResponse,
)
from bloodbank.services.doctor import DoctorRepository
from bloodbank.services.hospital import HospitalRepository
from bloodbank.services.patient import PatientRepository

hospital_router = APIRouter(
    prefix="/hospital",
    tags=["Hospital"],
    dependencies=[Depends(require_write_auth)],
)
doctor_router = APIRouter(
    prefix="/doctor",
    tags=["Doctor"],
    dependencies=[Depends(require_write_auth)],
)
patient_router = APIRouter(
    prefix="/patient",
    tags=["Patient"],
    dependencies=[Depends(require_write_auth)],
)


# Hospital

@hospital_router.get("/", response_model=ListResponseWrapper[HospitalResponse])
async def list_hospitals(db: AsyncSession = Depends(get_db)):
    rows = await HospitalRepository(db).list()
    return {"message": "Successfully Fetched All Hospital!", "data": rows}


@hospital_router.get("/{hospital_id}", response_model=ResponseWrapper[HospitalResponse])
async def get_hospital(hospital_id: int, db: AsyncSession = Depends(get_db)):
    row = await HospitalRepository(db).get_by_id(hospital_id)
    return {"message": "Successfully Fetched Hospital!", "data": row}


@hospital_router.post(
    "/",
    response_model=ResponseWrapper[HospitalResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_hospital(data: HospitalCreate, db: AsyncSession = Depends(get_db)):
    row = await HospitalRepository(db).create(data.model_dump())
    return {"message": "Successfully Created Hospital!", "data": row}


@hospital_router.put("/{hospital_id}", response_model=ResponseWrapper[HospitalResponse])
async def update_hospital(
    hospital_id: int, data: HospitalCreate, db: AsyncSession = Depends(get_db)
):
    row = await HospitalRepository(db).update(hospital_id, data.model_dump())
    return {"message": "Successfully Updated Hospital!", "data": row}


@hospital_router.delete(
    "/{hospital_id}", response_model=ResponseWrapper[HospitalResponse]
)
async def delete_hospital(hospital_id: int, db: AsyncSession = Depends(get_db)):
    row = await HospitalRepository(db).delete(hospital_id)
    return {"message": "Successfully Deleted Hospital!", "data": row}


# Doctor

@doctor_router.get("/", response_model=ListResponseWrapper[DoctorResponse])
async def list_doctors(db: AsyncSession = Depends(get_db)):
    rows = await DoctorRepository(db).list()
    return {"message": "Successfully Fetched All Doctor!", "data": rows}


@doctor_router.get("/{doctor_id}", response_model=ResponseWrapper[DoctorResponse])
async def get_doctor(doctor_id: int, db: AsyncSession = Depends(get_db)):
    row = await DoctorRepository(db).get_by_id(doctor_id)
    return {"message": "Successfully Fetched Doctor!", "data": row}


@doctor_router.post(
    "/",
    response_model=ResponseWrapper[DoctorResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_doctor(data: DoctorCreate, db: AsyncSession = Depends(get_db)):
    row = await DoctorRepository(db).create(data.model_dump())
    return {"message": "Successfully Created Doctor!", "data": row}


@doctor_router.put("/{doctor_id}", response_model=ResponseWrapper[DoctorResponse])
async def update_doctor(
    doctor_id: int, data: DoctorCreate, db: AsyncSession = Depends(get_db)
):
    row = await DoctorRepository(db).update(doctor_id, data.model_dump())
    return {"message": "Successfully Updated Doctor!", "data": row}


@doctor_router.delete("/{doctor_id}", response_model=ResponseWrapper[DoctorResponse])
async def delete_doctor(doctor_id: int, db: AsyncSession = Depends(get_db)):
    row = await DoctorRepository(db).delete(doctor_id)
    return {"message": "Successfully Deleted Doctor!", "data": row}


# Patient

@patient_router.get("/", response_model=ListResponseWrapper[PatientResponse])
async def list_patients(db: AsyncSession = Depends(get_db)):
    rows = await PatientRepository(db).list()
    return {"message": "Successfully Fetched All Patient!", "data": rows}


@patient_router.get("/{patient_id}", response_model=ResponseWrapper[PatientResponse])
async def get_patient(patient_id: int, db: AsyncSession = Depends(get_db)):
    row = await PatientRepository(db).get_by_id(patient_id)
    return {"message": "Successfully Fetched Patient!", "data": row}


@patient_router.post(
    "/",
    response_model=ResponseWrapper[PatientResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_patient(data: PatientCreate, db: AsyncSession = Depends(get_db)):
    row = await PatientRepository(db).create(data.model_dump())
    return {"message": "Successfully Created Patient!", "data": row}


@patient_router.put("/{patient_id}", response_model=ResponseWrapper[PatientResponse])
async def update_patient(
    patient_id: int, data: PatientCreate, db: AsyncSession = Depends(get_db)
):
    row = await PatientRepository(db).update(patient_id, data.model_dump())
    return {"message": "Successfully Updated Patient!", "data": row}


@patient_router.delete(
    "/{patient_id}", response_model=ResponseWrapper[PatientResponse]
)
async def delete_patient(patient_id: int, db: AsyncSession = Depends(get_db)):
    row = await PatientRepository(db).delete(patient_id)
    return {"message": "Successfully Deleted Patient!", "data": row}
