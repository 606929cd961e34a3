from fastapi import APIRouter
from .auth import router as auth_router
from .users import router as users_router
from .donor import router as donor_router
from .blood_stock import router as stock_router
from .request import router as request_router
from .confirmed import router as confirmed_router
from .facility import hospital_router, doctor_router, patient_router


router = APIRouter()

router.include_router(auth_router)
router.include_router(users_router)
router.include_router(donor_router)
router.include_router(stock_router)
router.include_router(request_router)
router.include_router(confirmed_router)
router.include_router(hospital_router)
router.include_router(doctor_router)
router.include_router(patient_router)
