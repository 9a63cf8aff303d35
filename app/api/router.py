from fastapi import APIRouter
from app.modules.users.router import router as auth_router
from app.modules.babies.router import router as babies_router
from app.modules.vaccinations.router import router as vaccinations_router
from app.modules.ncd_patients.router import router as ncd_patients_router
from app.modules.medical_records.router import router as medical_records_router

api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(babies_router, prefix="/babies", tags=["babies"])
api_router.include_router(vaccinations_router, tags=["vaccinations"])
# vaccinations_router carries /vaccinations and /babies/{baby_id}/vaccinations
api_router.include_router(ncd_patients_router, prefix="/ncd-patients", tags=["ncd-patients"])
api_router.include_router(medical_records_router, tags=["medical-records"])
