import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.access import Operation
from app.core.db import get_session
from app.core.security import get_principal, require_role, Principal
from app.modules.medical_records.schemas import MedicalRecordCreate, MedicalRecordOut
from app.modules.medical_records.service import MedicalRecordService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> MedicalRecordService:
    return MedicalRecordService(session)

@router.post("/ncd-patients/{patient_id}/records", response_model=MedicalRecordOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_role(Operation.MEDICAL_RECORD_CREATE))])
async def create_medical_record(
    patient_id: uuid.UUID,
    payload: MedicalRecordCreate,
    principal: Principal = Depends(get_principal),
    service: MedicalRecordService = Depends(svc),
):
    return await service.create(principal, patient_id, payload)

@router.get("/ncd-patients/{patient_id}/records", response_model=list[MedicalRecordOut], dependencies=[Depends(require_role(Operation.MEDICAL_RECORD_LIST))])
async def list_medical_records(
    patient_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: MedicalRecordService = Depends(svc),
):
    return await service.list_for_patient(principal, patient_id)
