import uuid
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.access import Operation
from app.core.db import get_session
from app.core.paging import Page, page_params
from app.core.security import get_principal, require_role, Principal
from app.modules.ncd_patients.schemas import NCDPatientCreate, NCDPatientUpdate, NCDPatientOut, NCDStats
from app.modules.ncd_patients.service import NCDPatientService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> NCDPatientService:
    return NCDPatientService(session)

@router.post("", response_model=NCDPatientOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_role(Operation.NCD_PATIENT_CREATE))])
async def create_ncd_patient(
    payload: NCDPatientCreate,
    principal: Principal = Depends(get_principal),
    service: NCDPatientService = Depends(svc),
):
    return await service.create(principal, payload)

@router.get("", response_model=list[NCDPatientOut], dependencies=[Depends(require_role(Operation.NCD_PATIENT_LIST))])
async def list_ncd_patients(
    search: str | None = Query(default=None, max_length=100),
    page: Page = Depends(page_params),
    principal: Principal = Depends(get_principal),
    service: NCDPatientService = Depends(svc),
):
    return await service.list(principal, page, search)

@router.get("/stats/overview", response_model=NCDStats, dependencies=[Depends(require_role(Operation.NCD_PATIENT_STATS))])
async def ncd_stats(
    principal: Principal = Depends(get_principal),
    service: NCDPatientService = Depends(svc),
):
    return await service.stats(principal)

@router.get("/{patient_id}", response_model=NCDPatientOut, dependencies=[Depends(require_role(Operation.NCD_PATIENT_READ))])
async def get_ncd_patient(
    patient_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: NCDPatientService = Depends(svc),
):
    return await service.get(principal, patient_id)

@router.put("/{patient_id}", response_model=NCDPatientOut, dependencies=[Depends(require_role(Operation.NCD_PATIENT_UPDATE))])
async def update_ncd_patient(
    patient_id: uuid.UUID,
    payload: NCDPatientUpdate,
    principal: Principal = Depends(get_principal),
    service: NCDPatientService = Depends(svc),
):
    return await service.update(principal, patient_id, payload)
