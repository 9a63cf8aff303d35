import uuid
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.access import Operation
from app.core.db import get_session
from app.core.security import get_principal, require_role, Principal
from app.modules.vaccinations.schemas import VaccinationCreate, VaccinationUpdate, VaccinationOut, VaccineStat
from app.modules.vaccinations.service import VaccinationService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> VaccinationService:
    return VaccinationService(session)

@router.post("/vaccinations", response_model=VaccinationOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_role(Operation.VACCINATION_CREATE))])
async def create_vaccination(
    payload: VaccinationCreate,
    principal: Principal = Depends(get_principal),
    service: VaccinationService = Depends(svc),
):
    return await service.create(principal, payload)

@router.get("/babies/{baby_id}/vaccinations", response_model=list[VaccinationOut], dependencies=[Depends(require_role(Operation.VACCINATION_LIST))])
async def list_baby_vaccinations(
    baby_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: VaccinationService = Depends(svc),
):
    return await service.list_for_baby(principal, baby_id)

# static paths before /vaccinations/{vaccination_id}
@router.get("/vaccinations/upcoming", response_model=list[VaccinationOut], dependencies=[Depends(require_role(Operation.VACCINATION_UPCOMING))])
async def upcoming_vaccinations(
    days: int = Query(30, ge=0, le=365),
    principal: Principal = Depends(get_principal),
    service: VaccinationService = Depends(svc),
):
    return await service.upcoming(principal, days)

@router.get("/vaccinations/stats", response_model=list[VaccineStat], dependencies=[Depends(require_role(Operation.VACCINATION_STATS))])
async def vaccination_stats(
    principal: Principal = Depends(get_principal),
    service: VaccinationService = Depends(svc),
):
    return await service.stats(principal)

@router.put("/vaccinations/{vaccination_id}", response_model=VaccinationOut, dependencies=[Depends(require_role(Operation.VACCINATION_UPDATE))])
async def update_vaccination(
    vaccination_id: uuid.UUID,
    payload: VaccinationUpdate,
    principal: Principal = Depends(get_principal),
    service: VaccinationService = Depends(svc),
):
    return await service.update(principal, vaccination_id, payload)
