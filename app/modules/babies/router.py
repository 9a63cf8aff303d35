import uuid
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.paging import Page, page_params
from app.core.access import Operation
from app.core.security import get_principal, require_role, Principal
from app.modules.babies.schemas import BabyCreate, BabyUpdate, BabyOut
from app.modules.babies.service import BabyService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> BabyService:
    return BabyService(session)

@router.post("", response_model=BabyOut, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_role(Operation.BABY_CREATE))])
async def create_baby(
    payload: BabyCreate,
    principal: Principal = Depends(get_principal),
    service: BabyService = Depends(svc),
):
    return await service.create(principal, payload)

@router.get("", response_model=list[BabyOut], dependencies=[Depends(require_role(Operation.BABY_LIST))])
async def list_babies(
    search: str | None = Query(default=None, max_length=100),
    page: Page = Depends(page_params),
    principal: Principal = Depends(get_principal),
    service: BabyService = Depends(svc),
):
    return await service.list(principal, page, search)

@router.get("/{baby_id}", response_model=BabyOut, dependencies=[Depends(require_role(Operation.BABY_READ))])
async def get_baby(
    baby_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: BabyService = Depends(svc),
):
    return await service.get(principal, baby_id)

@router.put("/{baby_id}", response_model=BabyOut, dependencies=[Depends(require_role(Operation.BABY_UPDATE))])
async def update_baby(
    baby_id: uuid.UUID,
    payload: BabyUpdate,
    principal: Principal = Depends(get_principal),
    service: BabyService = Depends(svc),
):
    return await service.update(principal, baby_id, payload)

@router.delete("/{baby_id}", status_code=204, dependencies=[Depends(require_role(Operation.BABY_DELETE))])
async def delete_baby(
    baby_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    service: BabyService = Depends(svc),
):
    await service.delete(principal, baby_id)
