from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.db import get_session
from app.core.security import get_principal, Principal
from app.modules.users.schemas import UserRegister, UserLogin, UserOut, AuthOut
from app.modules.users.service import UserService

router = APIRouter()

def svc(session: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(session)

@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, service: UserService = Depends(svc)):
    user, token = await service.register(payload)
    return {"user": user, "token": token}

@router.post("/login", response_model=AuthOut)
async def login(payload: UserLogin, service: UserService = Depends(svc)):
    user, token = await service.login(payload.email, payload.password)
    return {"user": user, "token": token}

@router.get("/me", response_model=UserOut)
async def me(principal: Principal = Depends(get_principal), service: UserService = Depends(svc)):
    return await service.get(principal.user_id)
