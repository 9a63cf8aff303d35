import uuid
from datetime import datetime, timedelta, timezone
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import BaseModel
from app.core import access
from app.core.access import Operation, Role
from app.core.config import settings
from app.core.errors import InvalidToken, Unauthenticated

http_bearer = HTTPBearer(auto_error=False)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

class Principal(BaseModel):
    user_id: uuid.UUID
    role: Role

def hash_password(raw: str) -> str:
    return pwd_context.hash(raw)

def verify_password(raw: str, hashed: str) -> bool:
    return pwd_context.verify(raw, hashed)

def create_access_token(user_id: uuid.UUID, role: Role, expires_delta: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": Role(role).value,
        "iat": now,
        "exp": now + (expires_delta or timedelta(hours=settings.TOKEN_EXPIRE_HOURS)),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def decode_token(token: str) -> Principal:
    """Verify signature and expiry; yield the identity the token was issued to."""
    try:
        data = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
        return Principal(user_id=uuid.UUID(str(data["sub"])), role=Role(data["role"]))
    except (JWTError, KeyError, ValueError):
        raise InvalidToken()

async def get_principal(creds: HTTPAuthorizationCredentials | None = Depends(http_bearer)) -> Principal:
    if creds is None:
        raise Unauthenticated("Access denied. No token provided.")
    return decode_token(creds.credentials)

def require_role(op: Operation):
    """Route guard: reject roles the policy table never allows for ``op``."""
    def dep(principal: Principal = Depends(get_principal)) -> Principal:
        access.enforce(access.check_role(principal, op))
        return principal
    return dep
