import uuid
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from app.core.access import Role

class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)
    phone_number: str | None = None
    facility_name: str | None = None

    @field_validator("email")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.lower()

    @model_validator(mode="after")
    def _role_fields(self):
        if self.role is Role.HEALTHCARE_PROVIDER and not self.facility_name:
            raise ValueError("facility_name is required for healthcare providers")
        return self

class UserLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.lower()

class UserOut(BaseModel):
    id: uuid.UUID
    email: str
    role: Role
    first_name: str
    last_name: str
    phone_number: str | None
    facility_name: str | None
    created_at: datetime

    class Config:
        from_attributes = True

class AuthOut(BaseModel):
    user: UserOut
    token: str
