import uuid
from datetime import date, datetime
from typing import Literal
from pydantic import BaseModel, Field

Gender = Literal["male", "female"]

class BabyCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)
    date_of_birth: date
    gender: Gender
    birth_weight: float | None = Field(default=None, gt=0)
    birth_height: float | None = Field(default=None, gt=0)
    blood_type: str | None = None
    allergies: list[str] = []

class BabyUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=120)
    last_name: str | None = Field(default=None, min_length=1, max_length=120)
    date_of_birth: date | None = None
    gender: Gender | None = None
    birth_weight: float | None = Field(default=None, gt=0)
    birth_height: float | None = Field(default=None, gt=0)
    blood_type: str | None = None
    allergies: list[str] | None = None

class BabyOut(BaseModel):
    id: uuid.UUID
    parent_id: uuid.UUID
    first_name: str
    last_name: str
    date_of_birth: date
    gender: str
    birth_weight: float | None
    birth_height: float | None
    blood_type: str | None
    allergies: list[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
