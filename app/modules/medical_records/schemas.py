import uuid
from datetime import date, datetime
from typing import Literal
from pydantic import BaseModel, Field

RecordType = Literal["consultation", "lab_result", "prescription", "follow_up"]

class Vitals(BaseModel):
    blood_pressure: str | None = Field(default=None, pattern=r"^\d{2,3}/\d{2,3}$")
    heart_rate: int | None = Field(default=None, gt=0)
    temperature: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    blood_sugar: float | None = Field(default=None, gt=0)

class MedicalRecordCreate(BaseModel):
    record_date: date
    record_type: RecordType
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    vitals: Vitals = Vitals()
    attachments: list[str] = []

class MedicalRecordOut(BaseModel):
    id: uuid.UUID
    patient_id: uuid.UUID
    provider_id: uuid.UUID
    record_date: date
    record_type: str
    title: str
    description: str
    vitals: Vitals
    attachments: list[str]
    created_at: datetime

    class Config:
        from_attributes = True
