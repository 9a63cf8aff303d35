import enum
import uuid
from datetime import date, datetime
from typing import Literal
from pydantic import BaseModel, Field, field_validator

class NCDType(str, enum.Enum):
    DIABETES = "diabetes"
    HYPERTENSION = "hypertension"
    HEART_DISEASE = "heart_disease"
    KIDNEY_DISEASE = "kidney_disease"
    CANCER = "cancer"

class EmergencyContact(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    relationship: str = Field(..., min_length=1, max_length=64)
    phone_number: str = Field(..., min_length=1, max_length=32)

class MedicalHistory(BaseModel):
    ncd_types: list[NCDType]
    diagnosis_date: date
    medications: list[str] = []
    allergies: list[str] = []
    family_history: list[str] = []

    @field_validator("ncd_types")
    @classmethod
    def _dedupe(cls, v: list[NCDType]) -> list[NCDType]:
        return list(dict.fromkeys(v))

class NCDPatientCreate(BaseModel):
    # honoured only when a provider creates a profile on someone's behalf
    user_id: uuid.UUID | None = None
    date_of_birth: date
    gender: Literal["male", "female"]
    emergency_contact: EmergencyContact
    medical_history: MedicalHistory

class NCDPatientUpdate(BaseModel):
    date_of_birth: date | None = None
    gender: Literal["male", "female"] | None = None
    emergency_contact: EmergencyContact | None = None
    medical_history: MedicalHistory | None = None

class MedicalHistoryOut(BaseModel):
    ncd_types: list[NCDType]
    diagnosis_date: date
    medications: list[str]
    allergies: list[str]
    family_history: list[str]

class PatientOwner(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone_number: str | None

    class Config:
        from_attributes = True

class NCDPatientOut(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    user: PatientOwner
    date_of_birth: date
    gender: str
    emergency_contact: EmergencyContact
    medical_history: MedicalHistoryOut
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class NCDTypeCount(BaseModel):
    ncd_type: NCDType
    count: int

class AgeGroupCount(BaseModel):
    age_group: str
    count: int

class NCDStats(BaseModel):
    ncd_types: list[NCDTypeCount]
    age_groups: list[AgeGroupCount]
