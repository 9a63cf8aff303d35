import enum
import uuid
from datetime import date, datetime
from pydantic import BaseModel, Field, model_validator

class VaccineType(str, enum.Enum):
    BCG = "BCG"
    HEPATITIS_B = "Hepatitis B"
    DPT = "DPT"
    POLIO = "Polio"
    MMR = "MMR"
    VARICELLA = "Varicella"

class VaccinationCreate(BaseModel):
    baby_id: uuid.UUID
    vaccine_type: VaccineType
    date_administered: date
    next_due_date: date | None = None
    batch_number: str | None = Field(default=None, max_length=64)
    notes: str | None = None

    @model_validator(mode="after")
    def _due_after_given(self):
        if self.next_due_date and self.next_due_date < self.date_administered:
            raise ValueError("next_due_date must not be before date_administered")
        return self

class VaccinationUpdate(BaseModel):
    vaccine_type: VaccineType | None = None
    date_administered: date | None = None
    next_due_date: date | None = None
    batch_number: str | None = Field(default=None, max_length=64)
    notes: str | None = None

class VaccinatedBaby(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    date_of_birth: date

    class Config:
        from_attributes = True

class AdministeringProvider(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    facility_name: str | None

    class Config:
        from_attributes = True

class VaccinationOut(BaseModel):
    id: uuid.UUID
    baby_id: uuid.UUID
    baby: VaccinatedBaby
    vaccine_type: VaccineType
    date_administered: date
    next_due_date: date | None
    batch_number: str | None
    administered_by: uuid.UUID
    provider: AdministeringProvider
    notes: str | None
    created_at: datetime

    class Config:
        from_attributes = True

class VaccineStat(BaseModel):
    vaccine_type: VaccineType
    count: int
    last_administered: date | None
