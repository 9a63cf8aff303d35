import uuid
from datetime import date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Date, Text, Float, Integer, JSON, ForeignKey
from app.core.base import Base, TimestampedMixin

class MedicalRecord(Base, TimestampedMixin):
    __tablename__ = "medical_record"

    patient_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("ncd_patient.id", ondelete="CASCADE"), index=True)
    provider_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("user.id"))
    record_date: Mapped[date] = mapped_column(Date)
    record_type: Mapped[str] = mapped_column(String(24))  # consultation | lab_result | prescription | follow_up
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)

    # vitals
    blood_pressure: Mapped[str | None] = mapped_column(String(16), nullable=True)  # e.g. "120/80"
    heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    temperature: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    height: Mapped[float | None] = mapped_column(Float, nullable=True)
    blood_sugar: Mapped[float | None] = mapped_column(Float, nullable=True)

    attachments: Mapped[list] = mapped_column(JSON, default=list)

    @property
    def vitals(self) -> dict:
        return {
            "blood_pressure": self.blood_pressure,
            "heart_rate": self.heart_rate,
            "temperature": self.temperature,
            "weight": self.weight,
            "height": self.height,
            "blood_sugar": self.blood_sugar,
        }
