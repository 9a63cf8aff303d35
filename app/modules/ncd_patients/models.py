import uuid
from datetime import date
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Date, JSON, ForeignKey, UniqueConstraint
from app.core.base import Base, TimestampedMixin
from app.modules.users.models import User

class NCDPatient(Base, TimestampedMixin):
    __tablename__ = "ncd_patient"

    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("user.id"), unique=True)  # one profile per user
    date_of_birth: Mapped[date] = mapped_column(Date)
    gender: Mapped[str] = mapped_column(String(8))

    emergency_contact_name: Mapped[str] = mapped_column(String(120))
    emergency_contact_relationship: Mapped[str] = mapped_column(String(64))
    emergency_contact_phone: Mapped[str] = mapped_column(String(32))

    diagnosis_date: Mapped[date] = mapped_column(Date)
    medications: Mapped[list] = mapped_column(JSON, default=list)
    allergies: Mapped[list] = mapped_column(JSON, default=list)
    family_history: Mapped[list] = mapped_column(JSON, default=list)

    conditions: Mapped[list["NCDCondition"]] = relationship(
        back_populates="patient", cascade="all, delete-orphan", lazy="selectin"
    )
    user: Mapped[User] = relationship(lazy="selectin")

    @property
    def ncd_types(self) -> list[str]:
        return [c.ncd_type for c in self.conditions]

    @property
    def emergency_contact(self) -> dict:
        return {
            "name": self.emergency_contact_name,
            "relationship": self.emergency_contact_relationship,
            "phone_number": self.emergency_contact_phone,
        }

    @property
    def medical_history(self) -> dict:
        return {
            "ncd_types": self.ncd_types,
            "diagnosis_date": self.diagnosis_date,
            "medications": self.medications,
            "allergies": self.allergies,
            "family_history": self.family_history,
        }

class NCDCondition(Base, TimestampedMixin):
    """One diagnosed NCD type of a profile; kept as rows so stats can GROUP BY."""
    __tablename__ = "ncd_condition"
    __table_args__ = (UniqueConstraint("patient_id", "ncd_type"),)

    patient_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("ncd_patient.id", ondelete="CASCADE"), index=True)
    ncd_type: Mapped[str] = mapped_column(String(32))  # diabetes | hypertension | heart_disease | kidney_disease | cancer

    patient: Mapped[NCDPatient] = relationship(back_populates="conditions")
