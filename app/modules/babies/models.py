import uuid
from datetime import date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Date, Float, JSON, ForeignKey
from app.core.base import Base, TimestampedMixin

class Baby(Base, TimestampedMixin):
    parent_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("user.id"), index=True)  # owner, never reassigned
    first_name: Mapped[str] = mapped_column(String(120))
    last_name: Mapped[str] = mapped_column(String(120))
    date_of_birth: Mapped[date] = mapped_column(Date)
    gender: Mapped[str] = mapped_column(String(8))  # male | female
    birth_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    birth_height: Mapped[float | None] = mapped_column(Float, nullable=True)
    blood_type: Mapped[str | None] = mapped_column(String(8), nullable=True)
    allergies: Mapped[list] = mapped_column(JSON, default=list)
