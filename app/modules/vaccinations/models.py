import uuid
from datetime import date
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Date, Text, ForeignKey
from app.core.base import Base, TimestampedMixin
from app.modules.babies.models import Baby
from app.modules.users.models import User

class Vaccination(Base, TimestampedMixin):
    baby_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("baby.id", ondelete="CASCADE"), index=True)
    vaccine_type: Mapped[str] = mapped_column(String(32))  # BCG | Hepatitis B | DPT | Polio | MMR | Varicella
    date_administered: Mapped[date] = mapped_column(Date)
    next_due_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    batch_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    administered_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("user.id"))
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    baby: Mapped[Baby] = relationship(lazy="selectin")
    provider: Mapped[User] = relationship(lazy="selectin")
