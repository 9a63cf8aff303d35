import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import DeclarativeBase, declared_attr, Mapped, mapped_column
from sqlalchemy import TIMESTAMP

def _now() -> datetime:
    return datetime.now(timezone.utc)

class Base(DeclarativeBase):
    pass

class TimestampedMixin:
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), default=_now, onupdate=_now)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()
