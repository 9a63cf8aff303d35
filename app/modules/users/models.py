from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Enum
from app.core.access import Role
from app.core.base import Base, TimestampedMixin

class User(Base, TimestampedMixin):
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[Role] = mapped_column(Enum(Role, native_enum=False, values_callable=lambda e: [r.value for r in e]))
    first_name: Mapped[str] = mapped_column(String(120))
    last_name: Mapped[str] = mapped_column(String(120))
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    facility_name: Mapped[str | None] = mapped_column(String(200), nullable=True)  # providers only
