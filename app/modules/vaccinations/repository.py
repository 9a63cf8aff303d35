import uuid
from datetime import date
from typing import Sequence
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.modules.vaccinations.models import Vaccination

class VaccinationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, administered_by: uuid.UUID, **data) -> Vaccination:
        obj = Vaccination(administered_by=administered_by, **data)
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj, attribute_names=["baby", "provider"])
        return obj

    async def get(self, vaccination_id: uuid.UUID) -> Vaccination | None:
        return await self.session.get(Vaccination, vaccination_id)

    async def list_for_baby(self, baby_id: uuid.UUID) -> Sequence[Vaccination]:
        q = select(Vaccination).where(Vaccination.baby_id == baby_id).order_by(Vaccination.date_administered.desc())
        res = await self.session.execute(q)
        return res.scalars().all()

    async def list_due_between(self, start: date, end: date) -> Sequence[Vaccination]:
        q = select(Vaccination).where(
            Vaccination.next_due_date.is_not(None),
            Vaccination.next_due_date >= start,
            Vaccination.next_due_date <= end,
        ).order_by(Vaccination.next_due_date.asc())
        res = await self.session.execute(q)
        return res.scalars().all()

    async def stats_by_type(self) -> list[dict]:
        count = func.count(Vaccination.id).label("count")
        q = select(
            Vaccination.vaccine_type,
            count,
            func.max(Vaccination.date_administered).label("last_administered"),
        ).group_by(Vaccination.vaccine_type).order_by(count.desc(), Vaccination.vaccine_type)
        res = await self.session.execute(q)
        return [dict(r) for r in res.mappings().all()]

    async def update(self, obj: Vaccination, **data) -> Vaccination:
        for k, v in data.items():
            setattr(obj, k, v)
        await self.session.flush()
        return obj

    async def delete_for_baby(self, baby_id: uuid.UUID) -> int:
        res = await self.session.execute(delete(Vaccination).where(Vaccination.baby_id == baby_id))
        return res.rowcount or 0
