import uuid
from datetime import date, datetime, timezone
from typing import Sequence
from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.paging import contains_pattern
from app.modules.ncd_patients.models import NCDPatient, NCDCondition
from app.modules.users.models import User

class NCDPatientRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user_id: uuid.UUID, ncd_types: list[str], **data) -> NCDPatient:
        obj = NCDPatient(user_id=user_id, **data)
        obj.conditions = [NCDCondition(ncd_type=t) for t in ncd_types]
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj, attribute_names=["user"])
        return obj

    async def get(self, patient_id: uuid.UUID) -> NCDPatient | None:
        return await self.session.get(NCDPatient, patient_id)

    async def get_by_user(self, user_id: uuid.UUID) -> NCDPatient | None:
        res = await self.session.execute(select(NCDPatient).where(NCDPatient.user_id == user_id))
        return res.scalar_one_or_none()

    async def list_all(self, limit: int | None = None, offset: int = 0) -> Sequence[NCDPatient]:
        q = select(NCDPatient).order_by(NCDPatient.created_at.desc(), NCDPatient.id)
        if limit:
            q = q.limit(limit)
        if offset:
            q = q.offset(offset)
        res = await self.session.execute(q)
        return res.scalars().all()

    async def search(self, query: str, limit: int = 10, offset: int = 0) -> Sequence[NCDPatient]:
        pattern = contains_pattern(query)
        q = select(NCDPatient).join(User, User.id == NCDPatient.user_id).where(
            or_(
                func.lower(User.first_name).like(pattern, escape="\\"),
                func.lower(User.last_name).like(pattern, escape="\\"),
                func.lower(User.email).like(pattern, escape="\\"),
            )
        ).order_by(NCDPatient.created_at.desc(), NCDPatient.id).limit(limit).offset(offset)
        res = await self.session.execute(q)
        return res.scalars().all()

    async def update(self, obj: NCDPatient, ncd_types: list[str] | None = None, **data) -> NCDPatient:
        for k, v in data.items():
            setattr(obj, k, v)
        if ncd_types is not None:
            keep = {c.ncd_type: c for c in obj.conditions}
            obj.conditions = [keep.get(t) or NCDCondition(ncd_type=t) for t in ncd_types]
            # child-row changes alone do not fire the parent's onupdate
            obj.updated_at = datetime.now(timezone.utc)
        await self.session.flush()
        return obj

    async def count_by_ncd_type(self) -> list[dict]:
        count = func.count(NCDCondition.id).label("count")
        q = select(NCDCondition.ncd_type, count).group_by(NCDCondition.ncd_type).order_by(count.desc(), NCDCondition.ncd_type)
        res = await self.session.execute(q)
        return [dict(r) for r in res.mappings().all()]

    async def birth_dates(self) -> list[date]:
        res = await self.session.execute(select(NCDPatient.date_of_birth))
        return list(res.scalars().all())
