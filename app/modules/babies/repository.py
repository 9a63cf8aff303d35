import uuid
from typing import Sequence
from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.paging import contains_pattern
from app.modules.babies.models import Baby

class BabyRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, parent_id: uuid.UUID, **data) -> Baby:
        obj = Baby(parent_id=parent_id, **data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def get(self, baby_id: uuid.UUID) -> Baby | None:
        return await self.session.get(Baby, baby_id)

    async def list(self, parent_id: uuid.UUID | None = None, limit: int | None = None, offset: int = 0) -> Sequence[Baby]:
        q = select(Baby).order_by(Baby.created_at.desc(), Baby.id)
        if parent_id is not None:
            q = q.where(Baby.parent_id == parent_id)
        if limit:
            q = q.limit(limit)
        if offset:
            q = q.offset(offset)
        res = await self.session.execute(q)
        return res.scalars().all()

    async def search(self, query: str, limit: int = 10, offset: int = 0) -> Sequence[Baby]:
        pattern = contains_pattern(query)
        q = select(Baby).where(
            or_(
                func.lower(Baby.first_name).like(pattern, escape="\\"),
                func.lower(Baby.last_name).like(pattern, escape="\\"),
            )
        ).order_by(Baby.created_at.desc(), Baby.id).limit(limit).offset(offset)
        res = await self.session.execute(q)
        return res.scalars().all()

    async def update(self, obj: Baby, **data) -> Baby:
        for k, v in data.items():
            setattr(obj, k, v)
        await self.session.flush()
        return obj

    async def delete(self, obj: Baby) -> None:
        await self.session.delete(obj)
        await self.session.flush()
