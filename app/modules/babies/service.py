import logging
import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from app.core import access
from app.core.access import Operation, Scope
from app.core.paging import Page
from app.core.security import Principal
from app.modules.babies.models import Baby
from app.modules.babies.repository import BabyRepository
from app.modules.babies.schemas import BabyCreate, BabyUpdate
from app.modules.vaccinations.repository import VaccinationRepository

logger = logging.getLogger(__name__)

class BabyService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = BabyRepository(session)

    async def create(self, actor: Principal, payload: BabyCreate) -> Baby:
        # babies are always created for the caller
        access.enforce(access.authorize(actor, Operation.BABY_CREATE, actor.user_id))
        obj = await self.repo.create(actor.user_id, **payload.model_dump())
        await self.session.commit()
        logger.info(f"Baby {obj.id} created by parent {actor.user_id}")
        return obj

    async def list(self, actor: Principal, page: Page, search: str | None = None) -> Sequence[Baby]:
        decision = access.enforce(access.check_role(actor, Operation.BABY_LIST))
        if decision.scope is Scope.OWN:
            return await self.repo.list(parent_id=actor.user_id, limit=page.limit, offset=page.offset)
        if search:
            return await self.repo.search(search, page.limit, page.offset)
        return await self.repo.list(limit=page.limit, offset=page.offset)

    async def get_owned(self, actor: Principal, op: Operation, baby_id: uuid.UUID) -> Baby:
        """Role check, then existence, then ownership."""
        access.enforce(access.check_role(actor, op))
        obj = await self.repo.get(baby_id)
        if obj is None:
            access.enforce(access.not_found(), "Baby")
        access.enforce(access.authorize(actor, op, obj.parent_id))
        return obj

    async def get(self, actor: Principal, baby_id: uuid.UUID) -> Baby:
        return await self.get_owned(actor, Operation.BABY_READ, baby_id)

    async def update(self, actor: Principal, baby_id: uuid.UUID, payload: BabyUpdate) -> Baby:
        obj = await self.get_owned(actor, Operation.BABY_UPDATE, baby_id)
        data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        obj = await self.repo.update(obj, **data)
        await self.session.commit()
        return obj

    async def delete(self, actor: Principal, baby_id: uuid.UUID) -> None:
        obj = await self.get_owned(actor, Operation.BABY_DELETE, baby_id)
        removed = await VaccinationRepository(self.session).delete_for_baby(obj.id)
        await self.repo.delete(obj)
        await self.session.commit()
        logger.info(f"Baby {baby_id} deleted by {actor.user_id} ({removed} vaccinations removed)")
