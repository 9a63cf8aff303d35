import logging
import uuid
from datetime import date, timedelta
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from app.core import access
from app.core.access import Operation
from app.core.errors import ValidationFailed
from app.core.security import Principal
from app.modules.babies.repository import BabyRepository
from app.modules.vaccinations.models import Vaccination
from app.modules.vaccinations.repository import VaccinationRepository
from app.modules.vaccinations.schemas import VaccinationCreate, VaccinationUpdate

logger = logging.getLogger(__name__)

class VaccinationService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = VaccinationRepository(session)
        self.babies = BabyRepository(session)

    async def create(self, actor: Principal, payload: VaccinationCreate) -> Vaccination:
        access.enforce(access.check_role(actor, Operation.VACCINATION_CREATE))
        baby = await self.babies.get(payload.baby_id)
        if baby is None:
            access.enforce(access.not_found(), "Baby")
        access.enforce(access.authorize(actor, Operation.VACCINATION_CREATE, baby.parent_id))
        data = payload.model_dump()
        data["vaccine_type"] = payload.vaccine_type.value
        obj = await self.repo.create(actor.user_id, **data)
        await self.session.commit()
        logger.info(f"Vaccination {obj.id} ({obj.vaccine_type}) recorded for baby {baby.id} by {actor.user_id}")
        return obj

    async def list_for_baby(self, actor: Principal, baby_id: uuid.UUID) -> Sequence[Vaccination]:
        access.enforce(access.check_role(actor, Operation.VACCINATION_LIST))
        baby = await self.babies.get(baby_id)
        if baby is None:
            access.enforce(access.not_found(), "Baby")
        access.enforce(access.authorize(actor, Operation.VACCINATION_LIST, baby.parent_id))
        return await self.repo.list_for_baby(baby_id)

    async def upcoming(self, actor: Principal, days: int = 30, today: date | None = None) -> Sequence[Vaccination]:
        access.enforce(access.check_role(actor, Operation.VACCINATION_UPCOMING))
        start = today or date.today()
        return await self.repo.list_due_between(start, start + timedelta(days=days))

    async def stats(self, actor: Principal) -> list[dict]:
        access.enforce(access.check_role(actor, Operation.VACCINATION_STATS))
        return await self.repo.stats_by_type()

    async def update(self, actor: Principal, vaccination_id: uuid.UUID, payload: VaccinationUpdate) -> Vaccination:
        access.enforce(access.check_role(actor, Operation.VACCINATION_UPDATE))
        obj = await self.repo.get(vaccination_id)
        if obj is None:
            access.enforce(access.not_found(), "Vaccination record")
        data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
        given = data.get("date_administered", obj.date_administered)
        due = data.get("next_due_date", obj.next_due_date)
        if due is not None and due < given:
            raise ValidationFailed([{"field": "next_due_date", "message": "next_due_date must not be before date_administered"}])
        if "vaccine_type" in data:
            data["vaccine_type"] = data["vaccine_type"].value
        obj = await self.repo.update(obj, **data)
        await self.session.commit()
        return obj
