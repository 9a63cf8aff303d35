import logging
import uuid
from collections import Counter
from datetime import date
from typing import Sequence
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core import access
from app.core.access import Operation, Role, Scope
from app.core.errors import AlreadyExists, ValidationFailed
from app.core.paging import Page
from app.core.security import Principal
from app.modules.ncd_patients.models import NCDPatient
from app.modules.ncd_patients.repository import NCDPatientRepository
from app.modules.ncd_patients.schemas import NCDPatientCreate, NCDPatientUpdate
from app.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

# (exclusive upper bound in years, label); ages >= the last bound fall into "60+"
AGE_GROUPS = [(30, "18-29"), (40, "30-39"), (50, "40-49"), (60, "50-59")]

def age_on(dob: date, today: date) -> int:
    return today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))

def age_group(age: int) -> str:
    for bound, label in AGE_GROUPS:
        if age < bound:
            return label
    return "60+"

def _columns(fields: dict) -> dict:
    """Flatten the nested request shape onto model columns."""
    data = dict(fields)
    contact = data.pop("emergency_contact", None)
    if contact is not None:
        data["emergency_contact_name"] = contact.name
        data["emergency_contact_relationship"] = contact.relationship
        data["emergency_contact_phone"] = contact.phone_number
    history = data.pop("medical_history", None)
    if history is not None:
        data["ncd_types"] = [t.value for t in history.ncd_types]
        data["diagnosis_date"] = history.diagnosis_date
        data["medications"] = list(history.medications)
        data["allergies"] = list(history.allergies)
        data["family_history"] = list(history.family_history)
    return data

class NCDPatientService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = NCDPatientRepository(session)
        self.users = UserRepository(session)

    async def create(self, actor: Principal, payload: NCDPatientCreate) -> NCDPatient:
        decision = access.enforce(access.check_role(actor, Operation.NCD_PATIENT_CREATE))
        if decision.scope is Scope.OWN:
            owner_id = actor.user_id
        else:
            if payload.user_id is None:
                raise ValidationFailed([{"field": "user_id", "message": "user_id is required when creating a profile for another user"}])
            owner = await self.users.get(payload.user_id)
            if owner is None:
                access.enforce(access.not_found(), "User")
            if owner.role is not Role.NCD_PATIENT:
                raise ValidationFailed([{"field": "user_id", "message": "user is not registered as an NCD patient"}])
            owner_id = owner.id
        access.enforce(access.authorize(actor, Operation.NCD_PATIENT_CREATE, owner_id))

        data = _columns({k: getattr(payload, k) for k in ("date_of_birth", "gender", "emergency_contact", "medical_history")})
        try:
            obj = await self.repo.create(owner_id, **data)
            await self.session.commit()
        except IntegrityError:
            # unique(user_id): a concurrent or repeated create loses here
            await self.session.rollback()
            raise AlreadyExists("NCD patient profile already exists")
        logger.info(f"NCD profile {obj.id} created for user {owner_id} by {actor.user_id}")
        return obj

    async def list(self, actor: Principal, page: Page, search: str | None = None) -> Sequence[NCDPatient]:
        decision = access.enforce(access.check_role(actor, Operation.NCD_PATIENT_LIST))
        if decision.scope is Scope.OWN:
            own = await self.repo.get_by_user(actor.user_id)
            return [own] if own else []
        if search:
            return await self.repo.search(search, page.limit, page.offset)
        return await self.repo.list_all(limit=page.limit, offset=page.offset)

    async def get_owned(self, actor: Principal, op: Operation, patient_id: uuid.UUID) -> NCDPatient:
        access.enforce(access.check_role(actor, op))
        obj = await self.repo.get(patient_id)
        if obj is None:
            access.enforce(access.not_found(), "NCD patient")
        access.enforce(access.authorize(actor, op, obj.user_id))
        return obj

    async def get(self, actor: Principal, patient_id: uuid.UUID) -> NCDPatient:
        return await self.get_owned(actor, Operation.NCD_PATIENT_READ, patient_id)

    async def update(self, actor: Principal, patient_id: uuid.UUID, payload: NCDPatientUpdate) -> NCDPatient:
        obj = await self.get_owned(actor, Operation.NCD_PATIENT_UPDATE, patient_id)
        fields = {k: getattr(payload, k) for k in payload.model_fields_set if getattr(payload, k) is not None}
        obj = await self.repo.update(obj, **_columns(fields))
        await self.session.commit()
        return obj

    async def stats(self, actor: Principal, today: date | None = None) -> dict:
        access.enforce(access.check_role(actor, Operation.NCD_PATIENT_STATS))
        today = today or date.today()
        ages = Counter(age_group(age_on(dob, today)) for dob in await self.repo.birth_dates())
        return {
            "ncd_types": await self.repo.count_by_ncd_type(),
            "age_groups": [{"age_group": k, "count": n} for k, n in ages.most_common()],
        }
