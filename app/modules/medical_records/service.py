import logging
import uuid
from typing import Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.access import Operation
from app.core.security import Principal
from app.modules.medical_records.models import MedicalRecord
from app.modules.medical_records.repository import MedicalRecordRepository
from app.modules.medical_records.schemas import MedicalRecordCreate
from app.modules.ncd_patients.service import NCDPatientService

logger = logging.getLogger(__name__)

class MedicalRecordService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = MedicalRecordRepository(session)
        self.patients = NCDPatientService(session)

    async def create(self, actor: Principal, patient_id: uuid.UUID, payload: MedicalRecordCreate) -> MedicalRecord:
        patient = await self.patients.get_owned(actor, Operation.MEDICAL_RECORD_CREATE, patient_id)
        data = payload.model_dump(exclude={"vitals"})
        data.update(payload.vitals.model_dump())
        obj = await self.repo.create(patient.id, actor.user_id, **data)
        await self.session.commit()
        logger.info(f"Medical record {obj.id} ({obj.record_type}) added to NCD profile {patient.id} by {actor.user_id}")
        return obj

    async def list_for_patient(self, actor: Principal, patient_id: uuid.UUID) -> Sequence[MedicalRecord]:
        patient = await self.patients.get_owned(actor, Operation.MEDICAL_RECORD_LIST, patient_id)
        return await self.repo.list_for_patient(patient.id)
