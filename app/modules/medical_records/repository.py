import uuid
from typing import Sequence
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.modules.medical_records.models import MedicalRecord

class MedicalRecordRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, patient_id: uuid.UUID, provider_id: uuid.UUID, **data) -> MedicalRecord:
        obj = MedicalRecord(patient_id=patient_id, provider_id=provider_id, **data)
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def list_for_patient(self, patient_id: uuid.UUID) -> Sequence[MedicalRecord]:
        q = select(MedicalRecord).where(MedicalRecord.patient_id == patient_id).order_by(
            MedicalRecord.record_date.desc(), MedicalRecord.created_at.desc()
        )
        res = await self.session.execute(q)
        return res.scalars().all()
