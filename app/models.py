"""Every mapped table, imported so Base.metadata is complete."""
from app.modules.users.models import User
from app.modules.babies.models import Baby
from app.modules.vaccinations.models import Vaccination
from app.modules.ncd_patients.models import NCDPatient, NCDCondition
from app.modules.medical_records.models import MedicalRecord

__all__ = ["User", "Baby", "Vaccination", "NCDPatient", "NCDCondition", "MedicalRecord"]
