# app/system_models/appointment_model/appointment_schemas.py
from typing import Literal, Optional

from app.system_models.prescription_model.prescription_schemas import CamelModel

APPOINTMENT_STATUS = Literal["pending", "confirmed", "completed", "cancelled"]
CONSULTATION_TYPE = Literal["clinic", "video", "call"]


class Appointment(CamelModel):
    """Read-only view of an appointment held in the Record Store."""
    id: str
    doctor_id: str
    patient_id: str
    doctor_name: str
    patient_name: str
    specialty: str
    date: str
    time: str
    status: APPOINTMENT_STATUS
    consultation_type: CONSULTATION_TYPE
    symptoms: Optional[str] = None
    fee: float

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"
