# app/prescription_client/prescription_form.py
"""
Prescription Form
Collects an ordered list of medicine entries plus notes, validates them and
hands the assembled request to a caller-supplied submit handler. Whether the
request becomes a create or an update is up to the caller.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from app.prescription_client.errors import FormValidationError, GatewayError
from app.prescription_client.notifications import Notifier
from app.system_models.appointment_model.appointment_schemas import Appointment
from app.system_models.prescription_model.prescription_schemas import (
    MedicineCreate,
    PrescriptionCreate,
    PrescriptionResponse,
)

logger = logging.getLogger(__name__)

REQUIRED_MESSAGES = {
    "name": "Medicine name is required",
    "dosage": "Dosage is required",
    "duration": "Duration is required",
    "instructions": "Instructions are required",
}


# ============================================================
# ✅ VALIDATION SCHEMA
# ============================================================

class MedicineFormData(BaseModel):
    name: str
    dosage: str
    duration: str
    instructions: str

    @field_validator("name", "dosage", "duration", "instructions")
    def required_after_trim(cls, v, info):
        v = v.strip()
        if not v:
            raise PydanticCustomError("required", REQUIRED_MESSAGES[info.field_name])
        return v


class PrescriptionFormData(BaseModel):
    medicines: List[MedicineFormData]
    notes: Optional[str] = None

    @field_validator("medicines")
    def at_least_one_medicine(cls, v):
        if not v:
            raise PydanticCustomError("required", "At least one medicine is required")
        return v


def _field_key(loc) -> str:
    return ".".join(str(part) for part in loc)


# ============================================================
# ✅ FORM STATE
# ============================================================

@dataclass
class MedicineEntry:
    name: str = ""
    dosage: str = ""
    duration: str = ""
    instructions: str = ""


class PrescriptionForm:
    def __init__(
        self,
        appointment: Appointment,
        existing_prescription: Optional[PrescriptionResponse] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.appointment = appointment
        self.existing_prescription = existing_prescription
        self.notifier = notifier or Notifier()
        self.errors: Dict[str, str] = {}

        if existing_prescription and existing_prescription.medicines:
            self.medicines = [
                MedicineEntry(
                    name=medicine.name,
                    dosage=medicine.dosage,
                    duration=medicine.duration,
                    instructions=medicine.instructions,
                )
                for medicine in existing_prescription.medicines
            ]
        else:
            self.medicines = [MedicineEntry()]
        self.notes = existing_prescription.notes if existing_prescription else ""

    @property
    def is_edit(self) -> bool:
        return self.existing_prescription is not None

    # ── Entry mutation ──

    def add_medicine(self) -> MedicineEntry:
        entry = MedicineEntry()
        self.medicines.append(entry)
        return entry

    def remove_medicine(self, index: int) -> bool:
        """Remove an entry; the last remaining entry stays."""
        if len(self.medicines) <= 1 or not 0 <= index < len(self.medicines):
            return False
        del self.medicines[index]
        return True

    # ── Validation and submission ──

    def validate(self) -> Optional[PrescriptionFormData]:
        """Return validated data, or None with field-scoped messages in self.errors."""
        try:
            data = PrescriptionFormData(
                medicines=[vars(entry) for entry in self.medicines],
                notes=self.notes,
            )
        except ValidationError as e:
            self.errors = {_field_key(error["loc"]): error["msg"] for error in e.errors()}
            return None
        self.errors = {}
        return data

    def build_request(self) -> PrescriptionCreate:
        data = self.validate()
        if data is None:
            raise FormValidationError(self.errors)

        return PrescriptionCreate(
            appointment_id=self.appointment.id,
            doctor_id=self.appointment.doctor_id,
            patient_id=self.appointment.patient_id,
            doctor_name=self.appointment.doctor_name,
            patient_name=self.appointment.patient_name,
            medicines=[MedicineCreate(**medicine.model_dump()) for medicine in data.medicines],
            notes=data.notes or "",
        )

    def submit(self, handler: Callable[[PrescriptionCreate], object]) -> bool:
        """
        Validate, then pass the request to `handler`.
        Validation failures never reach the handler and raise no notification.
        """
        try:
            request = self.build_request()
        except FormValidationError as e:
            logger.debug(f"Prescription form invalid: {e}")
            return False

        try:
            handler(request)
        except GatewayError as e:
            logger.error(f"Error saving prescription: {e}")
            self.notifier.error("Failed to save prescription. Please try again.")
            return False

        if self.is_edit:
            self.notifier.success("Prescription updated", "Prescription has been updated successfully.")
        else:
            self.notifier.success("Prescription created", "New prescription has been created successfully.")
        return True
