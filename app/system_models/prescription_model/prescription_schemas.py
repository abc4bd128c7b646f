# app/system_models/prescription_model/prescription_schemas.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# ============================================================
# ✅ MEDICINES
# ============================================================

class MedicineCreate(CamelModel):
    name: str
    dosage: str
    duration: str
    instructions: str


class MedicineUpdate(MedicineCreate):
    # Only consulted when PRESERVE_MEDICINE_IDS is enabled
    id: Optional[str] = None


class Medicine(MedicineCreate):
    id: str


# ============================================================
# ✅ PRESCRIPTIONS
# ============================================================

class PrescriptionBase(CamelModel):
    appointment_id: str
    doctor_id: str
    patient_id: str
    doctor_name: str
    patient_name: str
    notes: str = ""


class PrescriptionCreate(PrescriptionBase):
    medicines: List[MedicineCreate] = Field(..., min_length=1)


class PrescriptionUpdate(CamelModel):
    """Partial update - send only what you want to change."""
    appointment_id: Optional[str] = None
    doctor_id: Optional[str] = None
    patient_id: Optional[str] = None
    doctor_name: Optional[str] = None
    patient_name: Optional[str] = None
    medicines: Optional[List[MedicineUpdate]] = None
    notes: Optional[str] = None

    @field_validator("medicines")
    def validate_medicines_not_empty(cls, v):
        if v is not None and len(v) == 0:
            raise ValueError("At least one medicine is required")
        return v


class PrescriptionResponse(PrescriptionBase):
    id: str
    medicines: List[Medicine]
    created_at: str
    updated_at: str


class PrescriptionFilter(CamelModel):
    doctor_id: Optional[str] = None
    patient_id: Optional[str] = None
    appointment_id: Optional[str] = None

    def to_query(self) -> dict:
        """Store query params; absent or empty fields are left out entirely."""
        return {
            key: value
            for key, value in self.model_dump(by_alias=True).items()
            if value
        }
