# app/system_services/prescription_services.py
"""
Prescription Gateway services.
Translate prescription operations into Record Store calls. Record Store
errors propagate unchanged; the routes decide what the caller sees.
"""
import logging
import uuid
from typing import Dict, List, Optional

from app.helpers.time import to_iso, utcnow
from app.record_store.store_client import RecordStoreClient
from app.system_models.prescription_model.prescription_schemas import (
    Medicine,
    MedicineCreate,
    MedicineUpdate,
    PrescriptionCreate,
    PrescriptionFilter,
    PrescriptionResponse,
    PrescriptionUpdate,
)
from config.appconfig import settings

logger = logging.getLogger(__name__)

RESOURCE = "prescriptions"

# Never overwritten by an update
IMMUTABLE_FIELDS = {"id", "appointmentId", "doctorId", "patientId", "createdAt"}


def generate_medicine_id() -> str:
    return uuid.uuid4().hex


def _content(medicine: MedicineCreate) -> tuple:
    return (medicine.name, medicine.dosage, medicine.duration, medicine.instructions)


def assign_medicine_ids(medicines: List[MedicineCreate]) -> List[Medicine]:
    return [
        Medicine(id=generate_medicine_id(), **medicine.model_dump(include={"name", "dosage", "duration", "instructions"}))
        for medicine in medicines
    ]


def reconcile_medicine_ids(existing: List[Medicine], replacement: List[MedicineUpdate]) -> List[Medicine]:
    """
    Keep the id of every replacement entry whose content matches an existing
    medicine (matched by id first, then by content); new or changed entries
    get a fresh id. Each existing id is handed out at most once.
    """
    by_id = {medicine.id: medicine for medicine in existing}
    claimed = set()
    result = []

    for entry in replacement:
        kept_id = None
        previous = by_id.get(entry.id) if entry.id else None
        if previous and previous.id not in claimed and _content(previous) == _content(entry):
            kept_id = previous.id
        else:
            for candidate in existing:
                if candidate.id not in claimed and _content(candidate) == _content(entry):
                    kept_id = candidate.id
                    break

        medicine_id = kept_id or generate_medicine_id()
        claimed.add(medicine_id)
        result.append(
            Medicine(
                id=medicine_id,
                name=entry.name,
                dosage=entry.dosage,
                duration=entry.duration,
                instructions=entry.instructions,
            )
        )
    return result


# ============================================================
# ✅ READ
# ============================================================

def list_prescriptions(store: RecordStoreClient, filters: PrescriptionFilter) -> List[PrescriptionResponse]:
    """Prescriptions matching the filter, in store order."""
    records = store.list(RESOURCE, params=filters.to_query())
    return [PrescriptionResponse.model_validate(record) for record in records]


def get_prescription(store: RecordStoreClient, prescription_id: str) -> PrescriptionResponse:
    return PrescriptionResponse.model_validate(store.get(RESOURCE, prescription_id))


# ============================================================
# ✅ WRITE
# ============================================================

def create_prescription(store: RecordStoreClient, prescription: PrescriptionCreate) -> PrescriptionResponse:
    """Create a new prescription with generated medicine ids and equal timestamps."""
    now = to_iso(utcnow())
    payload = prescription.model_dump(by_alias=True, exclude={"medicines"})
    payload["medicines"] = [
        medicine.model_dump(by_alias=True) for medicine in assign_medicine_ids(prescription.medicines)
    ]
    payload["createdAt"] = now
    payload["updatedAt"] = now

    created = store.create(RESOURCE, payload)
    logger.info(f"Created prescription {created.get('id')} for appointment {prescription.appointment_id}")
    return PrescriptionResponse.model_validate(created)


def update_prescription(
    store: RecordStoreClient,
    prescription_id: str,
    changes: PrescriptionUpdate,
    preserve_medicine_ids: Optional[bool] = None,
) -> PrescriptionResponse:
    """
    Merge a partial update over the stored prescription and replace it.

    Raises RecordNotFoundError when the prescription does not exist.
    """
    if preserve_medicine_ids is None:
        preserve_medicine_ids = settings.PRESERVE_MEDICINE_IDS

    existing_record: Dict = store.get(RESOURCE, prescription_id)
    existing = PrescriptionResponse.model_validate(existing_record)

    provided = changes.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, exclude={"medicines"})
    merged = {**existing_record}
    merged.update({key: value for key, value in provided.items() if key not in IMMUTABLE_FIELDS})

    if changes.medicines is not None:
        if preserve_medicine_ids:
            medicines = reconcile_medicine_ids(existing.medicines, changes.medicines)
        else:
            medicines = assign_medicine_ids(changes.medicines)
        merged["medicines"] = [medicine.model_dump(by_alias=True) for medicine in medicines]

    merged["updatedAt"] = to_iso(utcnow())

    updated = store.replace(RESOURCE, prescription_id, merged)
    logger.info(f"Updated prescription {prescription_id}")
    return PrescriptionResponse.model_validate(updated)


def delete_prescription(store: RecordStoreClient, prescription_id: str) -> None:
    """Hard delete. Raises RecordNotFoundError when the prescription does not exist."""
    store.delete(RESOURCE, prescription_id)
    logger.info(f"Deleted prescription {prescription_id}")
