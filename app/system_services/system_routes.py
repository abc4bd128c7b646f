# app/system_services/system_routes.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.record_store.errors import RecordNotFoundError
from app.record_store.store_client import RecordStoreClient, get_record_store
from app.system_models.prescription_model.prescription_schemas import (
    PrescriptionCreate,
    PrescriptionFilter,
    PrescriptionResponse,
    PrescriptionUpdate,
)
from app.system_services.prescription_services import (
    create_prescription,
    delete_prescription,
    get_prescription,
    list_prescriptions,
    update_prescription,
)

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Prescription not found"


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("/prescriptions", response_model=List[PrescriptionResponse])
def list_prescriptions_endpoint(
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    patient_id: Optional[str] = Query(None, alias="patientId"),
    appointment_id: Optional[str] = Query(None, alias="appointmentId"),
    store: RecordStoreClient = Depends(get_record_store),
):
    """Get all prescriptions, optionally filtered by doctorId / patientId / appointmentId."""
    filters = PrescriptionFilter(doctor_id=doctor_id, patient_id=patient_id, appointment_id=appointment_id)
    try:
        return list_prescriptions(store, filters)
    except Exception as e:
        logger.error(f"Error fetching prescriptions: {e}")
        raise _server_error("Failed to fetch prescriptions")


@router.get("/prescriptions/{prescription_id}", response_model=PrescriptionResponse)
def get_prescription_endpoint(prescription_id: str, store: RecordStoreClient = Depends(get_record_store)):
    """Get a specific prescription."""
    try:
        return get_prescription(store, prescription_id)
    except RecordNotFoundError:
        raise _not_found()
    except Exception as e:
        logger.error(f"Error fetching prescription {prescription_id}: {e}")
        raise _server_error("Failed to fetch prescription")


@router.post("/prescriptions", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
def create_prescription_endpoint(
    prescription: PrescriptionCreate,
    store: RecordStoreClient = Depends(get_record_store),
):
    """Create a new prescription."""
    try:
        return create_prescription(store, prescription)
    except Exception as e:
        logger.error(f"Error creating prescription: {e}")
        raise _server_error("Failed to create prescription")


@router.put("/prescriptions/{prescription_id}", response_model=PrescriptionResponse)
def update_prescription_endpoint(
    prescription_id: str,
    changes: PrescriptionUpdate,
    store: RecordStoreClient = Depends(get_record_store),
):
    """
    Update a specific prescription.
    Fields left out of the body keep their stored value.
    """
    try:
        return update_prescription(store, prescription_id, changes)
    except RecordNotFoundError:
        raise _not_found()
    except Exception as e:
        logger.error(f"Error updating prescription {prescription_id}: {e}")
        raise _server_error("Failed to update prescription")


@router.delete("/prescriptions/{prescription_id}")
def delete_prescription_endpoint(prescription_id: str, store: RecordStoreClient = Depends(get_record_store)):
    """Delete a specific prescription."""
    try:
        delete_prescription(store, prescription_id)
    except RecordNotFoundError:
        raise _not_found()
    except Exception as e:
        logger.error(f"Error deleting prescription {prescription_id}: {e}")
        raise _server_error("Failed to delete prescription")

    return {"message": "Prescription deleted successfully"}


@router.get("/health")
def health():
    return {"status": "ok"}
