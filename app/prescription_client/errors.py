# app/prescription_client/errors.py
from typing import Dict, Optional


class GatewayError(Exception):
    """The Gateway answered with an error status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class FormValidationError(Exception):
    """Field-scoped validation failures, keyed like ``medicines.0.name``."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


class NoCompletedAppointmentsError(Exception):
    pass


class EditTargetNotFoundError(Exception):
    def __init__(self, prescription_id: str, appointment_id: str):
        super().__init__("cannot edit: originating appointment not found")
        self.prescription_id = prescription_id
        self.appointment_id = appointment_id


class NoPendingDeleteError(Exception):
    pass
