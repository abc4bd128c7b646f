# app/prescription_client/gateway_client.py
"""
HTTP client for the Prescription Gateway, plus the appointment read used by
the prescriptions page.
"""
import logging
from typing import List, Optional, Union

import requests
from pydantic import ValidationError

from app.prescription_client.errors import GatewayError
from app.record_store.store_client import RecordStoreClient
from app.system_models.appointment_model.appointment_schemas import Appointment
from app.system_models.prescription_model.prescription_schemas import (
    PrescriptionCreate,
    PrescriptionResponse,
    PrescriptionUpdate,
)
from config.appconfig import settings

logger = logging.getLogger(__name__)


class PrescriptionGatewayClient:
    """
    `session` only needs the requests-style verbs (get/post/put/delete), so a
    FastAPI TestClient can stand in for a real requests.Session.
    """

    def __init__(self, base_url: Optional[str] = None, session=None):
        self.base_url = (settings.GATEWAY_URL if base_url is None else base_url).rstrip("/")
        self.session = session or requests.Session()

    def _send(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = getattr(self.session, method)(url, **kwargs)
        except requests.RequestException as e:
            raise GatewayError(f"Gateway unreachable: {e}") from e

        if response.status_code >= 400:
            try:
                message = response.json().get("error", "Request failed")
            except ValueError:
                message = "Request failed"
            raise GatewayError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError("Gateway returned an unreadable response", status_code=response.status_code) from e

    def list_prescriptions(
        self,
        doctor_id: Optional[str] = None,
        patient_id: Optional[str] = None,
        appointment_id: Optional[str] = None,
    ) -> List[PrescriptionResponse]:
        params = {"doctorId": doctor_id, "patientId": patient_id, "appointmentId": appointment_id}
        params = {key: value for key, value in params.items() if value}
        data = self._send("get", "/prescriptions", params=params)
        return [PrescriptionResponse.model_validate(item) for item in data]

    def get_prescription(self, prescription_id: str) -> PrescriptionResponse:
        return PrescriptionResponse.model_validate(self._send("get", f"/prescriptions/{prescription_id}"))

    def create_prescription(self, request: PrescriptionCreate) -> PrescriptionResponse:
        data = self._send("post", "/prescriptions", json=request.model_dump(by_alias=True))
        return PrescriptionResponse.model_validate(data)

    def update_prescription(
        self,
        prescription_id: str,
        request: Union[PrescriptionCreate, PrescriptionUpdate],
    ) -> PrescriptionResponse:
        body = request.model_dump(by_alias=True, exclude_unset=True)
        data = self._send("put", f"/prescriptions/{prescription_id}", json=body)
        return PrescriptionResponse.model_validate(data)

    def delete_prescription(self, prescription_id: str) -> str:
        return self._send("delete", f"/prescriptions/{prescription_id}").get("message", "")


def fetch_doctor_appointments(store: RecordStoreClient, doctor_id: str) -> List[Appointment]:
    """
    GET /appointments?doctorId= straight from the Record Store.
    Records that do not fit the Appointment schema are logged and skipped.
    """
    appointments = []
    for record in store.list("appointments", params={"doctorId": doctor_id}):
        try:
            appointments.append(Appointment.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping malformed appointment {record.get('id')}: {e}")
    return appointments
