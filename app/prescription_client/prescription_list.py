# app/prescription_client/prescription_list.py
"""
Prescription List View
Fetches a doctor's prescriptions through the Gateway, derives the filtered /
grouped presentation and drives the create, edit and delete flows.

State is owned by the view instance. The presentation is always rebuilt from
(prescriptions, search_term, filter_by) by pure functions, so it is current
whenever any of those change. Every successful mutation re-fetches from the
Gateway instead of patching local state.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Literal, Optional, Union

from app.helpers.time import parse_iso, utcnow
from app.prescription_client.errors import (
    EditTargetNotFoundError,
    GatewayError,
    NoCompletedAppointmentsError,
    NoPendingDeleteError,
)
from app.prescription_client.gateway_client import PrescriptionGatewayClient, fetch_doctor_appointments
from app.prescription_client.notifications import Notifier
from app.prescription_client.prescription_form import PrescriptionForm
from app.record_store.errors import RecordStoreError
from app.record_store.store_client import RecordStoreClient
from app.system_models.appointment_model.appointment_schemas import Appointment
from app.system_models.prescription_model.prescription_schemas import (
    PrescriptionCreate,
    PrescriptionResponse,
)
from config.appconfig import settings

logger = logging.getLogger(__name__)

FILTER_BY = Literal["all", "patient", "recent"]
VIEW_BY = Literal["list", "patient"]


@dataclass
class PatientGroup:
    patient_name: str
    prescriptions: List[PrescriptionResponse] = field(default_factory=list)


# ============================================================
# ✅ PURE DERIVATIONS
# ============================================================

def matches_search(prescription: PrescriptionResponse, search_term: str) -> bool:
    term = search_term.lower()
    return (
        term in prescription.patient_name.lower()
        or any(term in medicine.name.lower() for medicine in prescription.medicines)
        or term in prescription.notes.lower()
    )


def filter_prescriptions(
    prescriptions: List[PrescriptionResponse],
    search_term: str = "",
    filter_by: FILTER_BY = "all",
    now: Optional[datetime] = None,
    recent_days: Optional[int] = None,
) -> List[PrescriptionResponse]:
    """
    Search, then category filter, then newest-first sort.

    "patient" keeps everything; grouping by patient is a view mode, not a filter.
    """
    filtered = list(prescriptions)

    if search_term:
        filtered = [p for p in filtered if matches_search(p, search_term)]

    if filter_by == "recent":
        now = now or utcnow()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        days = settings.RECENT_WINDOW_DAYS if recent_days is None else recent_days
        cutoff = now - timedelta(days=days)
        filtered = [p for p in filtered if parse_iso(p.created_at) >= cutoff]

    return sorted(filtered, key=lambda p: parse_iso(p.created_at), reverse=True)


def group_prescriptions_by_patient(prescriptions: List[PrescriptionResponse]) -> Dict[str, PatientGroup]:
    """Group by patient id; the group name comes from the first prescription seen."""
    groups: Dict[str, PatientGroup] = {}
    for prescription in prescriptions:
        group = groups.get(prescription.patient_id)
        if group is None:
            group = groups[prescription.patient_id] = PatientGroup(patient_name=prescription.patient_name)
        group.prescriptions.append(prescription)
    return groups


# ============================================================
# ✅ VIEW
# ============================================================

class PrescriptionListView:
    def __init__(
        self,
        doctor_id: str,
        appointments: List[Appointment],
        gateway: PrescriptionGatewayClient,
        notifier: Optional[Notifier] = None,
    ):
        self.doctor_id = doctor_id
        self.appointments = appointments
        self.gateway = gateway
        self.notifier = notifier or Notifier()

        self.prescriptions: List[PrescriptionResponse] = []
        self.search_term = ""
        self.filter_by: FILTER_BY = "all"
        self.view_by: VIEW_BY = "list"
        self.loading = False
        self.is_submitting = False

        self.form: Optional[PrescriptionForm] = None
        self.selected_prescription: Optional[PrescriptionResponse] = None
        self.selected_appointment: Optional[Appointment] = None
        self.pending_delete_id: Optional[str] = None

    @classmethod
    def for_doctor(
        cls,
        doctor_id: str,
        gateway: PrescriptionGatewayClient,
        store: RecordStoreClient,
        notifier: Optional[Notifier] = None,
    ) -> "PrescriptionListView":
        """Prescriptions page: load the doctor's appointments, then the prescriptions."""
        notifier = notifier or Notifier()
        try:
            appointments = fetch_doctor_appointments(store, doctor_id)
        except RecordStoreError as e:
            logger.error(f"Error fetching appointments: {e}")
            notifier.error("Failed to fetch appointments")
            appointments = []

        view = cls(doctor_id, appointments, gateway, notifier)
        view.fetch_prescriptions()
        return view

    # ── Fetch ──

    def fetch_prescriptions(self) -> bool:
        """Reload from the Gateway; on failure the previous list is kept."""
        self.loading = True
        try:
            self.prescriptions = self.gateway.list_prescriptions(doctor_id=self.doctor_id)
            return True
        except GatewayError as e:
            logger.error(f"Error fetching prescriptions: {e}")
            self.notifier.error("Failed to fetch prescriptions")
            return False
        finally:
            self.loading = False

    load = fetch_prescriptions

    # ── Presentation ──

    @property
    def filtered_prescriptions(self) -> List[PrescriptionResponse]:
        return filter_prescriptions(self.prescriptions, self.search_term, self.filter_by)

    @property
    def grouped_prescriptions(self) -> Dict[str, PatientGroup]:
        return group_prescriptions_by_patient(self.filtered_prescriptions)

    def visible(self) -> Union[List[PrescriptionResponse], Dict[str, PatientGroup]]:
        if self.view_by == "patient":
            return self.grouped_prescriptions
        return self.filtered_prescriptions

    def completed_appointments(self) -> List[Appointment]:
        return [appointment for appointment in self.appointments if appointment.is_completed]

    def appointment_for_prescription(self, prescription_id: str) -> Optional[Appointment]:
        prescription = next((p for p in self.prescriptions if p.id == prescription_id), None)
        if prescription is None:
            return None
        return self._find_appointment(prescription.appointment_id)

    def _find_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return next((a for a in self.appointments if a.id == appointment_id), None)

    # ── Create / edit ──

    def open_create_form(self) -> PrescriptionForm:
        """Open a blank form against the first completed appointment."""
        completed = self.completed_appointments()
        if not completed:
            self.notifier.error(
                "You need completed appointments to create prescriptions.",
                title="No completed appointments",
            )
            raise NoCompletedAppointmentsError("No completed appointments")

        return self._open_form(completed[0], None)

    def open_edit_form(self, prescription: PrescriptionResponse) -> PrescriptionForm:
        appointment = self._find_appointment(prescription.appointment_id)
        if appointment is None:
            self.notifier.error("Cannot edit: originating appointment not found")
            raise EditTargetNotFoundError(prescription.id, prescription.appointment_id)

        return self._open_form(appointment, prescription)

    def _open_form(self, appointment: Appointment, prescription: Optional[PrescriptionResponse]) -> PrescriptionForm:
        self.selected_appointment = appointment
        self.selected_prescription = prescription
        self.form = PrescriptionForm(appointment, existing_prescription=prescription, notifier=self.notifier)
        return self.form

    def close_form(self):
        self.form = None
        self.selected_prescription = None
        self.selected_appointment = None

    def submit_form(self) -> bool:
        if self.form is None:
            return False
        handler = self._handle_update if self.selected_prescription else self._handle_create
        return self.form.submit(handler)

    def _handle_create(self, request: PrescriptionCreate):
        self.is_submitting = True
        try:
            self.gateway.create_prescription(request)
            self.fetch_prescriptions()
            self.close_form()
        finally:
            self.is_submitting = False

    def _handle_update(self, request: PrescriptionCreate):
        self.is_submitting = True
        try:
            self.gateway.update_prescription(self.selected_prescription.id, request)
            self.fetch_prescriptions()
            self.close_form()
        finally:
            self.is_submitting = False

    # ── Delete ──

    def request_delete(self, prescription_id: str):
        """First step; nothing is sent until confirm_delete()."""
        self.pending_delete_id = prescription_id

    def cancel_delete(self):
        self.pending_delete_id = None

    def confirm_delete(self) -> bool:
        if self.pending_delete_id is None:
            raise NoPendingDeleteError("Delete was not requested")

        prescription_id, self.pending_delete_id = self.pending_delete_id, None
        try:
            self.gateway.delete_prescription(prescription_id)
        except GatewayError as e:
            logger.error(f"Error deleting prescription {prescription_id}: {e}")
            self.notifier.error("Failed to delete prescription")
            return False

        self.fetch_prescriptions()
        self.notifier.success("Success", "Prescription deleted successfully")
        return True
