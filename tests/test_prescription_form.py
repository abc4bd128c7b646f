# tests/test_prescription_form.py
import pytest

from app.prescription_client.errors import FormValidationError, GatewayError
from app.prescription_client.prescription_form import MedicineEntry, PrescriptionForm
from app.system_models.appointment_model.appointment_schemas import Appointment
from app.system_models.prescription_model.prescription_schemas import PrescriptionResponse
from tests.factories import make_appointment, make_medicine, make_prescription


@pytest.fixture
def appointment():
    return Appointment.model_validate(make_appointment(id="apt7", patientId="pat7", patientName="Jane Roe"))


def fill(entry: MedicineEntry, **values):
    for key, value in dict(make_medicine(), **values).items():
        setattr(entry, key, value)


def test_new_form_starts_with_one_blank_entry(appointment):
    form = PrescriptionForm(appointment)

    assert form.medicines == [MedicineEntry()]
    assert form.notes == ""
    assert not form.is_edit


def test_edit_form_is_prefilled_without_ids(appointment):
    existing = PrescriptionResponse.model_validate(
        make_prescription(
            id="p1",
            notes="rest",
            medicines=[dict(make_medicine("Amoxicillin"), id="m1"), dict(make_medicine("Ibuprofen"), id="m2")],
        )
    )

    form = PrescriptionForm(appointment, existing_prescription=existing)

    assert [entry.name for entry in form.medicines] == ["Amoxicillin", "Ibuprofen"]
    assert not hasattr(form.medicines[0], "id")
    assert form.notes == "rest"
    assert form.is_edit


def test_last_entry_cannot_be_removed(appointment):
    form = PrescriptionForm(appointment)

    assert form.remove_medicine(0) is False
    assert len(form.medicines) == 1

    form.add_medicine()
    assert form.remove_medicine(0) is True
    assert len(form.medicines) == 1


def test_whitespace_only_fields_are_rejected(appointment):
    form = PrescriptionForm(appointment)
    fill(form.medicines[0], dosage="   ")
    form.add_medicine()

    with pytest.raises(FormValidationError) as exc_info:
        form.build_request()

    errors = exc_info.value.errors
    assert errors["medicines.0.dosage"] == "Dosage is required"
    assert errors["medicines.1.name"] == "Medicine name is required"
    assert errors["medicines.1.instructions"] == "Instructions are required"
    assert "medicines.0.name" not in errors


def test_empty_medicine_list_is_rejected(appointment):
    form = PrescriptionForm(appointment)
    form.medicines = []

    assert form.validate() is None
    assert form.errors == {"medicines": "At least one medicine is required"}


def test_build_request_copies_appointment_details(appointment):
    form = PrescriptionForm(appointment)
    fill(form.medicines[0], name="  Amoxicillin ")

    request = form.build_request()

    assert request.appointment_id == "apt7"
    assert request.patient_id == "pat7"
    assert request.patient_name == "Jane Roe"
    assert request.doctor_id == appointment.doctor_id
    assert request.medicines[0].name == "Amoxicillin"
    assert request.notes == ""


def test_submit_success_notifies(appointment, notifier):
    form = PrescriptionForm(appointment, notifier=notifier)
    fill(form.medicines[0])
    received = []

    assert form.submit(received.append) is True
    assert len(received) == 1
    assert notifier.last.title == "Prescription created"


def test_submit_failure_notifies(appointment, notifier):
    form = PrescriptionForm(appointment, notifier=notifier)
    fill(form.medicines[0])

    def failing_handler(request):
        raise GatewayError("Failed to create prescription", status_code=500)

    assert form.submit(failing_handler) is False
    assert notifier.last.variant == "destructive"


def test_invalid_submit_skips_handler(appointment, notifier):
    form = PrescriptionForm(appointment, notifier=notifier)
    received = []

    assert form.submit(received.append) is False
    assert received == []
    assert notifier.notifications == []


def test_out_of_range_index_is_not_removed(appointment):
    form = PrescriptionForm(appointment)
    form.add_medicine()

    assert form.remove_medicine(5) is False
    assert form.remove_medicine(-1) is False
    assert len(form.medicines) == 2
