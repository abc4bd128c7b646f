# tests/factories.py
import uuid
from datetime import timedelta

from app.helpers.time import to_iso, utcnow


def make_medicine(name="Amoxicillin", **overrides):
    medicine = {"name": name, "dosage": "500mg", "duration": "7 days", "instructions": "3x daily"}
    medicine.update(overrides)
    return medicine


def make_prescription(created_at=None, medicines=None, **overrides):
    created_at = created_at or utcnow()
    record = {
        "appointmentId": "apt1",
        "doctorId": "doc1",
        "patientId": "pat1",
        "doctorName": "Dr. Sarah Lee",
        "patientName": "John Smith",
        "medicines": medicines
        if medicines is not None
        else [dict(make_medicine(), id=uuid.uuid4().hex)],
        "notes": "",
        "createdAt": to_iso(created_at),
        "updatedAt": to_iso(created_at),
    }
    record.update(overrides)
    return record


def make_appointment(**overrides):
    appointment = {
        "id": "apt1",
        "doctorId": "doc1",
        "patientId": "pat1",
        "doctorName": "Dr. Sarah Lee",
        "patientName": "John Smith",
        "specialty": "General Medicine",
        "date": "2024-05-01",
        "time": "10:00",
        "status": "completed",
        "consultationType": "clinic",
        "fee": 50,
    }
    appointment.update(overrides)
    return appointment


def days_ago(days):
    return utcnow() - timedelta(days=days)


