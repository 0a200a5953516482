"""Shared fakes and factories for the test suite"""
import threading

import pytest

from medseal.core.remote_store import RemoteStore
from medseal.services.history_cache import HistoryCache
from medseal.services.history_storage import MemoryStorage
from medseal.types.prescription import HistoryEntry, MedicineSummary, Prescription
from medseal.types.result import ErrorKind, Failure, Success


class FakeRemoteStore(RemoteStore):
    """In-memory RemoteStore recording every call"""

    def __init__(self, prescriptions=None, medicines=None, failing_medicines=None):
        self.prescriptions = prescriptions or {}
        self.medicines = medicines or {}
        self.failing_medicines = set(failing_medicines or ())
        self.prescription_calls = []
        self.medicine_calls = []
        self._lock = threading.Lock()

    def get_prescription(self, prescription_id, code):
        self.prescription_calls.append((prescription_id, code))
        prescription = self.prescriptions.get(prescription_id)
        if prescription is None:
            return Failure(kind=ErrorKind.REMOTE_REJECTED, message="Prescription not found")
        if prescription.code != code:
            return Failure(
                kind=ErrorKind.REMOTE_REJECTED,
                message="Invalid prescription code or patient contact"
            )
        return Success(value=prescription)

    def get_medicine(self, medicine_id):
        with self._lock:
            self.medicine_calls.append(medicine_id)
        if medicine_id in self.failing_medicines:
            raise ConnectionError(f"lookup of {medicine_id} timed out")
        return self.medicines.get(medicine_id)


def make_medicine(medicine_id, name=None, **overrides):
    record = {
        "id": medicine_id,
        "name": f"Drug {medicine_id}" if name is None else name,
        "dosage": "500 mg",
        "frequency": "Twice daily",
        "duration": "7 days",
        "side_effects": "Nausea",
        "guide_text": "Take with water",
    }
    record.update(overrides)
    return record


def make_prescription(prescription_id="42", code="ABCD", medicine_ids=("m1", "m2", "m3"), **overrides):
    data = {
        "id": prescription_id,
        "code": code,
        "patient_name": "Jane Doe",
        "patient_contact": "jane@example.com",
        "created_at": 1700000000000,
        "notes": "Rest well",
        "medicines": [
            {"medicine_id": mid, "custom_dosage": None, "custom_instructions": f"Notes for {mid}"}
            for mid in medicine_ids
        ],
    }
    data.update(overrides)
    return Prescription.model_validate(data)


def make_entry(entry_id, medicines=(("Amoxicillin", "500 mg", "After meals"),), accessed_at=1):
    summaries = [MedicineSummary(name=n, dosage=d, instructions=i) for n, d, i in medicines]
    return HistoryEntry(
        id=entry_id,
        code="CODE",
        patient_name="Jane Doe",
        created_at=1700000000000,
        accessed_at=accessed_at,
        medicines_count=len(summaries),
        doctor_notes="Rest well",
        medicines=summaries,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def history(storage):
    cache = HistoryCache(storage, capacity=10)
    cache.load()
    return cache
