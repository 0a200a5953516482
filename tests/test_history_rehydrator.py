"""Tests for offline rehydration of history entries"""
from conftest import make_entry
from medseal.services.history_rehydrator import rehydrate


def test_rehydrate_builds_one_line_per_summary():
    entry = make_entry("42", medicines=(
        ("Amoxicillin", "500 mg", "After meals"),
        ("Ibuprofen", "N/A", ""),
        ("Medicine (ID: m3)", "As prescribed", "Notes for m3"),
    ))

    accessed = rehydrate(entry)

    assert len(accessed.medicine_lines) == entry.medicines_count
    assert accessed.degraded_count == 0
    assert [line.medicine.name for line in accessed.medicine_lines] == [
        "Amoxicillin", "Ibuprofen", "Medicine (ID: m3)"
    ]


def test_rehydrate_uses_positional_ids():
    accessed = rehydrate(make_entry("42", medicines=(("A", "1 mg", ""), ("B", "2 mg", ""))))

    assert [line.medicine_id for line in accessed.medicine_lines] == ["42-med-0", "42-med-1"]
    assert rehydrate(make_entry("42", medicines=(("A", "1 mg", ""), ("B", "2 mg", "")))) == accessed


def test_rehydrate_defaults_and_missing_dosage():
    accessed = rehydrate(make_entry("7", medicines=(("A", "N/A", ""), ("B", "10 mg", "Morning"))))
    missing, present = accessed.medicine_lines

    assert missing.custom_dosage is None
    assert missing.custom_instructions is None
    assert missing.medicine.dosage == "As prescribed"
    assert present.custom_dosage == "10 mg"
    assert present.custom_instructions == "Morning"
    for line in accessed.medicine_lines:
        assert line.medicine.frequency == "As prescribed"
        assert line.medicine.duration == "As prescribed"


def test_rehydrate_copies_prescription_fields():
    entry = make_entry("9", accessed_at=1234)

    prescription = rehydrate(entry).prescription

    assert prescription.id == "9"
    assert prescription.code == "CODE"
    assert prescription.patient_name == "Jane Doe"
    assert prescription.notes == "Rest well"
    assert prescription.accessed_at == 1234
    assert len(prescription.medicines) == 1


def test_rehydrate_empty_entry():
    accessed = rehydrate(make_entry("e", medicines=()))

    assert accessed.medicine_lines == []
    assert accessed.prescription.medicines == []
