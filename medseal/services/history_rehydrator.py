"""Offline reconstruction of a prescription view from a history entry"""
from medseal.services.medicine_resolver import PLACEHOLDER_DIRECTIONS, PLACEHOLDER_SIDE_EFFECTS
from medseal.types.prescription import (
    AccessedPrescription,
    HistoryEntry,
    Medicine,
    MedicineLine,
    Prescription,
)

MISSING_DOSAGE = "N/A"


def rehydrate(entry: HistoryEntry) -> AccessedPrescription:
    """
    Rebuild a displayable prescription from a cached summary

    Medicine ids are synthesized from position, since the summary does not
    keep the remote ids. Frequency and duration are not summarized and fall
    back to fixed text.
    """
    lines = []
    for position, summary in enumerate(entry.medicines):
        dosage = None if summary.dosage == MISSING_DOSAGE else summary.dosage
        medicine_id = f"{entry.id}-med-{position}"
        lines.append(MedicineLine(
            medicine_id=medicine_id,
            custom_dosage=dosage,
            custom_instructions=summary.instructions or None,
            medicine=Medicine(
                id=medicine_id,
                name=summary.name or f"Medicine {position + 1}",
                dosage=dosage or PLACEHOLDER_DIRECTIONS,
                frequency=PLACEHOLDER_DIRECTIONS,
                duration=PLACEHOLDER_DIRECTIONS,
                side_effects=PLACEHOLDER_SIDE_EFFECTS,
            ),
        ))

    prescription = Prescription(
        id=entry.id,
        code=entry.code,
        patient_name=entry.patient_name,
        created_at=entry.created_at,
        accessed_at=entry.accessed_at,
        notes=entry.doctor_notes,
        medicines=lines,
    )
    return AccessedPrescription(prescription=prescription, medicine_lines=lines, degraded_count=0)
