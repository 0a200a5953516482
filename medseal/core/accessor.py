"""Patient-side prescription access"""
import logging
import time
from typing import Callable, List, Optional

from medseal.core.remote_store import RemoteStore
from medseal.services.history_cache import HistoryCache
from medseal.services.medicine_resolver import MedicineResolver
from medseal.types.prescription import (
    AccessedPrescription,
    HistoryEntry,
    MedicineLine,
    MedicineSummary,
    Prescription,
)
from medseal.types.result import ErrorKind, Failure, Result, Success

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def build_history_entry(
    prescription: Prescription,
    lines: List[MedicineLine],
    accessed_at: int
) -> HistoryEntry:
    """Summarize a resolved prescription for the history cache"""
    summaries = [
        MedicineSummary(
            name=line.medicine.name,
            dosage=line.custom_dosage or line.medicine.dosage or "N/A",
            instructions=line.custom_instructions or "",
        )
        for line in lines
    ]
    return HistoryEntry(
        id=prescription.id,
        code=prescription.code,
        patient_name=prescription.patient_name,
        created_at=prescription.created_at,
        accessed_at=accessed_at,
        medicines_count=len(summaries),
        doctor_notes=prescription.notes,
        medicines=summaries,
    )


class PrescriptionAccessor:
    """Fetches a prescription, resolves its medicines and records the access"""

    def __init__(
        self,
        remote_store: RemoteStore,
        history: HistoryCache,
        resolver: Optional[MedicineResolver] = None,
        clock: Callable[[], int] = _now_ms
    ):
        """
        Initialize the accessor

        Args:
            remote_store: Authoritative prescription store
            history: Cache receiving one entry per successful access
            resolver: Medicine resolver (defaults to one over remote_store)
            clock: Returns the access time in epoch milliseconds
        """
        self.remote_store = remote_store
        self.history = history
        self.resolver = resolver or MedicineResolver(remote_store)
        self.clock = clock

    def access(self, prescription_id: str, code: str) -> Result:
        """
        Access a prescription

        Args:
            prescription_id: Prescription identifier
            code: Verification code given to the patient

        Returns:
            Success(AccessedPrescription), or Failure with kind
            VALIDATION_ERROR or REMOTE_REJECTED
        """
        prescription_id = (prescription_id or "").strip()
        code = (code or "").strip()
        if not prescription_id or not code:
            logger.warning("Prescription access rejected: missing id or code")
            return Failure(
                kind=ErrorKind.VALIDATION_ERROR,
                message="Prescription ID and verification code are required"
            )

        try:
            fetched = self.remote_store.get_prescription(prescription_id, code)
        except Exception as e:
            logger.warning("Prescription %s fetch failed: %s", prescription_id, e)
            return Failure(kind=ErrorKind.REMOTE_REJECTED, message=str(e))

        if not fetched.success:
            logger.warning("Prescription %s rejected: %s", prescription_id, fetched.message)
            return Failure(kind=ErrorKind.REMOTE_REJECTED, message=fetched.message)

        try:
            prescription = Prescription.model_validate(fetched.value)
        except ValueError as e:
            logger.warning("Prescription %s returned a malformed record: %s", prescription_id, e)
            return Failure(kind=ErrorKind.REMOTE_REJECTED, message=f"Malformed prescription record: {e}")

        medicines = self.resolver.resolve_all(line.medicine_id for line in prescription.medicines)
        lines = [
            line.model_copy(update={"medicine": medicine})
            for line, medicine in zip(prescription.medicines, medicines)
        ]
        degraded_count = sum(1 for medicine in medicines if medicine.is_placeholder)

        self.history.upsert(build_history_entry(prescription, lines, self.clock()))

        logger.info(
            "Accessed prescription %s: %d medicines, %d degraded",
            prescription.id, len(lines), degraded_count
        )
        return Success(value=AccessedPrescription(
            prescription=prescription.model_copy(update={"medicines": lines}),
            medicine_lines=lines,
            degraded_count=degraded_count
        ))
