"""Remote prescription store contract and a JSON export backed implementation"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from medseal.types.prescription import Medicine, Prescription
from medseal.types.result import ErrorKind, Failure, Result, Success

logger = logging.getLogger(__name__)


def _with_string_ids(record: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a prescription record whose ids and code are strings"""
    record = dict(record, id=str(record["id"]), code=str(record.get("code", "")))
    record["medicines"] = [
        dict(line, medicine_id=str(line["medicine_id"]))
        if isinstance(line, dict) and line.get("medicine_id") is not None else line
        for line in record.get("medicines") or []
    ]
    return record


class RemoteStore:
    """Authoritative store of prescriptions and medicines

    Transport concerns (timeouts, retries) belong to implementations.
    """

    def get_prescription(self, prescription_id: str, code: str) -> Result:
        """Return Success(Prescription) or Failure(REMOTE_REJECTED, message)"""
        raise NotImplementedError

    def get_medicine(self, medicine_id: str) -> Optional[Union[Medicine, Mapping[str, Any]]]:
        """Return the medicine record, or None if unknown. May raise."""
        raise NotImplementedError


class StaticRemoteStore(RemoteStore):
    """RemoteStore served from an exported snapshot

    Snapshot format::

        {"prescriptions": [{...}, ...], "medicines": [{...}, ...]}
    """

    def __init__(self, prescriptions: Optional[Dict[str, Dict[str, Any]]] = None,
                 medicines: Optional[Dict[str, Dict[str, Any]]] = None):
        self.prescriptions = prescriptions or {}
        self.medicines = medicines or {}

    @classmethod
    def from_file(cls, path: Union[Path, str]) -> "StaticRemoteStore":
        """Load a snapshot file"""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise ValueError(f"Failed to load remote store snapshot from {path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Remote store snapshot {path} must be a JSON object")

        prescriptions = {
            str(p["id"]): _with_string_ids(p) for p in data.get("prescriptions", [])
            if isinstance(p, dict) and p.get("id") not in (None, "")
        }
        medicines = {
            str(m["id"]): dict(m, id=str(m["id"])) for m in data.get("medicines", [])
            if isinstance(m, dict) and m.get("id") not in (None, "")
        }
        logger.info("Loaded %d prescriptions and %d medicines from %s",
                    len(prescriptions), len(medicines), path)
        return cls(prescriptions, medicines)

    def get_prescription(self, prescription_id: str, code: str) -> Result:
        record = self.prescriptions.get(prescription_id)
        if record is None:
            return Failure(kind=ErrorKind.REMOTE_REJECTED, message="Prescription not found")
        if str(record.get("code", "")) != code:
            return Failure(
                kind=ErrorKind.REMOTE_REJECTED,
                message="Invalid prescription code or patient contact"
            )
        return Success(value=Prescription.model_validate(record))

    def get_medicine(self, medicine_id: str) -> Optional[Dict[str, Any]]:
        return self.medicines.get(medicine_id)
