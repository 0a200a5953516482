"""Medicine lookup with placeholder fallback"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from medseal.core.config import Config
from medseal.core.remote_store import RemoteStore
from medseal.types.prescription import Medicine

logger = logging.getLogger(__name__)

PLACEHOLDER_DIRECTIONS = "As prescribed"
PLACEHOLDER_SIDE_EFFECTS = "Contact your doctor for details"


def placeholder_medicine(medicine_id: str) -> Medicine:
    """Build the substitute record used when a medicine lookup fails"""
    return Medicine(
        id=medicine_id,
        name=f"Medicine (ID: {medicine_id})",
        dosage=PLACEHOLDER_DIRECTIONS,
        frequency=PLACEHOLDER_DIRECTIONS,
        duration=PLACEHOLDER_DIRECTIONS,
        side_effects=PLACEHOLDER_SIDE_EFFECTS,
        guide_text=None,
        is_placeholder=True,
    )


class MedicineResolver:
    """Resolves medicine ids against the remote store"""

    def __init__(self, remote_store: RemoteStore, max_workers: Optional[int] = None):
        """
        Initialize medicine resolver

        Args:
            remote_store: Store answering get_medicine lookups
            max_workers: Thread pool size for resolve_all (defaults to Config.MAX_WORKERS)
        """
        self.remote_store = remote_store
        self.max_workers = max_workers or Config.MAX_WORKERS

    def resolve(self, medicine_id: str) -> Medicine:
        """
        Resolve one medicine id. Never raises.

        Remote errors, missing records and records without a name all
        resolve to placeholder_medicine(medicine_id).
        """
        try:
            record = self.remote_store.get_medicine(medicine_id)
        except Exception as e:
            logger.warning("Medicine lookup failed for %s: %s", medicine_id, e)
            return placeholder_medicine(medicine_id)

        if record is None:
            logger.warning("Medicine %s not found", medicine_id)
            return placeholder_medicine(medicine_id)

        if isinstance(record, Medicine):
            return record.model_copy(update={"is_placeholder": False})

        try:
            data = dict(record)
            data.setdefault("id", medicine_id)
            # Remote records never carry the placeholder flag
            data.pop("is_placeholder", None)
            return Medicine.model_validate(data)
        except (TypeError, ValueError) as e:
            logger.warning("Malformed medicine record for %s: %s", medicine_id, e)
            return placeholder_medicine(medicine_id)

    def resolve_all(self, medicine_ids: Iterable[str]) -> List[Medicine]:
        """
        Resolve several ids concurrently

        Args:
            medicine_ids: Ids to resolve

        Returns:
            One Medicine per id, in input order
        """
        medicine_ids = list(medicine_ids)
        if not medicine_ids:
            return []

        workers = max(1, min(self.max_workers, len(medicine_ids)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.resolve, medicine_ids))
