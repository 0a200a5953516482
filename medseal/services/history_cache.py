"""Bounded, deduplicated history of accessed prescriptions"""
import json
import logging
import threading
from typing import List, Optional

from pydantic import ValidationError

from medseal.core.config import Config
from medseal.types.prescription import HistoryEntry

logger = logging.getLogger(__name__)


class HistoryCache:
    """
    Most-recent-first collection of HistoryEntry snapshots

    Entries are unique by id and bounded by capacity. An upsert of a known id
    replaces that entry and moves it to the front, so eviction always drops
    the least recently upserted entry.
    """

    def __init__(self, storage, capacity: Optional[int] = None):
        """
        Initialize history cache

        Args:
            storage: Slot object exposing read() -> Optional[str] and write(str)
            capacity: Maximum number of entries (defaults to Config.history_capacity())

        Raises:
            ValueError: If capacity is below 1
        """
        self.storage = storage
        self.capacity = capacity if capacity is not None else Config.history_capacity()
        if self.capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {self.capacity}")
        self._entries: List[HistoryEntry] = []
        self._lock = threading.Lock()

    def load(self) -> List[HistoryEntry]:
        """Load entries from storage. Unusable content yields an empty history."""
        with self._lock:
            self._entries = self._read_entries()
            return list(self._entries)

    def _read_entries(self) -> List[HistoryEntry]:
        try:
            raw = self.storage.read()
        except Exception as e:
            logger.warning("Could not read prescription history: %s", e)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Prescription history is not valid JSON, starting empty: %s", e)
            return []

        if not isinstance(data, list):
            logger.warning("Prescription history is not a JSON array, starting empty")
            return []

        entries = []
        seen = set()
        for item in data:
            try:
                entry = HistoryEntry.model_validate(item)
            except ValidationError as e:
                logger.warning("Skipping malformed history entry: %s", e)
                continue
            if entry.id in seen:
                continue
            seen.add(entry.id)
            entries.append(entry)

        return entries[:self.capacity]

    def upsert(self, entry: HistoryEntry) -> None:
        """Insert or replace an entry as the most recent one, then persist"""
        with self._lock:
            entries = [e for e in self._entries if e.id != entry.id]
            entries.insert(0, entry)
            while len(entries) > max(self.capacity, 1):
                evicted = entries.pop()
                logger.info("Evicted prescription %s from history", evicted.id)
            self._entries = entries
            self._persist()

    def _persist(self) -> None:
        payload = json.dumps(
            [e.model_dump(mode="json") for e in self._entries],
            ensure_ascii=False
        )
        try:
            self.storage.write(payload)
        except Exception as e:
            logger.warning("Could not save prescription history: %s", e)

    def list(self) -> List[HistoryEntry]:
        """Entries, most recent first"""
        with self._lock:
            return list(self._entries)

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        """Cached entry with the given id, if any"""
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
