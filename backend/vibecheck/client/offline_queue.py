"""
Offline reconciliation queue for vibes captured without connectivity.

Entries live in durable local storage under a fixed key, in capture order.
An entry is either captured (stored) or submitted (removed); a failed replay
leaves it captured for the next pass.
"""
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, List, Optional
from pydantic import BaseModel, ValidationError
from vibecheck.core.utils import local_today
from vibecheck.client.storage import JsonFileStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "offline_vibes"


class OfflineVibeRecord(BaseModel):
    """A vibe captured on this device and not yet accepted by the server."""
    id: str
    relationship_id: int
    user_id: int
    mood: int
    note: Optional[str] = None
    captured_on: date  # Local calendar date at capture time
    timestamp: int  # Capture time, epoch milliseconds


@dataclass
class ReconcileResult:
    """Outcome of one reconciliation pass."""
    submitted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    skipped: bool = False


class OfflineVibeQueue:
    """Durable FIFO of offline vibes with a single-flight replay loop."""

    def __init__(self, storage: JsonFileStorage):
        self.storage = storage
        self._mutate_lock = threading.RLock()
        self._reconcile_lock = threading.Lock()

    def _load_entries(self) -> List[Any]:
        """
        Stored entries in order. Items that fail validation stay as raw
        values so writing the list back never loses them.
        """
        raw = self.storage.get_item(STORAGE_KEY) or []
        entries: List[Any] = []
        for item in raw:
            try:
                entries.append(OfflineVibeRecord.model_validate(item))
            except ValidationError as e:
                logger.error(f"Skipping unreadable offline vibe {item!r}, leaving it in storage: {e}")
                entries.append(item)
        return entries

    def _load(self) -> List[OfflineVibeRecord]:
        return [e for e in self._load_entries() if isinstance(e, OfflineVibeRecord)]

    def _save(self, entries: List[Any]) -> None:
        self.storage.set_item(STORAGE_KEY, [
            e.model_dump(mode="json") if isinstance(e, OfflineVibeRecord) else e
            for e in entries
        ])

    def enqueue(
        self,
        relationship_id: int,
        user_id: int,
        mood: int,
        note: Optional[str] = None,
        captured_on: Optional[date] = None
    ) -> OfflineVibeRecord:
        """Append a vibe with a fresh local id and capture timestamp."""
        record = OfflineVibeRecord(
            id=uuid.uuid4().hex,
            relationship_id=relationship_id,
            user_id=user_id,
            mood=mood,
            note=note,
            captured_on=captured_on or local_today(),
            timestamp=int(time.time() * 1000),
        )
        with self._mutate_lock:
            entries = self._load_entries()
            entries.append(record)
            self._save(entries)
        logger.info(f"Queued offline vibe {record.id} for relationship {relationship_id}")
        return record

    def list_pending(self) -> List[OfflineVibeRecord]:
        """All queued entries in capture order."""
        with self._mutate_lock:
            return self._load()

    def remove(self, record_id: str) -> None:
        """Remove one entry; removing an unknown id does nothing."""
        with self._mutate_lock:
            entries = self._load_entries()
            remaining = [
                e for e in entries
                if not (isinstance(e, OfflineVibeRecord) and e.id == record_id)
            ]
            if len(remaining) != len(entries):
                self._save(remaining)

    def clear(self) -> None:
        with self._mutate_lock:
            self.storage.remove_item(STORAGE_KEY)

    def __len__(self) -> int:
        return len(self.list_pending())

    def reconcile(self, submit: Callable[[OfflineVibeRecord], Any]) -> ReconcileResult:
        """
        Replay queued vibes one at a time in capture order.

        Each success removes its entry. Any failure, including a duplicate
        rejected by the server, keeps the entry queued and moves on to the next.
        A call made while another pass is running returns immediately with
        ``skipped=True``.
        """
        if not self._reconcile_lock.acquire(blocking=False):
            logger.info("Offline vibe reconciliation already running, skipping")
            return ReconcileResult(skipped=True)

        result = ReconcileResult()
        try:
            for record in self.list_pending():
                try:
                    submit(record)
                except Exception as e:
                    logger.warning(f"Offline vibe {record.id} not submitted, keeping it queued: {e}")
                    result.failed.append(record.id)
                    continue
                self.remove(record.id)
                result.submitted.append(record.id)
        finally:
            self._reconcile_lock.release()

        logger.info(
            f"Offline reconciliation finished: {len(result.submitted)} submitted, {len(result.failed)} pending"
        )
        return result
