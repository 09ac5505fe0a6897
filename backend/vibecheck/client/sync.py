"""
Offline-first vibe submission.

Submits straight to the API while online. When the server cannot be reached
the vibe is captured in the offline queue, and the queue is replayed when
connectivity comes back.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from vibecheck.core.exceptions import TransientIO, VibeCheckError
from vibecheck.services.vibe_service import validate_vibe
from vibecheck.client.api_client import VibeClient
from vibecheck.client.offline_queue import OfflineVibeQueue, OfflineVibeRecord, ReconcileResult

logger = logging.getLogger(__name__)


@dataclass
class SubmissionOutcome:
    """Either the stored vibe (submitted) or the queued record (queued)."""
    queued: bool
    vibe: Optional[Dict[str, Any]] = None
    record: Optional[OfflineVibeRecord] = None


class OfflineFirstVibeClient:

    def __init__(self, client: VibeClient, queue: OfflineVibeQueue, online: bool = True):
        self.client = client
        self.queue = queue
        self._online = online

    @property
    def online(self) -> bool:
        return self._online

    def submit_vibe(self, relationship_id: int, mood: Any, note: Optional[str] = None) -> SubmissionOutcome:
        # Invalid input would never replay successfully, so it is rejected before queueing
        validate_vibe(mood, note)
        if self.client.user_id is None:
            raise VibeCheckError("Log in before submitting a vibe")

        if self._online:
            try:
                vibe = self.client.submit_vibe(relationship_id, mood, note)
                return SubmissionOutcome(queued=False, vibe=vibe)
            except TransientIO as e:
                logger.warning(f"Going offline after failed submission: {e}")
                self._online = False

        record = self.queue.enqueue(relationship_id, self.client.user_id, mood, note)
        return SubmissionOutcome(queued=True, record=record)

    def set_online(self, online: bool) -> Optional[ReconcileResult]:
        """Record a connectivity change; coming back online replays the queue."""
        was_online = self._online
        self._online = online
        if online and not was_online:
            logger.info("Connectivity restored, replaying offline vibes")
            return self.sync()
        return None

    def sync(self) -> ReconcileResult:
        return self.queue.reconcile(self.client.submit_offline_record)
