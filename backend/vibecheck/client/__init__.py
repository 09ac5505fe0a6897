"""Client package - API client and offline-first vibe queue."""
from vibecheck.client.storage import JsonFileStorage
from vibecheck.client.offline_queue import OfflineVibeQueue, OfflineVibeRecord, ReconcileResult, STORAGE_KEY
from vibecheck.client.api_client import VibeClient
from vibecheck.client.sync import OfflineFirstVibeClient, SubmissionOutcome

__all__ = [
    "JsonFileStorage",
    "OfflineVibeQueue",
    "OfflineVibeRecord",
    "ReconcileResult",
    "STORAGE_KEY",
    "VibeClient",
    "OfflineFirstVibeClient",
    "SubmissionOutcome",
]
