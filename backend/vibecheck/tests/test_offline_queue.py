"""
Tests for the offline queue, its reconciliation loop and the offline-first client.
"""
import json
from datetime import timedelta
import httpx
import pytest
from vibecheck.client import (
    JsonFileStorage, OfflineFirstVibeClient, OfflineVibeQueue, STORAGE_KEY, VibeClient,
)
from vibecheck.core.exceptions import DuplicateSubmission, InvalidMood, RecordOwnerMismatch, TransientIO
from vibecheck.core.utils import local_today
from vibecheck.models.vibe import Vibe


@pytest.fixture
def storage(tmp_path):
    return JsonFileStorage(tmp_path / "offline.json")


@pytest.fixture
def queue(storage):
    return OfflineVibeQueue(storage)


class FlakyHttp:
    """Forwards to the test client unless the network is marked down."""

    def __init__(self, inner, fail_on=()):
        self.inner = inner
        self.down = False
        self.fail_on = set(fail_on)
        self.calls = 0

    def request(self, method, url, **kwargs):
        self.calls += 1
        if self.down or self.calls in self.fail_on:
            raise httpx.ConnectError("network unreachable")
        return self.inner.request(method, url, **kwargs)

    def close(self):
        pass


@pytest.fixture
def paired(client, login):
    """A relationship with both partners and an API client logged in as the creator."""
    alex_headers, alex_id = login("Alex")
    sam_headers, _ = login("Sam")
    created = client.post("/api/relationships", headers=alex_headers).json()
    client.post("/api/relationships/join", json={"code": created["code"]}, headers=sam_headers)

    http = FlakyHttp(client)
    api = VibeClient(base_url="http://testserver/api", http=http)
    api.login("alex@example.com")
    return created["relationship_id"], alex_id, api, http


def test_enqueue_and_list_in_capture_order(queue):
    first = queue.enqueue(1, 10, 3, "first")
    second = queue.enqueue(1, 10, 4)

    pending = queue.list_pending()
    assert [r.id for r in pending] == [first.id, second.id]
    assert pending[0].note == "first"
    assert pending[0].captured_on == local_today()
    assert first.id != second.id
    assert first.timestamp <= second.timestamp


def test_queue_survives_restart(storage, tmp_path):
    record = OfflineVibeQueue(storage).enqueue(1, 10, 2)

    reopened = OfflineVibeQueue(JsonFileStorage(tmp_path / "offline.json"))
    assert [r.id for r in reopened.list_pending()] == [record.id]

    stored = json.loads((tmp_path / "offline.json").read_text())
    assert stored[STORAGE_KEY][0]["mood"] == 2


def test_remove_is_idempotent(queue):
    keep = queue.enqueue(1, 10, 3)
    drop = queue.enqueue(1, 10, 4)

    queue.remove(drop.id)
    queue.remove(drop.id)
    queue.remove("never-existed")

    assert [r.id for r in queue.list_pending()] == [keep.id]


def test_clear(queue):
    queue.enqueue(1, 10, 3)
    queue.clear()
    assert queue.list_pending() == []
    assert len(queue) == 0


def test_corrupt_storage_reads_as_empty(tmp_path):
    path = tmp_path / "offline.json"
    path.write_text("{not json")
    assert OfflineVibeQueue(JsonFileStorage(path)).list_pending() == []


def test_reconcile_isolates_failures(queue):
    today = local_today()
    records = [
        queue.enqueue(1, 10, mood, captured_on=today - timedelta(days=days_ago))
        for mood, days_ago in [(3, 2), (4, 1), (5, 0)]
    ]
    attempted = []

    def submit(record):
        attempted.append(record.id)
        if record.id == records[1].id:
            raise TransientIO("store outage")

    result = queue.reconcile(submit)

    assert attempted == [r.id for r in records]
    assert result.submitted == [records[0].id, records[2].id]
    assert result.failed == [records[1].id]
    assert [r.id for r in queue.list_pending()] == [records[1].id]


def test_duplicate_rejection_stays_queued(queue):
    record = queue.enqueue(1, 10, 3)

    def submit(_):
        raise DuplicateSubmission()

    assert queue.reconcile(submit).failed == [record.id]
    assert [r.id for r in queue.list_pending()] == [record.id]


def test_reconcile_is_single_flight(queue):
    queue.enqueue(1, 10, 3)
    nested = []

    def submit(_):
        nested.append(queue.reconcile(lambda r: None))

    result = queue.reconcile(submit)

    assert nested[0].skipped is True
    assert result.skipped is False
    assert queue.list_pending() == []


def test_round_trip_through_api(db, paired, queue):
    relationship_id, alex_id, api, _ = paired
    queue.enqueue(relationship_id, alex_id, 4, "from the train")

    result = queue.reconcile(api.submit_offline_record)

    assert len(result.submitted) == 1
    assert queue.list_pending() == []
    vibes = db.query(Vibe).filter(Vibe.relationship_id == relationship_id).all()
    assert len(vibes) == 1
    assert vibes[0].note == "from the train"


def test_reconcile_over_http_with_outage(db, paired, queue):
    relationship_id, alex_id, api, http = paired
    today = local_today()
    records = [
        queue.enqueue(relationship_id, alex_id, mood, captured_on=today - timedelta(days=days_ago))
        for mood, days_ago in [(2, 2), (3, 1), (4, 0)]
    ]
    # Second replay request hits a dead network
    http.fail_on = {http.calls + 2}

    result = queue.reconcile(api.submit_offline_record)

    assert result.failed == [records[1].id]
    assert [r.id for r in queue.list_pending()] == [records[1].id]
    stored = sorted(v.date for v in db.query(Vibe).all())
    assert stored == [today - timedelta(days=2), today]

    timeline = api.get_vibes(relationship_id)["vibes"]
    assert timeline[0]["userA"]["mood"] == 4
    assert timeline[1]["userA"] is None
    assert timeline[2]["userA"]["mood"] == 2


def test_client_maps_errors(paired):
    relationship_id, _, api, _ = paired
    api.submit_vibe(relationship_id, 3)
    with pytest.raises(DuplicateSubmission) as exc_info:
        api.submit_vibe(relationship_id, 3)
    assert exc_info.value.message == "You have already submitted a vibe today"


def test_offline_first_client(db, paired, queue):
    relationship_id, _, api, http = paired
    syncing = OfflineFirstVibeClient(api, queue)

    with pytest.raises(InvalidMood):
        syncing.submit_vibe(relationship_id, 7)
    assert queue.list_pending() == []

    http.down = True
    outcome = syncing.submit_vibe(relationship_id, 4, "offline")
    assert outcome.queued is True
    assert syncing.online is False
    assert [r.id for r in queue.list_pending()] == [outcome.record.id]

    http.down = False
    assert syncing.set_online(False) is None
    result = syncing.set_online(True)

    assert result.submitted == [outcome.record.id]
    assert queue.list_pending() == []
    assert db.query(Vibe).count() == 1

    with pytest.raises(DuplicateSubmission):
        syncing.submit_vibe(relationship_id, 5)


def test_unreadable_entry_survives_later_writes(storage, queue):
    storage.set_item(STORAGE_KEY, [{"id": "broken", "mood": "not a number"}])

    record = queue.enqueue(1, 10, 3)
    queue.remove(record.id)

    assert queue.list_pending() == []
    assert storage.get_item(STORAGE_KEY) == [{"id": "broken", "mood": "not a number"}]


def test_replay_refuses_another_users_record(db, paired, queue):
    relationship_id, alex_id, alex_api, http = paired
    sam_api = VibeClient(base_url="http://testserver/api", http=http)
    sam_api.login("sam@example.com")
    record = queue.enqueue(relationship_id, alex_id, 4, "alex's day")

    with pytest.raises(RecordOwnerMismatch):
        sam_api.submit_offline_record(record)

    result = queue.reconcile(sam_api.submit_offline_record)
    assert result.failed == [record.id]
    assert [r.id for r in queue.list_pending()] == [record.id]
    assert db.query(Vibe).count() == 0

    assert queue.reconcile(alex_api.submit_offline_record).submitted == [record.id]
    vibe = db.query(Vibe).one()
    assert vibe.user_id == alex_id
    assert vibe.note == "alex's day"
