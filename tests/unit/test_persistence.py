"""
Unit Tests for the Persistence Adapter
Purpose: Seed fallback, section repair, round-trip and file backend behaviour
"""

import json

import pytest

from rfp_engine.exceptions import PersistenceError
from rfp_engine.persistence import (
    InMemoryBackend,
    JsonFileBackend,
    PersistenceAdapter,
    seed_snapshot,
    serialize_snapshot,
)
from rfp_engine.store import ProposalStore
from rfp_engine.store_schema import SNAPSHOT_SECTIONS, ProposalCreate, ProposalStatus, UserRole

KEY = "rfp-suite-data"


def _adapter(blob=None):
    backend = InMemoryBackend({KEY: blob} if blob is not None else None)
    return PersistenceAdapter(backend, storage_key=KEY)


class TestSeedFallback:
    def test_absent_blob_returns_seed(self):
        snapshot = _adapter().load()

        assert [u.email for u in snapshot.users] == [
            "admin@rfpai.com", "john@company.com", "sarah@startup.com",
        ]
        assert [u.role for u in snapshot.users] == [
            UserRole.ADMIN, UserRole.CUSTOMER, UserRole.COLLABORATOR,
        ]
        assert snapshot.proposals[0].title == "Website Redesign Project"
        assert snapshot.proposals[0].status == ProposalStatus.IN_PROGRESS
        assert snapshot.next_id.user == 4
        assert snapshot.next_id.proposal == 2
        assert snapshot.next_id.question == 1

    def test_unparseable_blob_returns_seed(self):
        snapshot = _adapter("{not json").load()
        assert len(snapshot.users) == 3

    def test_non_object_blob_returns_seed(self):
        snapshot = _adapter("[1, 2, 3]").load()
        assert len(snapshot.proposals) == 1


class TestSectionRepair:
    def test_missing_arrays_start_empty_and_present_data_is_kept(self):
        blob = json.dumps({
            "users": [{
                "id": 7, "email": "kim@example.com", "password": "x",
                "firstName": "Kim", "lastName": "Lo", "role": "admin",
                "createdAt": "2026-01-01T00:00:00.000000",
                "updatedAt": "2026-01-01T00:00:00.000000",
            }],
            "nextId": {"user": 8},
        })
        snapshot = _adapter(blob).load()

        assert [u.id for u in snapshot.users] == [7]
        assert snapshot.proposals == []
        assert snapshot.proposal_answers == []
        assert snapshot.next_id.user == 8
        # Counters absent from the blob take the seed value
        assert snapshot.next_id.proposal == 2
        assert snapshot.next_id.share_token == 1

    def test_missing_counters_use_seed(self):
        snapshot = _adapter(json.dumps({"users": []})).load()
        assert snapshot.users == []
        assert snapshot.next_id.user == 4

    def test_invalid_record_is_skipped_and_neighbours_survive(self):
        blob = json.dumps({
            "users": [
                {
                    "id": 10, "email": "ada@example.com", "password": "x",
                    "firstName": "Ada", "lastName": "Byron", "role": "customer",
                },
                {
                    "id": 11, "email": "root@example.com", "password": "x",
                    "firstName": "Root", "lastName": "User", "role": "superuser",
                },
            ],
            "proposals": [
                {"id": 5, "title": "Keep me", "ownerId": 10},
                {"id": "not-a-number"},
            ],
            "nextId": {"user": 12, "proposal": 6},
        })
        snapshot = _adapter(blob).load()

        assert [u.id for u in snapshot.users] == [10]
        assert [p.title for p in snapshot.proposals] == ["Keep me"]
        assert snapshot.next_id.user == 12

    def test_valid_records_survive_the_next_save(self):
        blob = json.dumps({
            "users": [{"id": "bad"}],
            "proposals": [{"id": 5, "title": "Keep me"}],
            "nextId": {"proposal": 6},
        })
        backend = InMemoryBackend({KEY: blob})
        store = ProposalStore(backend=backend, storage_key=KEY)

        store.proposals.create(ProposalCreate(title="new"))

        stored = json.loads(backend.slots[KEY])
        assert [p["title"] for p in stored["proposals"]] == ["Keep me", "new"]
        assert stored["users"] == []

    def test_unknown_record_fields_are_kept(self):
        blob = json.dumps({
            "proposals": [{"id": 5, "title": "Keep me", "priority": "high"}],
            "nextId": {"proposal": 6},
        })
        snapshot = _adapter(blob).load()

        raw = json.loads(serialize_snapshot(snapshot))
        assert raw["proposals"][0]["priority"] == "high"

    def test_invalid_counters_are_derived_from_stored_ids(self):
        blob = json.dumps({
            "proposals": [{"id": 9, "title": "Keep me"}],
            "nextId": {"proposal": "lots"},
        })
        snapshot = _adapter(blob).load()

        assert snapshot.next_id.proposal == 10
        assert snapshot.next_id.user == 4

    def test_non_list_section_starts_empty(self):
        snapshot = _adapter(json.dumps({"users": {"id": 1}})).load()
        assert snapshot.users == []


class TestRoundTrip:
    def test_serialized_snapshot_loads_unchanged(self, store, proposal):
        question = store.questions.add(proposal.id, "Who signs off?")
        store.answers.set_answer(question.id, "The CFO", respondent_token="tok")
        store.share_tokens.get_or_create(proposal.id)
        store.files.add_bytes(proposal.id, "brief.txt", b"hello")

        snapshot = store.snapshot
        reloaded = _adapter(serialize_snapshot(snapshot)).load()

        assert reloaded == snapshot

    def test_blob_uses_camel_case_layout(self):
        raw = json.loads(serialize_snapshot(seed_snapshot()))

        for section in SNAPSHOT_SECTIONS:
            assert section in raw
        assert set(raw["nextId"]) == {
            "user", "proposal", "file", "question", "answer", "shareToken", "collaboration",
        }
        assert "firstName" in raw["users"][0]
        assert "budgetRange" in raw["proposals"][0]


class TestJsonFileBackend:
    def test_write_then_read(self, temp_dir):
        backend = JsonFileBackend(temp_dir / "slots")
        backend.write(KEY, '{"users": []}')

        assert backend.path_for(KEY).exists()
        assert backend.read(KEY) == '{"users": []}'

    def test_read_missing_key(self, temp_dir):
        assert JsonFileBackend(temp_dir).read("nothing-here") is None

    def test_write_failure_raises_persistence_error(self, temp_dir, monkeypatch):
        backend = JsonFileBackend(temp_dir)

        def _fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("rfp_engine.persistence.os.replace", _fail)

        with pytest.raises(PersistenceError) as exc_info:
            backend.write(KEY, "{}")
        assert exc_info.value.storage_key == KEY
        assert list(temp_dir.iterdir()) == []
