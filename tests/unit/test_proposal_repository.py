"""
Unit Tests for ProposalRepository
"""

import json

from rfp_engine import config
from rfp_engine.persistence import InMemoryBackend
from rfp_engine.store import ProposalStore
from rfp_engine.store_schema import ProposalCreate, ProposalStatus, ProposalUpdate


class TestCreate:
    def test_create_forces_draft_and_empty_content(self, store, customer):
        created = store.proposals.create(ProposalCreate(title="Data Platform", owner_id=customer.id))

        assert created.status == ProposalStatus.DRAFT
        assert created.content is None
        assert created.owner_id == customer.id
        assert store.proposals.get(created.id) == created

    def test_client_fields_are_kept(self, store):
        created = store.proposals.create(ProposalCreate(
            title="CRM Rollout", client_name="Initech", client_email="pm@initech.example",
        ))
        assert created.client_name == "Initech"
        assert created.client_contact is None


class TestList:
    def test_most_recently_updated_first(self, store):
        older = store.proposals.create(ProposalCreate(title="Older"))
        newer = store.proposals.create(ProposalCreate(title="Newer"))
        store.proposals.update(older.id, ProposalUpdate(timeline="Q3"))

        titles = [p.title for p in store.proposals.list()]
        assert titles[:2] == ["Older", "Newer"]

    def test_orders_by_instant_across_timestamp_formats(self):
        blob = json.dumps({
            "proposals": [
                {"id": 1, "title": "old", "updatedAt": "2026-10-19T00:58:43.000Z"},
                {"id": 2, "title": "new", "updatedAt": "2026-10-18T21:58:43.709266-04:00"},
                {"id": 3, "title": "garbled", "updatedAt": "yesterday"},
            ],
            "nextId": {"proposal": 4},
        })
        store = ProposalStore(backend=InMemoryBackend({config.STORAGE_KEY: blob}))

        assert [p.title for p in store.proposals.list()] == ["new", "old", "garbled"]

    def test_new_proposal_sorts_ahead_of_utc_suffixed_one(self):
        blob = json.dumps({
            "proposals": [{"id": 1, "title": "old", "updatedAt": "2020-01-01T00:00:00.000Z"}],
            "nextId": {"proposal": 2},
        })
        store = ProposalStore(backend=InMemoryBackend({config.STORAGE_KEY: blob}))
        store.proposals.create(ProposalCreate(title="new"))

        assert [p.title for p in store.proposals.list()] == ["new", "old"]

    def test_filter_by_owner(self, store, proposal, customer):
        owned = store.proposals.list(owner_id=customer.id)
        assert [p.id for p in owned] == [proposal.id]
        assert store.proposals.list(owner_id=12345) == []


class TestUpdate:
    def test_update_refreshes_timestamp(self, store, proposal):
        updated = store.proposals.update(proposal.id, ProposalUpdate(status=ProposalStatus.COMPLETED))

        assert updated.status == ProposalStatus.COMPLETED
        assert updated.title == proposal.title
        assert updated.created_at == proposal.created_at
        assert updated.updated_at >= proposal.updated_at

    def test_optional_field_can_be_cleared(self, store, proposal):
        updated = store.proposals.update(proposal.id, ProposalUpdate(industry=None))
        assert updated.industry is None

    def test_update_missing_returns_none(self, store):
        assert store.proposals.update(404, ProposalUpdate(title="Nope")) is None


class TestLookups:
    def test_get_by_share_token(self, store, proposal):
        share = store.share_tokens.get_or_create(proposal.id)

        assert store.proposals.get_by_share_token(share.token) == proposal
        assert store.proposals.get_by_share_token("unknown") is None

    def test_list_for_collaborator(self, store, proposal, collaborator):
        store.collaborations.add(proposal.id, collaborator.id, "writer")

        assert store.proposals.list_for_collaborator(collaborator.id) == [proposal]
        assert store.proposals.list_for_collaborator(1) == []


class TestDelete:
    def test_delete_missing_returns_false(self, store):
        assert store.proposals.delete(404) is False

    def test_delete_removes_proposal(self, store, proposal):
        assert store.proposals.delete(proposal.id) is True
        assert store.proposals.get(proposal.id) is None
