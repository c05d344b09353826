"""Repository for proposals.

Deleting a proposal cascades to everything it owns (see ``integrity``).
"""

from typing import List, Optional

from ..integrity import cascade_delete_proposal
from ..store_schema import (
    EntityKind,
    Proposal,
    ProposalCreate,
    ProposalStatus,
    ProposalUpdate,
    changed_fields,
    now_iso,
    parse_timestamp,
)
from ..utils import get_logger
from .base import BaseRepository, find_by_id, index_of

logger = get_logger(__name__)


class ProposalRepository(BaseRepository):
    """Repository for Proposal records."""

    def list(self, owner_id: Optional[int] = None) -> List[Proposal]:
        """
        List proposals, most recently updated first.

        Args:
            owner_id: Only return proposals owned by this user

        Returns:
            List of proposals (ties keep insertion order)
        """
        proposals = list(self.snapshot.proposals)
        if owner_id is not None:
            proposals = [p for p in proposals if p.owner_id == owner_id]
        proposals.sort(key=lambda p: parse_timestamp(p.updated_at), reverse=True)
        return proposals

    def get(self, proposal_id: int) -> Optional[Proposal]:
        return find_by_id(self.snapshot.proposals, proposal_id)

    def get_by_share_token(self, token: str) -> Optional[Proposal]:
        share = self.store.share_tokens.get(token)
        if share is None:
            return None
        return self.get(share.proposal_id)

    def list_for_collaborator(self, user_id: int) -> List[Proposal]:
        """Proposals on which ``user_id`` holds a collaboration grant."""
        granted = {c.proposal_id for c in self.snapshot.collaborations if c.user_id == user_id}
        return [p for p in self.snapshot.proposals if p.id in granted]

    def create(self, proposal_data: ProposalCreate) -> Proposal:
        """Create a proposal in draft status with no generated content."""
        now = now_iso()
        with self.store.transaction("proposal.create") as snapshot:
            proposal = Proposal(
                id=self.store.allocator(snapshot).next_id(EntityKind.PROPOSAL),
                status=ProposalStatus.DRAFT,
                content=None,
                created_at=now,
                updated_at=now,
                **proposal_data.model_dump(),
            )
            snapshot.proposals.append(proposal)

        logger.info(f"Created proposal: {proposal.id} ({proposal.title!r})")
        return proposal

    def update(self, proposal_id: int, proposal_data: ProposalUpdate) -> Optional[Proposal]:
        """Update a proposal.

        Args:
            proposal_id: Proposal ID
            proposal_data: Fields to change

        Returns:
            Updated Proposal or None if not found
        """
        idx = index_of(self.snapshot.proposals, proposal_id)
        if idx == -1:
            return None

        changes = changed_fields(proposal_data, Proposal)
        with self.store.transaction("proposal.update") as snapshot:
            updated = snapshot.proposals[idx].model_copy(update={**changes, "updated_at": now_iso()})
            snapshot.proposals[idx] = updated

        logger.debug(f"Updated proposal {proposal_id}: {sorted(changes)}")
        return updated

    def delete(self, proposal_id: int) -> bool:
        """Delete a proposal with its files, questions, answers, share token and collaborations."""
        if self.get(proposal_id) is None:
            return False

        with self.store.transaction("proposal.delete") as snapshot:
            cascade_delete_proposal(snapshot, proposal_id)

        logger.info(f"Deleted proposal: {proposal_id}")
        return True
