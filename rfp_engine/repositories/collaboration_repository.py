"""Repository for collaboration grants."""

from typing import Iterable, List, Optional

from ..integrity import collaborator_users_for
from ..store_schema import (
    Collaboration,
    CollaborationUpdate,
    EntityKind,
    User,
    changed_fields,
    now_iso,
)
from ..utils import get_logger
from .base import BaseRepository, find_by_id, index_of

logger = get_logger(__name__)


class CollaborationRepository(BaseRepository):
    """Repository for Collaboration records."""

    def get(self, collaboration_id: int) -> Optional[Collaboration]:
        return find_by_id(self.snapshot.collaborations, collaboration_id)

    def list_by_proposal(self, proposal_id: int) -> List[Collaboration]:
        return [c for c in self.snapshot.collaborations if c.proposal_id == proposal_id]

    def list_by_user(self, user_id: int) -> List[Collaboration]:
        return [c for c in self.snapshot.collaborations if c.user_id == user_id]

    def add(self, proposal_id: int, user_id: int, role: str) -> Collaboration:
        """Grant ``user_id`` access to a proposal."""
        with self.store.transaction("collaboration.add") as snapshot:
            grant = Collaboration(
                id=self.store.allocator(snapshot).next_id(EntityKind.COLLABORATION),
                proposal_id=proposal_id,
                user_id=user_id,
                role=role,
                enabled=True,
                created_at=now_iso(),
            )
            snapshot.collaborations.append(grant)

        logger.info(f"Added collaboration {grant.id}: user {user_id} on proposal {proposal_id} as {role!r}")
        return grant

    def update(self, collaboration_id: int, collaboration_data: CollaborationUpdate) -> Optional[Collaboration]:
        idx = index_of(self.snapshot.collaborations, collaboration_id)
        if idx == -1:
            return None
        changes = changed_fields(collaboration_data, Collaboration)
        with self.store.transaction("collaboration.update") as snapshot:
            updated = snapshot.collaborations[idx].model_copy(update=changes)
            snapshot.collaborations[idx] = updated
        return updated

    def delete(self, collaboration_id: int) -> bool:
        if self.get(collaboration_id) is None:
            return False
        with self.store.transaction("collaboration.delete") as snapshot:
            snapshot.collaborations = [c for c in snapshot.collaborations if c.id != collaboration_id]
        logger.info(f"Deleted collaboration: {collaboration_id}")
        return True

    def collaborators_for_proposal_ids(self, proposal_ids: Iterable[int]) -> List[User]:
        """Distinct collaborator users granted on any of ``proposal_ids``."""
        return collaborator_users_for(self.snapshot, proposal_ids)

    def collaborators_for_customer(self, customer_id: int) -> List[User]:
        """Collaborators working on any proposal owned by ``customer_id``."""
        owned = [p.id for p in self.snapshot.proposals if p.owner_id == customer_id]
        return collaborator_users_for(self.snapshot, owned)
