"""Repository for public share links."""

import secrets
from typing import Optional

from .. import config
from ..store_schema import EntityKind, ShareToken, now_iso
from ..utils import get_logger
from .base import BaseRepository

logger = get_logger(__name__)


def generate_token(length: Optional[int] = None) -> str:
    """Random opaque token drawn from ``config.SHARE_TOKEN_ALPHABET``."""
    length = length or config.SHARE_TOKEN_LENGTH
    return "".join(secrets.choice(config.SHARE_TOKEN_ALPHABET) for _ in range(length))


class ShareTokenRepository(BaseRepository):
    """Repository for ShareToken records. One token per proposal."""

    def get(self, token: str) -> Optional[ShareToken]:
        return next((t for t in self.snapshot.share_tokens if t.token == token), None)

    def get_for_proposal(self, proposal_id: int) -> Optional[ShareToken]:
        return next((t for t in self.snapshot.share_tokens if t.proposal_id == proposal_id), None)

    def get_or_create(self, proposal_id: int) -> ShareToken:
        """Return the proposal's token, creating it on first use."""
        existing = self.get_for_proposal(proposal_id)
        if existing is not None:
            return existing

        with self.store.transaction("share_token.create") as snapshot:
            share = ShareToken(
                id=self.store.allocator(snapshot).next_id(EntityKind.SHARE_TOKEN),
                proposal_id=proposal_id,
                token=generate_token(),
                created_at=now_iso(),
            )
            snapshot.share_tokens.append(share)

        logger.info(f"Created share token {share.id} for proposal {proposal_id}")
        return share
