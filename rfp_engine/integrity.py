"""
Referential integrity helpers.

These functions work on a working copy of the snapshot and never persist
anything themselves; the caller commits the copy once, so observers never see
a half-finished cascade.
"""

from typing import Iterable, List

from .store_schema import StoreSnapshot, User, UserRole
from .utils import get_logger

logger = get_logger(__name__)


def cascade_delete_proposal(snapshot: StoreSnapshot, proposal_id: int) -> bool:
    """
    Remove a proposal and everything it owns.

    Order: proposal, files, questions (remembering their ids), answers to
    those questions, share tokens, collaborations.

    Returns:
        False (with nothing touched) if the proposal does not exist
    """
    if not any(p.id == proposal_id for p in snapshot.proposals):
        return False

    snapshot.proposals = [p for p in snapshot.proposals if p.id != proposal_id]

    files_before = len(snapshot.proposal_files)
    snapshot.proposal_files = [f for f in snapshot.proposal_files if f.proposal_id != proposal_id]

    question_ids = {q.id for q in snapshot.proposal_questions if q.proposal_id == proposal_id}
    snapshot.proposal_questions = [q for q in snapshot.proposal_questions if q.id not in question_ids]

    answers_before = len(snapshot.proposal_answers)
    snapshot.proposal_answers = [a for a in snapshot.proposal_answers if a.question_id not in question_ids]

    snapshot.share_tokens = [t for t in snapshot.share_tokens if t.proposal_id != proposal_id]
    snapshot.collaborations = [c for c in snapshot.collaborations if c.proposal_id != proposal_id]

    logger.info(
        f"Cascade delete of proposal {proposal_id}: "
        f"{files_before - len(snapshot.proposal_files)} files, "
        f"{len(question_ids)} questions, "
        f"{answers_before - len(snapshot.proposal_answers)} answers"
    )
    return True


def remove_question_with_answer(snapshot: StoreSnapshot, question_id: int) -> bool:
    """Remove a question and its answer, if any."""
    if not any(q.id == question_id for q in snapshot.proposal_questions):
        return False
    snapshot.proposal_questions = [q for q in snapshot.proposal_questions if q.id != question_id]
    snapshot.proposal_answers = [a for a in snapshot.proposal_answers if a.question_id != question_id]
    return True


def collaborator_users_for(snapshot: StoreSnapshot, proposal_ids: Iterable[int]) -> List[User]:
    """Distinct collaborator users with a grant on any of ``proposal_ids``."""
    wanted = set(proposal_ids)
    user_ids = {c.user_id for c in snapshot.collaborations if c.proposal_id in wanted}
    return [u for u in snapshot.users if u.role == UserRole.COLLABORATOR and u.id in user_ids]
