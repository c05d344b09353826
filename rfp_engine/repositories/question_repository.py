"""Repository for proposal questions."""

from typing import List, Optional, Union

from ..integrity import remove_question_with_answer
from ..store_schema import EntityKind, ProposalQuestion, QuestionSource, StoreSnapshot, now_iso
from ..utils import get_logger
from .base import BaseRepository, find_by_id, index_of

logger = get_logger(__name__)


def next_question_order(snapshot: StoreSnapshot, proposal_id: int) -> int:
    """Order for a new question: how many the proposal already has."""
    return sum(1 for q in snapshot.proposal_questions if q.proposal_id == proposal_id)


def append_question(
    store,
    snapshot: StoreSnapshot,
    proposal_id: int,
    text: str,
    order: int,
    source: QuestionSource,
) -> ProposalQuestion:
    """Allocate and append a question inside an open transaction."""
    question = ProposalQuestion(
        id=store.allocator(snapshot).next_id(EntityKind.QUESTION),
        proposal_id=proposal_id,
        question=text,
        order=order,
        source=source,
        created_at=now_iso(),
    )
    snapshot.proposal_questions.append(question)
    return question


class QuestionRepository(BaseRepository):
    """Repository for ProposalQuestion records."""

    def list(self, proposal_id: int) -> List[ProposalQuestion]:
        """Questions of a proposal in display order."""
        questions = [q for q in self.snapshot.proposal_questions if q.proposal_id == proposal_id]
        questions.sort(key=lambda q: q.order)
        return questions

    def get(self, question_id: int) -> Optional[ProposalQuestion]:
        return find_by_id(self.snapshot.proposal_questions, question_id)

    def add(
        self,
        proposal_id: int,
        question: str,
        source: Union[QuestionSource, str] = QuestionSource.USER,
    ) -> ProposalQuestion:
        """
        Append a question to a proposal.

        Order is the number of questions the proposal already has; it is not
        recompacted after deletions, so orders can repeat.
        """
        with self.store.transaction("question.add") as snapshot:
            created = append_question(
                self.store,
                snapshot,
                proposal_id,
                question,
                order=next_question_order(snapshot, proposal_id),
                source=QuestionSource(source),
            )
        logger.debug(f"Added question {created.id} to proposal {proposal_id} at order {created.order}")
        return created

    def update(self, question_id: int, question: str) -> Optional[ProposalQuestion]:
        idx = index_of(self.snapshot.proposal_questions, question_id)
        if idx == -1:
            return None
        with self.store.transaction("question.update") as snapshot:
            updated = snapshot.proposal_questions[idx].model_copy(update={"question": question})
            snapshot.proposal_questions[idx] = updated
        return updated

    def remove(self, question_id: int) -> bool:
        """Remove a question together with its answer."""
        if self.get(question_id) is None:
            return False
        with self.store.transaction("question.remove") as snapshot:
            remove_question_with_answer(snapshot, question_id)
        logger.debug(f"Removed question: {question_id}")
        return True
