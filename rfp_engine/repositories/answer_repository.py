"""Repository for answers to proposal questions.

A question has at most one answer; ``set_answer`` creates or updates it.
"""

from typing import Iterable, List, Optional

from ..store_schema import EntityKind, ProposalAnswer, now_iso
from ..utils import get_logger
from .base import BaseRepository

logger = get_logger(__name__)


class AnswerRepository(BaseRepository):
    """Repository for ProposalAnswer records."""

    def list_for_questions(self, question_ids: Iterable[int]) -> List[ProposalAnswer]:
        wanted = set(question_ids)
        return [a for a in self.snapshot.proposal_answers if a.question_id in wanted]

    def get_by_question(self, question_id: int) -> Optional[ProposalAnswer]:
        return next((a for a in self.snapshot.proposal_answers if a.question_id == question_id), None)

    def set_answer(self, question_id: int, answer: str, respondent_token: Optional[str] = None) -> ProposalAnswer:
        """
        Create or update the answer to a question.

        Args:
            question_id: Question being answered (must exist)
            answer: Answer text
            respondent_token: Share token of a public respondent. Replaces the
                stored token only when given. It is not checked against the
                proposal's current share token.

        Returns:
            The stored answer
        """
        now = now_iso()
        with self.store.transaction("answer.set") as snapshot:
            idx = next(
                (i for i, a in enumerate(snapshot.proposal_answers) if a.question_id == question_id),
                -1,
            )
            if idx != -1:
                changes = {"answer": answer, "updated_at": now}
                if respondent_token is not None:
                    changes["respondent_token"] = respondent_token
                stored = snapshot.proposal_answers[idx].model_copy(update=changes)
                snapshot.proposal_answers[idx] = stored
            else:
                stored = ProposalAnswer(
                    id=self.store.allocator(snapshot).next_id(EntityKind.ANSWER),
                    question_id=question_id,
                    answer=answer,
                    respondent_token=respondent_token,
                    created_at=now,
                    updated_at=now,
                )
                snapshot.proposal_answers.append(stored)

        logger.debug(f"Stored answer {stored.id} for question {question_id}")
        return stored
