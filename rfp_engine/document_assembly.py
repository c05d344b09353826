"""
Document Assembly
Version: 1.0.0
Date: 2026-10-13

Purpose: Build a proposal's generated content from its questions and answers
and write it back to the proposal. Reads only from the store; the single side
effect is the proposal update.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from . import config
from .store_schema import (
    Proposal,
    ProposalAnswer,
    ProposalQuestion,
    ProposalStatus,
    ProposalUpdate,
    now_iso,
)
from .utils import get_logger

if TYPE_CHECKING:
    from .store import ProposalStore

logger = get_logger(__name__)


def join_questions_and_answers(
    questions: List[ProposalQuestion],
    answers: List[ProposalAnswer],
) -> str:
    """One block per question: the question, then its answer or a placeholder."""
    by_question = {a.question_id: a for a in answers}
    blocks = []
    for question in questions:
        answer = by_question.get(question.id)
        text = answer.answer if answer and answer.answer else config.NO_ANSWER_PLACEHOLDER
        blocks.append(f"{question.question}\n{text}")
    return "\n\n".join(blocks)


def build_document_content(
    proposal: Proposal,
    questions: List[ProposalQuestion],
    answers: List[ProposalAnswer],
) -> Dict[str, Any]:
    return {
        "executiveSummary": config.EXECUTIVE_SUMMARY_TEMPLATE.format(
            title=proposal.title, description=proposal.description or ""
        ),
        "introduction": config.INTRODUCTION_TEMPLATE.format(title=proposal.title),
        "projectOverview": {
            "title": proposal.title,
            "description": proposal.description or "",
            "industry": proposal.industry or "",
            "timeline": proposal.timeline or "",
            "budget": proposal.budget_range or "",
        },
        "requirementsAndAnswers": join_questions_and_answers(questions, answers),
        "generatedAt": now_iso(),
    }


def generate_proposal_document(store: "ProposalStore", proposal_id: int) -> Optional[Proposal]:
    """
    Assemble and store the proposal document.

    Returns:
        The updated proposal (status in_progress), or None if it does not exist
    """
    proposal = store.proposals.get(proposal_id)
    if proposal is None:
        return None

    questions = store.questions.list(proposal_id)
    answers = store.answers.list_for_questions(q.id for q in questions)
    content = build_document_content(proposal, questions, answers)

    logger.info(f"Generated document for proposal {proposal_id} from {len(questions)} questions")
    return store.proposals.update(
        proposal_id,
        ProposalUpdate(content=content, status=ProposalStatus.IN_PROGRESS),
    )
