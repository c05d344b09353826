# ## File: rfp_engine/question_generator.py
# Version: 1.0.0
# Date: 2026-10-13
# Purpose: Derives the starter questions for a new proposal from its title and
#          description using a fixed template bank plus sentence extraction.
#          No model is called; generation always succeeds.

import re
from typing import TYPE_CHECKING, List, Optional

from . import config
from .repositories.question_repository import append_question
from .store_schema import ProposalQuestion, QuestionSource
from .utils import get_logger

if TYPE_CHECKING:
    from .store import ProposalStore

logger = get_logger(__name__)

SENTENCE_SPLIT = re.compile(r"[.!?]+")


def extract_sentences(title: Optional[str], description: Optional[str]) -> List[str]:
    """Sentence fragments of title + description long enough to be meaningful."""
    text = " ".join(part for part in (title, description) if part)
    fragments = (s.strip() for s in SENTENCE_SPLIT.split(text))
    return [s for s in fragments if len(s) > config.MIN_SENTENCE_LENGTH]


def candidate_questions(title: Optional[str], description: Optional[str]) -> List[str]:
    """Question texts in emission order: templates first, then the elaboration prompt."""
    emitted: List[str] = []
    for template in config.QUESTION_TEMPLATES:
        if template not in emitted:
            emitted.append(template)

    sentences = extract_sentences(title, description)
    if sentences:
        emitted.append(config.ELABORATION_PREFIX + ". ".join(sentences[:2]))
    return emitted


def generate_ai_questions(
    store: "ProposalStore",
    proposal_id: int,
    title: Optional[str],
    description: Optional[str],
) -> List[ProposalQuestion]:
    """
    Create the generated questions for a proposal.

    Orders run from 0 in emission order and every question is tagged
    ``source=ai``. All questions are committed together.

    Returns:
        The created questions, in emission order
    """
    texts = candidate_questions(title, description)
    created: List[ProposalQuestion] = []
    with store.transaction("question.generate") as snapshot:
        for order, text in enumerate(texts):
            created.append(
                append_question(store, snapshot, proposal_id, text, order=order, source=QuestionSource.AI)
            )

    logger.info(f"Generated {len(created)} questions for proposal {proposal_id}")
    return created
