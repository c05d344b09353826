"""One repository per entity kind, all sharing a ``ProposalStore``."""

from .answer_repository import AnswerRepository
from .collaboration_repository import CollaborationRepository
from .file_repository import FileRepository
from .proposal_repository import ProposalRepository
from .question_repository import QuestionRepository
from .share_token_repository import ShareTokenRepository
from ..exceptions import DuplicateEmailError
from .user_repository import UserRepository

__all__ = [
    "AnswerRepository",
    "CollaborationRepository",
    "DuplicateEmailError",
    "FileRepository",
    "ProposalRepository",
    "QuestionRepository",
    "ShareTokenRepository",
    "UserRepository",
]
