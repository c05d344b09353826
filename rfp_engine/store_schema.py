"""
Store Schema - Pydantic Models
Version: 1.1.0
Date: 2026-10-12

Purpose: Define the records held by the proposal store, the root snapshot that
is persisted as a single JSON blob, and the create/update request models that
callers pass to the repositories.

Records are frozen; repositories replace a record with ``model_copy(update=...)``
instead of mutating it. Field names are snake_case in Python and camelCase in
the persisted blob.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with an explicit offset."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    """
    Parse a stored timestamp into an aware datetime.

    Accepts a trailing ``Z`` for UTC. Naive values are read as local time;
    unparseable values compare earlier than any real time.
    """
    text = (value or "").strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.astimezone()
    except (ValueError, OverflowError):
        return datetime.min.replace(tzinfo=timezone.utc)
    return parsed


# ============================================
# ENUMS
# ============================================

class UserRole(str, Enum):
    """Role of a store user."""
    CUSTOMER = "customer"
    ADMIN = "admin"
    COLLABORATOR = "collaborator"


class ProposalStatus(str, Enum):
    """Lifecycle status of a proposal."""
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class QuestionSource(str, Enum):
    """Who produced a question."""
    AI = "ai"
    USER = "user"


class EntityKind(str, Enum):
    """Entity kinds that own an id counter."""
    USER = "user"
    PROPOSAL = "proposal"
    FILE = "file"
    QUESTION = "question"
    ANSWER = "answer"
    SHARE_TOKEN = "share_token"
    COLLABORATION = "collaboration"


# ============================================
# BASE MODELS
# ============================================

class StoreModel(BaseModel):
    """Base for everything that is persisted: camelCase on disk."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_store(self) -> Dict[str, Any]:
        """Serialize in the persisted (camelCase, JSON-safe) format."""
        return self.model_dump(mode="json", by_alias=True)


class StoreRecord(StoreModel):
    """An immutable entity record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, extra="allow")


# ============================================
# ENTITY RECORDS
# ============================================

class User(StoreRecord):
    """A registered account."""
    id: int
    email: str
    password: str = Field(description="Opaque credential, stored as given")
    first_name: str
    last_name: str
    role: UserRole = UserRole.CUSTOMER
    company: Optional[str] = None
    job_title: Optional[str] = None
    enabled: bool = True
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)


class Proposal(StoreRecord):
    """A proposal owned by a customer."""
    id: int
    title: str
    description: Optional[str] = None
    industry: Optional[str] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    status: ProposalStatus = ProposalStatus.DRAFT
    content: Optional[Dict[str, Any]] = Field(default=None, description="Generated document content")
    owner_id: Optional[int] = Field(default=None, description="Weak reference to User")
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    client_email: Optional[str] = None
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)


class ProposalFile(StoreRecord):
    """A file attached to a proposal. ``data`` is a base64 data URL."""
    id: int
    proposal_id: int
    name: str
    type: str = ""
    size: int = 0
    data: str = ""
    created_at: str = Field(default_factory=now_iso)


class ProposalQuestion(StoreRecord):
    """A question asked about a proposal."""
    id: int
    proposal_id: int
    question: str
    order: int = 0
    source: QuestionSource = QuestionSource.USER
    created_at: str = Field(default_factory=now_iso)


class ProposalAnswer(StoreRecord):
    """The single answer to a question."""
    id: int
    question_id: int
    answer: str
    respondent_token: Optional[str] = Field(default=None, description="Share token used by a public respondent")
    created_at: str = Field(default_factory=now_iso)
    updated_at: str = Field(default_factory=now_iso)


class ShareToken(StoreRecord):
    """Public share link for a proposal."""
    id: int
    proposal_id: int
    token: str
    created_at: str = Field(default_factory=now_iso)


class Collaboration(StoreRecord):
    """Grant giving a user access to a proposal."""
    id: int
    proposal_id: int
    user_id: int
    role: str
    enabled: bool = True
    created_at: str = Field(default_factory=now_iso)


# ============================================
# SNAPSHOT
# ============================================

class Counters(StoreModel):
    """Next id to hand out, per entity kind."""
    user: int = 1
    proposal: int = 1
    file: int = 1
    question: int = 1
    answer: int = 1
    share_token: int = 1
    collaboration: int = 1


class StoreSnapshot(StoreModel):
    """Root object persisted under the storage key."""
    users: List[User] = Field(default_factory=list)
    proposals: List[Proposal] = Field(default_factory=list)
    proposal_files: List[ProposalFile] = Field(default_factory=list)
    proposal_questions: List[ProposalQuestion] = Field(default_factory=list)
    proposal_answers: List[ProposalAnswer] = Field(default_factory=list)
    share_tokens: List[ShareToken] = Field(default_factory=list)
    collaborations: List[Collaboration] = Field(default_factory=list)
    next_id: Counters = Field(default_factory=Counters)

    def working_copy(self) -> "StoreSnapshot":
        """
        Shallow copy: fresh lists and counters, shared (immutable) records.
        Mutating the copy never affects this snapshot.
        """
        return StoreSnapshot(
            users=list(self.users),
            proposals=list(self.proposals),
            proposal_files=list(self.proposal_files),
            proposal_questions=list(self.proposal_questions),
            proposal_answers=list(self.proposal_answers),
            share_tokens=list(self.share_tokens),
            collaborations=list(self.collaborations),
            next_id=self.next_id.model_copy(),
        )


# Top-level arrays that a persisted blob must contain.
SNAPSHOT_SECTIONS = (
    "users",
    "proposals",
    "proposalFiles",
    "proposalQuestions",
    "proposalAnswers",
    "shareTokens",
    "collaborations",
)


# ============================================
# REQUEST MODELS
# ============================================

def _clean_email(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("email must not be empty")
    return value


class UserCreate(StoreModel):
    """Registration input."""
    email: str
    password: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.CUSTOMER
    company: Optional[str] = None
    job_title: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, v: str) -> str:
        return _clean_email(v)


class UserUpdate(StoreModel):
    """Mutable user fields. Unset fields are left unchanged."""
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    enabled: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _clean_email(v)


class ProposalCreate(StoreModel):
    """Input for a new proposal. Status and content are always reset."""
    title: str
    description: Optional[str] = None
    industry: Optional[str] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    owner_id: Optional[int] = None
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    client_email: Optional[str] = None


class ProposalUpdate(StoreModel):
    """Mutable proposal fields. Unset fields are left unchanged."""
    title: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    status: Optional[ProposalStatus] = None
    content: Optional[Dict[str, Any]] = None
    owner_id: Optional[int] = None
    client_name: Optional[str] = None
    client_contact: Optional[str] = None
    client_email: Optional[str] = None


class CollaborationUpdate(StoreModel):
    """Mutable collaboration fields."""
    role: Optional[str] = None
    enabled: Optional[bool] = None


def changed_fields(request: StoreModel, record_cls: type) -> Dict[str, Any]:
    """
    Fields explicitly set on an update request, keyed by python name.

    ``None`` only survives for record fields whose default is ``None``;
    everything else (e.g. ``enabled``, ``status``) cannot be cleared.
    """
    changes = {}
    for name, value in request.model_dump(exclude_unset=True).items():
        if value is None and record_cls.model_fields[name].default is not None:
            continue
        changes[name] = value
    return changes
