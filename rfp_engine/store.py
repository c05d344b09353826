"""
Proposal Store
Version: 1.3.0
Date: 2026-10-14

Purpose: Composition root for the embedded store. A ``ProposalStore`` owns the
in-memory snapshot, the persistence adapter, and the notification bus, and
exposes one repository per entity kind.

Every mutation goes through ``transaction()``: repositories change a working
copy of the snapshot, and the copy replaces the live snapshot, is persisted,
and is announced on the bus exactly once when the block exits.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from . import config
from .event_bus import StoreChanged, StoreEventBus
from .id_allocator import IdAllocator
from .persistence import InMemoryBackend, JsonFileBackend, PersistenceAdapter, StorageBackend
from .repositories import (
    AnswerRepository,
    CollaborationRepository,
    FileRepository,
    ProposalRepository,
    QuestionRepository,
    ShareTokenRepository,
    UserRepository,
)
from .store_schema import Proposal, ProposalQuestion, StoreSnapshot
from .utils import get_logger

logger = get_logger(__name__)


class ProposalStore:
    """In-process repository over a single persisted snapshot."""

    def __init__(
        self,
        backend: Optional[StorageBackend] = None,
        storage_key: Optional[str] = None,
        bus: Optional[StoreEventBus] = None,
    ):
        self.bus = bus or StoreEventBus()
        self.adapter = PersistenceAdapter(
            backend if backend is not None else InMemoryBackend(),
            storage_key=storage_key,
            bus=self.bus,
        )
        self._snapshot = self.adapter.load()

        self.users = UserRepository(self)
        self.proposals = ProposalRepository(self)
        self.files = FileRepository(self)
        self.questions = QuestionRepository(self)
        self.answers = AnswerRepository(self)
        self.share_tokens = ShareTokenRepository(self)
        self.collaborations = CollaborationRepository(self)

    @property
    def snapshot(self) -> StoreSnapshot:
        """The committed snapshot. Treat it as read-only."""
        return self._snapshot

    @contextmanager
    def transaction(self, reason: str = "") -> Iterator[StoreSnapshot]:
        """
        Yield a working copy of the snapshot and commit it on normal exit.

        If the block raises, the working copy is discarded and nothing is
        persisted or announced.
        """
        working = self._snapshot.working_copy()
        yield working
        self._commit(working, reason)

    def _commit(self, working: StoreSnapshot, reason: str) -> None:
        previous = self._snapshot
        # Observers notified by the adapter must already see the new state.
        self._snapshot = working
        try:
            self.adapter.save(working, reason=reason)
        except Exception:
            self._snapshot = previous
            raise

    @staticmethod
    def allocator(snapshot: StoreSnapshot) -> IdAllocator:
        return IdAllocator(snapshot.next_id)

    def subscribe(self, listener: Callable[[StoreChanged], None]) -> Callable[[], None]:
        return self.bus.subscribe(listener)

    def reload(self) -> StoreSnapshot:
        """Re-read the durable slot (e.g. after an external write) and notify."""
        self._snapshot = self.adapter.load()
        self.bus.notify("reload")
        return self._snapshot

    # ========================================
    # DERIVED OPERATIONS
    # ========================================

    def generate_ai_questions(self, proposal_id: int, title: str, description: str) -> List[ProposalQuestion]:
        from .question_generator import generate_ai_questions
        return generate_ai_questions(self, proposal_id, title, description)

    def generate_proposal_document(self, proposal_id: int) -> Optional[Proposal]:
        from .document_assembly import generate_proposal_document
        return generate_proposal_document(self, proposal_id)


def open_default_store(data_dir: Optional[Union[str, Path]] = None) -> ProposalStore:
    """Store persisted as JSON under ``data_dir`` (default: ``config.DATA_DIR``)."""
    directory = Path(data_dir) if data_dir else config.DATA_DIR
    backend = JsonFileBackend(directory)
    logger.info(f"Opening proposal store at {backend.path_for(config.STORAGE_KEY)}")
    return ProposalStore(backend=backend)
