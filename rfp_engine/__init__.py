"""
RFP Engine
==========

Embedded proposal store for the RFP suite: users, proposals, attachments,
questions, answers, share links and collaboration grants persisted as one
JSON snapshot.

Modules:
- store: ProposalStore composition root and open_default_store()
- repositories: one repository per entity kind
- integrity: cascading delete and cross-kind joins
- question_generator / document_assembly: derived content
"""

from .version_config import RFP_STORE_VERSION as __version__
from .event_bus import StoreChanged, StoreEventBus
from .persistence import InMemoryBackend, JsonFileBackend, PersistenceAdapter, seed_snapshot
from .store import ProposalStore, open_default_store

__all__ = [
    "__version__",
    "InMemoryBackend",
    "JsonFileBackend",
    "PersistenceAdapter",
    "ProposalStore",
    "StoreChanged",
    "StoreEventBus",
    "open_default_store",
    "seed_snapshot",
]
