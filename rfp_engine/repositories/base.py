"""Shared plumbing for the entity repositories."""

from typing import TYPE_CHECKING, List, Optional, TypeVar

from ..store_schema import StoreRecord, StoreSnapshot

if TYPE_CHECKING:
    from ..store import ProposalStore

RecordT = TypeVar("RecordT", bound=StoreRecord)


class BaseRepository:
    """Gives a repository access to its store's snapshot and transactions."""

    def __init__(self, store: "ProposalStore"):
        self.store = store

    @property
    def snapshot(self) -> StoreSnapshot:
        return self.store.snapshot


def find_by_id(records: List[RecordT], record_id: int) -> Optional[RecordT]:
    return next((r for r in records if r.id == record_id), None)


def index_of(records: List[RecordT], record_id: int) -> int:
    """Position of the record with ``record_id``, or -1."""
    for idx, record in enumerate(records):
        if record.id == record_id:
            return idx
    return -1
