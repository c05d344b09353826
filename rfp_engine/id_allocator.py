"""
ID allocation for store entities.

Each entity kind has its own counter inside the snapshot's ``next_id``; the
counter always holds the next id to hand out. Ids are unique and increasing
within a kind, and kinds do not share a namespace.
"""

from typing import Union

from .store_schema import Counters, EntityKind


class IdAllocator:
    """Post-increment allocator over a snapshot's counters."""

    def __init__(self, counters: Counters):
        self.counters = counters

    def next_id(self, kind: Union[EntityKind, str]) -> int:
        try:
            field = EntityKind(kind).value
        except ValueError:
            raise ValueError(f"Unknown entity kind: {kind!r}")
        current = getattr(self.counters, field)
        setattr(self.counters, field, current + 1)
        return current

    def peek(self, kind: Union[EntityKind, str]) -> int:
        """Id the next allocation of ``kind`` will return."""
        return getattr(self.counters, EntityKind(kind).value)
