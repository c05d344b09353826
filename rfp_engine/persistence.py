# ## File: rfp_engine/persistence.py
# Version: 1.3.0
# Date: 2026-10-19
# Purpose: Reads and writes the store snapshot to one durable key/value slot.
#          - CHANGE (v1.3.0): Records are validated one by one; an invalid
#            record is skipped instead of replacing the blob with seed data.
#          - CHANGE (v1.2.0): Missing sections and counters are repaired
#            individually; present data is never discarded.
#          - CHANGE (v1.1.0): Storage backends split out so tests can run
#            against an in-memory slot.

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import ValidationError

from . import config
from .event_bus import StoreEventBus
from .exceptions import PersistenceError
from .store_schema import (
    Collaboration,
    Counters,
    Proposal,
    ProposalAnswer,
    ProposalFile,
    ProposalQuestion,
    ProposalStatus,
    SNAPSHOT_SECTIONS,
    ShareToken,
    StoreRecord,
    StoreSnapshot,
    User,
    UserRole,
    now_iso,
)
from .utils import ensure_directory, get_logger

logger = get_logger(__name__)


# ============================================
# STORAGE BACKENDS
# ============================================

class StorageBackend:
    """A durable key/value slot holding serialized blobs."""

    def read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write(self, key: str, blob: str) -> None:
        raise NotImplementedError


class InMemoryBackend(StorageBackend):
    """Dictionary-backed slot. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.slots: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def write(self, key: str, blob: str) -> None:
        self.slots[key] = blob


class JsonFileBackend(StorageBackend):
    """Stores each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = ensure_directory(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

    def write(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        # Write to a sibling temp file first so a crash never leaves half a blob.
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=str(self.directory))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp_name, path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise PersistenceError(f"Failed to write {path}: {e}", storage_key=key) from e


# ============================================
# SEED DATA
# ============================================

def seed_snapshot() -> StoreSnapshot:
    """Snapshot used when nothing usable is stored yet."""
    now = now_iso()
    password = config.SEED_PASSWORD
    users = [
        User(
            id=1, email="admin@rfpai.com", password=password,
            first_name="Admin", last_name="User", role=UserRole.ADMIN,
            company="RFP AI", job_title="System Administrator",
            created_at=now, updated_at=now,
        ),
        User(
            id=2, email="john@company.com", password=password,
            first_name="John", last_name="Smith", role=UserRole.CUSTOMER,
            company="Acme Corporation", job_title="Project Manager",
            created_at=now, updated_at=now,
        ),
        User(
            id=3, email="sarah@startup.com", password=password,
            first_name="Sarah", last_name="Johnson", role=UserRole.COLLABORATOR,
            company="Startup Inc", job_title="Technical Writer",
            created_at=now, updated_at=now,
        ),
    ]
    proposals = [
        Proposal(
            id=1,
            title="Website Redesign Project",
            description="Complete redesign of corporate website with modern UI/UX",
            industry="Technology",
            budget_range="$50K - $100K",
            timeline="3-6 months",
            status=ProposalStatus.IN_PROGRESS,
            owner_id=2,
            created_at=now,
            updated_at=now,
        ),
    ]
    return StoreSnapshot(
        users=users,
        proposals=proposals,
        next_id=Counters(user=4, proposal=2),
    )


def repair_blob(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill in missing top-level arrays and counters from the seed defaults.

    Only absent (or null) parts are replaced; anything present is kept.
    """
    repaired = dict(raw)
    for section in SNAPSHOT_SECTIONS:
        if repaired.get(section) is None:
            logger.warning(f"Persisted store is missing '{section}', starting it empty")
            repaired[section] = []
        elif not isinstance(repaired[section], list):
            logger.warning(f"Persisted section '{section}' is not a list, starting it empty")
            repaired[section] = []

    seed_counters = seed_snapshot().next_id.to_store()
    counters = repaired.get("nextId")
    if not isinstance(counters, dict):
        logger.warning("Persisted store is missing 'nextId', using seed counters")
        repaired["nextId"] = seed_counters
    else:
        merged = dict(seed_counters)
        merged.update({k: v for k, v in counters.items() if v is not None})
        repaired["nextId"] = merged
    return repaired


SECTION_RECORDS: Dict[str, Type[StoreRecord]] = {
    "users": User,
    "proposals": Proposal,
    "proposalFiles": ProposalFile,
    "proposalQuestions": ProposalQuestion,
    "proposalAnswers": ProposalAnswer,
    "shareTokens": ShareToken,
    "collaborations": Collaboration,
}

SECTION_COUNTERS = {
    "users": "user",
    "proposals": "proposal",
    "proposalFiles": "file",
    "proposalQuestions": "question",
    "proposalAnswers": "answer",
    "shareTokens": "share_token",
    "collaborations": "collaboration",
}


def _load_records(section: str, items: List[Any], record_cls: Type[StoreRecord]) -> List[StoreRecord]:
    """Validate one section record by record, dropping (and logging) the bad ones."""
    records = []
    for position, item in enumerate(items):
        try:
            records.append(record_cls.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid record {position} in '{section}': {e}")
    return records


def counters_from_records(sections: Dict[str, List[StoreRecord]]) -> Counters:
    """Counters one past the highest stored id of each kind (seed values at least)."""
    seed = seed_snapshot().next_id
    values = {}
    for section, kind in SECTION_COUNTERS.items():
        highest = max((r.id for r in sections.get(section, [])), default=0)
        values[kind] = max(getattr(seed, kind), highest + 1)
    return Counters(**values)


# ============================================
# ADAPTER
# ============================================

class PersistenceAdapter:
    """Loads and saves the snapshot under a single storage key."""

    def __init__(
        self,
        backend: StorageBackend,
        storage_key: Optional[str] = None,
        bus: Optional[StoreEventBus] = None,
    ):
        self.backend = backend
        self.storage_key = storage_key or config.STORAGE_KEY
        self.bus = bus

    def load(self) -> StoreSnapshot:
        """
        Read the stored snapshot.

        Absent or unparseable blobs fall back to the seed snapshot. Inside a
        parsed blob only the offending records are skipped, so valid
        neighbours survive. This never raises.
        """
        blob = self.backend.read(self.storage_key)
        if blob is None:
            logger.info(f"No stored data under '{self.storage_key}', using seed snapshot")
            return seed_snapshot()

        try:
            raw = json.loads(blob)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored data under '{self.storage_key}' is not valid JSON, using seed snapshot: {e}")
            return seed_snapshot()

        if not isinstance(raw, dict):
            logger.warning(f"Stored data under '{self.storage_key}' is not an object, using seed snapshot")
            return seed_snapshot()

        repaired = repair_blob(raw)
        sections = {
            section: _load_records(section, repaired[section], SECTION_RECORDS[section])
            for section in SNAPSHOT_SECTIONS
        }
        try:
            counters = Counters.model_validate(repaired["nextId"])
        except ValidationError as e:
            logger.warning(f"Stored counters under '{self.storage_key}' are invalid, deriving them from stored ids: {e}")
            counters = counters_from_records(sections)
        snapshot = StoreSnapshot.model_validate({**sections, "nextId": counters})

        logger.debug(
            f"Loaded store '{self.storage_key}': {len(snapshot.users)} users, "
            f"{len(snapshot.proposals)} proposals"
        )
        return snapshot

    def save(self, snapshot: StoreSnapshot, reason: str = "") -> None:
        """Serialize the full snapshot, write it, then notify the bus."""
        blob = serialize_snapshot(snapshot)
        self.backend.write(self.storage_key, blob)
        logger.debug(f"Saved store '{self.storage_key}' ({len(blob)} bytes)")
        if self.bus is not None:
            self.bus.notify(reason)


def serialize_snapshot(snapshot: StoreSnapshot) -> str:
    """The persisted (camelCase JSON) form of a snapshot."""
    return json.dumps(snapshot.to_store(), ensure_ascii=False)
