"""
Pytest Configuration and Shared Fixtures
Version: 1.1.0
Purpose: Reusable store fixtures for the unit and integration suites
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rfp_engine.persistence import InMemoryBackend, JsonFileBackend
from rfp_engine.store import ProposalStore
from rfp_engine.store_schema import ProposalCreate, UserCreate, UserRole


# ============================================================================
# Function-scoped fixtures (run for each test)
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test."""
    temp_path = Path(tempfile.mkdtemp(prefix="rfp_test_"))
    yield temp_path
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture
def memory_backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(memory_backend: InMemoryBackend) -> ProposalStore:
    """A seeded store persisted in memory."""
    return ProposalStore(backend=memory_backend)


@pytest.fixture
def file_store(temp_dir: Path) -> ProposalStore:
    """A seeded store persisted as JSON under a temp directory."""
    return ProposalStore(backend=JsonFileBackend(temp_dir / "data"))


@pytest.fixture
def customer(store: ProposalStore):
    return store.users.register(UserCreate(
        email="dana@client.example",
        password="s3cret",
        first_name="Dana",
        last_name="Reyes",
        company="Client Co",
    ))


@pytest.fixture
def collaborator(store: ProposalStore):
    return store.users.create_collaborator(UserCreate(
        email="lee@writers.example",
        password="s3cret",
        first_name="Lee",
        last_name="Park",
        role=UserRole.CUSTOMER,
    ))


@pytest.fixture
def proposal(store: ProposalStore, customer):
    return store.proposals.create(ProposalCreate(
        title="Website Redesign",
        description="Complete redesign of corporate website with modern UI/UX",
        industry="Technology",
        budget_range="$50K - $100K",
        timeline="3-6 months",
        owner_id=customer.id,
    ))
