"""Fixtures for service tests.

Services run against the in-memory tree store so every test gets a fresh,
isolated document space. Trigger timing is shortened so debounced
regeneration finishes within a test.
"""

from collections.abc import AsyncGenerator

import pytest

from src.config import Config, TriggerConfig
from src.core.tree_store import InMemoryTreeStore
from src.services.mutation_engine import TreeMutationEngine

RELEASE_NOTES_TEXT = (
    "Release Checklist\n\n"
    "## Testing\n"
    "Run the full regression suite\n\n"
    "## Documentation\n"
    "Update the changelog entries"
)


@pytest.fixture
async def store() -> AsyncGenerator[InMemoryTreeStore, None]:
    """Fresh in-memory tree store."""
    tree_store = InMemoryTreeStore()
    await tree_store.initialize()
    yield tree_store
    await tree_store.close()


@pytest.fixture
def engine(store) -> TreeMutationEngine:
    """Mutation engine bound to session s1."""
    return TreeMutationEngine(store, "s1")


@pytest.fixture
def fast_config() -> Config:
    """Configuration with a short quiet period."""
    return Config(trigger=TriggerConfig(debounce_seconds=0.05, min_content_length=50))


@pytest.fixture
def release_notes() -> str:
    """Structured text long enough to trigger regeneration."""
    return RELEASE_NOTES_TEXT
