"""
Pytest configuration and fixtures for BookFriends tests.
"""

import itertools
import random

import pytest

from bookfriends.groups import GroupRegistry
from bookfriends.journal import Journal
from bookfriends.models import BookRecord, Group, Session, UserProfile
from bookfriends.storage import FileBackend, JsonStore, MemoryBackend


# =============================================================================
# Stores
# =============================================================================

@pytest.fixture
def store() -> JsonStore:
    """Store over an in-memory backend."""
    return JsonStore(MemoryBackend())


@pytest.fixture
def file_store(tmp_path) -> JsonStore:
    """Store writing one file per key under a temporary directory."""
    return JsonStore(FileBackend(tmp_path / "data"))


@pytest.fixture
def journal(file_store) -> Journal:
    return Journal(file_store, groups=GroupRegistry(file_store, rng=random.Random(7)))


# =============================================================================
# Factories
# =============================================================================

@pytest.fixture
def make_record():
    counter = itertools.count(1)

    def _make(group_id="A", author_name="Mina", title=None, **fields) -> BookRecord:
        n = next(counter)
        return BookRecord(
            id=fields.pop("id", f"rec-{n}"),
            group_id=group_id,
            title=title or f"Book {n}",
            author_name=author_name,
            timestamp=fields.pop("timestamp", 1_700_000_000_000 + n),
            **fields,
        )

    return _make


@pytest.fixture
def make_group():
    def _make(code="12345", name="Tuesday Readers", **fields) -> Group:
        fields.setdefault("leader_name", "Jun")
        return Group(code=code, name=name, **fields)

    return _make


@pytest.fixture
def make_session(make_group):
    def _make(code="12345", user_name="Mina", **user_fields) -> Session:
        return Session(
            group=make_group(code=code, name=f"Group {code}"),
            user=UserProfile(group_id=code, name=user_name, **user_fields),
        )

    return _make
