"""
Shared fixtures for the recruiting tracker tests.

Stores are built over an in-memory backend with a frozen clock, so ids are
predictable (1000, 1001, ...) and every outreach entry is dated 2025-03-14.
"""

import pytest

from redzone.contexts.persistence import InMemoryStore
from redzone.contexts.tracker import EntityStore, IdGenerator

FIXED_CLOCK_MS = 1000
FIXED_DATE = "2025-03-14"


def build_store(persistence, clock_ms: int = FIXED_CLOCK_MS) -> EntityStore:
    """EntityStore over persistence with a frozen clock and date."""
    return EntityStore(
        persistence,
        id_generator=IdGenerator(clock=lambda: clock_ms),
        today=lambda: FIXED_DATE,
    )


@pytest.fixture
def backend():
    """Empty in-memory backend."""
    return InMemoryStore()


@pytest.fixture
def store(backend):
    """EntityStore over the in-memory backend."""
    return build_store(backend)


@pytest.fixture
def full_profile_fields():
    """Values for all eight scalar profile fields."""
    return {
        "name": "Jordan Reyes",
        "email": "jordan@example.com",
        "phone": "555-0100",
        "position": "Wide Receiver",
        "height": "6'1\"",
        "weight": "185",
        "gpa": "3.6",
        "test_scores": "SAT 1280",
    }


@pytest.fixture
def make_store():
    """Factory for stores over a given backend (e.g., to simulate a reload)."""
    return build_store
