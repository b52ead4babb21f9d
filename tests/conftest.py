"""Pytest fixtures for card counter tests."""

import pytest
from hypothesis import strategies as st
from random import Random

from core.cards import Card, Rank, Shoe, Suit
from core.game import GameState
from core.session import SessionStore
from core.storage import InMemoryKeyValueStore, KeyValueStore, StorageUnavailable


class BrokenKeyValueStore(KeyValueStore):
    """A store whose medium is disabled or full."""

    def __init__(self, fail_reads: bool = True) -> None:
        self.fail_reads = fail_reads
        self.writes = 0

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageUnavailable("storage disabled")
        return None

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        raise StorageUnavailable("quota exceeded")


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    return Shoe.fresh(num_decks=6, rng=rng)


@pytest.fixture
def kv_store():
    """An empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def session_store(kv_store):
    """A session store over the in-memory key-value store."""
    return SessionStore(kv_store)


@pytest.fixture
def game(session_store, rng):
    """An initialized game with default settings."""
    g = GameState(session_store, rng=rng)
    g.init()
    return g


@pytest.fixture
def broken_store():
    """A key-value store that always fails."""
    return BrokenKeyValueStore()


def stacked_cards(*cards: Card) -> list[Card]:
    """Return cards ordered so they are drawn in the given order."""
    return list(reversed(cards))


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(suit, rank)
