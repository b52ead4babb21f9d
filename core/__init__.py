"""Card counting engine - 100% UI-agnostic."""

from core.cards import Card, Rank, Shoe, Suit
from core.game import GameState, Snapshot
from core.session import PersistedSettings, PersistedState, SessionStore

__all__ = [
    "Card",
    "Rank",
    "Shoe",
    "Suit",
    "GameState",
    "Snapshot",
    "PersistedSettings",
    "PersistedState",
    "SessionStore",
]
