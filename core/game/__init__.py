"""Game orchestration and events."""

from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import Lifecycle
from core.game.engine import GameState, Snapshot

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "Lifecycle",
    "GameState",
    "Snapshot",
]
