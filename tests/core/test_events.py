"""Tests for the game event emitter."""

import pytest

from core.game.events import EventEmitter, EventType, GameEvent


class TestEventEmitter:
    """Tests for EventEmitter class."""

    def test_typed_and_catch_all_handlers(self):
        """Test typed handlers see their type and catch-all handlers see everything."""
        emitter = EventEmitter()
        drawn, everything = [], []
        emitter.subscribe(drawn.append, EventType.CARD_DRAWN)
        emitter.subscribe(everything.append)

        emitter.emit_new(EventType.CARD_DRAWN, remaining_cards=51)
        emitter.emit_new(EventType.SHOE_EMPTY)

        assert [e.event_type for e in drawn] == [EventType.CARD_DRAWN]
        assert [e.event_type for e in everything] == [EventType.CARD_DRAWN, EventType.SHOE_EMPTY]

    def test_unsubscribe(self):
        """Test an unsubscribed handler stops receiving events."""
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append, EventType.SHOE_SHUFFLED)
        emitter.unsubscribe(seen.append, EventType.SHOE_SHUFFLED)
        emitter.unsubscribe(seen.append, EventType.SHOE_EMPTY)  # Should not raise

        emitter.emit_new(EventType.SHOE_SHUFFLED)

        assert seen == []

    def test_history(self):
        """Test emitted events are kept until cleared."""
        emitter = EventEmitter()
        event = emitter.emit_new(EventType.STORAGE_UNAVAILABLE, message="gone")

        assert emitter.history == [event]
        assert str(event) == "STORAGE_UNAVAILABLE: {'message': 'gone'}"

        emitter.clear_history()
        assert emitter.history == []

    def test_event_is_immutable(self):
        """Test events cannot be modified."""
        event = GameEvent(EventType.SHOE_CREATED)
        with pytest.raises(AttributeError):
            event.event_type = EventType.SHOE_EMPTY  # type: ignore[misc]
