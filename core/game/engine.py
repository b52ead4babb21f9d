"""Card counting game: one shoe, one running count, persisted on every change."""

import logging
from dataclasses import dataclass
from random import Random
from typing import Any, Callable

from transitions import Machine

from core.cards import Card, Shoe
from core.counting import DEFAULT_TABLE, RankValueTable, apply, true_count
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import Lifecycle
from core.session import DEFAULT_NUM_DECKS, PersistedSettings, SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """The view of the game exposed to the presentation layer."""

    remaining_cards: int
    running_count: int

    def to_dict(self) -> dict[str, int]:
        """Return the snapshot as a plain dict."""
        return {
            "remaining_cards": self.remaining_cards,
            "running_count": self.running_count,
        }


class GameState:
    """
    Card counting practice game.

    Owns the shoe and the running count, and saves both through the
    session store after every draw and reshuffle so a restart resumes
    with the exact same remaining cards.

    Construct once, call ``init()``, then hand the instance to whatever
    presentation layer drives it.
    """

    STATES = [s.name.lower() for s in Lifecycle]

    TRANSITIONS = [
        {"trigger": "mark_ready", "source": "uninitialized", "dest": "ready"},
        # Internal transition: only valid once ready, leaves the state alone
        {"trigger": "require_ready", "source": "ready", "dest": None},
    ]

    def __init__(
        self,
        session_store: SessionStore,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize an uninitialized game.

        Args:
            session_store: Where settings and shoe state are persisted
            rng: Random number generator for reproducible shuffles
        """
        self._session_store = session_store
        self._rng = rng or Random()
        self._num_decks = DEFAULT_NUM_DECKS
        self._table: RankValueTable = DEFAULT_TABLE
        self._shoe: Shoe | None = None
        self._running_count = 0
        self._storage_notified = False
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="uninitialized",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def lifecycle(self) -> Lifecycle:
        """Get current lifecycle state as enum."""
        return Lifecycle[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def init(self) -> None:
        """
        Load settings, then resume the saved shoe or start a fresh one.

        A saved shoe is restored in its exact order and never reshuffled.

        Raises:
            MachineError: If the game was already initialized
        """
        self.mark_ready()
        self._apply_settings(self._session_store.load_settings())

        saved = self._session_store.load_state()
        if saved is not None:
            self._shoe = Shoe(num_decks=saved.num_decks, cards=saved.cards, rng=self._rng)
            self._running_count = saved.running_count
            logger.info(
                "Restored shoe: %d card(s) left, running count %+d",
                self._shoe.remaining(),
                self._running_count,
            )
            self.events.emit_new(
                EventType.SHOE_RESTORED,
                remaining_cards=self._shoe.remaining(),
                running_count=self._running_count,
            )
        else:
            self._new_shoe()
            logger.info("Started fresh %d-deck shoe", self._num_decks)
            self.events.emit_new(EventType.SHOE_CREATED, num_decks=self._num_decks)

        self._check_storage()

    def draw_card(self) -> Card | None:
        """
        Draw the top card and count it.

        Returns:
            The drawn card, or None if the shoe is empty. An empty shoe is
            left untouched and nothing is saved.
        """
        shoe = self._require_shoe()

        card = shoe.draw()
        if card is None:
            logger.debug("Draw from empty shoe")
            self.events.emit_new(EventType.SHOE_EMPTY)
            return None

        self._running_count = apply(card, self._table, self._running_count)
        self._save()
        logger.debug(
            "Drew %s: %d left, running count %+d",
            card,
            shoe.remaining(),
            self._running_count,
        )
        self.events.emit_new(
            EventType.CARD_DRAWN,
            card=card,
            remaining_cards=shoe.remaining(),
            running_count=self._running_count,
        )
        return card

    def reshuffle(self) -> None:
        """Discard the shoe and start a full, freshly shuffled one."""
        self.require_ready()
        self._new_shoe()
        logger.info("Reshuffled into a fresh %d-deck shoe", self._num_decks)
        self.events.emit_new(EventType.SHOE_SHUFFLED, num_decks=self._num_decks)

    def snapshot(self) -> Snapshot:
        """Return remaining cards and running count."""
        return Snapshot(
            remaining_cards=self._require_shoe().remaining(),
            running_count=self._running_count,
        )

    def reload_settings(self) -> PersistedSettings:
        """
        Re-read settings after the user edited them.

        The new table applies to the next draw; the new deck count applies
        from the next reshuffle.
        """
        self.require_ready()
        settings = self._session_store.load_settings()
        self._apply_settings(settings)
        logger.info("Reloaded settings: %d deck(s)", settings.num_decks)
        self.events.emit_new(EventType.SETTINGS_RELOADED, num_decks=settings.num_decks)
        self._check_storage()
        return settings

    def update_settings(self, settings: PersistedSettings) -> PersistedSettings:
        """Save new settings and reload them into the running game."""
        self.require_ready()
        self._session_store.save_settings(settings)
        if self._session_store.degraded:
            # Storage is gone, so the reload would only see defaults
            self._apply_settings(settings)
            self._check_storage()
            return settings
        return self.reload_settings()

    @property
    def num_decks(self) -> int:
        """Return the configured number of decks for new shoes."""
        return self._num_decks

    @property
    def table(self) -> RankValueTable:
        """Return the active rank value table."""
        return self._table

    @property
    def decks_remaining(self) -> float:
        """Return the number of decks left in the shoe."""
        return self._require_shoe().decks_remaining

    @property
    def true_count(self) -> float:
        """Return the running count per remaining deck."""
        return true_count(self._running_count, self.decks_remaining)

    @property
    def storage_notice(self) -> str | None:
        """Return a message if progress is no longer being saved."""
        return self._session_store.notice

    def to_dict(self) -> dict[str, Any]:
        """Return the snapshot plus derived counts for display."""
        data: dict[str, Any] = self.snapshot().to_dict()
        data["decks_remaining"] = round(self.decks_remaining, 2)
        data["true_count"] = round(self.true_count, 2)
        data["storage_notice"] = self.storage_notice
        return data

    def _apply_settings(self, settings: PersistedSettings) -> None:
        self._num_decks = settings.num_decks
        self._table = settings.custom_values

    def _new_shoe(self) -> None:
        self._shoe = Shoe.fresh(num_decks=self._num_decks, rng=self._rng)
        self._running_count = 0
        self._save()

    def _require_shoe(self) -> Shoe:
        self.require_ready()
        if self._shoe is None:
            raise RuntimeError("Game has no shoe; init() did not complete")
        return self._shoe

    def _save(self) -> None:
        shoe = self._require_shoe()
        self._session_store.save(shoe.num_decks, shoe.cards, self._running_count)
        self._check_storage()

    def _check_storage(self) -> None:
        if self._session_store.degraded and not self._storage_notified:
            self._storage_notified = True
            self.events.emit_new(
                EventType.STORAGE_UNAVAILABLE,
                message=self._session_store.notice,
            )
