"""Settings and shoe state records persisted in a key-value store."""

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from core.cards import CARDS_PER_DECK, Card, Rank, Suit
from core.counting import DEFAULT_TABLE, RankValueTable
from core.storage import KeyValueStore, StorageUnavailable

logger = logging.getLogger(__name__)

SETTINGS_KEY = "cardCounterSettings"
STATE_KEY = "cardCounterState"

DEFAULT_NUM_DECKS = 1


class MalformedPersistedRecord(ValueError):
    """A stored record could not be parsed or failed validation."""


@dataclass(frozen=True)
class PersistedSettings:
    """Shoe size and per-rank count values chosen by the user."""

    num_decks: int = DEFAULT_NUM_DECKS
    custom_values: RankValueTable = field(default_factory=lambda: dict(DEFAULT_TABLE))


@dataclass(frozen=True)
class PersistedState:
    """A shoe in progress: remaining cards (bottom first) and running count."""

    num_decks: int
    cards: tuple[Card, ...]
    running_count: int


def _serialize_card(card: Card) -> dict[str, str]:
    """Serialize a card to a dict."""
    return {"suit": card.suit.value, "rank": card.rank.value}


def _deserialize_card(data: Any) -> Card:
    """Deserialize a card from a dict."""
    if not isinstance(data, dict):
        raise MalformedPersistedRecord(f"Card is not an object: {data!r}")
    try:
        return Card(Suit(data["suit"]), Rank(data["rank"]))
    except (KeyError, ValueError) as exc:
        raise MalformedPersistedRecord(f"Invalid card: {data!r}") from exc


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid count or deck number
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_num_decks(value: Any) -> int:
    if not _is_int(value) or value < 1:
        raise MalformedPersistedRecord(f"Invalid numDecks: {value!r}")
    return value


def serialize_settings(settings: PersistedSettings) -> str:
    """Encode settings as the JSON settings record."""
    return json.dumps({
        "numDecks": settings.num_decks,
        "customValues": {rank.value: value for rank, value in settings.custom_values.items()},
    })


def deserialize_settings(raw: str) -> PersistedSettings:
    """
    Decode a settings record.

    Missing fields fall back to their defaults. Labels that are not ranks
    are ignored; ranks absent from customValues count as 0.

    Raises:
        MalformedPersistedRecord: If the record is unparsable or mistyped
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedPersistedRecord("Settings record is not valid JSON") from exc
    if not isinstance(data, dict):
        raise MalformedPersistedRecord("Settings record is not an object")

    num_decks = DEFAULT_NUM_DECKS
    if data.get("numDecks") is not None:
        num_decks = _parse_num_decks(data["numDecks"])

    custom_values: dict[Rank, int] = dict(DEFAULT_TABLE)
    raw_values = data.get("customValues")
    if raw_values is not None:
        if not isinstance(raw_values, dict):
            raise MalformedPersistedRecord("customValues is not an object")
        custom_values = {}
        for label, value in raw_values.items():
            if not _is_int(value):
                raise MalformedPersistedRecord(f"Invalid value for rank {label!r}: {value!r}")
            try:
                custom_values[Rank(label)] = value
            except ValueError:
                logger.debug("Ignoring unknown rank label %r in settings", label)

    return PersistedSettings(num_decks=num_decks, custom_values=custom_values)


def serialize_state(num_decks: int, cards: Iterable[Card], running_count: int) -> str:
    """Encode a shoe in progress as the JSON state record."""
    return json.dumps({
        "numDecks": num_decks,
        "cards": [_serialize_card(c) for c in cards],
        "runningCount": running_count,
    })


def deserialize_state(raw: str) -> PersistedState:
    """
    Decode a state record.

    Raises:
        MalformedPersistedRecord: If the record is unparsable, mistyped, or
            holds more copies of a card than its decks allow
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedPersistedRecord("State record is not valid JSON") from exc
    if not isinstance(data, dict):
        raise MalformedPersistedRecord("State record is not an object")

    num_decks = _parse_num_decks(data.get("numDecks"))

    raw_cards = data.get("cards")
    if not isinstance(raw_cards, list):
        raise MalformedPersistedRecord("cards is not a list")
    cards = tuple(_deserialize_card(c) for c in raw_cards)
    if len(cards) > num_decks * CARDS_PER_DECK:
        raise MalformedPersistedRecord(
            f"{len(cards)} cards exceed a {num_decks}-deck shoe"
        )
    most_common = Counter(cards).most_common(1)
    if most_common and most_common[0][1] > num_decks:
        card, copies = most_common[0]
        raise MalformedPersistedRecord(
            f"{card!r} appears {copies} times in a {num_decks}-deck shoe"
        )

    running_count = data.get("runningCount")
    if not _is_int(running_count):
        raise MalformedPersistedRecord(f"Invalid runningCount: {running_count!r}")

    return PersistedState(num_decks=num_decks, cards=cards, running_count=running_count)


class SessionStore:
    """
    Load and save the card counter's two records.

    Corrupt records are recovered with defaults. If the backing store
    fails, the session store logs it once, records a notice, and stops
    touching storage for the rest of the session.
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings_key: str = SETTINGS_KEY,
        state_key: str = STATE_KEY,
    ) -> None:
        self._store = store
        self._settings_key = settings_key
        self._state_key = state_key
        self._notice: str | None = None

    @property
    def degraded(self) -> bool:
        """Whether persistence was lost for this session."""
        return self._notice is not None

    @property
    def notice(self) -> str | None:
        """User-facing message describing lost persistence, if any."""
        return self._notice

    def _mark_unavailable(self, exc: StorageUnavailable) -> None:
        if self._notice is None:
            logger.warning("Storage unavailable, continuing in memory: %s", exc)
            self._notice = "Progress cannot be saved; this session will not survive a restart."

    def _read(self, key: str) -> str | None:
        if self.degraded:
            return None
        try:
            return self._store.get(key)
        except StorageUnavailable as exc:
            self._mark_unavailable(exc)
            return None

    def _write(self, key: str, value: str) -> None:
        if self.degraded:
            return
        try:
            self._store.set(key, value)
        except StorageUnavailable as exc:
            self._mark_unavailable(exc)

    def load_settings(self) -> PersistedSettings:
        """Load settings, falling back to one deck and the Hi-Lo table."""
        raw = self._read(self._settings_key)
        if raw is None:
            return PersistedSettings()
        try:
            return deserialize_settings(raw)
        except MalformedPersistedRecord as exc:
            logger.warning("Discarding malformed settings record: %s", exc)
            return PersistedSettings()

    def save_settings(self, settings: PersistedSettings) -> None:
        """Overwrite the settings record."""
        self._write(self._settings_key, serialize_settings(settings))
        if not self.degraded:
            logger.info("Saved settings: %d deck(s)", settings.num_decks)

    def load_state(self) -> PersistedState | None:
        """Load the shoe in progress, or None if there is no usable record."""
        raw = self._read(self._state_key)
        if raw is None:
            return None
        try:
            return deserialize_state(raw)
        except MalformedPersistedRecord as exc:
            logger.warning("Discarding malformed state record: %s", exc)
            return None

    def save(self, num_decks: int, cards: Iterable[Card], running_count: int) -> None:
        """Overwrite the state record."""
        self._write(self._state_key, serialize_state(num_decks, cards, running_count))


def settings_from_labels(num_decks: int, values: Mapping[str, int]) -> PersistedSettings:
    """Build settings from label-keyed values such as an API payload."""
    return PersistedSettings(
        num_decks=num_decks,
        custom_values={Rank(label): value for label, value in values.items()},
    )
