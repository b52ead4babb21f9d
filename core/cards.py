"""Card and Shoe classes - immutable cards in a mutable multi-deck shoe."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Sequence

CARDS_PER_DECK = 52


class Suit(Enum):
    """Card suits, in shoe build order."""

    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is printed in red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks, valued by their printed label."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    suit: Suit
    rank: Rank

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.suit.name}, {self.rank.name})"


class Shoe:
    """
    A multi-deck shoe.

    Cards are drawn from the end of the sequence, so the last card in
    ``cards`` is the one on top.
    """

    def __init__(
        self,
        num_decks: int = 1,
        cards: Iterable[Card] | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a shoe.

        Args:
            num_decks: Number of decks the shoe was built from
            cards: Existing ordered cards to restore verbatim; when omitted
                the shoe is built in order (unshuffled)
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        if cards is None:
            self._cards: list[Card] = self.build(num_decks)
        else:
            self._cards = list(cards)

    @staticmethod
    def build(num_decks: int) -> list[Card]:
        """
        Enumerate every card of num_decks decks, suit-major and rank-minor.

        Args:
            num_decks: Number of 52-card decks

        Returns:
            Exactly 52 * num_decks cards in a fixed order
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")
        return [
            Card(suit, rank)
            for _ in range(num_decks)
            for suit in Suit
            for rank in Rank
        ]

    @classmethod
    def fresh(cls, num_decks: int = 1, rng: Random | None = None) -> "Shoe":
        """Build a full shoe and shuffle it once."""
        shoe = cls(num_decks=num_decks, rng=rng)
        shoe.shuffle()
        return shoe

    def shuffle(self) -> None:
        """Shuffle the current cards in place (Fisher-Yates)."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def draw(self) -> Card | None:
        """Draw the top card, or return None if the shoe is empty."""
        if not self._cards:
            return None
        return self._cards.pop()

    def remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def cards(self) -> Sequence[Card]:
        """Return the remaining cards, bottom first."""
        return tuple(self._cards)

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    @property
    def decks_remaining(self) -> float:
        """Return the estimated number of decks remaining."""
        return len(self._cards) / CARDS_PER_DECK
