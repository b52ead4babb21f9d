"""Running count arithmetic over a rank value table."""

from typing import Mapping

from core.cards import Card, Rank, Suit

RankValueTable = Mapping[Rank, int]


def value_of(rank: Rank, table: RankValueTable) -> int:
    """
    Look up the count value of a rank.

    A rank missing from the table contributes 0, so a partial custom
    table never breaks counting.
    """
    return table.get(rank, 0)


def apply(card: Card, table: RankValueTable, running_count: int) -> int:
    """
    Count a single card.

    Args:
        card: The card just drawn
        table: Active rank value table
        running_count: Running count before the card

    Returns:
        The running count after the card
    """
    return running_count + value_of(card.rank, table)


def table_sum(table: RankValueTable) -> int:
    """
    Calculate the sum of tag values for a full 52-card deck.

    Balanced systems sum to 0; unbalanced ones do not.
    """
    # Each rank appears once per suit in a deck
    return sum(value_of(rank, table) * len(Suit) for rank in Rank)


def is_balanced(table: RankValueTable) -> bool:
    """Return whether a full deck counts back to zero."""
    return table_sum(table) == 0


def true_count(running_count: int, decks_remaining: float) -> float:
    """
    Calculate the true count.

    Args:
        running_count: Current running count
        decks_remaining: Number of decks remaining in the shoe

    Returns:
        Running count per remaining deck, 0.0 once the shoe is empty
    """
    if decks_remaining <= 0:
        return 0.0
    return running_count / decks_remaining
