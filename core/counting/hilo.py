"""Hi-Lo card counting table."""

from types import MappingProxyType

from core.cards import Rank

# The most widely taught system and the default table.
#   2-6:  +1 (low cards)
#   7-9:   0 (neutral)
#   10-A: -1 (high cards)
# Full deck sum: 0 (balanced)
HILO_TABLE = MappingProxyType({
    Rank.TWO: 1,
    Rank.THREE: 1,
    Rank.FOUR: 1,
    Rank.FIVE: 1,
    Rank.SIX: 1,
    Rank.SEVEN: 0,
    Rank.EIGHT: 0,
    Rank.NINE: 0,
    Rank.TEN: -1,
    Rank.JACK: -1,
    Rank.QUEEN: -1,
    Rank.KING: -1,
    Rank.ACE: -1,
})

DEFAULT_TABLE = HILO_TABLE
