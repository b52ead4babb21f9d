"""Knock-Out (KO) card counting table."""

from types import MappingProxyType

from core.cards import Rank

# Like Hi-Lo but counts 7 as +1.
#   2-7:  +1
#   8-9:   0
#   10-A: -1
# Full deck sum: +4 (unbalanced)
KO_TABLE = MappingProxyType({
    Rank.TWO: 1,
    Rank.THREE: 1,
    Rank.FOUR: 1,
    Rank.FIVE: 1,
    Rank.SIX: 1,
    Rank.SEVEN: 1,  # Key difference from Hi-Lo
    Rank.EIGHT: 0,
    Rank.NINE: 0,
    Rank.TEN: -1,
    Rank.JACK: -1,
    Rank.QUEEN: -1,
    Rank.KING: -1,
    Rank.ACE: -1,
})
