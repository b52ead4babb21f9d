"""Omega II card counting table."""

from types import MappingProxyType

from core.cards import Rank

# Multi-level balanced system. Aces count 0 (they are usually side counted).
#   2, 3, 7: +1
#   4, 5, 6: +2
#   8, A:     0
#   9:       -1
#   10-K:    -2
OMEGA2_TABLE = MappingProxyType({
    Rank.TWO: 1,
    Rank.THREE: 1,
    Rank.FOUR: 2,
    Rank.FIVE: 2,
    Rank.SIX: 2,
    Rank.SEVEN: 1,
    Rank.EIGHT: 0,
    Rank.NINE: -1,
    Rank.TEN: -2,
    Rank.JACK: -2,
    Rank.QUEEN: -2,
    Rank.KING: -2,
    Rank.ACE: 0,
})
