"""Tests for Card and Shoe classes."""

import pytest
from collections import Counter
from random import Random

from hypothesis import given, settings
from hypothesis import strategies as st

from core.cards import Card, Shoe, Rank, Suit


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Suit.SPADES, Rank.ACE)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Suit.SPADES, Rank.ACE)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_equality_and_hash(self):
        """Test that equal cards compare and hash equal."""
        assert Card(Suit.HEARTS, Rank.TEN) == Card(Suit.HEARTS, Rank.TEN)
        assert len({Card(Suit.HEARTS, Rank.TEN), Card(Suit.HEARTS, Rank.TEN)}) == 1

    def test_rank_labels(self):
        """Test the printed rank labels."""
        assert [r.value for r in Rank] == [
            "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A",
        ]

    def test_suit_values(self):
        """Test suit names and colors."""
        assert [s.value for s in Suit] == ["Hearts", "Diamonds", "Clubs", "Spades"]
        assert Suit.HEARTS.is_red
        assert Suit.DIAMONDS.is_red
        assert not Suit.CLUBS.is_red
        assert not Suit.SPADES.is_red

    def test_card_str(self):
        """Test string representation."""
        assert str(Card(Suit.SPADES, Rank.ACE)) == "A♠"
        assert str(Card(Suit.HEARTS, Rank.TEN)) == "10♥"


class TestShoeBuild:
    """Tests for building a shoe."""

    def test_build_single_deck_order(self):
        """Test the build is suit-major, rank-minor."""
        cards = Shoe.build(1)
        assert len(cards) == 52
        assert cards[0] == Card(Suit.HEARTS, Rank.TWO)
        assert cards[12] == Card(Suit.HEARTS, Rank.ACE)
        assert cards[13] == Card(Suit.DIAMONDS, Rank.TWO)
        assert cards[-1] == Card(Suit.SPADES, Rank.ACE)

    def test_build_is_deterministic(self):
        """Test building twice gives the same order."""
        assert Shoe.build(2) == Shoe.build(2)

    @given(num_decks=st.integers(min_value=1, max_value=8))
    def test_build_contains_every_card_num_decks_times(self, num_decks):
        """Test each of the 52 cards appears exactly num_decks times."""
        cards = Shoe.build(num_decks)
        counts = Counter(cards)
        assert len(cards) == 52 * num_decks
        assert len(counts) == 52
        assert set(counts.values()) == {num_decks}

    def test_build_rejects_zero_decks(self):
        """Test that a shoe needs at least one deck."""
        with pytest.raises(ValueError):
            Shoe.build(0)
        with pytest.raises(ValueError):
            Shoe(num_decks=0)

    def test_new_shoe_is_unshuffled(self):
        """Test that constructing a shoe does not shuffle it."""
        shoe = Shoe(num_decks=2)
        assert list(shoe.cards) == Shoe.build(2)

    def test_restore_existing_cards(self):
        """Test constructing a shoe from a saved card order."""
        saved = [Card(Suit.CLUBS, Rank.FIVE), Card(Suit.HEARTS, Rank.KING)]
        shoe = Shoe(num_decks=1, cards=saved)
        assert list(shoe.cards) == saved
        assert shoe.remaining() == 2


class TestShoeShuffle:
    """Tests for shuffling."""

    @given(seed=st.integers(), num_decks=st.integers(min_value=1, max_value=4))
    @settings(max_examples=25)
    def test_shuffle_is_permutation(self, seed, num_decks):
        """Test shuffling keeps the same multiset of cards."""
        shoe = Shoe(num_decks=num_decks, rng=Random(seed))
        before = Counter(shoe.cards)
        shoe.shuffle()
        assert Counter(shoe.cards) == before
        assert shoe.remaining() == 52 * num_decks

    def test_shuffle_changes_order(self, rng):
        """Test shuffling a full shoe moves cards."""
        shoe = Shoe(num_decks=1, rng=rng)
        shoe.shuffle()
        assert list(shoe.cards) != Shoe.build(1)

    def test_shuffle_reproducible_with_seed(self):
        """Test that the same seed produces the same order."""
        a = Shoe.fresh(num_decks=2, rng=Random(7))
        b = Shoe.fresh(num_decks=2, rng=Random(7))
        assert a.cards == b.cards

    def test_shuffle_partial_shoe(self, rng):
        """Test shuffling only touches the remaining cards."""
        saved = Shoe.build(1)[:10]
        shoe = Shoe(num_decks=1, cards=saved, rng=rng)
        shoe.shuffle()
        assert Counter(shoe.cards) == Counter(saved)

    def test_shuffle_empty_and_single(self, rng):
        """Test shuffling trivial shoes."""
        empty = Shoe(num_decks=1, cards=[], rng=rng)
        empty.shuffle()
        assert empty.remaining() == 0

        one = Shoe(num_decks=1, cards=[Card(Suit.SPADES, Rank.ACE)], rng=rng)
        one.shuffle()
        assert list(one.cards) == [Card(Suit.SPADES, Rank.ACE)]


class TestShoeDraw:
    """Tests for drawing from a shoe."""

    def test_draw_takes_from_the_end(self):
        """Test the last card in the sequence is on top."""
        shoe = Shoe(num_decks=1)
        assert shoe.draw() == Card(Suit.SPADES, Rank.ACE)
        assert shoe.draw() == Card(Suit.SPADES, Rank.KING)

    def test_draw_decrements_remaining(self, shoe):
        """Test each draw removes exactly one card."""
        total = shoe.remaining()
        for drawn in range(1, 11):
            assert shoe.draw() is not None
            assert shoe.remaining() == total - drawn

    def test_draw_until_empty(self):
        """Test drawing a whole shoe then from an empty one."""
        shoe = Shoe.fresh(num_decks=1, rng=Random(1))
        drawn = [shoe.draw() for _ in range(52)]
        assert Counter(drawn) == Counter(Shoe.build(1))
        assert shoe.remaining() == 0

        assert shoe.draw() is None
        assert shoe.remaining() == 0
        assert shoe.draw() is None

    def test_cards_view_is_a_copy(self, shoe):
        """Test that the cards view cannot mutate the shoe."""
        view = shoe.cards
        shoe.draw()
        assert len(view) == shoe.remaining() + 1


class TestShoeProperties:
    """Tests for shoe bookkeeping."""

    def test_shoe_properties(self, shoe):
        """Test bookkeeping on a fresh 6-deck shoe."""
        assert shoe.num_decks == 6
        assert shoe.remaining() == 312
        assert shoe.decks_remaining == 6.0

    def test_decks_remaining_after_draws(self, shoe):
        """Test decks remaining drops with each draw."""
        for _ in range(26):
            shoe.draw()
        assert shoe.decks_remaining == 5.5
