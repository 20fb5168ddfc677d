"""Tests for the domino set utilities."""

import random

import pytest

from ashakk.engine.domino_set import (
    SET_SIZE,
    add_to_hand,
    deal,
    find_starter_index,
    generate_set,
    hand_contains_all,
    hand_has_number,
    remove_from_hand,
    shuffle,
)
from ashakk.models import DOUBLE_SIX, Tile


def keys(tiles):
    return sorted(t.key() for t in tiles)


class TestGenerateSet:
    """Tests for generate_set."""

    def test_twenty_eight_distinct_tiles(self):
        tiles = generate_set()
        assert len(tiles) == SET_SIZE
        assert len(set(tiles)) == SET_SIZE

    def test_contains_every_pair_once(self):
        expected = [(a, b) for a in range(7) for b in range(a, 7)]
        assert keys(generate_set()) == expected

    def test_fresh_list_each_call(self):
        first = generate_set()
        first.pop()
        assert len(generate_set()) == SET_SIZE


class TestShuffle:
    """Tests for shuffle."""

    def test_same_multiset(self):
        tiles = generate_set()
        assert keys(shuffle(tiles, random.Random(1))) == keys(tiles)

    def test_input_untouched(self):
        tiles = generate_set()
        before = list(tiles)
        shuffle(tiles, random.Random(1))
        assert tiles == before

    def test_seeded_shuffle_is_reproducible(self):
        first = shuffle(generate_set(), random.Random(7))
        second = shuffle(generate_set(), random.Random(7))
        assert [t.key() for t in first] == [t.key() for t in second]

    def test_shuffle_permutes(self):
        """Test at least one of several seeds changes the order."""
        original = [t.key() for t in generate_set()]
        orders = [[t.key() for t in shuffle(generate_set(), random.Random(s))] for s in range(5)]
        assert any(order != original for order in orders)

    def test_shuffle_empty_and_single(self):
        assert shuffle([]) == []
        assert shuffle([DOUBLE_SIX]) == [DOUBLE_SIX]


class TestDeal:
    """Tests for deal."""

    @pytest.mark.parametrize("players,per_player,undealt", [(2, 14, 0), (3, 9, 1), (4, 7, 0)])
    def test_hand_sizes(self, players, per_player, undealt):
        hands, rest = deal(generate_set(), players)
        assert len(hands) == players
        assert all(len(hand) == per_player for hand in hands)
        assert len(rest) == undealt

    def test_deal_in_seat_order(self):
        tiles = generate_set()
        hands, _ = deal(tiles, 4)
        assert hands[0] == tiles[:7]
        assert hands[3] == tiles[21:28]

    def test_remainder_is_the_tail(self):
        tiles = generate_set()
        _, rest = deal(tiles, 3)
        assert rest == [tiles[-1]]

    def test_deal_conserves_tiles(self):
        tiles = generate_set()
        hands, rest = deal(tiles, 3)
        dealt = [t for hand in hands for t in hand] + rest
        assert keys(dealt) == keys(tiles)

    def test_zero_players_rejected(self):
        with pytest.raises(ValueError):
            deal(generate_set(), 0)


class TestFindStarter:
    """Tests for find_starter_index."""

    def test_finds_double_six_holder(self):
        hands = [[Tile.of(0, 0)], [Tile.of(1, 2), DOUBLE_SIX], [Tile.of(3, 3)]]
        assert find_starter_index(hands) == 1

    def test_defaults_to_seat_zero(self):
        hands = [[Tile.of(0, 0)], [Tile.of(1, 2)]]
        assert find_starter_index(hands) == 0


class TestHandHelpers:
    """Tests for hand mutation and membership helpers."""

    def test_remove_is_orientation_insensitive(self):
        hand = [Tile.of(2, 5), Tile.of(1, 1)]
        assert remove_from_hand(hand, [Tile.of(5, 2)]) == [Tile.of(1, 1)]

    def test_remove_one_match_per_request(self):
        hand = [Tile.of(1, 1), Tile.of(1, 1), Tile.of(2, 2)]
        assert remove_from_hand(hand, [Tile.of(1, 1)]) == [Tile.of(1, 1), Tile.of(2, 2)]

    def test_remove_missing_tile_is_skipped(self):
        hand = [Tile.of(1, 1)]
        assert remove_from_hand(hand, [Tile.of(3, 4)]) == [Tile.of(1, 1)]

    def test_remove_does_not_mutate(self):
        hand = [Tile.of(1, 1)]
        remove_from_hand(hand, [Tile.of(1, 1)])
        assert hand == [Tile.of(1, 1)]

    def test_add_appends(self):
        hand = [Tile.of(1, 1)]
        result = add_to_hand(hand, [Tile.of(2, 2)])
        assert result == [Tile.of(1, 1), Tile.of(2, 2)]
        assert hand == [Tile.of(1, 1)]

    def test_hand_has_number(self):
        hand = [Tile.of(1, 2), Tile.of(4, 4)]
        assert hand_has_number(hand, 4)
        assert not hand_has_number(hand, 5)
        assert not hand_has_number([], 0)

    def test_contains_all_counts_multiplicity(self):
        hand = [Tile.of(1, 2), Tile.of(3, 4)]
        assert hand_contains_all(hand, [Tile.of(2, 1), Tile.of(4, 3)])
        assert not hand_contains_all(hand, [Tile.of(1, 2), Tile.of(1, 2)])
        assert not hand_contains_all(hand, [Tile.of(5, 5)])
        assert hand_contains_all(hand, [])
