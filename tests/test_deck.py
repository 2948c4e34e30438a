"""Tests for the deck and the deal."""
import random

import pytest

from cruce.deal import deal_cards, sort_hand, team_of, partner_of
from cruce.deck import (
    Card,
    Rank,
    Suit,
    cards_point_total,
    create_deck,
    find_duplicate_cards,
    make_deck_24,
    validate_deck,
)
from cruce.state import Player


def _players():
    return [Player(id=str(i + 1), name=f"P{i}") for i in range(4)]


def test_deck_24():
    deck = make_deck_24()
    assert len(deck) == 24
    assert len(set(deck)) == 24
    assert cards_point_total(deck) == 120


def test_card_points_and_ids():
    assert Card(Suit.ROSU, Rank.TWO).points == 2
    assert Card(Suit.ROSU, Rank.QUEEN).points == 3
    assert Card(Suit.ROSU, Rank.KING).points == 4
    assert Card(Suit.ROSU, Rank.NINE).points == 0
    assert Card(Suit.ROSU, Rank.TEN).points == 10
    assert Card(Suit.ROSU, Rank.ACE).points == 11
    assert Card(Suit.ROSU, Rank.QUEEN).id == "rosu-3"
    assert Card(Suit.DUBA, Rank.ACE).id == "duba-11"
    # equal by value, whatever the construction
    assert Card(Suit.VERDE, Rank.TEN) == Card(2, 10)


def test_create_deck_is_shuffled_copy():
    rng = random.Random(1)
    a = create_deck(rng)
    b = create_deck(rng)
    assert a is not b
    assert sorted(a, key=lambda c: c.id) == sorted(b, key=lambda c: c.id)
    assert a != make_deck_24()
    valid, errors = validate_deck(a)
    assert valid, errors


def test_validate_deck_reports_problems():
    deck = make_deck_24()
    deck[0] = deck[1]
    valid, errors = validate_deck(deck)
    assert not valid
    assert any("Missing card" in e for e in errors)
    assert any("Duplicate" in e for e in errors)
    assert any("Total points" in e for e in errors)

    valid, errors = validate_deck(make_deck_24()[:20])
    assert not valid
    assert any("24 cards" in e for e in errors)


def test_find_duplicate_cards():
    card = Card(Suit.GHINDA, Rank.ACE)
    assert find_duplicate_cards([card, Card(Suit.ROSU, Rank.TWO), Card(Suit.GHINDA, Rank.ACE)]) == [card]
    assert find_duplicate_cards(make_deck_24()) == []


def test_deal_cards_round_robin():
    deck = make_deck_24()
    players = _players()
    deal_cards(deck, players, 6)
    for p in players:
        assert len(p.hand) == 6
    all_cards = [c for p in players for c in p.hand]
    assert len(all_cards) == 24
    assert len(set(all_cards)) == 24
    # seat 0 got cards 0, 4, 8, ... of the deck
    assert set(players[0].hand) == set(deck[0::4])
    assert set(players[3].hand) == set(deck[3::4])


def test_deal_many_random_decks_never_duplicates():
    rng = random.Random(7)
    for _ in range(50):
        players = _players()
        deal_cards(create_deck(rng), players)
        all_cards = [c for p in players for c in p.hand]
        assert len(all_cards) == 24
        assert find_duplicate_cards(all_cards) == []


def test_dealt_hands_are_sorted_by_suit_then_value():
    players = _players()
    deal_cards(create_deck(random.Random(3)), players)
    for p in players:
        keys = [(int(c.suit), int(c.rank)) for c in p.hand]
        assert keys == sorted(keys)


def test_sort_hand():
    hand = [Card(Suit.DUBA, Rank.TWO), Card(Suit.ROSU, Rank.ACE), Card(Suit.ROSU, Rank.NINE)]
    sort_hand(hand)
    assert hand == [Card(Suit.ROSU, Rank.NINE), Card(Suit.ROSU, Rank.ACE), Card(Suit.DUBA, Rank.TWO)]


def test_deal_too_many_cards_raises():
    with pytest.raises(ValueError):
        deal_cards(make_deck_24(), _players(), 7)


def test_teams():
    assert [team_of(s) for s in range(4)] == [0, 1, 0, 1]
    assert partner_of(0) == 2
    assert partner_of(3) == 1
