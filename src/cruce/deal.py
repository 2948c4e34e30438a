"""
Distribution (deal) for the 4 Cruce seats.
Cards go out one at a time, round-robin from seat 0, 6 cards each.
"""
from __future__ import annotations

from typing import Protocol, Sequence

from .deck import Card

PLAYERS = 4
CARDS_PER_PLAYER = 6


class HasHand(Protocol):
    hand: list[Card]


def card_sort_value(card: Card) -> int:
    """Display order: suit group first, then face value."""
    return int(card.suit) * 100 + int(card.rank)


def sort_hand(hand: list[Card]) -> None:
    """Sort a hand in place for display. Legality never depends on this order."""
    hand.sort(key=card_sort_value)


def deal_cards(
    deck: Sequence[Card],
    players: Sequence[HasHand],
    per_player_count: int = CARDS_PER_PLAYER,
) -> None:
    """
    Deal ``per_player_count`` cards to every player, one per seat per round,
    starting from seat 0. Hands are extended in place, then sorted.
    """
    needed = per_player_count * len(players)
    if needed > len(deck):
        raise ValueError(f"Cannot deal {needed} cards from deck of {len(deck)}")

    idx = 0
    for _ in range(per_player_count):
        for player in players:
            player.hand.append(deck[idx])
            idx += 1

    for player in players:
        sort_hand(player.hand)


def next_seat(seat: int) -> int:
    """Play goes 0 -> 1 -> 2 -> 3 -> 0."""
    return (seat + 1) % PLAYERS


def team_of(seat: int) -> int:
    """Seats 0 and 2 are team 0, seats 1 and 3 are team 1."""
    return seat % 2


def partner_of(seat: int) -> int:
    return (seat + 2) % PLAYERS
