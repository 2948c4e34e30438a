from typing import Sequence

import pytest

from cruce.deck import Card, Rank, Suit

R, G, V, D = Suit.ROSU, Suit.GHINDA, Suit.VERDE, Suit.DUBA


def deck_from_hands(hands: Sequence[Sequence[Card]]) -> list[Card]:
    """Order a deck so that round-robin dealing gives seat i exactly ``hands[i]``."""
    deck: list[Card] = []
    for i in range(len(hands[0])):
        for hand in hands:
            deck.append(hand[i])
    return deck


# Every card exactly once; seat 0 holds the Roșu marriage.
FIXED_HANDS = (
    [Card(R, Rank.QUEEN), Card(R, Rank.KING), Card(R, Rank.ACE), Card(G, Rank.TEN), Card(V, Rank.TWO), Card(D, Rank.NINE)],
    [Card(R, Rank.TWO), Card(R, Rank.NINE), Card(G, Rank.ACE), Card(G, Rank.TWO), Card(V, Rank.TEN), Card(D, Rank.QUEEN)],
    [Card(R, Rank.TEN), Card(G, Rank.NINE), Card(G, Rank.QUEEN), Card(V, Rank.KING), Card(V, Rank.ACE), Card(D, Rank.TWO)],
    [Card(G, Rank.KING), Card(V, Rank.QUEEN), Card(V, Rank.NINE), Card(D, Rank.TEN), Card(D, Rank.ACE), Card(D, Rank.KING)],
)


@pytest.fixture
def fixed_deck() -> list[Card]:
    return deck_from_hands(FIXED_HANDS)

