"""
Cruce deck: 24 cards (4 suits × 6 ranks).
Card points: 2→2, Treiar→3, Patrar→4, 9→0, 10→10, As→11. 120 points per deck.
"""
from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum


class Suit(IntEnum):
    """Roșu, Ghindă, Verde, Dubă. Order used for display and tie-breaks."""
    ROSU = 0
    GHINDA = 1
    VERDE = 2
    DUBA = 3


class Rank(IntEnum):
    """Face value of a card. Treiar plays the Queen, Patrar the King."""
    TWO = 2
    QUEEN = 3
    KING = 4
    NINE = 9
    TEN = 10
    ACE = 11


CARD_POINTS = {
    Rank.TWO: 2,
    Rank.QUEEN: 3,
    Rank.KING: 4,
    Rank.NINE: 0,
    Rank.TEN: 10,
    Rank.ACE: 11,
}

# Trick-taking order, unrelated to points: As > 10 > Patrar > Treiar > 9 > 2
TRICK_RANK = {
    Rank.TWO: 1,
    Rank.NINE: 2,
    Rank.QUEEN: 3,
    Rank.KING: 4,
    Rank.TEN: 5,
    Rank.ACE: 6,
}

RANK_NAMES = {
    Rank.TWO: "Doiar",
    Rank.QUEEN: "Treiar",
    Rank.KING: "Patrar",
    Rank.NINE: "Nouar",
    Rank.TEN: "Zecar",
    Rank.ACE: "As",
}

SUIT_NAMES = {
    Suit.ROSU: "Roșu",
    Suit.GHINDA: "Ghindă",
    Suit.VERDE: "Verde",
    Suit.DUBA: "Dubă",
}

CARDS_PER_SUIT = 6
TOTAL_CARDS = 24
TOTAL_POINTS = 120


@dataclass(frozen=True)
class Card:
    """A single Cruce card, identified by (suit, rank)."""

    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            object.__setattr__(self, "suit", Suit(self.suit))
        if not isinstance(self.rank, Rank):
            object.__setattr__(self, "rank", Rank(self.rank))

    @property
    def points(self) -> int:
        return CARD_POINTS[self.rank]

    @property
    def trick_rank(self) -> int:
        return TRICK_RANK[self.rank]

    @property
    def id(self) -> str:
        """Stable identifier, e.g. ``rosu-3``."""
        return f"{self.suit.name.lower()}-{int(self.rank)}"

    @property
    def display_name(self) -> str:
        return f"{RANK_NAMES[self.rank]} {SUIT_NAMES[self.suit]}"

    def is_marriage_rank(self) -> bool:
        return self.rank in (Rank.QUEEN, Rank.KING)

    def __str__(self) -> str:
        rank_str = {Rank.QUEEN: "Q", Rank.KING: "K", Rank.ACE: "A"}.get(self.rank) or str(int(self.rank))
        suit_char = "RGVD"[self.suit]
        return f"{rank_str}{suit_char}"

    def __repr__(self) -> str:
        return str(self)


def make_deck_24() -> list[Card]:
    """Build the full 24-card deck in canonical (suit, rank) order."""
    return [Card(s, r) for s in Suit for r in Rank]


def create_deck(rng: random.Random | None = None) -> list[Card]:
    """A freshly shuffled deck (uniform permutation)."""
    if rng is None:
        rng = random.Random()
    deck = make_deck_24()
    rng.shuffle(deck)
    return deck


def cards_point_total(cards: list[Card]) -> int:
    return sum(c.points for c in cards)


def find_duplicate_cards(cards: list[Card]) -> list[Card]:
    """Cards that occur more than once, in first-seen order."""
    counts = Counter(cards)
    return [c for c in counts if counts[c] > 1]


def validate_deck(cards: list[Card]) -> tuple[bool, list[str]]:
    """
    Check that ``cards`` form a complete Cruce deck.
    Returns (valid, errors); nothing is corrected.
    """
    errors: list[str] = []
    if len(cards) != TOTAL_CARDS:
        errors.append(f"Deck should have {TOTAL_CARDS} cards, has {len(cards)}")

    for suit in Suit:
        suit_cards = [c for c in cards if c.suit == suit]
        if len(suit_cards) != CARDS_PER_SUIT:
            errors.append(f"Suit {suit.name} should have {CARDS_PER_SUIT} cards, has {len(suit_cards)}")
        for rank in Rank:
            if not any(c.rank == rank for c in suit_cards):
                errors.append(f"Missing card: {int(rank)} of {suit.name}")

    for dup in find_duplicate_cards(cards):
        errors.append(f"Duplicate card: {dup.display_name}")

    total = cards_point_total(cards)
    if total != TOTAL_POINTS:
        errors.append(f"Total points should be {TOTAL_POINTS}, calculated {total}")

    return (not errors, errors)
