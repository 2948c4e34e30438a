"""
Bidding (licitație) for 4 players.
A bid is a number of game points (1..6) the bidder's team promises to make:
at least bid × 33 hand points. 0 means pass. Bidding ends when three seats
have passed and someone holds a bid; the bidder then leads and sets trump.
"""
from __future__ import annotations

from typing import NamedTuple

from .deal import PLAYERS
from .deck import Card, Rank, Suit
from .play import find_marriages

PASS = 0
MAX_BID = 6
POINTS_PER_GAME_POINT = 33


class TrumpSuggestion(NamedTuple):
    suit: Suit
    score: int
    reasoning: str


class BiddingAdvice(NamedTuple):
    recommended_bid: int
    reasoning: str


def is_valid_bid(bid: int, current_bid: int) -> bool:
    """Pass is always valid; a real bid must beat ``current_bid`` and not exceed 6."""
    if bid == PASS:
        return True
    if bid <= current_bid:
        return False
    if bid > MAX_BID:
        return False
    return True


def is_bidding_complete(passed_players, total_players: int = PLAYERS, highest_bid: int = 0) -> bool:
    """Complete when all but one seat passed and a bid stands."""
    return len(passed_players) == total_players - 1 and highest_bid > 0


def all_passed(passed_players, total_players: int = PLAYERS) -> bool:
    return len(passed_players) >= total_players


def suggest_trump_suit(hand: list[Card]) -> TrumpSuggestion:
    """
    Score each suit: length×10 + points + 40 for a marriage + 5 per 10/As.
    Ties go to the first suit in ``Suit`` order.
    """
    marriage_suits = {m.suit for m in find_marriages(hand)}
    best: TrumpSuggestion | None = None
    for suit in Suit:
        suit_cards = [c for c in hand if c.suit == suit]
        suit_points = sum(c.points for c in suit_cards)
        has_marriage = suit in marriage_suits
        high_cards = sum(1 for c in suit_cards if c.rank in (Rank.TEN, Rank.ACE))

        score = len(suit_cards) * 10
        score += suit_points
        score += 40 if has_marriage else 0
        score += high_cards * 5

        reasoning = (
            f"{len(suit_cards)} cards, {suit_points} points, "
            f"{'has' if has_marriage else 'no'} marriage, {high_cards} high cards"
        )
        if best is None or score > best.score:
            best = TrumpSuggestion(suit, score, reasoning)
    assert best is not None
    return best


def get_bidding_advice(hand: list[Card]) -> BiddingAdvice:
    """Recommended bid from raw points plus 20 per marriage (counted as non-trump)."""
    total_points = sum(c.points for c in hand)
    marriages = find_marriages(hand)
    high_cards = sum(1 for c in hand if c.rank in (Rank.TEN, Rank.ACE))
    potential = total_points + 20 * len(marriages)

    if potential >= 3 * POINTS_PER_GAME_POINT:
        bid = 3
        reasoning = (
            f"Strong hand with {total_points} card points, {len(marriages)} marriages, "
            f"and {high_cards} high cards."
        )
    elif potential >= 2 * POINTS_PER_GAME_POINT:
        bid = 2
        reasoning = f"Good hand with {total_points} card points and {len(marriages)} marriages."
    elif potential >= POINTS_PER_GAME_POINT:
        bid = 1
        reasoning = f"Decent hand with {total_points} card points, worth a conservative bid."
    else:
        bid = PASS
        reasoning = f"Weak hand with only {total_points} card points. Better to pass."

    if len(marriages) >= 2:
        bid = min(bid + 1, 4)
        reasoning += " Multiple marriages increase bid potential."

    return BiddingAdvice(bid, reasoning)
