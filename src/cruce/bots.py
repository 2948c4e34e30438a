"""
Heuristic decisions for the automated seats.

Bots never touch the game state: they read a hand and the table and return
a bid or a ``BotPlay`` that the game applies through its public operations.
Each seat has a fixed difficulty multiplier (see ``config.BOT_DIFFICULTY``)
so the three bots behave differently without per-seat branches.
"""
from __future__ import annotations

import logging
import random
from typing import NamedTuple, Sequence

from .bidding import MAX_BID, PASS
from .config import BOT_DIFFICULTY, DEFAULT_DIFFICULTY, HARD_DIFFICULTY
from .deck import Card, Rank, Suit
from .play import (
    available_marriages,
    calculate_marriage_points,
    card_rank,
    compare_cards_for_trick,
    find_marriages,
    legal_plays,
    winning_position,
)
from .state import MarriageAnnouncement, Player

logger = logging.getLogger(__name__)

# (threshold, bid), checked from the top
BID_THRESHOLDS = ((80, 4), (65, 3), (50, 2), (35, 1))
AGGRESSIVE_BID_CHANCE = 0.2
CONSERVATIVE_BID_CHANCE = 0.2
# Chance that a seat below HARD_DIFFICULTY bothers to win a trick it could win
CASUAL_WIN_CHANCE = 0.5
LEAD_CANDIDATES = 3
# Rough hand strength needed per bid level
STRENGTH_PER_BID = 30


class BotPlay(NamedTuple):
    card: Card
    announce_marriage: bool = False


def get_bot_difficulty(seat: int) -> float:
    return BOT_DIFFICULTY.get(seat, DEFAULT_DIFFICULTY)


def suit_distribution(hand: Sequence[Card]) -> list[int]:
    counts = [0] * len(Suit)
    for c in hand:
        counts[c.suit] += 1
    return counts


def evaluate_hand_strength(hand: Sequence[Card]) -> float:
    """
    points×1.5 + 25 per marriage + 8 per As/10 + 5 per suit held
    + 10 per card beyond two in the longest suit (from three cards on).
    """
    strength = sum(c.points for c in hand) * 1.5
    strength += len(find_marriages(list(hand))) * 25
    strength += sum(1 for c in hand if c.rank in (Rank.ACE, Rank.TEN)) * 8

    counts = suit_distribution(hand)
    strength += sum(1 for n in counts if n > 0) * 5
    longest = max(counts) if counts else 0
    if longest >= 3:
        strength += (longest - 2) * 10
    return strength


def recommended_bid(strength: float) -> int:
    """Bid level for a (difficulty-scaled) hand strength, 0 below every threshold."""
    for threshold, value in BID_THRESHOLDS:
        if strength >= threshold:
            return value
    return PASS


class HandAnalysis(NamedTuple):
    total_points: int
    marriages: list[dict]
    strength: int
    high_cards: int
    trump_cards: int
    suit_distribution: dict[Suit, int]
    recommended_bid: int


def get_hand_analysis(hand: Sequence[Card], trump_suit: Suit | None = None) -> HandAnalysis:
    """Summary of a hand for display next to the bidding controls."""
    strength = evaluate_hand_strength(hand)
    counts = suit_distribution(hand)
    return HandAnalysis(
        total_points=sum(c.points for c in hand),
        marriages=available_marriages(list(hand), trump_suit),
        strength=round(strength),
        high_cards=sum(1 for c in hand if c.rank in (Rank.ACE, Rank.TEN)),
        trump_cards=0 if trump_suit is None else sum(1 for c in hand if c.suit == trump_suit),
        suit_distribution={suit: counts[suit] for suit in Suit},
        recommended_bid=recommended_bid(strength),
    )


def evaluate_bid_reasonableness(hand: Sequence[Card], bid: int) -> tuple[bool, str]:
    """Whether the hand's strength backs ``bid`` (about 30 strength per level)."""
    strength = evaluate_hand_strength(hand)
    required = bid * STRENGTH_PER_BID
    if strength >= required:
        return True, f"Hand strength ({strength:.1f}) supports bid of {bid}"
    return False, f"Hand strength ({strength:.1f}) too low for bid of {bid} (need ~{required})"


def get_bot_bid(
    hand: Sequence[Card],
    current_bid: int,
    seat: int,
    rng: random.Random | None = None,
    difficulty: float | None = None,
) -> int:
    """Bid for ``seat`` given the standing bid; 0 means pass."""
    if rng is None:
        rng = random.Random()
    if difficulty is None:
        difficulty = get_bot_difficulty(seat)

    strength = evaluate_hand_strength(hand)
    bid = recommended_bid(strength / difficulty)

    roll = rng.random()
    if roll > 1.0 - AGGRESSIVE_BID_CHANCE and bid > 0:
        bid += 1
    elif roll < CONSERVATIVE_BID_CHANCE and bid > 1:
        bid -= 1
    bid = min(bid, MAX_BID)

    if bid > current_bid:
        logger.debug("Bot %d hand strength %.1f, bids %d", seat, strength, bid)
        return bid
    logger.debug("Bot %d hand strength %.1f, passes (current bid %d)", seat, strength, current_bid)
    return PASS


def _highest(cards: Sequence[Card]) -> Card:
    return max(cards, key=card_rank)


def _lowest(cards: Sequence[Card]) -> Card:
    return min(cards, key=card_rank)


def choose_marriage_lead(hand: Sequence[Card], trump_suit: Suit | None) -> Card | None:
    """Best marriage card to lead: highest value (trump first), Patrar before Treiar."""
    marriages = available_marriages(list(hand), trump_suit)
    if not marriages:
        return None
    best = marriages[0]
    for m in marriages[1:]:
        if m["value"] > best["value"]:
            best = m
    king = Card(best["suit"], Rank.KING)
    if king in hand:
        return king
    return Card(best["suit"], Rank.QUEEN)


def select_lead_card(
    playable: Sequence[Card],
    trump_suit: Suit | None,
    difficulty: float,
    rng: random.Random,
) -> Card:
    if difficulty >= HARD_DIFFICULTY:
        trumps = [c for c in playable if trump_suit is not None and c.suit == trump_suit]
        aces = [c for c in playable if c.rank == Rank.ACE]
        tens = [c for c in playable if c.rank == Rank.TEN]
        if trumps and rng.random() > 0.3:
            return _highest(trumps)
        if aces and rng.random() > 0.4:
            return rng.choice(aces)
        if tens and rng.random() > 0.5:
            return rng.choice(tens)

    ranked = sorted(playable, key=lambda c: c.points, reverse=True)
    return rng.choice(ranked[:LEAD_CANDIDATES])


def select_follow_card(
    playable: Sequence[Card],
    current_trick: Sequence[Card],
    trump_suit: Suit | None,
    difficulty: float,
    rng: random.Random,
) -> Card:
    lead_suit = current_trick[0].suit
    winning = current_trick[winning_position(list(current_trick), trump_suit)]
    winners = [c for c in playable if compare_cards_for_trick(c, winning, lead_suit, trump_suit) > 0]

    wants_to_win = difficulty >= HARD_DIFFICULTY or rng.random() < CASUAL_WIN_CHANCE
    if winners and wants_to_win:
        return _lowest(winners)

    blanks = [c for c in playable if c.points == 0]
    if blanks:
        return rng.choice(blanks)
    return _lowest(playable)


def get_bot_play(
    hand: Sequence[Card],
    current_trick: Sequence[Card],
    trump_suit: Suit | None,
    seat: int,
    all_players: Sequence[Player] = (),
    marriage_announcements: Sequence[MarriageAnnouncement] = (),
    rng: random.Random | None = None,
    difficulty: float | None = None,
) -> BotPlay:
    """Card (and marriage flag) for ``seat``. ``hand`` must not be empty."""
    if rng is None:
        rng = random.Random()
    if difficulty is None:
        difficulty = get_bot_difficulty(seat)

    playable = legal_plays(list(hand), list(current_trick), trump_suit)
    if not playable:
        raise ValueError(f"Bot {seat} has no playable card")

    if not current_trick:
        marriage_card = choose_marriage_lead(hand, trump_suit)
        if marriage_card is not None:
            logger.debug("Bot %d leads %s and announces a marriage", seat, marriage_card)
            return BotPlay(marriage_card, True)
        card = select_lead_card(playable, trump_suit, difficulty, rng)
    else:
        card = select_follow_card(playable, current_trick, trump_suit, difficulty, rng)

    logger.debug("Bot %d plays %s", seat, card)
    return BotPlay(card, False)


def suggest_play(
    hand: Sequence[Card],
    current_trick: Sequence[Card],
    trump_suit: Suit | None,
) -> tuple[Card, str]:
    """Deterministic advice for a human seat: (card, reason)."""
    playable = legal_plays(list(hand), list(current_trick), trump_suit)
    if not playable:
        raise ValueError("No playable cards available")

    if not current_trick:
        marriage_card = choose_marriage_lead(hand, trump_suit)
        if marriage_card is not None:
            value = calculate_marriage_points(marriage_card.suit, trump_suit)
            return marriage_card, f"Play marriage in {marriage_card.suit.name} for {value} points"
        scoring = [c for c in playable if c.points > 0]
        if scoring:
            best = max(scoring, key=lambda c: (c.points, card_rank(c)))
            return best, f"Lead with high-value card ({best.points} points)"
        return playable[0], "Lead with any card"

    lead_suit = current_trick[0].suit
    winning = current_trick[winning_position(list(current_trick), trump_suit)]
    winners = [c for c in playable if compare_cards_for_trick(c, winning, lead_suit, trump_suit) > 0]
    if winners:
        return _lowest(winners), "Win trick with lowest winning card"
    blanks = [c for c in playable if c.points == 0]
    if blanks:
        return blanks[0], "Cannot win, play low card to save points"
    return _lowest(playable), "Cannot win, play lowest available card"
