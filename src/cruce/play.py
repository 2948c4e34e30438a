"""
Trick-taking: legal moves, trick winner, marriages.
Must follow the led suit; without it, must play trump if one is set and held.
Highest trump wins the trick, else highest card of the led suit.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from .deal import PLAYERS
from .deck import CARD_POINTS, RANK_NAMES, TRICK_RANK, Card, Rank, Suit, find_duplicate_cards

if TYPE_CHECKING:
    from .state import GameState

TRUMP_MARRIAGE_VALUE = 40
REGULAR_MARRIAGE_VALUE = 20


class Marriage(NamedTuple):
    suit: Suit
    queen: Card
    king: Card


def card_rank(card: Card) -> int:
    """Trick-taking rank (2 < 9 < Treiar < Patrar < 10 < As), not the point value."""
    return card.trick_rank


def has_suit(hand: list[Card], suit: Suit) -> bool:
    return any(c.suit == suit for c in hand)


def legal_plays(hand: list[Card], trick: list[Card], trump_suit: Suit | None) -> list[Card]:
    """
    Cards from ``hand`` that may be played on ``trick`` (cards in play order).
    """
    if not trick:
        return list(hand)

    lead_suit = trick[0].suit
    if has_suit(hand, lead_suit):
        return [c for c in hand if c.suit == lead_suit]

    if trump_suit is not None and lead_suit != trump_suit and has_suit(hand, trump_suit):
        return [c for c in hand if c.suit == trump_suit]

    return list(hand)


def is_card_playable(card: Card, state: "GameState") -> bool:
    """True if the seat to act holds ``card`` and may legally play it now."""
    hand = state.hand_of(state.current_player)
    return card in legal_plays(hand, state.current_trick, state.trump_suit)


def compare_cards_for_trick(a: Card, b: Card, lead_suit: Suit, trump_suit: Suit | None) -> int:
    """
    > 0 if ``a`` beats ``b``, < 0 if ``b`` beats ``a``, 0 when neither
    follows the lead nor is trump.
    """
    a_trump = trump_suit is not None and a.suit == trump_suit
    b_trump = trump_suit is not None and b.suit == trump_suit
    if a_trump and not b_trump:
        return 1
    if b_trump and not a_trump:
        return -1
    if a_trump and b_trump:
        return card_rank(a) - card_rank(b)

    a_follows = a.suit == lead_suit
    b_follows = b.suit == lead_suit
    if a_follows and not b_follows:
        return 1
    if b_follows and not a_follows:
        return -1
    if a_follows and b_follows:
        return card_rank(a) - card_rank(b)
    return 0


def winning_position(trick: list[Card], trump_suit: Suit | None) -> int:
    """Position of the card currently winning a (possibly partial) trick."""
    if not trick:
        raise ValueError("Empty trick has no winner")
    lead_suit = trick[0].suit
    best = 0
    for pos in range(1, len(trick)):
        if compare_cards_for_trick(trick[pos], trick[best], lead_suit, trump_suit) > 0:
            best = pos
    return best


def determine_trick_winner(trick: list[Card], trump_suit: Suit | None) -> int:
    """
    Position (0..3) in ``trick`` of the winning card.
    Callers map it to a seat with ``determine_trick_winner_seat``.
    """
    if len(trick) != PLAYERS:
        raise ValueError(f"Trick must have exactly {PLAYERS} cards, has {len(trick)}")
    if find_duplicate_cards(trick):
        raise ValueError(f"Trick contains duplicate cards: {trick}")
    return winning_position(trick, trump_suit)


def determine_trick_winner_seat(trick: list[Card], trump_suit: Suit | None, leading_player: int) -> int:
    """Absolute seat that won ``trick`` when ``leading_player`` played its first card."""
    return (leading_player + determine_trick_winner(trick, trump_suit)) % PLAYERS


def calculate_trick_points(trick: list[Card]) -> int:
    return sum(c.points for c in trick)


class TrickCard(NamedTuple):
    card: Card
    rank: int
    is_trump: bool
    follows_lead: bool
    seat: int


class TrickEvaluation(NamedTuple):
    winner: int
    winner_seat: int
    explanation: str
    cards: list[TrickCard]


def card_hierarchy_explanation() -> str:
    ranks = sorted(Rank, key=lambda r: TRICK_RANK[r], reverse=True)
    order = " > ".join(f"{RANK_NAMES[r]} ({CARD_POINTS[r]} pts)" for r in ranks)
    return f"Cruce card hierarchy (highest to lowest): {order}"


def debug_trick_evaluation(
    trick: list[Card],
    trump_suit: Suit | None,
    leading_player: int = 0,
) -> TrickEvaluation:
    """Card-by-card breakdown of a complete trick and who takes it."""
    winner = determine_trick_winner(trick, trump_suit)
    winner_seat = (leading_player + winner) % PLAYERS
    lead_suit = trick[0].suit

    cards = [
        TrickCard(
            card=card,
            rank=card_rank(card),
            is_trump=trump_suit is not None and card.suit == trump_suit,
            follows_lead=card.suit == lead_suit,
            seat=(leading_player + pos) % PLAYERS,
        )
        for pos, card in enumerate(trick)
    ]

    trump_name = trump_suit.name if trump_suit is not None else "None"
    lines = [f"Lead suit: {lead_suit.name}. Trump: {trump_name}. Leading player: {leading_player}"]
    for item in cards:
        lines.append(
            f"Player {item.seat}: {item.card.display_name} "
            f"(rank: {item.rank}, {'TRUMP' if item.is_trump else 'not trump'}, "
            f"{'follows lead' if item.follows_lead else 'off suit'})"
        )
    lines.append(
        f"Winner position in trick: {winner}, Actual player: {winner_seat} "
        f"with {trick[winner].display_name}"
    )
    return TrickEvaluation(winner, winner_seat, "\n".join(lines), cards)


def _marriage_partner_rank(rank: Rank) -> Rank:
    return Rank.KING if rank == Rank.QUEEN else Rank.QUEEN


def can_announce_marriage(card: Card, hand: list[Card], is_leading_card: bool) -> bool:
    """A marriage is announced only when leading a Treiar or Patrar whose partner is in hand."""
    if not is_leading_card:
        return False
    if not card.is_marriage_rank():
        return False
    partner = Card(card.suit, _marriage_partner_rank(card.rank))
    return partner in hand


def find_marriages(hand: list[Card]) -> list[Marriage]:
    marriages: list[Marriage] = []
    for suit in Suit:
        queen = Card(suit, Rank.QUEEN)
        king = Card(suit, Rank.KING)
        if queen in hand and king in hand:
            marriages.append(Marriage(suit, queen, king))
    return marriages


def calculate_marriage_points(suit: Suit, trump_suit: Suit | None) -> int:
    return TRUMP_MARRIAGE_VALUE if suit == trump_suit else REGULAR_MARRIAGE_VALUE


def available_marriages(hand: list[Card], trump_suit: Suit | None) -> list[dict]:
    """Marriages held in ``hand`` with their current value: [{"suit": ..., "value": ...}]."""
    return [
        {"suit": m.suit, "value": calculate_marriage_points(m.suit, trump_suit)}
        for m in find_marriages(hand)
    ]


def play_rule_explanation(card: Card, state: "GameState") -> str:
    """Human-readable reason why ``card`` is or is not playable for the seat to act."""
    hand = state.hand_of(state.current_player)
    trick = state.current_trick
    trump_suit = state.trump_suit

    if not trick:
        return "You are leading this trick and can play any card."

    lead_suit = trick[0].suit
    if has_suit(hand, lead_suit):
        if card.suit == lead_suit:
            return f"You must follow suit ({lead_suit.name}) and this card is valid."
        return f"You must follow suit ({lead_suit.name}). This card is not playable."

    if trump_suit is not None and lead_suit != trump_suit and has_suit(hand, trump_suit):
        if card.suit == trump_suit:
            return "You cannot follow suit, so you must play trump. This trump card is valid."
        return "You cannot follow suit and must play trump. This card is not playable."

    return "You cannot follow suit and have no trump, so you can play any card."
