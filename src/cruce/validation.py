"""
Diagnostics over a live game state. Nothing here repairs state; callers
decide whether a finding is fatal.
"""
from __future__ import annotations

from .deal import CARDS_PER_PLAYER, PLAYERS
from .deck import Card, find_duplicate_cards
from .bidding import MAX_BID
from .play import is_card_playable
from .state import GameState


def validate_game_state(
    state: GameState,
    cards_per_player: int = CARDS_PER_PLAYER,
) -> tuple[bool, list[str]]:
    """Structural consistency checks. Returns (valid, errors)."""
    errors: list[str] = []

    if len(state.players) != PLAYERS:
        errors.append(f"Game must have exactly {PLAYERS} players, has {len(state.players)}")

    for index, player in enumerate(state.players):
        if len(player.hand) > cards_per_player:
            errors.append(f"Player {index} has too many cards: {len(player.hand)}")

    if not 0 <= state.current_player < len(state.players):
        errors.append(f"Invalid current player index: {state.current_player}")

    if len(state.current_trick) > PLAYERS:
        errors.append(f"Trick cannot have more than {PLAYERS} cards, has {len(state.current_trick)}")

    if not 0 <= state.bid <= MAX_BID:
        errors.append(f"Invalid bid amount: {state.bid}")

    if state.bidder != -1 and not 0 <= state.bidder < len(state.players):
        errors.append(f"Invalid bidder index: {state.bidder}")

    return (not errors, errors)


def detect_rule_violations(state: GameState, played_card: Card | None = None) -> list[str]:
    """Suit-following violation of ``played_card`` and duplicates across hands and trick."""
    violations: list[str] = []

    if played_card is not None and not is_card_playable(played_card, state):
        violations.append("Card played violates suit-following rules")

    all_cards: list[Card] = [c for p in state.players for c in p.hand]
    all_cards.extend(state.current_trick)
    for dup in find_duplicate_cards(all_cards):
        violations.append(f"Duplicate card detected: {dup.display_name}")

    return violations
