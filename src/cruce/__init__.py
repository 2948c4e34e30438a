"""Cruce game engine (4 players, 2 teams, 24-card deck)."""

__version__ = "0.1.0"

from .deck import Card, Rank, Suit, create_deck, make_deck_24, validate_deck
from .deal import deal_cards, team_of
from .bidding import is_valid_bid, is_bidding_complete, suggest_trump_suit
from .play import (
    legal_plays,
    is_card_playable,
    determine_trick_winner,
    determine_trick_winner_seat,
    calculate_trick_points,
    can_announce_marriage,
    calculate_marriage_points,
    debug_trick_evaluation,
)
from .scoring import calculate_hand_result
from .validation import validate_game_state
from .state import GamePhase, GameState, GameStats, HandResult, Player
from .bots import BotPlay, evaluate_hand_strength, get_bot_bid, get_bot_play, get_hand_analysis
from .config import GameConfig
from .scheduler import AsyncioScheduler, ManualScheduler
from .game import CruceGame, play_bot_game, run_match
