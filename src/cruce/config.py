"""Table configuration for a Cruce game."""
from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_TARGET_SCORE = 15

# Scales bidding thresholds per seat: lower values bid more eagerly.
# Seats at or above HARD_DIFFICULTY also lead and follow more aggressively.
BOT_DIFFICULTY: dict[int, float] = {0: 0.3, 1: 0.5, 2: 0.4, 3: 0.6}
DEFAULT_DIFFICULTY = 1.0
HARD_DIFFICULTY = 0.5

# Table-seat multipliers above overbid badly when all four seats are bots
# (bids of 4-5 against ~60 points per team), so scores drift down forever.
# Simulations use these instead; an average hand then bids 1-2.
SIMULATION_DIFFICULTY: dict[int, float] = {0: 2.0, 1: 2.0, 2: 2.0, 3: 2.0}

# Hands dealt (redeals included) before an all-bot game is given up
DEFAULT_MAX_HANDS = 500


@dataclass
class GameConfig:
    """Configuration for one table. Delays are in seconds of scheduler time."""

    target_score: int = DEFAULT_TARGET_SCORE
    cards_per_player: int = 6
    human_seats: tuple[int, ...] = (0,)
    player_names: tuple[str, str, str, str] = ("Player", "Bot 1", "Bot 2", "Bot 3")
    # Bot "thinking time" before a bid or a card
    bot_delay: float = 1.0
    # Pause with 4 cards on the table before the trick is collected
    trick_delay: float = 1.5
    # Pause on the scoring screen before the next hand is dealt
    next_hand_delay: float = 3.0
    auto_next_hand: bool = True
    bot_difficulty: dict[int, float] = field(default_factory=lambda: dict(BOT_DIFFICULTY))

    def difficulty_for(self, seat: int) -> float:
        return self.bot_difficulty.get(seat, DEFAULT_DIFFICULTY)

    def is_human(self, seat: int) -> bool:
        return seat in self.human_seats
