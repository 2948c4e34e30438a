"""
Game state records: seats, phase, marriages, tricks, hand results, stats.
The Game State Machine in ``game.py`` is the only writer of ``GameState``.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum

from .deck import Card, Suit


class GamePhase(str, Enum):
    BIDDING = "bidding"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass
class Player:
    """One seat at the table."""

    id: str
    name: str
    hand: list[Card] = field(default_factory=list)
    is_human: bool = False
    score: int = 0


@dataclass(frozen=True)
class MarriageAnnouncement:
    seat: int
    suit: Suit
    value: int


@dataclass(frozen=True)
class TrickResult:
    """A completed trick: who led, who won, the cards in play order and their points."""

    leader: int
    winner: int
    cards: tuple[Card, ...]
    points: int


@dataclass(frozen=True)
class HandResult:
    team_scores: tuple[int, int]
    game_points: tuple[int, int]
    bid_made: bool
    bid: int = 0
    bidder: int = -1
    player_scores: tuple[int, ...] = ()
    marriages: tuple[MarriageAnnouncement, ...] = ()


@dataclass(frozen=True)
class GameStats:
    cards_per_player: int
    tricks_played: int
    tricks_remaining: int
    total_points: int
    game_score: tuple[int, int]
    target_score: int
    current_bid: int
    bidder: int
    trump_suit: Suit | None
    current_hand_points: tuple[int, int, int, int]


@dataclass
class GameState:
    """Single mutable aggregate for one hand (plus the carried game score)."""

    players: list[Player] = field(default_factory=list)
    phase: GamePhase = GamePhase.BIDDING
    current_player: int = 0
    trump_suit: Suit | None = None
    current_trick: list[Card] = field(default_factory=list)
    bid: int = 0
    bidder: int = -1
    passed_players: set[int] = field(default_factory=set)
    scores: list[int] = field(default_factory=lambda: [0, 0, 0, 0])
    game_score: list[int] = field(default_factory=lambda: [0, 0])
    target_score: int = 15
    marriage_announcements: list[MarriageAnnouncement] = field(default_factory=list)
    leading_player: int = 0
    trick_history: list[TrickResult] = field(default_factory=list)
    hand_number: int = 0
    last_hand_result: HandResult | None = None
    winner_team: int | None = None

    def hand_of(self, seat: int) -> list[Card]:
        return self.players[seat].hand

    def is_trick_leading(self) -> bool:
        return not self.current_trick

    def snapshot(self) -> "GameState":
        """Deep copy safe to hand out to observers."""
        return copy.deepcopy(self)
