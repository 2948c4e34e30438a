"""
Hand scoring: trick points + marriages per team, converted to game points.
Every full 33 hand points is one game point; a failed bid costs the bidding
team exactly ``bid`` game points.
"""
from __future__ import annotations

from typing import Sequence

from .bidding import POINTS_PER_GAME_POINT
from .deal import team_of
from .play import calculate_marriage_points, calculate_trick_points
from .state import HandResult, MarriageAnnouncement

__all__ = [
    "calculate_hand_result",
    "calculate_marriage_points",
    "calculate_trick_points",
    "convert_to_game_points",
    "marriage_scores_by_seat",
]


def convert_to_game_points(hand_points: int) -> int:
    return hand_points // POINTS_PER_GAME_POINT


def marriage_scores_by_seat(announcements: Sequence[MarriageAnnouncement], seats: int = 4) -> list[int]:
    scores = [0] * seats
    for a in announcements:
        scores[a.seat] += a.value
    return scores


def calculate_hand_result(
    player_scores: Sequence[int],
    marriage_scores: Sequence[int],
    bid: int,
    bidder: int,
) -> HandResult:
    """
    Team totals are seats 0+2 and 1+3 (trick points plus marriages).
    Both teams score floor(total / 33); if the bidder's team stays under
    bid × 33, its game points are replaced by -bid.
    A made bid is not credited as such: the bidding team scores the same
    floor conversion as the defenders.
    """
    totals = [
        score + (marriage_scores[i] if i < len(marriage_scores) else 0)
        for i, score in enumerate(player_scores)
    ]
    team_scores = (totals[0] + totals[2], totals[1] + totals[3])

    bidder_team = team_of(bidder)
    bid_made = team_scores[bidder_team] >= bid * POINTS_PER_GAME_POINT

    game_points = [convert_to_game_points(s) for s in team_scores]
    if not bid_made:
        game_points[bidder_team] = -bid

    return HandResult(
        team_scores=team_scores,
        game_points=(game_points[0], game_points[1]),
        bid_made=bid_made,
        bid=bid,
        bidder=bidder,
        player_scores=tuple(totals),
    )
