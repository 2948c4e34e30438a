"""
Command-line interface for running Cruce bot games.

Usage examples:

    python -m cruce.cli simulate --games 20 --target-score 11 --seed 7
    cruce simulate --games 5 --log-level INFO
"""
from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

from .config import DEFAULT_MAX_HANDS, DEFAULT_TARGET_SCORE, GameConfig
from .game import run_match


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play complete games with bots in all four seats.",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=10,
        help="Number of games to play.",
    )
    parser.add_argument(
        "--target-score",
        type=int,
        default=DEFAULT_TARGET_SCORE,
        help="Game points a team needs to win a game.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for deals and bot decisions.",
    )
    parser.add_argument(
        "--max-hands",
        type=int,
        default=DEFAULT_MAX_HANDS,
        help="Give a game up as undecided after this many deals.",
    )
    parser.add_argument(
        "--difficulty",
        type=float,
        default=None,
        help="Bidding multiplier for every bot (lower bids more). Default: simulation table.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> tuple[int, int]:
    config = None
    if getattr(args, "difficulty", None) is not None:
        config = GameConfig(bot_difficulty={seat: args.difficulty for seat in range(4)})
    max_hands = getattr(args, "max_hands", None) or DEFAULT_MAX_HANDS

    wins, finals = run_match(
        args.games,
        target_score=args.target_score,
        rng=random.Random(args.seed),
        config=config,
        max_hands=max_hands,
    )
    for i, final in enumerate(finals, start=1):
        winner = "undecided" if final.winner_team is None else f"team {final.winner_team}"
        print(
            f"[game {i}/{args.games}] "
            f"hands={final.hand_number} "
            f"score={final.game_score[0]}-{final.game_score[1]} "
            f"winner={winner}",
            flush=True,
        )
    undecided = len(finals) - sum(wins)
    print(
        f"Wins: team 0 (seats 0+2) {wins[0]}, team 1 (seats 1+3) {wins[1]}, "
        f"undecided after {max_hands} hands {undecided}"
    )
    return wins


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cruce", description="Cruce game engine CLI.")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level, e.g. DEBUG, INFO, WARNING.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
