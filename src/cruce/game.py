"""
Game orchestration: deal → bid → play 6 tricks → score, hand after hand
until a team reaches the target score.

``CruceGame`` owns the only mutable ``GameState``. Human intents and bot
decisions both come in through ``make_bid`` / ``play_card``; after every
mutation a deep-copied snapshot goes out to the subscribed listeners. Bot
turns, trick collection and the next deal are deferred through a
``Scheduler`` and re-check the state they were scheduled against before
they run.
"""
from __future__ import annotations

import dataclasses
import logging
import random
from typing import Callable, Sequence

from .bidding import all_passed, is_bidding_complete, is_valid_bid
from .bots import get_bot_bid, get_bot_play, suggest_play
from .config import DEFAULT_MAX_HANDS, SIMULATION_DIFFICULTY, GameConfig
from .deal import PLAYERS, deal_cards, next_seat, team_of
from .deck import Card, create_deck
from .play import (
    available_marriages,
    calculate_marriage_points,
    calculate_trick_points,
    can_announce_marriage,
    determine_trick_winner_seat,
    is_card_playable,
    legal_plays,
)
from .scheduler import ManualScheduler, Scheduler
from .scoring import calculate_hand_result, marriage_scores_by_seat
from .state import (
    GamePhase,
    GameState,
    GameStats,
    MarriageAnnouncement,
    Player,
    TrickResult,
)
from .validation import validate_game_state

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class CruceGame:
    """State machine for one table of four seats."""

    def __init__(
        self,
        config: GameConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or GameConfig()
        self.scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.rng = rng or random.Random()
        self._state = GameState(target_score=self.config.target_score)
        self._listeners: list[Listener] = []
        # Bumped on every publish; deferred actions compare against it
        self._version = 0

    # ---- observers ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state snapshots. Returns the matching unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_state(self) -> GameState:
        return self._state.snapshot()

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def current_player(self) -> int:
        return self._state.current_player

    @property
    def hand_number(self) -> int:
        return self._state.hand_number

    @property
    def is_game_over(self) -> bool:
        return self._state.winner_team is not None

    def _publish(self) -> None:
        self._version += 1
        if logger.isEnabledFor(logging.DEBUG):
            valid, errors = validate_game_state(self._state, self.config.cards_per_player)
            if not valid:
                logger.error("Inconsistent game state: %s", "; ".join(errors))
        snapshot = self._state.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ---- deferred actions ----

    def _defer(self, delay: float, action: Callable[[], None], name: str) -> None:
        version = self._version
        hand_number = self._state.hand_number

        def run() -> None:
            if self._version != version:
                logger.debug(
                    "Dropping stale %s scheduled for hand %d (state moved on)", name, hand_number
                )
                return
            action()

        self.scheduler.call_later(delay, run)

    def _schedule_turn(self) -> None:
        s = self._state
        seat = s.current_player
        if s.players[seat].is_human:
            return
        if s.phase == GamePhase.BIDDING:
            self._defer(self.config.bot_delay, self._bot_bid, f"bot {seat} bid")
        elif s.phase == GamePhase.PLAYING and len(s.current_trick) < PLAYERS:
            self._defer(self.config.bot_delay, self._bot_play, f"bot {seat} play")

    def _bot_bid(self) -> None:
        s = self._state
        seat = s.current_player
        bid = get_bot_bid(
            s.hand_of(seat),
            s.bid,
            seat,
            rng=self.rng,
            difficulty=self.config.difficulty_for(seat),
        )
        self.make_bid(bid, seat=seat)

    def _bot_play(self) -> None:
        s = self._state
        seat = s.current_player
        choice = get_bot_play(
            s.hand_of(seat),
            s.current_trick,
            s.trump_suit,
            seat,
            s.players,
            s.marriage_announcements,
            rng=self.rng,
            difficulty=self.config.difficulty_for(seat),
        )
        self.play_card(choice.card, choice.announce_marriage, seat=seat)

    # ---- dealing ----

    def start_new_game(self, target_score: int | None = None, deck: Sequence[Card] | None = None) -> None:
        """
        Deal a hand and open the bidding at seat 0.
        The team score carries over while a game is in progress; it restarts
        at 0-0 when there is no game yet or the previous one was won.
        """
        prev = self._state
        if target_score is not None:
            prev.target_score = target_score
        if not prev.players or prev.winner_team is not None:
            prev.game_score = [0, 0]
            prev.winner_team = None
            prev.last_hand_result = None
        self._deal_hand(deck)

    def deal_next_hand(self) -> bool:
        """Deal the next hand of a game in progress (when ``auto_next_hand`` is off)."""
        s = self._state
        if s.phase != GamePhase.FINISHED or s.winner_team is not None:
            logger.warning("Cannot deal the next hand in phase %s", s.phase.value)
            return False
        self._deal_hand()
        return True

    def _deal_hand(self, deck: Sequence[Card] | None = None) -> None:
        prev = self._state
        players = [
            Player(
                id=str(seat + 1),
                name=self.config.player_names[seat],
                is_human=self.config.is_human(seat),
            )
            for seat in range(PLAYERS)
        ]
        cards = list(deck) if deck is not None else create_deck(self.rng)
        deal_cards(cards, players, self.config.cards_per_player)

        self._state = GameState(
            players=players,
            phase=GamePhase.BIDDING,
            current_player=0,
            game_score=list(prev.game_score),
            target_score=prev.target_score,
            hand_number=prev.hand_number + 1,
            last_hand_result=prev.last_hand_result,
        )
        logger.info(
            "Hand %d dealt (score %d-%d, playing to %d)",
            self._state.hand_number,
            self._state.game_score[0],
            self._state.game_score[1],
            self._state.target_score,
        )
        self._publish()
        self._schedule_turn()

    # ---- bidding ----

    def make_bid(self, bid: int, seat: int | None = None) -> bool:
        """
        Bid for the seat to act (0 passes). Without ``seat`` the bid is a UI
        intent and is accepted only while a human seat is to act. Returns False
        and leaves the state untouched when the bid is rejected.
        """
        s = self._state
        if s.phase != GamePhase.BIDDING:
            logger.warning("Bid %d rejected: not bidding (phase %s)", bid, s.phase.value)
            return False
        if seat is not None and seat != s.current_player:
            logger.warning("Bid %d rejected: seat %d is not to act (seat %d is)", bid, seat, s.current_player)
            return False
        if seat is None and not s.players[s.current_player].is_human:
            logger.warning("Bid %d rejected: seat %d is automated", bid, s.current_player)
            return False
        if not is_valid_bid(bid, s.bid):
            logger.warning("Bid %d rejected: current bid is %d", bid, s.bid)
            return False

        actor = s.current_player
        if bid > s.bid:
            s.bid = bid
            s.bidder = actor
            logger.info("Seat %d bids %d", actor, bid)
        else:
            s.passed_players.add(actor)
            logger.info("Seat %d passes", actor)

        if is_bidding_complete(s.passed_players, PLAYERS, s.bid):
            s.phase = GamePhase.PLAYING
            s.current_player = s.bidder
            s.trump_suit = None
            logger.info("Bidding won by seat %d with %d", s.bidder, s.bid)
            self._publish()
            self._schedule_turn()
            return True

        if all_passed(s.passed_players, PLAYERS):
            logger.info("All seats passed; redealing hand %d", s.hand_number)
            self._deal_hand()
            return True

        nxt = next_seat(actor)
        while nxt in s.passed_players:
            nxt = next_seat(nxt)
        s.current_player = nxt
        self._publish()
        self._schedule_turn()
        return True

    # ---- play ----

    def play_card(self, card: Card, announce_marriage: bool = False, seat: int | None = None) -> bool:
        """
        Play ``card`` for the seat to act, optionally announcing a marriage.
        Without ``seat`` the play is a UI intent and needs a human seat to act.
        Returns False and leaves the state untouched when the play is rejected.
        """
        s = self._state
        if s.phase != GamePhase.PLAYING:
            logger.warning("Play %s rejected: not playing (phase %s)", card, s.phase.value)
            return False
        if seat is not None and seat != s.current_player:
            logger.warning("Play %s rejected: seat %d is not to act (seat %d is)", card, seat, s.current_player)
            return False
        if seat is None and not s.players[s.current_player].is_human:
            logger.warning("Play %s rejected: seat %d is automated", card, s.current_player)
            return False
        if len(s.current_trick) >= PLAYERS:
            logger.warning("Play %s rejected: trick is being collected", card)
            return False
        actor = s.current_player
        hand = s.hand_of(actor)
        if card not in hand:
            logger.warning("Play %s rejected: not in seat %d's hand", card, actor)
            return False
        if not is_card_playable(card, s):
            logger.warning("Play %s rejected: seat %d must follow suit or trump", card, actor)
            return False

        leading = not s.current_trick
        if leading:
            s.leading_player = actor
            if actor == s.bidder and s.trump_suit is None:
                s.trump_suit = card.suit
                logger.info("Trump is %s", card.suit.name)

        if announce_marriage:
            if can_announce_marriage(card, hand, leading):
                value = calculate_marriage_points(card.suit, s.trump_suit)
                s.marriage_announcements.append(MarriageAnnouncement(actor, card.suit, value))
                logger.info("Seat %d announces a marriage in %s for %d", actor, card.suit.name, value)
            else:
                logger.warning("Seat %d cannot announce a marriage with %s; playing it plain", actor, card)

        hand.remove(card)
        s.current_trick.append(card)
        s.current_player = next_seat(actor)

        self._publish()
        if len(s.current_trick) == PLAYERS:
            self._defer(self.config.trick_delay, self._evaluate_trick, "trick evaluation")
        else:
            self._schedule_turn()
        return True

    def _evaluate_trick(self) -> None:
        s = self._state
        trick = list(s.current_trick)
        winner = determine_trick_winner_seat(trick, s.trump_suit, s.leading_player)
        points = calculate_trick_points(trick)

        s.scores[winner] += points
        s.players[winner].score += points
        s.trick_history.append(TrickResult(s.leading_player, winner, tuple(trick), points))
        s.current_trick = []
        s.current_player = winner
        logger.info("Seat %d takes trick %d for %d points", winner, len(s.trick_history), points)

        if all(not p.hand for p in s.players):
            self._finish_hand()
            return
        self._publish()
        self._schedule_turn()

    def _finish_hand(self) -> None:
        s = self._state
        marriage_scores = marriage_scores_by_seat(s.marriage_announcements, PLAYERS)
        trick_scores = list(s.scores)
        result = calculate_hand_result(trick_scores, marriage_scores, s.bid, s.bidder)
        result = dataclasses.replace(result, marriages=tuple(s.marriage_announcements))

        for seat in range(PLAYERS):
            s.scores[seat] += marriage_scores[seat]
            s.players[seat].score += marriage_scores[seat]
        for team in range(2):
            s.game_score[team] += result.game_points[team]
        s.last_hand_result = result
        s.phase = GamePhase.FINISHED
        logger.info(
            "Hand %d: bid %d by seat %d %s, teams %d-%d, game points %+d/%+d, score %d-%d",
            s.hand_number,
            s.bid,
            s.bidder,
            "made" if result.bid_made else "failed",
            result.team_scores[0],
            result.team_scores[1],
            result.game_points[0],
            result.game_points[1],
            s.game_score[0],
            s.game_score[1],
        )

        reached = [team for team in range(2) if s.game_score[team] >= s.target_score]
        if reached:
            if len(reached) == 1:
                s.winner_team = reached[0]
            elif s.game_score[0] != s.game_score[1]:
                s.winner_team = 0 if s.game_score[0] > s.game_score[1] else 1
            else:
                s.winner_team = team_of(s.bidder)
            logger.info("Team %d wins the game %d-%d", s.winner_team, s.game_score[0], s.game_score[1])
            self._publish()
            return

        self._publish()
        if self.config.auto_next_hand:
            self._defer(self.config.next_hand_delay, self._deal_hand, "next hand")

    # ---- read-only queries ----

    def is_card_playable(self, card: Card) -> bool:
        s = self._state
        if s.phase != GamePhase.PLAYING or len(s.current_trick) >= PLAYERS:
            return False
        return is_card_playable(card, s)

    def legal_cards(self) -> list[Card]:
        s = self._state
        if s.phase != GamePhase.PLAYING or len(s.current_trick) >= PLAYERS:
            return []
        return legal_plays(s.hand_of(s.current_player), s.current_trick, s.trump_suit)

    def get_available_marriages(self) -> list[dict]:
        """
        Marriages the seat to act may announce with its next card. The bidder's
        opening lead sets trump, so each of its marriages would count as trump.
        """
        s = self._state
        if s.phase != GamePhase.PLAYING or s.current_trick:
            return []
        hand = s.hand_of(s.current_player)
        if s.trump_suit is None and s.current_player == s.bidder:
            return [{"suit": m["suit"], "value": calculate_marriage_points(m["suit"], m["suit"])}
                    for m in available_marriages(hand, None)]
        return available_marriages(hand, s.trump_suit)

    def suggest_play(self) -> tuple[Card, str] | None:
        s = self._state
        if s.phase != GamePhase.PLAYING or len(s.current_trick) >= PLAYERS:
            return None
        return suggest_play(s.hand_of(s.current_player), s.current_trick, s.trump_suit)

    def get_game_stats(self) -> GameStats:
        s = self._state
        tricks_played = len(s.trick_history)
        return GameStats(
            cards_per_player=self.config.cards_per_player,
            tricks_played=tricks_played,
            tricks_remaining=self.config.cards_per_player - tricks_played,
            total_points=sum(s.scores),
            game_score=(s.game_score[0], s.game_score[1]),
            target_score=s.target_score,
            current_bid=s.bid,
            bidder=s.bidder,
            trump_suit=s.trump_suit,
            current_hand_points=(s.scores[0], s.scores[1], s.scores[2], s.scores[3]),
        )

    def game_summary(self) -> str:
        s = self._state
        summary = (
            f"Game to {s.target_score} points. "
            f"Score: team 0 {s.game_score[0]}, team 1 {s.game_score[1]}.\n"
        )
        if s.bid > 0 and s.bidder >= 0:
            summary += f"{s.players[s.bidder].name} bid {s.bid}"
            if s.trump_suit is not None:
                summary += f" with {s.trump_suit.name} as trump"
            summary += ".\n"
        summary += f"{len(s.trick_history)} of {self.config.cards_per_player} tricks played."
        return summary


def simulation_config(config: GameConfig | None = None) -> GameConfig:
    """
    All-bot version of ``config``. Without an explicit config the bots use
    ``SIMULATION_DIFFICULTY`` so that games reach their target.
    """
    if config is None:
        config = GameConfig(bot_difficulty=dict(SIMULATION_DIFFICULTY))
    return dataclasses.replace(config, human_seats=(), auto_next_hand=True)


def play_bot_game(
    target_score: int | None = None,
    rng: random.Random | None = None,
    config: GameConfig | None = None,
    max_hands: int = DEFAULT_MAX_HANDS,
) -> GameState:
    """
    Play one game with bots in all four seats on a manual scheduler.

    Returns the final state. A won game has ``winner_team`` set; a game
    still undecided after ``max_hands`` deals stops at the end of that hand
    (phase FINISHED, ``winner_team`` None).
    """
    scheduler = ManualScheduler()
    game = CruceGame(simulation_config(config), scheduler, rng=rng)
    game.start_new_game(target_score)
    while not game.is_game_over:
        if game.hand_number > max_hands or (
            game.phase == GamePhase.FINISHED and game.hand_number >= max_hands
        ):
            logger.info("Game undecided after %d hands", max_hands)
            break
        if not scheduler.run_next():
            break
    return game.get_state()


def run_match(
    num_games: int,
    target_score: int | None = None,
    rng: random.Random | None = None,
    config: GameConfig | None = None,
    max_hands: int = DEFAULT_MAX_HANDS,
) -> tuple[tuple[int, int], list[GameState]]:
    """
    Play ``num_games`` bot games. Returns (wins per team, final states);
    undecided games count for neither team.
    """
    if rng is None:
        rng = random.Random()
    wins = [0, 0]
    finals: list[GameState] = []
    for _ in range(num_games):
        final = play_bot_game(target_score, rng=rng, config=config, max_hands=max_hands)
        if final.winner_team is not None:
            wins[final.winner_team] += 1
        finals.append(final)
    return (wins[0], wins[1]), finals
