"""Tests for the manual and asyncio schedulers."""
import asyncio
import random

import pytest

from cruce.config import SIMULATION_DIFFICULTY, GameConfig
from cruce.game import CruceGame
from cruce.scheduler import AsyncioScheduler, ManualScheduler
from cruce.state import GamePhase


def test_manual_scheduler_runs_in_due_order():
    scheduler = ManualScheduler()
    order = []
    scheduler.call_later(2.0, lambda: order.append("b"))
    scheduler.call_later(1.0, lambda: order.append("a"))
    scheduler.call_later(2.0, lambda: order.append("c"))
    assert order == []
    assert scheduler.pending == 3
    assert scheduler.run_until_idle() == 3
    assert order == ["a", "b", "c"]
    assert scheduler.now == 2.0


def test_manual_scheduler_advance_only_runs_due_timers():
    scheduler = ManualScheduler()
    order = []
    scheduler.call_later(1.0, lambda: order.append(1))
    scheduler.call_later(3.0, lambda: order.append(3))
    assert scheduler.advance(1.5) == 1
    assert order == [1]
    assert scheduler.now == 1.5
    assert scheduler.advance(1.5) == 1
    assert order == [1, 3]


def test_manual_scheduler_timers_scheduled_by_timers():
    scheduler = ManualScheduler()
    order = []

    def first():
        order.append("first")
        scheduler.call_later(0.5, lambda: order.append("second"))

    scheduler.call_later(1.0, first)
    scheduler.advance(1.0)
    assert order == ["first"]
    scheduler.advance(0.5)
    assert order == ["first", "second"]


def test_manual_scheduler_run_next_steps_one_timer():
    scheduler = ManualScheduler()
    order = []
    scheduler.call_later(2.0, lambda: order.append("b"))
    scheduler.call_later(1.0, lambda: order.append("a"))
    assert scheduler.run_next()
    assert order == ["a"]
    assert scheduler.now == 1.0
    assert scheduler.run_next()
    assert not scheduler.run_next()
    assert order == ["a", "b"]


def test_manual_scheduler_cancel():
    scheduler = ManualScheduler()
    order = []
    handle = scheduler.call_later(1.0, lambda: order.append("x"))
    scheduler.call_later(2.0, lambda: order.append("y"))
    handle.cancel()
    assert scheduler.pending == 1
    assert scheduler.advance(5.0) == 1
    assert order == ["y"]


def test_manual_scheduler_max_steps():
    scheduler = ManualScheduler()

    def forever():
        scheduler.call_later(1.0, forever)

    scheduler.call_later(0.0, forever)
    with pytest.raises(RuntimeError):
        scheduler.run_until_idle(max_steps=50)


@pytest.mark.asyncio
async def test_asyncio_scheduler_fires_callbacks():
    scheduler = AsyncioScheduler()
    fired = []
    scheduler.call_later(0.02, lambda: fired.append("late"))
    scheduler.call_later(0.0, lambda: fired.append("early"))
    await asyncio.sleep(0.05)
    assert fired == ["early", "late"]


@pytest.mark.asyncio
async def test_bot_game_on_event_loop():
    config = GameConfig(
        human_seats=(),
        target_score=3,
        bot_delay=0.0,
        trick_delay=0.0,
        next_hand_delay=0.0,
        bot_difficulty=dict(SIMULATION_DIFFICULTY),
    )
    game = CruceGame(config, AsyncioScheduler(), rng=random.Random(12))
    done = asyncio.Event()

    def on_state(state):
        if state.winner_team is not None:
            done.set()

    game.subscribe(on_state)
    game.start_new_game()
    await asyncio.wait_for(done.wait(), timeout=10)
    state = game.get_state()
    assert state.phase == GamePhase.FINISHED
    assert state.game_score[state.winner_team] >= 3
