"""
Tests for engine.py - the fixed-rate game loop.
"""

import logging
import os
import random
import sys
import threading
import time
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from snakegame import GameConfig, GameEngine  # noqa: E402
from snakegame.domain import (  # noqa: E402
    UP, DOWN, LEFT, RIGHT,
    Cell,
    CellOutOfBoundsError,
    CellState,
    ConfigurationError,
    MoveOutcome,
    SessionStatus,
    Sound,
)
from snakegame.services import AudioSink, RecordingRenderSink, ScoreBoard  # noqa: E402


def make_engine(rows=40, cols=40, start=None, wrap=False, fruit=Cell(0, 0), tick_rate=12.0, seed=42):
    """Build an engine with recording collaborators and a known fruit position."""
    config = GameConfig(rows=rows, cols=cols, start=start, wrap=wrap, tick_rate=tick_rate)
    render = RecordingRenderSink()
    score = ScoreBoard()
    audio = MagicMock(spec=AudioSink)
    engine = GameEngine(config, render_sink=render, score_sink=score, audio=audio,
                        rng=random.Random(seed))
    if fruit is not None:
        engine.fruit.position = fruit
    render.clear()
    return engine, render, score, audio


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class TestConstruction:
    """Tests for GameEngine construction."""

    def test_defaults(self):
        engine = GameEngine(rng=random.Random(1))
        assert engine.status is SessionStatus.NOT_STARTED
        assert engine.snake.head == Cell(20, 20)
        assert engine.fruit.position not in engine.snake
        assert engine.score == 0

    def test_initial_render_events(self):
        render = RecordingRenderSink()
        engine = GameEngine(GameConfig(rows=10, cols=10), render_sink=render,
                            rng=random.Random(3))
        assert render.events == [
            (Cell(5, 5), CellState.SNAKE),
            (engine.fruit.position, CellState.FRUIT),
        ]

    @pytest.mark.parametrize("config", [
        GameConfig(rows=0, cols=10),
        GameConfig(rows=10, cols=-3),
        GameConfig(rows=1, cols=1),
        GameConfig(rows=10, cols=10, start=(10, 0)),
        GameConfig(rows=10, cols=10, start=(0, -1)),
        GameConfig(rows=10, cols=10, tick_rate=0),
        GameConfig(rows=10, cols=10, tick_rate=float("nan")),
        GameConfig(rows=10, cols=10, tick_rate=float("inf")),
        GameConfig(rows=10, cols=10, log_level="LOUD"),
    ])
    def test_invalid_config_fails_fast(self, config):
        with pytest.raises(ConfigurationError):
            GameEngine(config)


class TestInput:
    """Tests for direction requests."""

    def test_reversal_is_rejected_and_session_stays_idle(self):
        engine, _, _, audio = make_engine(start=(20, 20))
        assert engine.request_direction(RIGHT) is False
        assert engine.status is SessionStatus.NOT_STARTED
        assert engine.snake.direction is LEFT
        audio.play.assert_not_called()

    def test_first_accepted_input_starts_session(self):
        engine, _, _, audio = make_engine(start=(20, 20))
        assert engine.request_direction(DOWN) is True
        assert engine.status is SessionStatus.RUNNING
        audio.play.assert_called_once_with(Sound.GAME_START)

    def test_accepts_strings_and_ignores_unknown_directions(self):
        engine, _, _, _ = make_engine()
        assert engine.request_direction("SIDEWAYS") is False
        assert engine.status is SessionStatus.NOT_STARTED
        assert engine.request_direction("UP") is True
        assert engine.snake.direction is UP

    def test_last_write_wins_between_ticks(self):
        engine, _, _, _ = make_engine(start=(20, 20))
        engine.request_direction(UP)
        engine.request_direction(LEFT)
        engine.tick()
        assert engine.snake.head == Cell(19, 20)

    def test_input_after_game_over_is_ignored(self):
        engine, _, _, _ = make_engine(start=(0, 5))
        engine.request_direction(LEFT)
        engine.tick()
        assert engine.is_over
        assert engine.request_direction(UP) is False
        assert engine.snake.direction is LEFT

    def test_input_waiting_on_a_tick_sees_game_over(self):
        """A request that arrives while a colliding tick runs is rejected once the tick ends."""
        engine, _, _, _ = make_engine(start=(0, 5))
        engine.request_direction(LEFT)
        results = []

        with engine._state_lock:
            worker = threading.Thread(
                target=lambda: results.append(engine.request_direction(UP))
            )
            worker.start()
            time.sleep(0.05)
            assert worker.is_alive()
            # Same transition a colliding tick makes while holding the lock
            engine._end_session()

        worker.join(timeout=1.0)
        assert results == [False]
        assert engine.snake.direction is LEFT
        assert engine.snapshot().direction is LEFT


class TestTick:
    """Tests for a single tick."""

    def test_tick_is_skipped_before_first_input(self):
        engine, render, _, _ = make_engine(start=(20, 20))
        assert engine.tick() is None
        assert engine.tick_count == 0
        assert engine.snake.body() == [Cell(20, 20)]
        assert render.events == []

    def test_reversal_then_down_moves_head_down(self):
        engine, _, _, _ = make_engine(rows=40, cols=40, start=(20, 20))
        assert engine.request_direction(RIGHT) is False
        assert engine.request_direction(DOWN) is True

        assert engine.tick() is MoveOutcome.MOVED
        assert engine.snake.head == Cell(20, 21)

    def test_moved_emits_head_then_vacated_tail(self):
        engine, render, score, audio = make_engine(start=(20, 20))
        engine.request_direction(UP)
        audio.reset_mock()

        engine.tick()

        assert render.events == [
            (Cell(20, 19), CellState.SNAKE),
            (Cell(20, 20), CellState.EMPTY),
        ]
        assert score.score == 0
        audio.play.assert_not_called()

    def test_eating_fruit_grows_scores_and_replaces_fruit(self):
        engine, render, score, audio = make_engine(start=(7, 5), fruit=Cell(5, 5))
        engine.request_direction(LEFT)

        assert engine.tick() is MoveOutcome.MOVED
        render.clear()
        assert engine.tick() is MoveOutcome.ATE

        assert engine.snake.head == Cell(5, 5)
        assert len(engine.snake) == 2
        new_fruit = engine.fruit.position
        assert new_fruit not in engine.snake
        assert render.events == [
            (Cell(5, 5), CellState.SNAKE),
            (new_fruit, CellState.FRUIT),
        ]
        assert engine.score == 1
        assert score.score == 1
        audio.play.assert_called_with(Sound.EAT)

    def test_wall_collision_ends_session(self):
        engine, render, _, audio = make_engine(start=(0, 12), wrap=False)
        engine.request_direction(LEFT)

        assert engine.tick() is MoveOutcome.COLLIDED

        assert engine.status is SessionStatus.OVER
        assert render.events == []
        audio.play.assert_called_with(Sound.GAME_OVER)
        audio.release.assert_called_once()

    def test_ticks_after_game_over_change_nothing(self):
        engine, render, score, _ = make_engine(start=(0, 12), wrap=False)
        engine.request_direction(LEFT)
        engine.tick()
        body = engine.snake.body()
        fruit = engine.fruit.position
        ticks = engine.tick_count

        assert engine.tick() is None
        assert engine.tick() is None

        assert engine.snake.body() == body
        assert engine.fruit.position == fruit
        assert engine.tick_count == ticks
        assert render.events == []
        assert score.score == 0

    def test_wrap_enabled_moves_through_edge(self):
        engine, _, _, _ = make_engine(rows=40, cols=40, start=(0, 12), wrap=True)
        engine.request_direction(LEFT)
        assert engine.tick() is MoveOutcome.MOVED
        assert engine.snake.head == Cell(39, 12)
        assert engine.status is SessionStatus.RUNNING

    def test_audio_failure_does_not_stop_the_tick(self, caplog):
        engine, _, score, audio = make_engine(start=(6, 5), fruit=Cell(5, 5))
        audio.play.side_effect = RuntimeError("device busy")

        with caplog.at_level(logging.WARNING, logger="snakegame.engine"):
            assert engine.request_direction(LEFT) is True
            assert engine.tick() is MoveOutcome.ATE

        assert score.score == 1
        assert engine.status is SessionStatus.RUNNING
        assert "device busy" in caplog.text

    def test_audio_release_failure_still_ends_session(self):
        engine, _, _, audio = make_engine(start=(0, 0), fruit=Cell(5, 5))
        audio.release.side_effect = OSError("already closed")
        engine.request_direction(UP)
        assert engine.tick() is MoveOutcome.COLLIDED
        assert engine.is_over

    def test_game_over_callback_receives_final_snapshot(self):
        engine, _, _, _ = make_engine(start=(0, 3))
        seen = []
        engine.on_game_over(seen.append)
        engine.request_direction(LEFT)
        engine.tick()
        assert len(seen) == 1
        assert seen[0].is_over
        assert seen[0].head == Cell(0, 3)


class TestSnapshot:
    """Tests for the read side."""

    def test_snapshot_reflects_state(self):
        engine, _, _, _ = make_engine(rows=10, cols=10, start=(5, 5), fruit=Cell(1, 1))
        engine.request_direction(UP)
        engine.tick()
        state = engine.snapshot()
        assert state.tick == 1
        assert state.body == (Cell(5, 4),)
        assert state.fruit == Cell(1, 1)
        assert state.direction is UP
        assert state.status is SessionStatus.RUNNING
        assert (state.width, state.height) == (10, 10)

    def test_cell_state(self):
        engine, _, _, _ = make_engine(rows=10, cols=10, start=(5, 5), fruit=Cell(1, 1))
        assert engine.cell_state((5, 5)) is CellState.SNAKE
        assert engine.cell_state((1, 1)) is CellState.FRUIT
        assert engine.cell_state((9, 9)) is CellState.EMPTY

    def test_cell_state_out_of_bounds_raises(self):
        engine, _, _, _ = make_engine(rows=10, cols=10)
        with pytest.raises(CellOutOfBoundsError):
            engine.cell_state((10, 0))


class TestLoop:
    """Tests for the background tick thread."""

    def test_loop_advances_and_stops(self):
        engine, _, _, _ = make_engine(start=(20, 20), fruit=Cell(39, 39), tick_rate=100)
        engine.request_direction(UP)
        engine.start()
        try:
            assert wait_for(lambda: engine.tick_count >= 3)
        finally:
            engine.stop(timeout=1.0)
        assert not engine.is_alive

    def test_loop_idles_until_first_input(self):
        engine, _, _, _ = make_engine(start=(20, 20), fruit=Cell(39, 39), tick_rate=100)
        engine.start()
        try:
            time.sleep(0.05)
            assert engine.tick_count == 0
            engine.request_direction(DOWN)
            assert wait_for(lambda: engine.tick_count >= 1)
        finally:
            engine.stop(timeout=1.0)

    def test_collision_ends_loop(self):
        engine, _, _, audio = make_engine(rows=3, cols=3, start=(1, 1), fruit=Cell(2, 2), tick_rate=50)
        engine.request_direction(LEFT)
        engine.start()
        engine.join(timeout=2.0)
        assert not engine.is_alive
        assert engine.is_over
        audio.release.assert_called_once()

    def test_stop_interrupts_the_inter_tick_wait(self):
        engine, _, _, _ = make_engine(tick_rate=0.5)
        engine.start()
        time.sleep(0.05)
        started = time.monotonic()
        engine.stop(timeout=2.0)
        assert time.monotonic() - started < 1.0
        assert not engine.is_alive

    def test_start_twice_raises(self):
        engine, _, _, _ = make_engine(tick_rate=0.5)
        engine.start()
        try:
            with pytest.raises(RuntimeError):
                engine.start()
        finally:
            engine.stop(timeout=1.0)

    def test_start_after_game_over_raises(self):
        engine, _, _, _ = make_engine(start=(0, 0), fruit=Cell(5, 5))
        engine.request_direction(UP)
        engine.tick()
        with pytest.raises(RuntimeError):
            engine.start()

    def test_input_from_other_thread_is_seen_by_next_tick(self):
        engine, _, _, _ = make_engine(start=(20, 20), fruit=Cell(39, 39))
        worker = threading.Thread(target=engine.request_direction, args=(UP,))
        worker.start()
        worker.join()
        assert engine.tick() is MoveOutcome.MOVED
        assert engine.snake.head == Cell(20, 19)
