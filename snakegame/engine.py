"""
GameEngine - the fixed-rate game loop.

The engine owns the board, the snake and the fruit. One background thread
calls tick() at the configured rate and is the only code that moves the
snake or the fruit. Input sources call request_direction() from any thread;
UIs read snapshot() or listen to render events.
"""

import logging
import random
import threading
import time
from typing import Callable, List, Optional, Union

from .config import GameConfig
from .domain.board import Board, Cell
from .domain.constants import CellState, Direction, MoveOutcome, SessionStatus, Sound
from .domain.fruit import Fruit
from .domain.game_state import GameState
from .domain.snake import Snake
from .services.audio_service import AudioSink, NullAudio
from .services.sinks import BoardView, RenderSink, ScoreBoard, ScoreSink

logger = logging.getLogger(__name__)

GameOverCallback = Callable[[GameState], None]


class GameEngine:
    """
    Manages:
      - Board (rows, cols, wrap policy)
      - Snake
      - Fruit
      - Score
      - Session status (NOT_STARTED -> RUNNING -> OVER)
      - The tick thread
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_sink: Optional[RenderSink] = None,
        score_sink: Optional[ScoreSink] = None,
        audio: Optional[AudioSink] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = (config or GameConfig()).validate()
        self.board = Board(self.config.rows, self.config.cols, self.config.wrap, rng=rng)
        self.render_sink = render_sink or BoardView(self.config.rows, self.config.cols)
        self.score_sink = score_sink or ScoreBoard()
        self.audio = audio or NullAudio()

        self.snake = Snake(self.config.start_cell)
        self.fruit = Fruit(self.board)
        self.status = SessionStatus.NOT_STARTED
        self.score = 0
        self.tick_count = 0

        # Held for a whole tick, while taking snapshots and while applying input.
        self._state_lock = threading.Lock()
        # Serializes direction arbitration between input sources.
        self._input_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._game_over_callbacks: List[GameOverCallback] = []

        self.fruit.place(self.snake.occupied)
        self._emit(self.snake.head, CellState.SNAKE)
        self._emit(self.fruit.position, CellState.FRUIT)
        logger.info(
            f"New session on {self.board} starting at {self.snake.head}, "
            f"fruit at {self.fruit.position}"
        )

    # ------------------------------------------------------------------
    # Input side
    # ------------------------------------------------------------------

    def request_direction(self, direction: Union[Direction, str]) -> bool:
        """
        Ask the snake to turn.

        Reversals and unknown directions are ignored. The first accepted
        request starts the session. The change takes effect on the next tick;
        if several requests arrive between ticks, the last accepted one wins.

        Returns:
            True if the request was accepted
        """
        try:
            direction = Direction(direction)
        except ValueError:
            logger.debug(f"Ignoring unknown direction {direction!r}")
            return False

        # The tick sets OVER under _state_lock, so the check and the write
        # share it with the tick.
        with self._input_lock, self._state_lock:
            if self.status is SessionStatus.OVER:
                return False
            if not self.snake.set_direction(direction):
                logger.debug(
                    f"Rejected reversal {direction.value} while moving {self.snake.direction.value}"
                )
                return False
            if self.status is SessionStatus.NOT_STARTED:
                self.status = SessionStatus.RUNNING
                logger.info(f"Session started, moving {direction.value}")
                self._play(Sound.GAME_START)
        return True

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> Optional[MoveOutcome]:
        """
        Execute one tick:
          1) Skip unless the session is RUNNING
          2) Advance the snake toward the current fruit
          3) MOVED: report the new head and the freed tail
          4) ATE: report the new head, re-place the fruit, score, play 'eat'
          5) COLLIDED: end the session

        Returns the outcome, or None when the tick was skipped.
        """
        with self._state_lock:
            if self.status is not SessionStatus.RUNNING:
                return None

            outcome = self.snake.advance(self.fruit.position, self.board)
            self.tick_count += 1

            if outcome is MoveOutcome.MOVED:
                self._emit(self.snake.last_head, CellState.SNAKE)
                self._emit(self.snake.last_vacated, CellState.EMPTY)
            elif outcome is MoveOutcome.ATE:
                self._emit(self.snake.last_head, CellState.SNAKE)
                new_fruit = self.fruit.place(self.snake.occupied)
                self._emit(new_fruit, CellState.FRUIT)
                self.score += 1
                self.score_sink.increment()
                self._play(Sound.EAT)
                logger.debug(f"Ate fruit at {self.snake.head}, length {len(self.snake)}")
            elif outcome is MoveOutcome.COLLIDED:
                self._end_session()

            state = self._snapshot() if self.status is SessionStatus.OVER else None

        if state is not None:
            for callback in list(self._game_over_callbacks):
                callback(state)
        return outcome

    def _end_session(self) -> None:
        self.status = SessionStatus.OVER
        self._stop_event.set()
        logger.info(
            f"Game over after {self.tick_count} ticks: score {self.score}, "
            f"length {len(self.snake)}"
        )
        self._play(Sound.GAME_OVER)
        try:
            self.audio.release()
        except Exception as exc:  # noqa: BLE001 - game over must complete without audio
            logger.warning(f"Failed to release audio resources: {exc}")

    def _emit(self, cell: Cell, state: CellState) -> None:
        self.render_sink.update_cell(cell, state)

    def _play(self, cue: Sound) -> None:
        try:
            self.audio.play(cue)
        except Exception as exc:  # noqa: BLE001 - a missing sound must not stop the game
            logger.warning(f"Failed to play sound '{cue.value}': {exc}")

    # ------------------------------------------------------------------
    # Loop lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the tick thread. Ticks are skipped until the first accepted direction."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Game loop is already running.")
        if self.status is SessionStatus.OVER:
            raise RuntimeError("Session is over; create a new GameEngine to play again.")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="snake-game-loop", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        interval = self.config.tick_interval
        logger.info(f"Game loop running at {self.config.tick_rate:g} ticks/s")
        next_tick = time.monotonic()
        try:
            while not self._stop_event.is_set():
                self.tick()
                if self.status is SessionStatus.OVER:
                    break
                next_tick += interval
                delay = next_tick - time.monotonic()
                if delay < 0:
                    # Fell behind; resume from now instead of bursting.
                    next_tick = time.monotonic()
                    delay = 0
                if self._stop_event.wait(delay):
                    break
        except Exception:
            logger.exception("Game loop crashed")
            raise
        finally:
            logger.info("Game loop stopped")

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Ask the tick thread to exit and wait for it.

        The thread finishes any tick in progress and exits within one tick
        period. Stopping does not end the session; start() resumes it.
        """
        self._stop_event.set()
        self.join(timeout)

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def is_over(self) -> bool:
        return self.status is SessionStatus.OVER

    def on_game_over(self, callback: GameOverCallback) -> None:
        """Register a callback run on the tick thread with the final snapshot."""
        self._game_over_callbacks.append(callback)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def snapshot(self) -> GameState:
        """Return a consistent copy of the current state."""
        with self._state_lock:
            return self._snapshot()

    def _snapshot(self) -> GameState:
        return GameState(
            tick=self.tick_count,
            body=self.snake.body(),
            fruit=self.fruit.position,
            score=self.score,
            direction=self.snake.direction,
            status=self.status,
            width=self.board.cols,
            height=self.board.rows,
            wrap_enabled=self.board.wrap_enabled,
        )

    def cell_state(self, cell) -> CellState:
        """
        Logical state of a board cell.

        Raises:
            CellOutOfBoundsError: for a cell outside the board
        """
        self.board.require_in_bounds(cell)
        return self.snapshot().cell_state(cell)

    def __repr__(self):
        return (
            f"<GameEngine status={self.status.value} tick={self.tick_count} "
            f"score={self.score} snake={self.snake!r}>"
        )
