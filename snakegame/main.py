"""
Headless launcher: runs one session driven by the autopilot player and
prints the board to the terminal.

    python -m snakegame.main --rows 20 --cols 20 --tick-rate 8
"""

import argparse
import json
import logging
import random
import time
from typing import Dict, Optional

from .config import GameConfig
from .engine import GameEngine
from .players import Player, RandomPlayer
from .services import AudioService, BoardView, ScoreBoard

logger = logging.getLogger(__name__)


def run_session(
    config: GameConfig,
    player: Optional[Player] = None,
    max_ticks: Optional[int] = None,
    show_board: bool = True,
    seed: Optional[int] = None,
) -> Dict:
    """
    Run a single session until game over, `max_ticks`, or Ctrl-C.

    The engine ticks on its own thread; this function is the foreground side.
    It polls snapshots, asks the player for a direction and prints the board.

    Returns:
        A dictionary summarizing the session (status, ticks, score, length).
    """
    rng = random.Random(seed)
    player = player or RandomPlayer(rng=random.Random(rng.random()))
    view = BoardView(config.rows, config.cols)
    score = ScoreBoard()

    audio = None
    if config.sound_dir:
        audio = AudioService()
        audio.load_sounds(config.sound_dir)

    engine = GameEngine(config, render_sink=view, score_sink=score, audio=audio, rng=rng)
    engine.start()

    try:
        while engine.is_alive:
            state = engine.snapshot()
            if state.is_over or (max_ticks is not None and state.tick >= max_ticks):
                break

            move = player.get_move(state)
            if move is not None:
                engine.request_direction(move)

            if show_board:
                print(f"\n{score}  tick {state.tick}\n{view.render()}")

            time.sleep(config.tick_interval)
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping game loop")
    finally:
        engine.stop(timeout=config.tick_interval * 2)
        if audio is not None:
            audio.shutdown()

    final = engine.snapshot()
    if show_board:
        print("\n" + final.print_board() + "\n")
    return {
        "status": final.status.value,
        "ticks": final.tick,
        "score": final.score,
        "length": len(final.body),
    }


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Run a headless Snake session with an autopilot player."
    )
    parser.add_argument("--rows", type=int, default=None, help="Board height in cells")
    parser.add_argument("--cols", type=int, default=None, help="Board width in cells")
    parser.add_argument("--tick-rate", type=float, default=None, help="Ticks per second")
    parser.add_argument("--wrap", action="store_true", default=None,
                        help="Let the snake wrap around the board edges")
    parser.add_argument("--sound-dir", type=str, default=None,
                        help="Directory holding eat/game_over/game_start clips")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Stop after this many ticks even if the snake is alive")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Do not print the board")

    args = parser.parse_args(argv)

    config = GameConfig.from_env().with_overrides(
        rows=args.rows,
        cols=args.cols,
        tick_rate=args.tick_rate,
        wrap=args.wrap,
        sound_dir=args.sound_dir,
    ).validate()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    result = run_session(
        config,
        max_ticks=args.max_ticks,
        show_board=not args.quiet,
        seed=args.seed,
    )

    print("\nSession Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
