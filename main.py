"""Main entry point for the scroller game.

This module provides command-line options to run the game:
- Window mode (default): pygame window, keyboard controls
- Headless mode: autopilot plays faster than realtime, stats only
"""

import argparse
import logging
import sys

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


def build_config(mode: str):
    from scroller.config import flyer_config, runner_config

    return flyer_config() if mode == "flyer" else runner_config()


def run_window(mode: str, seed=None):
    """Run the game in a pygame window."""
    from scroller.simulation import GameEngine

    try:
        from rendering.game_window import main as window_main
    except ImportError as e:
        logger.error("Error: Required dependencies not installed: %s", e)
        logger.error("Install with: pip install -e .")
        sys.exit(1)

    engine = GameEngine(build_config(mode), seed=seed)
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("SCROLLER - %s", mode.upper())
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("Controls:")
    logger.info("  SPACE/UP - Jump (also starts a round)")
    logger.info("  DOWN     - Duck (runner)")
    logger.info("  ENTER    - Start / restart")
    logger.info("  ESC      - Quit")
    logger.info("=" * SEPARATOR_WIDTH)
    window_main(engine)


def run_headless(mode: str, max_frames: int, stats_interval: int, seed=None):
    """Run the game headless with an autopilot at a fixed dt of one frame.

    Args:
        mode: "flyer" or "runner"
        max_frames: Number of frames to simulate
        stats_interval: Log stats every N frames
        seed: Optional random seed for deterministic behavior
    """
    from scroller.autopilot import create_autopilot
    from scroller.events import RoundEnded
    from scroller.simulation import GameEngine

    config = build_config(mode)
    engine = GameEngine(config, seed=seed)
    autopilot = create_autopilot(config)

    scores = []
    engine.event_bus.subscribe(RoundEnded, lambda event: scores.append(event.score))

    snapshot = engine.snapshot()
    for _ in range(max_frames):
        for kind in autopilot.decide(snapshot):
            engine.push_input(kind)
        snapshot = engine.step(1.0)
        if stats_interval > 0 and snapshot.frame % stats_interval == 0:
            logger.info(
                "frame=%d phase=%s round=%d score=%d high=%d speed=%.2f",
                snapshot.frame,
                snapshot.phase,
                snapshot.round_number,
                snapshot.score,
                snapshot.high_score,
                snapshot.speed,
            )
    engine.teardown()

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("HEADLESS RUN ENDED - %d frames", snapshot.frame)
    logger.info("  rounds finished: %d", len(scores))
    if scores:
        logger.info("  mean score: %.1f", sum(scores) / len(scores))
    logger.info("  high score: %d", snapshot.high_score)
    logger.info("=" * SEPARATOR_WIDTH)
    return snapshot


def main():
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Side-scrolling obstacle avoidance game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play the flyer in a window (default)
  python main.py

  # Play the runner
  python main.py --mode runner

  # Autopilot run for testing/benchmarking
  python main.py --headless --max-frames 10000 --stats-interval 600

  # Reproducible run
  python main.py --headless --mode runner --seed 42
        """,
    )

    parser.add_argument(
        "--mode", choices=["flyer", "runner"], default="flyer", help="Game variant (default: flyer)"
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (autopilot, stats only)"
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        default=10000,
        help="Frames to simulate in headless mode (default: 10000)",
    )

    parser.add_argument(
        "--stats-interval",
        type=int,
        default=600,
        help="Log stats every N frames in headless mode (default: 600)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    if args.headless:
        logger.info("Starting headless %s run...", args.mode)
        logger.info(
            "Configuration: %d frames, stats every %d frames", args.max_frames, args.stats_interval
        )
        run_headless(args.mode, args.max_frames, args.stats_interval, seed=args.seed)
    else:
        run_window(args.mode, seed=args.seed)


if __name__ == "__main__":
    main()
