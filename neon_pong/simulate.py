"""
Headless Neon Pong match runner

The left paddle follows the ball, the right one is driven by the AI opponent.
Runs on a simulated clock, so a full match takes a fraction of a second.

Usage:
    neon-pong-sim --difficulty hard --seed 42
"""

import argparse
import logging
import random
import sys
from typing import Any

from neon_pong.core.game_engine import GameEngine
from neon_pong.core.physics import PhysicsEngine
from neon_pong.gui.keyboard import BallTrackingInput
from neon_pong.utils.config import AI_DIFFICULTIES, GameConfig
from neon_pong.utils.leaderboard import JsonFileScoreStore, Leaderboard


class SimulatedClock:
    """Clock that only moves when slept on"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


class PowerUpCounter:
    """Sound observer counting collected power-ups"""

    def __init__(self) -> None:
        self.collected = 0

    def play_wall_bounce(self) -> None:
        pass

    def play_paddle_hit(self, speed: float) -> None:
        pass

    def play_power_up(self) -> None:
        self.collected += 1

    def play_score(self) -> None:
        pass

    def play_victory(self) -> None:
        pass


def build_config(args: argparse.Namespace) -> GameConfig:
    """Configuration from an optional JSON file and the command line overrides"""
    config = GameConfig.load_from_file(args.config) if args.config else GameConfig()
    config.DIFFICULTY = args.difficulty
    config.AI_ENABLED = True
    if args.no_power_ups:
        config.POWER_UPS_ENABLED = False
    return config


def run_match(
    config: GameConfig,
    max_ticks: int,
    seed: int | None = None,
    leaderboard: Leaderboard | None = None,
    player_name: str = "",
) -> dict[str, Any]:
    """
    Plays one match and returns its summary

    Args:
        config: Game configuration
        max_ticks: Stop after this many ticks even without a winner
        seed: Seed of the simulation randomness
        leaderboard: Records the result when the left player wins
        player_name: Name of the left player on the leaderboard

    Returns:
        Dict with score, winner, ticks, longest rally and power-ups collected
    """
    clock = SimulatedClock()
    counter = PowerUpCounter()
    physics_engine = PhysicsEngine(config=config, rng=random.Random(seed))
    engine = GameEngine(
        physics_engine,
        sound=counter,
        clock=clock,
        sleep=clock.sleep,
        leaderboard=leaderboard,
        player_name=player_name,
    )

    ticks = engine.run(BallTrackingInput(physics_engine), max_ticks=max_ticks)
    winner = engine.get_winner()

    return {
        "score": physics_engine.state.score.to_tuple(),
        "winner": winner.value if winner is not None else None,
        "ticks": ticks,
        "longest_rally": physics_engine.state.rally.longest_rally,
        "power_ups_collected": counter.collected,
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run a headless Neon Pong match against the AI opponent",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--difficulty",
        choices=list(AI_DIFFICULTIES.keys()),
        default="medium",
        help="AI opponent difficulty",
    )
    parser.add_argument(
        "--max-ticks", type=int, default=100_000, help="Stop the match after N ticks"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--config", type=str, default=None, help="JSON configuration file to start from"
    )
    parser.add_argument(
        "--no-power-ups", action="store_true", help="Disable power-up spawning"
    )
    parser.add_argument(
        "--leaderboard", type=str, default=None, help="JSON file keeping the leaderboard"
    )
    parser.add_argument("--name", type=str, default="", help="Player name on the leaderboard")
    parser.add_argument("--verbose", action="store_true", help="Log simulation events")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}")
        return 1

    leaderboard = Leaderboard(JsonFileScoreStore(args.leaderboard)) if args.leaderboard else None
    summary = run_match(config, args.max_ticks, args.seed, leaderboard, args.name)

    left, right = summary["score"]
    print("=== NEON PONG ===")
    print(f"Difficulty: {config.DIFFICULTY}")
    print(f"Final score: {left} - {right}")
    print(f"Winner: {summary['winner'] or 'none (tick limit reached)'}")
    print(f"Ticks: {summary['ticks']}")
    print(f"Longest rally: {summary['longest_rally']}")
    print(f"Power-ups collected: {summary['power_ups_collected']}")

    if leaderboard is not None:
        print("=== LEADERBOARD ===")
        for rank, entry in enumerate(leaderboard.load(), start=1):
            print(
                f"{rank:2d}. {entry.name}: {entry.player_score}-{entry.opponent_score} "
                f"({entry.difficulty})"
            )
    return 0


if __name__ == "__main__":
    sys.exit(main())
