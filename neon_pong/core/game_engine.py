"""
Neon Pong main game engine: fixed-step frame loop around the physics engine
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from neon_pong.core.entities import InputState, Side
from neon_pong.core.interfaces import InputSource, RendererProtocol, SoundTrigger
from neon_pong.core.physics import PhysicsEngine
from neon_pong.utils.leaderboard import Leaderboard

logger = logging.getLogger(__name__)


class GameEngine:
    """Main engine that orchestrates the game"""

    def __init__(
        self,
        physics_engine: PhysicsEngine | None = None,
        renderer: RendererProtocol | None = None,
        sound: SoundTrigger | None = None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        leaderboard: Leaderboard | None = None,
        player_name: str = "",
    ):
        """
        Args:
            physics_engine: Simulation to drive, a default one is created if None
            renderer: Receives a snapshot after every tick
            sound: Receives the audio cues of every tick
            clock: Monotonic clock in seconds
            sleep: Blocking wait used by ``run`` between frames
            leaderboard: Records the human winner of each game
            player_name: Name recorded on the leaderboard, blank for anonymous
        """
        self.physics_engine = physics_engine or PhysicsEngine()
        self.renderer = renderer
        self.sound = sound
        self.clock = clock
        self.sleep = sleep
        self.leaderboard = leaderboard
        self.player_name = player_name
        self.frame_duration = self.physics_engine.config.frame_duration_ms / 1000

        # Game state
        self.running = False
        self.paused = False
        self.last_update_time: float | None = None
        self._renderer_ready = False

        # Statistics
        self.total_games = 0
        self.game_stats = {"left_wins": 0, "right_wins": 0, "total_ticks": 0}

    def start_game(self) -> None:
        """Starts a new game"""
        if self.renderer is not None and not self._renderer_ready:
            self._notify(
                self.renderer.initialize,
                self.physics_engine.config.CANVAS_WIDTH,
                self.physics_engine.config.CANVAS_HEIGHT,
            )
            self._renderer_ready = True

        self.running = True
        self.paused = False
        self.physics_engine.reset_game()
        self.last_update_time = None
        logger.info("Game started")

    def stop_game(self) -> None:
        """Stops the current game, no tick is scheduled afterwards"""
        self.running = False
        logger.info("Game stopped")

    def pause_game(self) -> None:
        """Pauses / resumes the game"""
        self.paused = not self.paused
        if not self.paused:
            # Resume without catching up on the frames spent paused
            self.last_update_time = self.clock()
        logger.info("Game paused" if self.paused else "Game resumed")

    def update(
        self, controls: InputState | None = None, now: float | None = None
    ) -> dict[str, list[Any]] | None:
        """
        Runs one tick if a full frame elapsed since the previous one.

        Args:
            controls: Input of this tick
            now: Current time in seconds. If None, read from the clock

        Returns:
            The tick events, or None when no tick ran
        """
        if not self.running or self.paused:
            return None

        if now is None:
            now = self.clock()
        if self.last_update_time is not None and now < self.last_update_time + self.frame_duration:
            return None
        self.last_update_time = now

        events = self.physics_engine.update(controls)
        self.game_stats["total_ticks"] += 1

        if self.sound is not None:
            self._play_sounds(self.sound, events)
        if self.renderer is not None:
            self._notify(self.renderer.render, self.physics_engine.get_render_state())

        if events["victory"]:
            self._handle_game_end(events["victory"][0]["side"])

        return events

    def run(self, input_source: InputSource, max_ticks: int | None = None) -> int:
        """
        Cooperative loop: polls the input and ticks at the frame rate until the
        game is over, stopped, or ``max_ticks`` ticks ran.

        Returns:
            int: Number of ticks that ran
        """
        if not self.running:
            self.start_game()

        ticks = 0
        while self.running and (max_ticks is None or ticks < max_ticks):
            now = self.clock()
            if self.last_update_time is not None:
                wait = self.last_update_time + self.frame_duration - now
                if wait > 0:
                    self.sleep(wait)
                    now = self.clock()

            if self.update(input_source.poll(), now) is not None:
                ticks += 1
            elif self.paused:
                self.sleep(self.frame_duration)

        return ticks

    def _play_sounds(self, sound: SoundTrigger, events: dict[str, list[Any]]) -> None:
        """Forwards the audio cues of one tick"""
        for _ in events["wall_bounces"]:
            self._notify(sound.play_wall_bounce)
        for hit in events["paddle_hits"]:
            self._notify(sound.play_paddle_hit, hit["speed"])
        for _ in events["power_ups_collected"]:
            self._notify(sound.play_power_up)
        for _ in events["goals"]:
            self._notify(sound.play_score)
        for _ in events["victory"]:
            self._notify(sound.play_victory)

    def _notify(self, callback: Callable[..., None], *args: Any) -> None:
        """Calls an observer, its failures never stop the simulation"""
        try:
            callback(*args)
        except Exception:
            logger.exception(f"Observer call {callback.__qualname__} failed")

    def _handle_game_end(self, winner: Side) -> None:
        """Handles the end of a game"""
        self.total_games += 1
        if winner is Side.LEFT:
            self.game_stats["left_wins"] += 1
        else:
            self.game_stats["right_wins"] += 1

        score = self.physics_engine.state.score
        logger.info(f"Game over: {winner.value} wins {score.left}-{score.right}")
        self.running = False

        if self.leaderboard is not None:
            self._notify(self._record_score, self.leaderboard, winner)

    def _record_score(self, leaderboard: Leaderboard, winner: Side) -> None:
        """Adds a human winner to the leaderboard, AI victories are not recorded"""
        physics = self.physics_engine
        if winner is Side.RIGHT and physics.ai_enabled:
            return

        score = physics.state.score
        if winner is Side.LEFT:
            player_score, opponent_score = score.left, score.right
        else:
            player_score, opponent_score = score.right, score.left
        difficulty = physics.opponent.difficulty if physics.ai_enabled else None
        leaderboard.add_score(self.player_name, player_score, opponent_score, difficulty)

    def get_stats(self) -> dict[str, Any]:
        """Returns game statistics"""
        stats: dict[str, Any] = self.game_stats.copy()
        stats["total_games"] = self.total_games
        stats["longest_rally"] = self.physics_engine.state.rally.longest_rally
        return stats

    def reset_stats(self) -> None:
        """Resets statistics to zero"""
        self.total_games = 0
        self.game_stats = {"left_wins": 0, "right_wins": 0, "total_ticks": 0}

    def is_running(self) -> bool:
        """Checks if the game is running"""
        return self.running

    def is_paused(self) -> bool:
        """Checks if the game is paused"""
        return self.paused

    def is_game_over(self) -> bool:
        """Checks if the game is over"""
        return self.physics_engine.is_game_over()

    def get_winner(self) -> Side | None:
        """Returns the game winner"""
        return self.physics_engine.get_winner()
