"""
Unit tests for the game engine frame loop

Tests the host loop including:
- Fixed-step clamp
- Pause / resume and stop
- Sound and render forwarding
- Observer failure isolation
- Match end statistics
"""

import logging

import pytest

from neon_pong.core.entities import InputState, RenderState, Side, Vector2D
from neon_pong.core.game_engine import GameEngine
from neon_pong.core.physics import PhysicsEngine
from neon_pong.simulate import SimulatedClock
from neon_pong.utils.config import GameConfig
from neon_pong.utils.leaderboard import InMemoryScoreStore, Leaderboard

FRAME = 1 / 60


class RecordingRenderer:
    def __init__(self) -> None:
        self.initialized: tuple[int, int] | None = None
        self.frames: list[RenderState] = []

    def initialize(self, width: int, height: int) -> None:
        self.initialized = (width, height)

    def render(self, state: RenderState) -> None:
        self.frames.append(state)

    def cleanup(self) -> None:
        pass


class BrokenRenderer(RecordingRenderer):
    def render(self, state: RenderState) -> None:
        raise RuntimeError("display lost")


class RecordingSound:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def play_wall_bounce(self) -> None:
        self.calls.append(("wall",))

    def play_paddle_hit(self, speed: float) -> None:
        self.calls.append(("paddle", speed))

    def play_power_up(self) -> None:
        self.calls.append(("power_up",))

    def play_score(self) -> None:
        self.calls.append(("score",))

    def play_victory(self) -> None:
        self.calls.append(("victory",))


class IdleInput:
    def poll(self) -> InputState:
        return InputState()


@pytest.fixture
def physics(fixed_random):
    return PhysicsEngine(
        config=GameConfig(POWER_UPS_ENABLED=False), rng=fixed_random(0.9), ai_enabled=False
    )


class TestFrameClamp:
    """Test the fixed-step clamp"""

    def test_not_running(self, physics):
        """Test no tick runs before the game starts"""
        engine = GameEngine(physics)

        assert engine.update(now=0.0) is None

    def test_one_tick_per_frame(self, physics):
        """Test ticks only run once a full frame elapsed"""
        engine = GameEngine(physics)
        engine.start_game()

        assert engine.update(now=1.0) is not None
        assert engine.update(now=1.0 + FRAME / 2) is None
        assert engine.update(now=1.0 + FRAME) is not None
        assert physics.state.frame_count == 2

    def test_no_catch_up(self, physics):
        """Test a long stall still runs a single tick"""
        engine = GameEngine(physics)
        engine.start_game()
        engine.update(now=1.0)

        engine.update(now=5.0)

        assert physics.state.frame_count == 2

    def test_pause_and_resume(self, physics):
        """Test a paused game does not tick"""
        clock = SimulatedClock(10.0)
        engine = GameEngine(physics, clock=clock)
        engine.start_game()
        engine.update()

        engine.pause_game()
        assert engine.is_paused() is True
        assert engine.update(now=11.0) is None

        engine.pause_game()
        assert engine.is_paused() is False
        assert engine.update(now=clock() + FRAME) is not None

    def test_stop(self, physics):
        """Test a stopped game does not tick"""
        engine = GameEngine(physics)
        engine.start_game()
        engine.stop_game()

        assert engine.is_running() is False
        assert engine.update(now=1.0) is None


class TestObservers:
    """Test render and sound forwarding"""

    def test_renderer_receives_snapshots(self, physics):
        """Test the renderer is initialized once and gets one frame per tick"""
        renderer = RecordingRenderer()
        engine = GameEngine(physics, renderer=renderer)
        engine.start_game()

        engine.update(now=0.0)
        engine.update(now=FRAME)

        assert renderer.initialized == (1400, 700)
        assert len(renderer.frames) == 2
        assert isinstance(renderer.frames[0], RenderState)

    def test_sounds_follow_events(self, physics):
        """Test wall bounces trigger their sound"""
        sound = RecordingSound()
        engine = GameEngine(physics, sound=sound)
        engine.start_game()
        physics.state.ball.position = Vector2D(700, 10)
        physics.state.ball.velocity = Vector2D(3, -5)

        engine.update(now=0.0)

        assert sound.calls == [("wall",)]

    def test_paddle_hit_sound_gets_speed(self, physics):
        """Test the paddle hit sound receives the ball speed"""
        sound = RecordingSound()
        engine = GameEngine(physics, sound=sound)
        engine.start_game()
        physics.state.ball.position = Vector2D(62, 350)
        physics.state.ball.velocity = Vector2D(-5, 0)

        engine.update(now=0.0)

        assert sound.calls[0][0] == "paddle"
        assert sound.calls[0][1] == pytest.approx(5.5)

    def test_renderer_failure_isolated(self, physics, caplog):
        """Test a failing renderer is logged and the simulation goes on"""
        engine = GameEngine(physics, renderer=BrokenRenderer())
        engine.start_game()

        with caplog.at_level(logging.ERROR, logger="neon_pong.core.game_engine"):
            first = engine.update(now=0.0)
            second = engine.update(now=FRAME)

        assert first is not None
        assert second is not None
        assert physics.state.frame_count == 2
        assert "display lost" in caplog.text


class TestMatch:
    """Test match lifecycle"""

    def test_game_end_statistics(self, physics):
        """Test a victory stops the loop and counts the win"""
        sound = RecordingSound()
        engine = GameEngine(physics, sound=sound)
        engine.start_game()
        physics.state.score.left = 10
        physics.state.ball.position = Vector2D(1395, 100)
        physics.state.ball.velocity = Vector2D(10, 0)

        events = engine.update(now=0.0)

        assert events["victory"]
        assert engine.is_running() is False
        assert engine.is_game_over() is True
        assert engine.get_winner() is Side.LEFT
        assert engine.get_stats()["left_wins"] == 1
        assert engine.get_stats()["total_games"] == 1
        assert ("score",) in sound.calls
        assert ("victory",) in sound.calls

    def test_run_respects_frame_rate(self, physics):
        """Test the loop sleeps between frames"""
        clock = SimulatedClock()
        engine = GameEngine(physics, clock=clock, sleep=clock.sleep)

        ticks = engine.run(IdleInput(), max_ticks=10)

        assert ticks == 10
        assert physics.state.frame_count == 10
        assert clock() == pytest.approx(9 * FRAME)

    def test_reset_stats(self, physics):
        """Test statistics can be cleared"""
        engine = GameEngine(physics)
        engine.total_games = 3
        engine.game_stats["left_wins"] = 2

        engine.reset_stats()

        assert engine.get_stats()["total_games"] == 0
        assert engine.get_stats()["left_wins"] == 0


class BrokenStore:
    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


class TestLeaderboardRecording:
    """Test finished games reach the leaderboard"""

    def test_left_win_recorded(self, physics):
        """Test the left player's win is recorded against a human"""
        board = Leaderboard(InMemoryScoreStore())
        engine = GameEngine(physics, leaderboard=board, player_name="Ann")
        engine.start_game()
        physics.state.score.left = 10
        physics.state.ball.position = Vector2D(1395, 100)
        physics.state.ball.velocity = Vector2D(10, 0)

        engine.update(now=0.0)

        [entry] = board.load()
        assert entry.name == "Ann"
        assert (entry.player_score, entry.opponent_score) == (11, 0)
        assert entry.difficulty == "vs Human"

    def test_right_human_win_recorded(self, physics):
        """Test a right side human winner is recorded with their own score first"""
        board = Leaderboard(InMemoryScoreStore())
        engine = GameEngine(physics, leaderboard=board)
        engine.start_game()
        physics.state.score.left = 4
        physics.state.score.right = 10
        physics.state.ball.position = Vector2D(5, 100)
        physics.state.ball.velocity = Vector2D(-10, 0)

        engine.update(now=0.0)

        [entry] = board.load()
        assert entry.name == "Anonymous"
        assert (entry.player_score, entry.opponent_score) == (11, 4)

    def test_win_against_ai_records_difficulty(self, fixed_random):
        """Test a win against the AI records its difficulty"""
        physics = PhysicsEngine(
            config=GameConfig(POWER_UPS_ENABLED=False),
            rng=fixed_random(0.9),
            ai_enabled=True,
            difficulty="hard",
        )
        board = Leaderboard(InMemoryScoreStore())
        engine = GameEngine(physics, leaderboard=board)
        engine.start_game()
        physics.state.score.left = 10
        physics.state.ball.position = Vector2D(1395, 100)
        physics.state.ball.velocity = Vector2D(10, 0)

        engine.update(now=0.0)

        assert board.load()[0].difficulty == "hard"

    def test_ai_win_not_recorded(self, fixed_random):
        """Test AI victories stay off the leaderboard"""
        physics = PhysicsEngine(
            config=GameConfig(POWER_UPS_ENABLED=False), rng=fixed_random(0.9), ai_enabled=True
        )
        board = Leaderboard(InMemoryScoreStore())
        engine = GameEngine(physics, leaderboard=board)
        engine.start_game()
        physics.state.score.right = 10
        physics.state.ball.position = Vector2D(5, 100)
        physics.state.ball.velocity = Vector2D(-10, 0)

        engine.update(now=0.0)

        assert engine.get_winner() is Side.RIGHT
        assert board.load() == []

    def test_store_failure_isolated(self, physics, caplog):
        """Test a failing score store is logged and the game end still counts"""
        engine = GameEngine(physics, leaderboard=Leaderboard(BrokenStore()))
        engine.start_game()
        physics.state.score.left = 10
        physics.state.ball.position = Vector2D(1395, 100)
        physics.state.ball.velocity = Vector2D(10, 0)

        with caplog.at_level(logging.ERROR, logger="neon_pong.core.game_engine"):
            engine.update(now=0.0)

        assert engine.get_stats()["left_wins"] == 1
        assert "disk full" in caplog.text
