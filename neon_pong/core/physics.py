"""
Physics system for Neon Pong: the per-frame tick orchestrator
"""

import logging
import random
from typing import Any

from neon_pong.ai.controller import OpponentController
from neon_pong.core.collision import CollisionDetector
from neon_pong.core.entities import (
    ActiveEffects,
    AIState,
    Ball,
    Control,
    DragInput,
    GameState,
    InputState,
    Paddle,
    Particle,
    RenderState,
    Side,
)
from neon_pong.core.kinematics import (
    apply_speed_limits,
    bounce_off_wall,
    calculate_ball_speed,
    calculate_paddle_bounce,
    calculate_paddle_velocity,
    check_ball_out_of_bounds,
    check_wall_collision,
    reset_ball,
    update_ball_position,
    update_paddle_position,
)
from neon_pong.core.powerups import (
    PowerUpSpawner,
    activate_power_up,
    find_colliding_power_up,
    get_power_up_owner,
    remove_power_up,
    update_active_effects,
    update_all_power_ups,
)
from neon_pong.core.progress import (
    award_paddle_hit,
    award_rally_bonus,
    award_victory,
    check_level_up,
)
from neon_pong.utils.config import GameConfig, PhysicsConfig, game_config, physics_config

logger = logging.getLogger(__name__)

# (intensity, duration) of the screen shake triggered by each event
WALL_SHAKE = (3.0, 6)
PADDLE_SHAKE = (8.0, 15)
POWER_UP_SHAKE = (8.0, 15)
LEVEL_UP_SHAKE = (10.0, 20)


def _new_events() -> dict[str, list[Any]]:
    return {
        "wall_bounces": [],
        "paddle_hits": [],
        "power_ups_collected": [],
        "shield_saves": [],
        "goals": [],
        "victory": [],
        "achievements": [],
        "level_ups": [],
        "resets": [],
    }


class PhysicsEngine:
    """
    Main physics engine.

    Owns the whole game state and is its only writer: ``update`` advances it
    by exactly one tick, observers only ever see ``get_render_state``.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        physics: PhysicsConfig | None = None,
        rng: random.Random | None = None,
        ai_enabled: bool | None = None,
        difficulty: str | None = None,
    ):
        self.config = config or game_config
        self.physics = physics or physics_config
        self.rng = rng or random.Random()
        self.canvas_width = float(self.config.CANVAS_WIDTH)
        self.canvas_height = float(self.config.CANVAS_HEIGHT)
        self.ai_enabled = ai_enabled if ai_enabled is not None else self.config.AI_ENABLED

        self.collision_detector = CollisionDetector()
        self.power_up_spawner = PowerUpSpawner(
            self.canvas_width, self.canvas_height, self.config, self.rng
        )
        self.set_difficulty(difficulty or self.config.DIFFICULTY)

        self.state = GameState(
            ball=Ball(self.canvas_width / 2, self.canvas_height / 2, 0, 0, self.config.BALL_RADIUS),
            left_paddle=self._new_paddle(Side.LEFT),
            right_paddle=self._new_paddle(Side.RIGHT),
        )
        self.reset_game()

    @property
    def current_time(self) -> float:
        """Simulation clock in milliseconds"""
        return self.state.frame_count * self.config.frame_duration_ms

    def set_difficulty(self, difficulty: str) -> None:
        """Switches the AI opponent to another difficulty tier"""
        self.opponent = OpponentController(
            difficulty,
            dead_zone=self.config.AI_DEAD_ZONE,
            frame_duration_ms=self.config.frame_duration_ms,
            rng=self.rng,
        )

    def _new_paddle(self, side: Side) -> Paddle:
        if side is Side.LEFT:
            x = self.config.PADDLE_MARGIN
        else:
            x = self.canvas_width - self.config.PADDLE_MARGIN - self.config.PADDLE_WIDTH
        y = (self.canvas_height - self.config.PADDLE_HEIGHT) / 2
        return Paddle(
            x,
            y,
            width=self.config.PADDLE_WIDTH,
            height=self.config.PADDLE_HEIGHT,
            speed=self.config.PADDLE_SPEED,
        )

    def reset_paddles(self) -> None:
        """Resets paddles to their initial position"""
        self.state.left_paddle = self._new_paddle(Side.LEFT)
        self.state.right_paddle = self._new_paddle(Side.RIGHT)

    def reset_ball(self) -> None:
        """Serves the primary ball from the center"""
        position, velocity = reset_ball(
            self.canvas_width,
            self.canvas_height,
            self.config.BALL_INITIAL_SPEED_X,
            self.config.BALL_INITIAL_SPEED_Y,
            self.rng,
        )
        ball = self.state.ball
        ball.position = position
        ball.velocity = velocity
        ball.trail = []

    def reset_game(self) -> None:
        """Resets the game to zero"""
        state = self.state
        state.score.left = 0
        state.score.right = 0
        state.winner = None
        state.power_ups = []
        state.effects = ActiveEffects()
        state.rally.rallies = 0
        state.frame_count = 0
        state.ai_state = AIState(target_y=self.canvas_height / 2, last_reaction_time=0.0)
        state.screen_shake.x = state.screen_shake.y = state.screen_shake.intensity = 0.0
        state.screen_shake.duration = 0
        self.power_up_spawner.reset()

        self.reset_paddles()
        self.reset_ball()
        logger.info("Game reset")

    def add_screen_shake(self, intensity: float, duration: int) -> None:
        self.state.screen_shake.intensity = intensity
        self.state.screen_shake.duration = duration

    def update(self, controls: InputState | None = None) -> dict[str, list[Any]]:
        """
        Advances the simulation by one tick.

        Args:
            controls: Control signals held and drag deltas of this tick

        Returns:
            Dictionary with the events that occurred:
            {
                "wall_bounces": [...],
                "paddle_hits": [...],
                "power_ups_collected": [...],
                "shield_saves": [...],
                "goals": [...],
                "victory": [...],
                "achievements": [...],
                "level_ups": [...],
                "resets": [...]
            }
        """
        controls = controls or InputState()
        events = _new_events()
        state = self.state

        if controls.is_held(Control.RESET):
            self.reset_game()
            events["resets"].append({"score": state.score.to_tuple()})
            return events

        # Terminal state until an explicit reset
        if state.winner is not None:
            return events

        state.frame_count += 1

        self._update_screen_shake()
        self._update_power_ups()
        update_active_effects(state.effects)

        self._move_left_paddle(controls)
        self._move_right_paddle(controls)
        self._move_balls()

        self._check_power_up_pickup(events)
        self._check_walls(events)
        self._check_paddles(events)
        self._check_extra_ball_paddles(events)
        self._check_goal(events)
        self._check_winner(events)
        self._check_level_up(events)

        return events

    def _update_screen_shake(self) -> None:
        shake = self.state.screen_shake
        if shake.duration > 0:
            shake.x = (self.rng.random() - 0.5) * shake.intensity
            shake.y = (self.rng.random() - 0.5) * shake.intensity
            shake.duration -= 1
            shake.intensity *= self.config.SHAKE_DECAY
        else:
            shake.x = shake.y = shake.intensity = 0.0

    def _update_power_ups(self) -> None:
        state = self.state
        state.power_ups.extend(self.power_up_spawner.update(state.power_ups, self.current_time))
        update_all_power_ups(
            state.power_ups, self.canvas_width, self.canvas_height, self.current_time, self.config
        )

    def _apply_manual_movement(
        self, paddle: Paddle, up: bool, down: bool, drag: DragInput
    ) -> None:
        if up:
            paddle.position.y = update_paddle_position(
                paddle.position.y, -paddle.speed, paddle.height, self.canvas_height
            )
        if down:
            paddle.position.y = update_paddle_position(
                paddle.position.y, paddle.speed, paddle.height, self.canvas_height
            )
        if drag.active:
            paddle.position.y = update_paddle_position(
                paddle.position.y + drag.delta * self.config.TOUCH_SENSITIVITY,
                0,
                paddle.height,
                self.canvas_height,
            )

    def _move_left_paddle(self, controls: InputState) -> None:
        paddle = self.state.left_paddle
        paddle.prev_y = paddle.position.y
        self._apply_manual_movement(
            paddle,
            controls.is_held(Control.LEFT_UP),
            controls.is_held(Control.LEFT_DOWN),
            controls.left_drag,
        )
        paddle.velocity = calculate_paddle_velocity(paddle.position.y, paddle.prev_y)

    def _move_right_paddle(self, controls: InputState) -> None:
        state = self.state
        paddle = state.right_paddle
        paddle.prev_y = paddle.position.y
        if not self.ai_enabled:
            self._apply_manual_movement(
                paddle,
                controls.is_held(Control.RIGHT_UP),
                controls.is_held(Control.RIGHT_DOWN),
                controls.right_drag,
            )
        else:
            state.ai_state, paddle.position.y = self.opponent.move(
                state.ball,
                paddle,
                state.ai_state,
                self.canvas_width,
                self.canvas_height,
                self.current_time,
            )
        paddle.velocity = calculate_paddle_velocity(paddle.position.y, paddle.prev_y)

    def _move_balls(self) -> None:
        effects = self.state.effects
        speed_multiplier = self.config.FAST_BALL_MULTIPLIER if effects.fast_ball.active else 1.0

        ball = self.state.ball
        ball.position = update_ball_position(ball, speed_multiplier)
        for extra_ball in effects.multi_ball.extra_balls:
            extra_ball.position = update_ball_position(extra_ball, speed_multiplier)

        self._update_trail(ball, self.config.TRAIL_PARTICLE_LIFE, 2.0, 3.0)
        for extra_ball in effects.multi_ball.extra_balls:
            self._update_trail(extra_ball, self.config.EXTRA_TRAIL_PARTICLE_LIFE, 1.0, 2.0)

    def _update_trail(self, ball: Ball, life: int, min_size: float, size_range: float) -> None:
        """Adds a particle at the ball position and ages the others"""
        ball.trail.append(
            Particle(
                ball.position.x,
                ball.position.y,
                self.rng.random() * size_range + min_size,
                life,
            )
        )
        for particle in ball.trail:
            particle.life -= 1
            particle.size *= self.config.TRAIL_DECAY
        ball.trail = [p for p in ball.trail if p.life > 0][-self.config.MAX_TRAIL_PARTICLES :]

    def _check_power_up_pickup(self, events: dict[str, list[Any]]) -> None:
        state = self.state
        power_up = find_colliding_power_up(state.ball, state.power_ups, self.config.POWER_UP_RADIUS)
        if power_up is None:
            return

        owner = get_power_up_owner(state.ball)
        activate_power_up(state.effects, power_up.type, owner, state.ball, self.config, self.rng)
        state.power_ups = remove_power_up(state.power_ups, power_up.id)
        self.power_up_spawner.reschedule()
        self.add_screen_shake(*POWER_UP_SHAKE)
        events["power_ups_collected"].append({"side": owner, "type": power_up.type})

    def _check_walls(self, events: dict[str, list[Any]]) -> None:
        state = self.state
        for ball in [state.ball, *state.effects.multi_ball.extra_balls]:
            if not check_wall_collision(ball, self.canvas_height):
                continue
            ball.velocity.y = bounce_off_wall(ball)
            # Keep the ball inside so it cannot bounce twice on the same wall
            ball.position.y = max(
                ball.radius, min(self.canvas_height - ball.radius, ball.position.y)
            )
            events["wall_bounces"].append({"extra_ball": ball is not state.ball})
            if ball is state.ball:
                self.add_screen_shake(*WALL_SHAKE)

    def _bounce_off_paddle(self, ball: Ball, side: Side) -> bool:
        """Bounces a ball off the paddle it moves towards, returns True on a hit"""
        if ball.velocity.x < 0:
            side_hit = Side.LEFT
        elif ball.velocity.x > 0:
            side_hit = Side.RIGHT
        else:
            return False
        if side_hit is not side:
            return False

        paddle = self.state.paddle(side)
        multiplier = self.state.effects.paddle_multiplier(side, self.config.BIG_PADDLE_MULTIPLIER)
        if not self.collision_detector.check_ball_paddle(ball, paddle, multiplier):
            return False

        ball.velocity = calculate_paddle_bounce(
            ball, paddle.position.y, paddle.height, paddle.velocity, self.physics, self.rng
        )
        ball.velocity = apply_speed_limits(ball, self.physics)
        self.collision_detector.separate_ball_from_paddle(ball, paddle, side)
        return True

    def _check_paddles(self, events: dict[str, list[Any]]) -> None:
        state = self.state
        for side in (Side.LEFT, Side.RIGHT):
            if not self._bounce_off_paddle(state.ball, side):
                continue

            rally = state.rally
            rally.rallies += 1
            rally.total_hits += 1
            rally.longest_rally = max(rally.longest_rally, rally.rallies)
            self._unlock(events, award_paddle_hit(state.progress, rally.rallies))

            speed = calculate_ball_speed(state.ball)
            self.add_screen_shake(*PADDLE_SHAKE)
            events["paddle_hits"].append({"side": side, "speed": speed, "extra_ball": False})
            break

    def _check_extra_ball_paddles(self, events: dict[str, list[Any]]) -> None:
        for extra_ball in self.state.effects.multi_ball.extra_balls:
            for side in (Side.LEFT, Side.RIGHT):
                if self._bounce_off_paddle(extra_ball, side):
                    events["paddle_hits"].append(
                        {
                            "side": side,
                            "speed": calculate_ball_speed(extra_ball),
                            "extra_ball": True,
                        }
                    )
                    break

    def _check_goal(self, events: dict[str, list[Any]]) -> None:
        state = self.state
        conceding = check_ball_out_of_bounds(state.ball, self.canvas_width)
        if conceding is None:
            return

        shield = state.effects.shield
        if shield.active and shield.owner is conceding:
            # The shield absorbs the goal and sends the ball back
            shield.uses -= 1
            if shield.uses <= 0:
                shield.active = False
                shield.owner = None
            state.ball.velocity.x = -state.ball.velocity.x
            state.ball.position.x = 0.0 if conceding is Side.LEFT else self.canvas_width
            self.add_screen_shake(*PADDLE_SHAKE)
            events["shield_saves"].append({"side": conceding})
            logger.debug(f"Shield saved a goal for {conceding.value}")
            return

        award_rally_bonus(state.progress, state.rally.rallies)
        scorer = conceding.opponent
        state.score.add_point(scorer)
        state.rally.rallies = 0
        events["goals"].append({"side": scorer, "score": state.score.to_tuple()})
        logger.debug(f"Point for {scorer.value}, score {state.score.left}-{state.score.right}")
        self.reset_ball()

    def _check_winner(self, events: dict[str, list[Any]]) -> None:
        state = self.state
        if state.score.left >= self.config.WINNING_SCORE:
            state.winner = Side.LEFT
        elif state.score.right >= self.config.WINNING_SCORE:
            state.winner = Side.RIGHT
        else:
            return

        events["victory"].append({"side": state.winner, "score": state.score.to_tuple()})
        logger.debug(f"{state.winner.value} wins {state.score.left}-{state.score.right}")
        if state.winner is Side.LEFT:
            self._unlock(events, award_victory(state.progress, self.current_time))

    def _check_level_up(self, events: dict[str, list[Any]]) -> None:
        progress = self.state.progress
        if not check_level_up(progress):
            return
        self.add_screen_shake(*LEVEL_UP_SHAKE)
        events["level_ups"].append({"level": progress.level})
        logger.debug(f"Level up: {progress.level}")

    def _unlock(self, events: dict[str, list[Any]], achievements: list[str]) -> None:
        for name in achievements:
            events["achievements"].append({"name": name})
            logger.debug(f"Achievement unlocked: {name}")

    def get_render_state(self) -> RenderState:
        """Returns a read-only snapshot of the current state"""
        state = self.state
        effects = state.effects
        ball = state.ball
        progress = state.progress
        return RenderState(
            ball_position=ball.position.to_tuple(),
            ball_radius=ball.radius,
            ball_trail=tuple((p.x, p.y, p.size, p.life) for p in ball.trail),
            left_paddle=state.left_paddle.get_rect(),
            right_paddle=state.right_paddle.get_rect(),
            score=state.score.to_tuple(),
            winner=state.winner.value if state.winner is not None else None,
            screen_shake=(state.screen_shake.x, state.screen_shake.y),
            power_ups=tuple(
                (p.position.x, p.position.y, p.type.value, p.rotation, p.color, p.symbol)
                for p in state.power_ups
            ),
            big_paddle_side=(
                effects.big_paddle.owner.value
                if effects.big_paddle.active and effects.big_paddle.owner is not None
                else None
            ),
            extra_balls=tuple(
                (b.position.x, b.position.y, b.radius) for b in effects.multi_ball.extra_balls
            ),
            extra_ball_trails=tuple(
                tuple((p.x, p.y, p.size, p.life) for p in b.trail)
                for b in effects.multi_ball.extra_balls
            ),
            level=progress.level,
            current_xp=progress.current_xp,
            xp_to_next=progress.xp_to_next,
            achievements=progress.achievements.unlocked(),
        )

    def is_game_over(self) -> bool:
        """Checks if the game is over"""
        return self.state.winner is not None

    def get_winner(self) -> Side | None:
        """Returns the winner, or None while the game goes on"""
        return self.state.winner
