"""
Ball and paddle kinematics for Neon Pong

Pure functions: they read entities and return new values, the physics engine
decides what to write back. Randomness always comes from an injectable
``random.Random`` so callers can make outcomes reproducible.
"""

import random

from neon_pong.core.entities import Ball
from neon_pong.core.entities import Side
from neon_pong.core.entities import Vector2D
from neon_pong.utils.config import PhysicsConfig
from neon_pong.utils.config import physics_config


def reset_ball(
    canvas_width: float,
    canvas_height: float,
    initial_speed_x: float = 6.0,
    initial_speed_y: float = 3.0,
    rng: random.Random | None = None,
) -> tuple[Vector2D, Vector2D]:
    """Returns the serve position (canvas center) and a randomized velocity"""
    rng = rng or random.Random()
    dx = initial_speed_x if rng.random() > 0.5 else -initial_speed_x
    dy = (rng.random() * (initial_speed_y * 2) - initial_speed_y) * 0.8
    return Vector2D(canvas_width / 2, canvas_height / 2), Vector2D(dx, dy)


def update_ball_position(ball: Ball, speed_multiplier: float = 1.0) -> Vector2D:
    """Position of the ball after one tick"""
    return ball.position + ball.velocity * speed_multiplier


def check_wall_collision(ball: Ball, canvas_height: float) -> bool:
    """True when the ball touches or crosses the top or bottom wall"""
    return (
        ball.position.y - ball.radius <= 0 or ball.position.y + ball.radius >= canvas_height
    )


def bounce_off_wall(ball: Ball) -> float:
    """Vertical velocity after an elastic wall bounce"""
    return -ball.velocity.y


def check_ball_out_of_bounds(ball: Ball, canvas_width: float) -> Side | None:
    """Which goal line the ball crossed, if any"""
    if ball.position.x < 0:
        return Side.LEFT
    if ball.position.x > canvas_width:
        return Side.RIGHT
    return None


def calculate_ball_speed(ball: Ball) -> float:
    """Magnitude of the ball velocity"""
    return ball.velocity.magnitude()


def apply_speed_limits(ball: Ball, config: PhysicsConfig | None = None) -> Vector2D:
    """
    Rescales the ball velocity into [MIN_BALL_SPEED, MAX_BALL_SPEED].

    Direction is preserved. A ball at rest has no direction, it is served
    horizontally at the minimum speed.
    """
    config = config or physics_config
    current_speed = calculate_ball_speed(ball)

    if current_speed == 0:
        return Vector2D(config.MIN_BALL_SPEED, 0.0)

    if current_speed < config.MIN_BALL_SPEED:
        return ball.velocity * (config.MIN_BALL_SPEED / current_speed)

    if current_speed > config.MAX_BALL_SPEED:
        return ball.velocity * (config.MAX_BALL_SPEED / current_speed)

    return ball.velocity.copy()


def calculate_paddle_bounce(
    ball: Ball,
    paddle_y: float,
    paddle_height: float,
    paddle_velocity: float,
    config: PhysicsConfig | None = None,
    rng: random.Random | None = None,
) -> Vector2D:
    """
    Velocity of the ball after hitting a paddle.

    Args:
        ball: Ball at the moment of contact
        paddle_y: Top of the paddle
        paddle_height: Paddle height
        paddle_velocity: Signed paddle displacement of the last tick
        config: Physics tuning (global physics_config by default)
        rng: Random source for the chaos nudge

    Returns:
        Vector2D: New velocity
    """
    config = config or physics_config
    rng = rng or random.Random()

    # Reverse and accelerate
    new_dx = -ball.velocity.x * config.BALL_SPEED_MULTIPLIER
    new_dy = ball.velocity.y * config.BALL_SPEED_MULTIPLIER

    # Momentum transfer
    new_dy += paddle_velocity * config.PADDLE_INFLUENCE

    # Edge hits deflect sharply, center hits go straight
    paddle_center_y = paddle_y + paddle_height / 2
    hit_position = (ball.position.y - paddle_center_y) / (paddle_height / 2)
    new_dy += hit_position * config.BOUNCE_ANGLE_FACTOR

    if rng.random() < config.CHAOS_CHANCE:
        new_dy += (rng.random() - 0.5) * config.CHAOS_INTENSITY

    new_dy = max(-config.MAX_BALL_SPEED, min(config.MAX_BALL_SPEED, new_dy))

    return Vector2D(new_dx, new_dy)


def predict_ball_y(ball: Ball, target_x: float, canvas_height: float) -> float:
    """
    Predicts the ball y when it reaches target_x, unfolding wall bounces.

    The straight-line y is folded into [0, canvas_height] as a triangle wave
    of period 2 * canvas_height, so any number of reflections costs O(1).
    """
    if ball.velocity.x == 0:
        return ball.position.y

    time_to_reach = (target_x - ball.position.x) / ball.velocity.x
    predicted_y = ball.position.y + ball.velocity.y * time_to_reach

    period = 2 * canvas_height
    folded = predicted_y % period
    if folded > canvas_height:
        folded = period - folded
    return folded


def update_paddle_position(
    current_y: float, movement: float, paddle_height: float, canvas_height: float
) -> float:
    """New paddle top, kept inside the canvas"""
    new_y = current_y + movement
    return max(0.0, min(canvas_height - paddle_height, new_y))


def calculate_paddle_velocity(current_y: float, previous_y: float) -> float:
    """Signed paddle displacement of the last tick (used for momentum transfer)"""
    return current_y - previous_y


def apply_chaos_effect(
    ball: Ball, intensity: float = 2.0, rng: random.Random | None = None
) -> Vector2D:
    """Velocity with a random nudge on both axes"""
    rng = rng or random.Random()
    return Vector2D(
        ball.velocity.x + (rng.random() - 0.5) * intensity,
        ball.velocity.y + (rng.random() - 0.5) * intensity,
    )
