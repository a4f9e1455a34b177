"""
Scripted AI opponent for Neon Pong

The opponent imitates a human: it reacts with a delay, aims with an error that
shrinks with difficulty, and (from medium on) aims where the ball will be
rather than where it is.
"""

import random
from typing import Any

from neon_pong.core.entities import AIState, Ball, Paddle
from neon_pong.core.kinematics import predict_ball_y, update_paddle_position
from neon_pong.utils.config import AI_DIFFICULTIES, AIProfile, game_config

MAX_AIM_ERROR = 50.0  # Pixels of error at zero accuracy


def get_ai_profile(difficulty: str) -> AIProfile:
    """Profile of a difficulty tier ('easy', 'medium' or 'hard')"""
    if difficulty not in AI_DIFFICULTIES:
        raise ValueError(
            f"Unknown AI difficulty: {difficulty}. Available: {list(AI_DIFFICULTIES.keys())}"
        )
    return AI_DIFFICULTIES[difficulty]


def is_ball_approaching(ball: Ball, paddle_x: float, canvas_width: float) -> bool:
    """Checks if the ball moves towards the side of the paddle"""
    if paddle_x > canvas_width / 2:
        return ball.velocity.x > 0
    return ball.velocity.x < 0


def should_react(
    current_time: float,
    last_reaction_time: float,
    profile: AIProfile,
    frame_duration_ms: float = 1000 / 60,
) -> bool:
    """Checks if the reaction delay of the profile has elapsed"""
    reaction_delay_ms = profile.reaction_time * frame_duration_ms
    return current_time - last_reaction_time > reaction_delay_ms


def calculate_ai_target(
    ball: Ball,
    paddle: Paddle,
    canvas_height: float,
    profile: AIProfile,
    rng: random.Random | None = None,
) -> float:
    """Y the paddle center should reach, including the aiming error"""
    rng = rng or random.Random()

    if profile.prediction_enabled:
        target_y = predict_ball_y(ball, paddle.position.x, canvas_height)
    else:
        target_y = ball.position.y

    max_error = (1 - profile.accuracy) * MAX_AIM_ERROR
    target_y += (rng.random() - 0.5) * max_error

    return max(0.0, min(canvas_height, target_y))


def update_ai_paddle(
    paddle: Paddle,
    target_y: float,
    canvas_height: float,
    profile: AIProfile,
    dead_zone: float = 4.0,
) -> float:
    """
    New paddle top after one step towards the target.

    Inside the dead zone the paddle holds still. The dead zone is wider than
    half a step, so a step that overshoots always lands inside it.
    """
    difference = target_y - paddle.center_y

    if abs(difference) < dead_zone:
        return paddle.position.y

    movement = -profile.speed if difference < 0 else profile.speed
    return update_paddle_position(paddle.position.y, movement, paddle.height, canvas_height)


def compute_ai_move(
    ball: Ball,
    paddle: Paddle,
    ai_state: AIState,
    canvas_width: float,
    canvas_height: float,
    profile: AIProfile,
    current_time: float,
    rng: random.Random | None = None,
    dead_zone: float = 4.0,
    frame_duration_ms: float = 1000 / 60,
) -> tuple[AIState, float]:
    """
    Complete AI update for one tick.

    Returns:
        tuple: (new AI state, new paddle top)
    """
    if not is_ball_approaching(ball, paddle.position.x, canvas_width):
        return ai_state, paddle.position.y

    if not should_react(current_time, ai_state.last_reaction_time, profile, frame_duration_ms):
        # Keep moving towards the previous target
        new_y = update_ai_paddle(paddle, ai_state.target_y, canvas_height, profile, dead_zone)
        return ai_state, new_y

    new_target = calculate_ai_target(ball, paddle, canvas_height, profile, rng)
    new_y = update_ai_paddle(paddle, new_target, canvas_height, profile, dead_zone)
    return AIState(target_y=new_target, last_reaction_time=current_time), new_y


class OpponentController:
    """AI opponent bound to a difficulty tier"""

    def __init__(
        self,
        difficulty: str = "medium",
        dead_zone: float | None = None,
        frame_duration_ms: float | None = None,
        rng: random.Random | None = None,
    ):
        self.difficulty = difficulty
        self.profile = get_ai_profile(difficulty)
        self.dead_zone = dead_zone if dead_zone is not None else game_config.AI_DEAD_ZONE
        self.frame_duration_ms = (
            frame_duration_ms if frame_duration_ms is not None else game_config.frame_duration_ms
        )
        self.rng = rng or random.Random()

    def move(
        self,
        ball: Ball,
        paddle: Paddle,
        ai_state: AIState,
        canvas_width: float,
        canvas_height: float,
        current_time: float,
    ) -> tuple[AIState, float]:
        """Returns the new AI state and paddle top for this tick"""
        return compute_ai_move(
            ball,
            paddle,
            ai_state,
            canvas_width,
            canvas_height,
            self.profile,
            current_time,
            rng=self.rng,
            dead_zone=self.dead_zone,
            frame_duration_ms=self.frame_duration_ms,
        )


def create_opponent(difficulty: str, **kwargs: Any) -> OpponentController:
    """
    Factory to create opponents

    Args:
        difficulty: AI difficulty ('easy', 'medium', 'hard')
        **kwargs: Additional arguments for the controller

    Returns:
        OpponentController: Controller for the requested tier
    """
    return OpponentController(difficulty=difficulty, **kwargs)
