"""
Power-up system for Neon Pong: spawning, floating animation, pickup and timed effects

Power-ups get harder to catch the longer they wait: their floating radius
grows with the time elapsed since they spawned.
"""

import itertools
import logging
import math
import random
from dataclasses import dataclass
from dataclasses import replace

from neon_pong.core.collision import Circle, check_circle_circle_collision
from neon_pong.core.entities import (
    ActiveEffects,
    Ball,
    PowerUp,
    PowerUpType,
    Side,
    Vector2D,
)
from neon_pong.utils.config import GameConfig, game_config

logger = logging.getLogger(__name__)

SPAWN_MARGIN_X = 150.0
SPAWN_MARGIN_Y = 75.0
ROTATION_STEP = 0.05
EDGE_MARGIN = 30.0
EXTRA_BALL_OFFSET = 50.0


@dataclass(frozen=True)
class PowerUpSpec:
    """Static description of a power-up type"""

    type: PowerUpType
    color: str
    symbol: str
    duration: int | None = None  # Frames, for timed power-ups
    uses: int | None = None  # For one-shot power-ups like the shield


POWER_UP_TYPES: dict[PowerUpType, PowerUpSpec] = {
    PowerUpType.BIG_PADDLE: PowerUpSpec(PowerUpType.BIG_PADDLE, "#3b82f6", "B"),
    PowerUpType.FAST_BALL: PowerUpSpec(PowerUpType.FAST_BALL, "#ef4444", "F"),
    PowerUpType.MULTI_BALL: PowerUpSpec(PowerUpType.MULTI_BALL, "#f59e0b", "M"),
    PowerUpType.SHIELD: PowerUpSpec(PowerUpType.SHIELD, "#10b981", "S"),
}


def get_power_up_config(power_up_type: PowerUpType, config: GameConfig | None = None) -> PowerUpSpec:
    """Power-up description with its duration or use count from the configuration"""
    config = config or game_config
    type_spec = POWER_UP_TYPES.get(power_up_type)
    if type_spec is None:
        raise ValueError(
            f"Unknown power-up type: {power_up_type}. Available: {list(POWER_UP_TYPES.keys())}"
        )

    if power_up_type is PowerUpType.BIG_PADDLE:
        return replace(type_spec, duration=config.BIG_PADDLE_DURATION)
    if power_up_type is PowerUpType.FAST_BALL:
        return replace(type_spec, duration=config.FAST_BALL_DURATION)
    if power_up_type is PowerUpType.MULTI_BALL:
        return replace(type_spec, duration=config.MULTI_BALL_DURATION)
    return replace(type_spec, uses=config.SHIELD_USES)


def generate_spawn_timer(
    config: GameConfig | None = None, rng: random.Random | None = None
) -> int:
    """Frames until the next spawn, drawn from the configured range of seconds"""
    config = config or game_config
    rng = rng or random.Random()
    seconds = rng.uniform(config.POWER_UP_MIN_SPAWN_SECONDS, config.POWER_UP_MAX_SPAWN_SECONDS)
    return math.floor(seconds * config.FPS)


def should_spawn_power_up(spawn_timer: int, current_power_up_count: int) -> bool:
    """A power-up spawns when the timer ran out and the field is empty"""
    return spawn_timer <= 0 and current_power_up_count == 0


def spawn_power_up(
    canvas_width: float,
    canvas_height: float,
    current_time: float,
    power_up_id: int,
    rng: random.Random | None = None,
) -> PowerUp:
    """Creates a power-up of random type at a random position away from the edges"""
    rng = rng or random.Random()
    type_spec = POWER_UP_TYPES[rng.choice(list(POWER_UP_TYPES))]

    x = rng.random() * (canvas_width - SPAWN_MARGIN_X * 2) + SPAWN_MARGIN_X
    y = rng.random() * (canvas_height - SPAWN_MARGIN_Y * 2) + SPAWN_MARGIN_Y
    float_radius = 20 + rng.random() * 15

    return PowerUp(
        id=power_up_id,
        type=type_spec.type,
        color=type_spec.color,
        symbol=type_spec.symbol,
        position=Vector2D(x, y),
        base_position=Vector2D(x, y),
        rotation=0.0,
        float_offset=rng.random() * math.pi * 2,
        float_speed=0.02 + rng.random() * 0.03,
        float_radius=float_radius,
        base_float_radius=float_radius,
        spawn_time=current_time,
    )


def update_power_up_animation(
    power_up: PowerUp,
    canvas_width: float,
    canvas_height: float,
    current_time: float,
    config: GameConfig | None = None,
) -> None:
    """Advances rotation and floating of a power-up (in place)"""
    config = config or game_config

    power_up.rotation += ROTATION_STEP
    power_up.float_offset += power_up.float_speed

    elapsed_seconds = (current_time - power_up.spawn_time) / 1000
    growth_factor = 1 + elapsed_seconds / config.POWER_UP_GROWTH_SECONDS
    power_up.float_radius = min(
        power_up.base_float_radius * growth_factor, config.POWER_UP_MAX_FLOAT_RADIUS
    )

    radius = power_up.float_radius
    new_x = power_up.base_position.x + math.cos(power_up.float_offset) * radius
    new_y = power_up.base_position.y + math.sin(power_up.float_offset * 0.7) * radius * 0.6

    # Clamp to canvas bounds, the margin grows with the float radius
    margin = EDGE_MARGIN + radius
    new_x = max(margin, min(canvas_width - margin, new_x))
    new_y = max(margin, min(canvas_height - margin, new_y))

    # A clamped axis moves its base point, otherwise the power-up sticks to the wall
    if new_x in (margin, canvas_width - margin):
        power_up.base_position.x = new_x
    if new_y in (margin, canvas_height - margin):
        power_up.base_position.y = new_y

    power_up.position = Vector2D(new_x, new_y)


def update_all_power_ups(
    power_ups: list[PowerUp],
    canvas_width: float,
    canvas_height: float,
    current_time: float,
    config: GameConfig | None = None,
) -> None:
    for power_up in power_ups:
        update_power_up_animation(power_up, canvas_width, canvas_height, current_time, config)


def check_power_up_collision(ball: Ball, power_up: PowerUp, power_up_radius: float = 20.0) -> bool:
    """Checks if a ball touches a power-up"""
    return check_circle_circle_collision(
        Circle.from_ball(ball),
        Circle(power_up.position.x, power_up.position.y, power_up_radius),
    ).collided


def find_colliding_power_up(
    ball: Ball, power_ups: list[PowerUp], power_up_radius: float = 20.0
) -> PowerUp | None:
    """First power-up touched by the ball, if any"""
    for power_up in power_ups:
        if check_power_up_collision(ball, power_up, power_up_radius):
            return power_up
    return None


def remove_power_up(power_ups: list[PowerUp], power_up_id: int) -> list[PowerUp]:
    return [p for p in power_ups if p.id != power_up_id]


def get_power_up_owner(ball: Ball) -> Side:
    """The side a power-up goes to, from the ball direction (dx == 0 goes left)"""
    return Side.RIGHT if ball.velocity.x > 0 else Side.LEFT


def spawn_extra_balls(
    ball: Ball, config: GameConfig | None = None, rng: random.Random | None = None
) -> list[Ball]:
    """Two extra balls mirrored around the primary one, with perturbed velocities"""
    config = config or game_config
    rng = rng or random.Random()

    extra_balls = []
    for offset in (EXTRA_BALL_OFFSET, -EXTRA_BALL_OFFSET):
        extra_balls.append(
            Ball(
                ball.position.x + offset,
                ball.position.y,
                -ball.velocity.x + (rng.random() - 0.5) * 2,
                ball.velocity.y + (rng.random() - 0.5) * 2,
                radius=config.EXTRA_BALL_RADIUS,
            )
        )
    return extra_balls


def activate_power_up(
    effects: ActiveEffects,
    power_up_type: PowerUpType,
    owner: Side,
    ball: Ball,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> bool:
    """
    Starts the effect of a collected power-up.

    Returns:
        bool: False when the pickup changed nothing (multi-ball already running)
    """
    type_spec = get_power_up_config(power_up_type, config)

    if power_up_type is PowerUpType.BIG_PADDLE:
        effects.big_paddle.active = True
        effects.big_paddle.time_left = type_spec.duration or 0
        effects.big_paddle.owner = owner

    elif power_up_type is PowerUpType.FAST_BALL:
        effects.fast_ball.active = True
        effects.fast_ball.time_left = type_spec.duration or 0

    elif power_up_type is PowerUpType.MULTI_BALL:
        if effects.multi_ball.active:
            return False
        effects.multi_ball.active = True
        effects.multi_ball.time_left = type_spec.duration or 0
        effects.multi_ball.extra_balls = spawn_extra_balls(ball, config, rng)

    elif power_up_type is PowerUpType.SHIELD:
        effects.shield.active = True
        effects.shield.uses = type_spec.uses or 0
        effects.shield.owner = owner

    logger.debug(f"Activated {power_up_type.value} for {owner.value}")
    return True


def update_active_effects(effects: ActiveEffects) -> list[PowerUpType]:
    """Counts timed effects down by one frame, returns the ones that expired"""
    expired = []
    for power_up_type, effect in effects.timed().items():
        if not effect.active:
            continue
        effect.time_left -= 1
        if effect.time_left <= 0:
            effect.active = False
            effect.time_left = 0
            effect.owner = None
            expired.append(power_up_type)

    if PowerUpType.MULTI_BALL in expired:
        effects.multi_ball.extra_balls = []

    for power_up_type in expired:
        logger.debug(f"{power_up_type.value} expired")
    return expired


class PowerUpSpawner:
    """Power-up spawning manager, owns the spawn countdown"""

    def __init__(
        self,
        canvas_width: float,
        canvas_height: float,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.config = config or game_config
        self.rng = rng or random.Random()
        self._ids = itertools.count(1)
        self.spawn_timer = self.config.POWER_UP_INITIAL_SPAWN_DELAY

    def reset(self) -> None:
        """Restarts the grace period of a new game"""
        self.spawn_timer = self.config.POWER_UP_INITIAL_SPAWN_DELAY

    def reschedule(self) -> None:
        """Draws a new countdown, used after a spawn or a pickup"""
        self.spawn_timer = generate_spawn_timer(self.config, self.rng)

    def update(self, existing: list[PowerUp], current_time: float) -> list[PowerUp]:
        """Counts down one frame and returns the newly spawned power-ups"""
        if not self.config.POWER_UPS_ENABLED:
            return []

        self.spawn_timer -= 1
        if not should_spawn_power_up(self.spawn_timer, len(existing)):
            return []

        power_up = spawn_power_up(
            self.canvas_width, self.canvas_height, current_time, next(self._ids), self.rng
        )
        self.reschedule()
        logger.debug(
            f"Spawned {power_up.type.value} at ({power_up.position.x:.0f}, {power_up.position.y:.0f})"
        )
        return [power_up]
