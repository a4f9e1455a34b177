"""
Neon Pong game entities: balls, paddles, power-ups and the owned game state
"""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum

import numpy as np

from neon_pong.utils.config import game_config


class Side(str, Enum):
    """Half of the field owned by a player"""

    LEFT = "left"
    RIGHT = "right"

    @property
    def opponent(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class PowerUpType(Enum):
    """Available power-up types"""

    BIG_PADDLE = "big_paddle"
    FAST_BALL = "fast_ball"
    MULTI_BALL = "multi_ball"
    SHIELD = "shield"


class Control(Enum):
    """Discrete control signals an input source can hold"""

    LEFT_UP = "left_up"
    LEFT_DOWN = "left_down"
    RIGHT_UP = "right_up"
    RIGHT_DOWN = "right_down"
    RESET = "reset"


@dataclass
class Vector2D:
    """Simple 2D vector for positions and velocities"""

    x: float
    y: float

    def __add__(self, other: "Vector2D") -> "Vector2D":
        return Vector2D(self.x + other.x, self.y + other.y)

    def __mul__(self, scalar: float) -> "Vector2D":
        return Vector2D(self.x * scalar, self.y * scalar)

    def magnitude(self) -> float:
        return float(np.linalg.norm([self.x, self.y]))

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def copy(self) -> "Vector2D":
        return Vector2D(self.x, self.y)


@dataclass
class Particle:
    """Fading trail particle left behind a ball"""

    x: float
    y: float
    size: float
    life: int


class Ball:
    """Game ball"""

    def __init__(self, x: float, y: float, vx: float, vy: float, radius: float | None = None):
        self.position = Vector2D(x, y)
        self.velocity = Vector2D(vx, vy)
        self.radius = radius if radius is not None else game_config.BALL_RADIUS
        self.trail: list[Particle] = []

    def __repr__(self) -> str:
        return (
            f"Ball(position={self.position.to_tuple()}, "
            f"velocity={self.velocity.to_tuple()}, radius={self.radius})"
        )


class Paddle:
    """Player paddle"""

    def __init__(
        self,
        x: float,
        y: float,
        width: float | None = None,
        height: float | None = None,
        speed: float | None = None,
    ):
        self.position = Vector2D(x, y)
        self.width = width if width is not None else game_config.PADDLE_WIDTH
        self.height = height if height is not None else game_config.PADDLE_HEIGHT
        self.speed = speed if speed is not None else game_config.PADDLE_SPEED
        self.prev_y = y
        self.velocity = 0.0  # Signed, pixels per tick

    @property
    def center_y(self) -> float:
        return self.position.y + self.height / 2

    def get_rect(self, size_multiplier: float = 1.0) -> tuple[float, float, float, float]:
        """
        Returns the collision rectangle (x, y, width, height).

        An enlarged paddle grows symmetrically around its original center.
        """
        height = self.height * size_multiplier
        y = self.position.y - (height - self.height) / 2 if size_multiplier > 1 else self.position.y
        return (self.position.x, y, self.width, height)


@dataclass
class PowerUp:
    """Power-up floating on the field until a ball picks it up"""

    id: int
    type: PowerUpType
    color: str
    symbol: str
    position: Vector2D
    base_position: Vector2D
    rotation: float
    float_offset: float  # Animation phase (radians)
    float_speed: float
    float_radius: float
    base_float_radius: float
    spawn_time: float  # Simulation clock (ms)


@dataclass
class TimedEffect:
    """Effect slot counting down in frames"""

    active: bool = False
    time_left: int = 0
    owner: Side | None = None


@dataclass
class MultiBallEffect(TimedEffect):
    """Multi-ball slot, holding the extra balls while active"""

    extra_balls: list[Ball] = field(default_factory=list)


@dataclass
class ShieldEffect:
    """Shield slot, counting absorbed goals instead of frames"""

    active: bool = False
    uses: int = 0
    owner: Side | None = None


@dataclass
class ActiveEffects:
    """One slot per power-up type"""

    big_paddle: TimedEffect = field(default_factory=TimedEffect)
    fast_ball: TimedEffect = field(default_factory=TimedEffect)
    multi_ball: MultiBallEffect = field(default_factory=MultiBallEffect)
    shield: ShieldEffect = field(default_factory=ShieldEffect)

    def timed(self) -> dict[PowerUpType, TimedEffect]:
        """Slots with a frame countdown"""
        return {
            PowerUpType.BIG_PADDLE: self.big_paddle,
            PowerUpType.FAST_BALL: self.fast_ball,
            PowerUpType.MULTI_BALL: self.multi_ball,
        }

    def paddle_multiplier(self, side: Side, enlarged: float) -> float:
        """Collision size multiplier of a side's paddle"""
        if self.big_paddle.active and self.big_paddle.owner is side:
            return enlarged
        return 1.0


@dataclass
class AIState:
    """Opponent controller memory kept between ticks"""

    target_y: float = 0.0
    last_reaction_time: float = 0.0


@dataclass
class Score:
    left: int = 0
    right: int = 0

    def add_point(self, side: Side) -> None:
        if side is Side.LEFT:
            self.left += 1
        else:
            self.right += 1

    def to_tuple(self) -> tuple[int, int]:
        return (self.left, self.right)


@dataclass
class ScreenShake:
    """Cosmetic feedback counter, decays every tick"""

    x: float = 0.0
    y: float = 0.0
    intensity: float = 0.0
    duration: int = 0


@dataclass
class RallyStats:
    rallies: int = 0
    longest_rally: int = 0
    total_hits: int = 0


@dataclass
class Achievements:
    """One-time session achievements"""

    rally10: bool = False
    first_win: bool = False
    quick_reflexes: bool = False

    def unlocked(self) -> tuple[str, ...]:
        return tuple(name for name, value in vars(self).items() if value)


@dataclass
class Progress:
    """Experience and level earned over the session, kept across games"""

    level: int = 1
    current_xp: int = 0
    xp_to_next: int = 100
    achievements: Achievements = field(default_factory=Achievements)


@dataclass
class DragInput:
    """Pointer/touch drag on one side, as a Y delta since the last sample"""

    active: bool = False
    delta: float = 0.0


@dataclass
class InputState:
    """Everything an input source hands to a tick"""

    controls: frozenset[Control] = frozenset()
    left_drag: DragInput = field(default_factory=DragInput)
    right_drag: DragInput = field(default_factory=DragInput)

    def is_held(self, control: Control) -> bool:
        return control in self.controls


@dataclass
class GameState:
    """Complete mutable simulation state, owned by the physics engine"""

    ball: Ball
    left_paddle: Paddle
    right_paddle: Paddle
    score: Score = field(default_factory=Score)
    winner: Side | None = None
    ai_state: AIState = field(default_factory=AIState)
    screen_shake: ScreenShake = field(default_factory=ScreenShake)
    power_ups: list[PowerUp] = field(default_factory=list)
    effects: ActiveEffects = field(default_factory=ActiveEffects)
    rally: RallyStats = field(default_factory=RallyStats)
    progress: Progress = field(default_factory=Progress)
    frame_count: int = 0

    def paddle(self, side: Side) -> Paddle:
        return self.left_paddle if side is Side.LEFT else self.right_paddle


@dataclass(frozen=True)
class RenderState:
    """Read-only per-tick snapshot handed to renderers"""

    ball_position: tuple[float, float]
    ball_radius: float
    ball_trail: tuple[tuple[float, float, float, int], ...]  # x, y, size, life
    left_paddle: tuple[float, float, float, float]
    right_paddle: tuple[float, float, float, float]
    score: tuple[int, int]
    winner: str | None
    screen_shake: tuple[float, float]
    power_ups: tuple[tuple[float, float, str, float, str, str], ...]  # x, y, type, rot, color, sym
    big_paddle_side: str | None
    extra_balls: tuple[tuple[float, float, float], ...]  # x, y, radius
    extra_ball_trails: tuple[tuple[tuple[float, float, float, int], ...], ...]  # per extra ball
    level: int
    current_xp: int
    xp_to_next: int
    achievements: tuple[str, ...]
