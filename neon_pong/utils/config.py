"""
Neon Pong game configuration with Pydantic validation
"""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pygame
from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator

logger = logging.getLogger(__name__)


@dataclass
class KeyboardLayout:
    """Configuration for keyboard layouts"""

    name: str
    left_keys: dict[str, int]
    right_keys: dict[str, int]
    reset_key: int
    display_names: dict[str, str]


_ARROW_KEYS = {"up": pygame.K_UP, "down": pygame.K_DOWN}

# Keyboard layouts definition
KEYBOARD_LAYOUTS = {
    "qwerty": KeyboardLayout(
        name="QWERTY",
        left_keys={"up": pygame.K_w, "down": pygame.K_s},
        right_keys=_ARROW_KEYS,
        reset_key=pygame.K_r,
        display_names={"up": "W", "down": "S"},
    ),
    "azerty": KeyboardLayout(
        name="AZERTY",
        left_keys={"up": pygame.K_z, "down": pygame.K_s},  # Z instead of W
        right_keys=_ARROW_KEYS,
        reset_key=pygame.K_r,
        display_names={"up": "Z", "down": "S"},
    ),
    "qwertz": KeyboardLayout(
        name="QWERTZ",
        left_keys={"up": pygame.K_w, "down": pygame.K_s},
        right_keys=_ARROW_KEYS,
        reset_key=pygame.K_r,
        display_names={"up": "W", "down": "S"},
    ),
}


@dataclass(frozen=True)
class AIProfile:
    """Tuning of one opponent difficulty tier"""

    speed: float  # Paddle movement (pixels/frame)
    reaction_time: int  # Frames to wait before re-targeting
    accuracy: float  # 0-1, higher = smaller aiming error
    prediction_enabled: bool  # Aim at the predicted intercept instead of the ball


# Difficulty tiers, ordered from easiest to hardest
AI_DIFFICULTIES = {
    "easy": AIProfile(speed=5.5, reaction_time=12, accuracy=0.8, prediction_enabled=False),
    "medium": AIProfile(speed=6.5, reaction_time=6, accuracy=0.9, prediction_enabled=True),
    "hard": AIProfile(speed=7.5, reaction_time=2, accuracy=0.98, prediction_enabled=True),
}


class PhysicsConfig(BaseModel):
    """Ball response tuning used by the bounce and speed-limit formulas"""

    model_config = {"validate_assignment": True}

    BALL_SPEED_MULTIPLIER: float = Field(default=1.1, gt=1.0, description="Acceleration per hit")
    MAX_BALL_SPEED: float = Field(default=15.0, gt=0, description="Maximum ball speed")
    MIN_BALL_SPEED: float = Field(default=4.0, gt=0, description="Minimum ball speed")
    PADDLE_INFLUENCE: float = Field(
        default=0.4, ge=0, description="Share of paddle velocity given to the ball"
    )
    BOUNCE_ANGLE_FACTOR: float = Field(
        default=3.5, ge=0, description="Vertical deflection for edge hits"
    )
    CHAOS_CHANCE: float = Field(default=0.25, ge=0, le=1.0, description="Random nudge chance")
    CHAOS_INTENSITY: float = Field(default=6.0, ge=0, description="Random nudge amplitude")

    @model_validator(mode="after")
    def validate_speed_range(self) -> "PhysicsConfig":
        """Validate that the minimum speed stays below the maximum"""
        if self.MIN_BALL_SPEED >= self.MAX_BALL_SPEED:
            raise ValueError(
                f"MIN_BALL_SPEED ({self.MIN_BALL_SPEED}) must be below "
                f"MAX_BALL_SPEED ({self.MAX_BALL_SPEED})"
            )
        return self


class GameConfig(BaseModel):
    """Main game configuration with Pydantic validation"""

    # Allow mutation for compatibility with existing code
    model_config = {"validate_assignment": True}

    # Canvas dimensions
    CANVAS_WIDTH: int = Field(default=1400, gt=0, description="Canvas width in pixels")
    CANVAS_HEIGHT: int = Field(default=700, gt=0, description="Canvas height in pixels")

    # Ball
    BALL_RADIUS: float = Field(default=8.0, gt=0, description="Ball radius in pixels")
    BALL_INITIAL_SPEED_X: float = Field(default=6.0, gt=0, description="Serve speed (x)")
    BALL_INITIAL_SPEED_Y: float = Field(default=3.0, ge=0, description="Serve speed range (y)")
    EXTRA_BALL_RADIUS: float = Field(default=6.0, gt=0, description="Multi-ball radius")
    TRAIL_PARTICLE_LIFE: int = Field(default=20, gt=0, description="Trail particle lifetime")
    EXTRA_TRAIL_PARTICLE_LIFE: int = Field(default=15, gt=0, description="Extra ball trail life")
    MAX_TRAIL_PARTICLES: int = Field(default=100, gt=0, description="Trail length cap")
    TRAIL_DECAY: float = Field(default=0.95, gt=0, lt=1.0, description="Particle shrink rate")

    # Player paddles
    PADDLE_WIDTH: float = Field(default=12.0, gt=0, description="Paddle width in pixels")
    PADDLE_HEIGHT: float = Field(default=80.0, gt=0, description="Paddle height in pixels")
    PADDLE_SPEED: float = Field(default=4.5, gt=0, description="Paddle speed (pixels/frame)")
    PADDLE_MARGIN: float = Field(default=40.0, ge=0, description="Paddle margin from edge")
    TOUCH_SENSITIVITY: float = Field(default=0.8, gt=0, description="Drag delta multiplier")

    # Power-ups
    POWER_UPS_ENABLED: bool = Field(default=True, description="Enable power-up system")
    POWER_UP_INITIAL_SPAWN_DELAY: int = Field(
        default=420, ge=0, description="Grace period before the first spawn (frames)"
    )
    POWER_UP_MIN_SPAWN_SECONDS: float = Field(default=2.0, gt=0, description="Min spawn delay")
    POWER_UP_MAX_SPAWN_SECONDS: float = Field(default=10.0, gt=0, description="Max spawn delay")
    POWER_UP_RADIUS: float = Field(default=20.0, gt=0, description="Pickup radius")
    POWER_UP_MAX_FLOAT_RADIUS: float = Field(default=80.0, gt=0, description="Float radius cap")
    POWER_UP_GROWTH_SECONDS: float = Field(
        default=10.0, gt=0, description="Seconds for the float radius to grow by its base size"
    )
    BIG_PADDLE_DURATION: int = Field(default=480, gt=0, description="Big paddle (frames)")
    FAST_BALL_DURATION: int = Field(default=360, gt=0, description="Fast ball (frames)")
    MULTI_BALL_DURATION: int = Field(default=600, gt=0, description="Multi-ball (frames)")
    SHIELD_USES: int = Field(default=1, gt=0, description="Goals absorbed by a shield")
    FAST_BALL_MULTIPLIER: float = Field(default=1.5, gt=1.0, description="Fast ball speed-up")
    BIG_PADDLE_MULTIPLIER: float = Field(default=2.0, gt=1.0, description="Big paddle growth")

    # Gameplay
    WINNING_SCORE: int = Field(default=11, gt=0, description="Winning score")
    AI_ENABLED: bool = Field(default=True, description="Right paddle driven by the AI")
    DIFFICULTY: str = Field(default="medium", description="AI difficulty tier")
    AI_DEAD_ZONE: float = Field(default=4.0, gt=0, description="AI no-move threshold (pixels)")
    FPS: int = Field(default=60, gt=0, description="Ticks per second")

    # Feedback
    SHAKE_DECAY: float = Field(default=0.9, gt=0, lt=1.0, description="Shake intensity decay")

    # Keyboard layout
    KEYBOARD_LAYOUT: str = Field(default="qwerty", description="Keyboard layout name")

    @field_validator("DIFFICULTY")
    @classmethod
    def validate_difficulty(cls, v: str) -> str:
        """Validate difficulty tier exists"""
        if v not in AI_DIFFICULTIES:
            raise ValueError(f"Unknown difficulty '{v}'. Available: {list(AI_DIFFICULTIES.keys())}")
        return v

    @field_validator("KEYBOARD_LAYOUT")
    @classmethod
    def validate_keyboard_layout(cls, v: str) -> str:
        """Validate keyboard layout exists"""
        if v not in KEYBOARD_LAYOUTS:
            raise ValueError(
                f"Unknown keyboard layout '{v}'. Available: {list(KEYBOARD_LAYOUTS.keys())}"
            )
        return v

    @field_validator("AI_DEAD_ZONE")
    @classmethod
    def validate_dead_zone(cls, v: float) -> float:
        """An overshoot of one step must land inside the dead zone"""
        fastest = max(profile.speed for profile in AI_DIFFICULTIES.values())
        if v * 2 <= fastest:
            raise ValueError(
                f"AI_DEAD_ZONE ({v}) must exceed half the fastest AI speed ({fastest / 2})"
            )
        return v

    @model_validator(mode="after")
    def validate_layout(self) -> "GameConfig":
        """Validate canvas and spawn settings are consistent"""
        min_width = 2 * (self.PADDLE_MARGIN + self.PADDLE_WIDTH) + 100
        if self.CANVAS_WIDTH < min_width:
            raise ValueError(f"CANVAS_WIDTH must be at least {min_width} pixels")

        min_height = self.PADDLE_HEIGHT + 50
        if self.CANVAS_HEIGHT < min_height:
            raise ValueError(f"CANVAS_HEIGHT must be at least {min_height} pixels")

        if self.POWER_UP_MIN_SPAWN_SECONDS > self.POWER_UP_MAX_SPAWN_SECONDS:
            raise ValueError("POWER_UP_MIN_SPAWN_SECONDS must not exceed POWER_UP_MAX_SPAWN_SECONDS")

        return self

    @property
    def frame_duration_ms(self) -> float:
        """Nominal duration of one tick in milliseconds"""
        return 1000.0 / self.FPS

    def get_ai_profile(self) -> AIProfile:
        """Get the profile of the configured difficulty"""
        return AI_DIFFICULTIES[self.DIFFICULTY]

    def get_keyboard_layout(self) -> KeyboardLayout:
        """Get the current keyboard layout configuration"""
        return KEYBOARD_LAYOUTS.get(self.KEYBOARD_LAYOUT, KEYBOARD_LAYOUTS["qwerty"])

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization"""
        return self.model_dump()

    def save_to_file(self, filepath: str = "neon_pong_config.json") -> None:
        """Save configuration to a JSON file"""
        with open(Path(filepath), "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str = "neon_pong_config.json") -> "GameConfig":
        """Load configuration from a JSON file"""
        config_path = Path(filepath)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(config_path) as f:
            config_dict = json.load(f)

        return cls(**config_dict)

    def reset_to_defaults(self) -> None:
        """Reset all fields to their default values"""
        _replace_fields(self, GameConfig())


def _replace_fields(target: BaseModel, source: BaseModel) -> None:
    """Swap every field at once, so no half-updated state is ever validated"""
    target.__dict__.update(source.__dict__)


# Global configuration instances with validation
game_config = GameConfig()
physics_config = PhysicsConfig()


def load_config_from_file(filepath: str = "neon_pong_config.json") -> bool:
    """Load configuration from file into global game_config"""
    try:
        loaded_config = GameConfig.load_from_file(filepath)
        _replace_fields(game_config, loaded_config)
        logger.info(f"Loaded configuration from {filepath}")
        return True
    except FileNotFoundError:
        return False
    except (OSError, ValueError) as e:
        logger.error(f"Error loading config from {filepath}: {e}")
        return False


def _change_values(obj: BaseModel, old_values: dict[str, Any], **kwargs: Any) -> None:
    """Helper to change config values temporarily, recording what was replaced"""
    for name, new_value in kwargs.items():
        previous = getattr(obj, name)
        setattr(obj, name, new_value)
        old_values[name] = previous


def _restore_values(obj: BaseModel, old_values: dict[str, Any]) -> None:
    """Undo the changes in reverse order, through states that were already valid"""
    _change_values(obj, {}, **dict(reversed(list(old_values.items()))))


@contextmanager
def game_config_tmp(**kwargs: Any) -> Iterator[None]:
    """Temporarily modify game config (with validation)"""
    old_values: dict[str, Any] = {}
    try:
        _change_values(game_config, old_values, **kwargs)
        yield
    finally:
        _restore_values(game_config, old_values)


@contextmanager
def physics_config_tmp(**kwargs: Any) -> Iterator[None]:
    """Temporarily modify physics config (with validation)"""
    old_values: dict[str, Any] = {}
    try:
        _change_values(physics_config, old_values, **kwargs)
        yield
    finally:
        _restore_values(physics_config, old_values)
