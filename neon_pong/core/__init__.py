"""
Core module of Neon Pong game
"""

from neon_pong.core.entities import Ball
from neon_pong.core.entities import Control
from neon_pong.core.entities import GameState
from neon_pong.core.entities import InputState
from neon_pong.core.entities import Paddle
from neon_pong.core.entities import PowerUp
from neon_pong.core.entities import PowerUpType
from neon_pong.core.entities import RenderState
from neon_pong.core.entities import Side
from neon_pong.core.entities import Vector2D

__all__ = [
    "Ball",
    "Paddle",
    "PowerUp",
    "PowerUpType",
    "GameState",
    "RenderState",
    "InputState",
    "Control",
    "Side",
    "Vector2D",
]
