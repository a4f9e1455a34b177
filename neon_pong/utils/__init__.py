"""
Utility modules of Neon Pong
"""

from neon_pong.utils.config import AI_DIFFICULTIES
from neon_pong.utils.config import AIProfile
from neon_pong.utils.config import GameConfig
from neon_pong.utils.config import PhysicsConfig
from neon_pong.utils.config import game_config
from neon_pong.utils.config import physics_config

__all__ = [
    "game_config",
    "physics_config",
    "GameConfig",
    "PhysicsConfig",
    "AIProfile",
    "AI_DIFFICULTIES",
]
