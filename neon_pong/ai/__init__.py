"""
AI module for Neon Pong
"""

from neon_pong.ai.controller import OpponentController
from neon_pong.ai.controller import compute_ai_move
from neon_pong.ai.controller import create_opponent
from neon_pong.ai.controller import get_ai_profile

__all__ = ["OpponentController", "compute_ai_move", "create_opponent", "get_ai_profile"]
