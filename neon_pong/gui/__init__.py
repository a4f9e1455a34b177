"""
Input adapters for Neon Pong
"""

from neon_pong.gui.keyboard import BallTrackingInput
from neon_pong.gui.keyboard import KeyboardInput

__all__ = ["BallTrackingInput", "KeyboardInput"]
