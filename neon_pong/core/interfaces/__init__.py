"""
Protocols for the collaborators of the simulation core
"""

from neon_pong.core.interfaces.input import InputSource
from neon_pong.core.interfaces.renderer import RendererProtocol
from neon_pong.core.interfaces.sound import SoundTrigger
from neon_pong.core.interfaces.storage import ScoreStore

__all__ = ["InputSource", "RendererProtocol", "ScoreStore", "SoundTrigger"]
