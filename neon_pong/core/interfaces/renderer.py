"""
Renderer protocol - defines interface for different rendering backends
"""

from typing import Protocol

from neon_pong.core.entities import RenderState


class RendererProtocol(Protocol):
    """
    Protocol for renderer implementations.

    Enables multiple rendering backends: Pygame, headless, terminal, web, etc.
    A renderer only reads the snapshot it is given, it never writes back into
    the simulation.
    """

    def initialize(self, width: int, height: int) -> None:
        """
        Initialize the renderer with field dimensions.

        Args:
            width: Field width in pixels
            height: Field height in pixels
        """
        ...

    def render(self, state: RenderState) -> None:
        """
        Draw one frame.

        Args:
            state: Frozen snapshot of the tick that just completed
        """
        ...

    def cleanup(self) -> None:
        """Release renderer resources"""
        ...
