"""
Input protocol - defines interface for everything that produces paddle controls
"""

from typing import Protocol

from neon_pong.core.entities import InputState


class InputSource(Protocol):
    """
    Protocol for input producers (keyboard, touch, scripted bots, replays).

    The simulation never polls hardware itself: the frame loop asks the input
    source once per tick.
    """

    def poll(self) -> InputState:
        """
        Returns the controls held and drag deltas since the previous poll.

        Example:
            >>> state = source.poll()
            >>> state.is_held(Control.LEFT_UP)
            False
        """
        ...
