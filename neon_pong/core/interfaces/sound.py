"""
Sound protocol - fire-and-forget audio cues triggered by simulation events
"""

from typing import Protocol


class SoundTrigger(Protocol):
    """
    Protocol for sound backends.

    Every call returns immediately; the simulation never waits on audio.
    """

    def play_wall_bounce(self) -> None: ...

    def play_paddle_hit(self, speed: float) -> None:
        """
        Args:
            speed: Ball speed right after the hit, louder sounds for faster balls
        """
        ...

    def play_power_up(self) -> None: ...

    def play_score(self) -> None: ...

    def play_victory(self) -> None: ...
