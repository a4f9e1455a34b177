"""
Keyboard and drag input for Neon Pong
"""

from collections.abc import Mapping

import pygame

from neon_pong.core.entities import Control, DragInput, InputState, Side
from neon_pong.core.physics import PhysicsEngine
from neon_pong.utils.config import KeyboardLayout, game_config


class KeyboardInput:
    """
    Input source built from keyboard state and pointer/touch drags.

    Keys are mapped through a keyboard layout: the left paddle uses the
    layout letters, the right paddle the arrow keys.
    """

    def __init__(self, layout: KeyboardLayout | None = None):
        """
        Initialize the input source

        Args:
            layout: Keyboard layout, the configured one if None
        """
        self.layout = layout or game_config.get_keyboard_layout()
        self.key_mapping = {
            self.layout.left_keys["up"]: Control.LEFT_UP,
            self.layout.left_keys["down"]: Control.LEFT_DOWN,
            self.layout.right_keys["up"]: Control.RIGHT_UP,
            self.layout.right_keys["down"]: Control.RIGHT_DOWN,
            self.layout.reset_key: Control.RESET,
        }
        self.controls: frozenset[Control] = frozenset()

        # Per side: last sampled drag Y, accumulated delta since the last poll
        self._drag_last_y: dict[Side, float | None] = {Side.LEFT: None, Side.RIGHT: None}
        self._drag_delta: dict[Side, float] = {Side.LEFT: 0.0, Side.RIGHT: 0.0}

    def update_from_keys(self, keys_pressed: Mapping[int, bool]) -> None:
        """Update held controls from the currently pressed keys"""
        self.controls = frozenset(
            control for key, control in self.key_mapping.items() if keys_pressed.get(key, False)
        )

    def update_from_pygame(self) -> None:
        """Read the keyboard state from pygame (the display must be initialized)"""
        pressed = pygame.key.get_pressed()
        self.update_from_keys({key: bool(pressed[key]) for key in self.key_mapping})

    def begin_drag(self, side: Side, y: float) -> None:
        """Start a drag on one half of the field"""
        self._drag_last_y[side] = y
        self._drag_delta[side] = 0.0

    def move_drag(self, side: Side, y: float) -> None:
        """Record a drag sample, ignored when no drag is in progress"""
        last_y = self._drag_last_y[side]
        if last_y is None:
            return
        self._drag_delta[side] += y - last_y
        self._drag_last_y[side] = y

    def end_drag(self, side: Side) -> None:
        self._drag_last_y[side] = None
        self._drag_delta[side] = 0.0

    def _take_drag(self, side: Side) -> DragInput:
        active = self._drag_last_y[side] is not None
        delta = self._drag_delta[side]
        self._drag_delta[side] = 0.0
        return DragInput(active=active, delta=delta)

    def poll(self) -> InputState:
        """Returns the held controls and the drag deltas since the previous poll"""
        return InputState(
            controls=self.controls,
            left_drag=self._take_drag(Side.LEFT),
            right_drag=self._take_drag(Side.RIGHT),
        )

    def get_control_info(self) -> dict[str, str]:
        """Get information about controls for the left player"""
        return self.layout.display_names.copy()


class BallTrackingInput:
    """Scripted input source holding the left paddle on the ball, for headless matches"""

    def __init__(self, physics_engine: PhysicsEngine, tolerance: float = 10.0):
        self.physics_engine = physics_engine
        self.tolerance = tolerance

    def poll(self) -> InputState:
        state = self.physics_engine.state
        difference = state.ball.position.y - state.left_paddle.center_y
        if difference < -self.tolerance:
            return InputState(controls=frozenset({Control.LEFT_UP}))
        if difference > self.tolerance:
            return InputState(controls=frozenset({Control.LEFT_DOWN}))
        return InputState()
