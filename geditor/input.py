"""Per-frame mouse input state for the editor canvas."""

from __future__ import annotations

from enum import IntEnum

from geditor.vector import Vector2

OUT_OF_BOUNDS = Vector2(-1000, -1000)


class InputState(IntEnum):
    """State of a mouse button within the current frame."""

    JUST_PRESSED = 0
    JUST_RELEASED = 1
    PRESSED = 2
    RELEASED = 3


class MouseButton(IntEnum):
    """Mouse buttons the editor tracks."""

    LMB = 0
    RMB = 1


def tick_state(state: InputState) -> InputState:
    """Advance a button state by one frame."""
    if state is InputState.JUST_PRESSED:
        return InputState.PRESSED
    if state is InputState.JUST_RELEASED:
        return InputState.RELEASED
    return InputState(state)


class InputTracker:
    """Collects mouse events and answers per-frame queries about them."""

    def __init__(self) -> None:
        self._buttons = {button: InputState.RELEASED for button in MouseButton}
        self._in_bounds = False
        self._position = Vector2()
        self._last_position = Vector2()
        self._scroll = Vector2()

    def mouse_enter(self) -> None:
        """The pointer entered the canvas."""
        self._in_bounds = True

    def mouse_leave(self) -> None:
        """The pointer left the canvas."""
        self._in_bounds = False

    def motion(self, x: float, y: float) -> None:
        """The pointer moved to ``(x, y)`` in canvas coordinates."""
        self._position = Vector2(x, y)

    def scroll(self, dx: float, dy: float) -> None:
        """Accumulate a scroll-wheel delta for this frame."""
        self._scroll = self._scroll + Vector2(dx, dy)

    def button_pressed(self, button: MouseButton) -> None:
        """A button went down."""
        self._buttons[MouseButton(button)] = InputState.JUST_PRESSED

    def button_released(self, button: MouseButton) -> None:
        """A button went up."""
        self._buttons[MouseButton(button)] = InputState.JUST_RELEASED

    def tick(self) -> None:
        """Advance button states and remember the pointer position for motion deltas."""
        self._buttons = {button: tick_state(state) for button, state in self._buttons.items()}
        self._last_position = self._position

    def end_frame(self) -> None:
        """Reset the accumulated scroll."""
        self._scroll = Vector2()

    def state(self, button: MouseButton) -> InputState:
        """Current state of ``button``."""
        return self._buttons[MouseButton(button)]

    def is_pressed(self, button: MouseButton) -> bool:
        """True while the button is held (including the frame it went down)."""
        return self.state(button) in (InputState.PRESSED, InputState.JUST_PRESSED)

    def is_released(self, button: MouseButton) -> bool:
        """True while the button is up (including the frame it came up)."""
        return self.state(button) in (InputState.RELEASED, InputState.JUST_RELEASED)

    def is_just_pressed(self, button: MouseButton) -> bool:
        """True only in the frame the button went down."""
        return self.state(button) is InputState.JUST_PRESSED

    def is_just_released(self, button: MouseButton) -> bool:
        """True only in the frame the button came up."""
        return self.state(button) is InputState.JUST_RELEASED

    def mouse_position(self) -> Vector2:
        """Pointer position, or a far off-screen point when it is outside the canvas."""
        if not self._in_bounds:
            return OUT_OF_BOUNDS
        return self._position

    def relative_motion(self) -> Vector2:
        """Pointer movement since the last tick."""
        return self._position - self._last_position

    def scroll_delta(self) -> Vector2:
        """Scroll accumulated since the last frame end."""
        return self._scroll