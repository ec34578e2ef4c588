"""Per-frame keyboard and mouse button state tracking."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from enum import IntEnum

__all__ = [
    "MAX_INPUT_KEY",
    "MAX_INPUT_MOUSE",
    "WM_MOUSEMOVE",
    "WM_LBUTTONDOWN",
    "WM_MOUSEWHEEL",
    "ButtonStatus",
    "Keyboard",
    "Mouse",
]

MAX_INPUT_KEY = 255
MAX_INPUT_MOUSE = 8

WM_MOUSEMOVE = 0x0200
WM_LBUTTONDOWN = 0x0201
WM_MOUSEWHEEL = 0x020A


class ButtonStatus(IntEnum):
    """Transition of a key or button between two frames."""

    NONE = 0
    DOWN = 1
    UP = 2
    PRESS = 3
    DBLCLK = 4


def _transition(old: bool, new: bool) -> ButtonStatus:
    if not old and new:
        return ButtonStatus.DOWN
    if old and not new:
        return ButtonStatus.UP
    if old and new:
        return ButtonStatus.PRESS
    return ButtonStatus.NONE


def _held(pressed: Iterable[int], limit: int) -> list[bool]:
    state = [False] * limit
    for code in pressed:
        if 0 <= code < limit:
            state[code] = True
    return state


def _check(index: int, limit: int) -> int:
    if not 0 <= index < limit:
        raise IndexError(f"index {index} out of range 0..{limit - 1}")
    return index


class Keyboard:
    """Tracks which keys went down, came up or stayed pressed this frame."""

    def __init__(self) -> None:
        self._state = [False] * MAX_INPUT_KEY
        self._map = [ButtonStatus.NONE] * MAX_INPUT_KEY

    def update(self, pressed: Iterable[int]) -> None:
        """Take the key codes held now and work out each key's transition."""
        old = self._state
        self._state = _held(pressed, MAX_INPUT_KEY)
        self._map = [_transition(o, n) for o, n in zip(old, self._state)]

    def down(self, key: int) -> bool:
        return self._map[_check(key, MAX_INPUT_KEY)] is ButtonStatus.DOWN

    def up(self, key: int) -> bool:
        return self._map[_check(key, MAX_INPUT_KEY)] is ButtonStatus.UP

    def press(self, key: int) -> bool:
        return self._map[_check(key, MAX_INPUT_KEY)] is ButtonStatus.PRESS


def _milliseconds() -> int:
    return time.monotonic_ns() // 1_000_000


class Mouse:
    """Tracks button transitions, double clicks, cursor movement and wheel.

    ``clock`` returns the current time in milliseconds and
    ``double_click_time`` is the double-click window in milliseconds.
    """

    def __init__(
        self,
        double_click_time: int = 500,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._clock = clock if clock is not None else _milliseconds
        self._double_click_time = double_click_time
        self._position = [0.0, 0.0, 0.0]
        self._state = [False] * MAX_INPUT_MOUSE
        self._map = [ButtonStatus.NONE] * MAX_INPUT_MOUSE
        self._wheel_status = [0.0, 0.0, 0.0]
        self._wheel_old_status = [0.0, 0.0, 0.0]
        self._wheel_move_value = (0.0, 0.0, 0.0)
        now = self._clock()
        self._start_double_click = [now] * MAX_INPUT_MOUSE
        self._button_count = [0] * MAX_INPUT_MOUSE

    def update(self, buttons: Iterable[int], cursor: tuple[float, float]) -> None:
        """Advance one frame.

        ``buttons`` holds the indexes of held buttons (0 left, 1 right,
        2 middle) and ``cursor`` the cursor position in client coordinates.
        """
        old = self._state
        self._state = _held(buttons, MAX_INPUT_MOUSE)
        self._map = [_transition(o, n) for o, n in zip(old, self._state)]

        status, old_status = self._wheel_status, self._wheel_old_status
        old_status[0], old_status[1] = status[0], status[1]
        status[0], status[1] = float(cursor[0]), float(cursor[1])
        self._wheel_move_value = tuple(s - o for s, o in zip(status, old_status))
        old_status[2] = status[2]

        now = self._clock()
        window = self._double_click_time
        for i, state in enumerate(self._map):
            if state is ButtonStatus.DOWN:
                if self._button_count[i] == 1 and now - self._start_double_click[i] >= window:
                    self._button_count[i] = 0
                self._button_count[i] += 1
                if self._button_count[i] == 1:
                    self._start_double_click[i] = now
            elif state is ButtonStatus.UP:
                if self._button_count[i] == 1:
                    if now - self._start_double_click[i] >= window:
                        self._button_count[i] = 0
                elif self._button_count[i] == 2:
                    if now - self._start_double_click[i] <= window:
                        self._map[i] = ButtonStatus.DBLCLK
                    self._button_count[i] = 0

    def input_proc(self, message: int, wparam: int, lparam: int) -> bool:
        """Handle a window message carrying cursor position or wheel motion."""
        if message in (WM_LBUTTONDOWN, WM_MOUSEMOVE):
            self._position[0] = float(lparam & 0xFFFF)
            self._position[1] = float((lparam >> 16) & 0xFFFF)
        if message == WM_MOUSEWHEEL:
            delta = (wparam >> 16) & 0xFFFF
            if delta >= 0x8000:
                delta -= 0x10000
            self._wheel_old_status[2] = self._wheel_status[2]
            self._wheel_status[2] += float(delta)
        return True

    @property
    def position(self) -> tuple[float, float, float]:
        """Last cursor position reported through :meth:`input_proc`."""
        return tuple(self._position)  # type: ignore[return-value]

    @property
    def move_value(self) -> tuple[float, float, float]:
        """Cursor movement (x, y) and wheel movement (z) in the last frame."""
        return self._wheel_move_value  # type: ignore[return-value]

    def down(self, button: int) -> bool:
        return self._map[_check(button, MAX_INPUT_MOUSE)] is ButtonStatus.DOWN

    def up(self, button: int) -> bool:
        return self._map[_check(button, MAX_INPUT_MOUSE)] is ButtonStatus.UP

    def press(self, button: int) -> bool:
        return self._map[_check(button, MAX_INPUT_MOUSE)] is ButtonStatus.PRESS

    def double_click(self, button: int) -> bool:
        return self._map[_check(button, MAX_INPUT_MOUSE)] is ButtonStatus.DBLCLK