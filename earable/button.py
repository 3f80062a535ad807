"""Debounced push button with press and hold detection."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum


class ButtonState(IntEnum):
    IDLE = 0
    PRESSED = 1
    HELD = 2


class Button:
    """Tracks a button from raw pin readings.

    ``read_pin`` returns the pin level, ``clock`` returns milliseconds and
    ``notify`` is told of every state change.
    """

    def __init__(self, read_pin: Callable[[], bool], clock: Callable[[], int],
                 notify: Callable[[ButtonState], object] | None = None) -> None:
        self.read_pin = read_pin
        self.clock = clock
        self.notify = notify
        self._inverted = False
        self._last_debounce_time = 0
        self._press_start_time = 0
        self.debounce_delay = 25
        self.hold_delay = 1000
        self._pressed_flag = 1
        self._held_flag = 1
        self.state = ButtonState.IDLE

    def inverted(self) -> None:
        """Treat a low pin as pressed."""
        self._inverted = True

    def _emit(self, state: ButtonState) -> None:
        if self.notify is not None:
            self.notify(state)

    def update(self) -> None:
        reading = bool(self.read_pin())
        if self._inverted:
            reading = not reading
        now = self.clock()

        if not reading:
            if self.state != ButtonState.IDLE:
                self._emit(ButtonState.IDLE)
            self.state = ButtonState.IDLE
            self._last_debounce_time = now
            self._press_start_time = now
            self._pressed_flag = 1
            self._held_flag = 1
            return

        if now - self._last_debounce_time < self.debounce_delay:
            return
        self.state = ButtonState.PRESSED
        if self._pressed_flag == 1:
            self._pressed_flag = 0
            self._emit(ButtonState.PRESSED)

        if now - self._press_start_time < self.hold_delay:
            return
        self.state = ButtonState.HELD
        if self._held_flag == 1:
            self._held_flag = 0
            self._emit(ButtonState.HELD)

    def set_debounce_time(self, debounce_time: int) -> None:
        self.debounce_delay = debounce_time

    def set_hold_time(self, hold_time: int) -> None:
        self.hold_delay = hold_time

    def get_pressed(self) -> bool:
        return self.state in (ButtonState.PRESSED, ButtonState.HELD)

    def get_held(self) -> bool:
        return self.state == ButtonState.HELD

    def get_pressed_once(self) -> bool:
        """True once per press."""
        if self._pressed_flag:
            return False
        self._pressed_flag = 2
        return self.get_pressed()

    def get_held_once(self) -> bool:
        """True once per hold."""
        if self._held_flag:
            return False
        self._held_flag = 2
        return self.get_held()