"""Game pad state with button edges, stick dead zones and keyboard emulation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Iterable, Optional

TRIGGER_THRESHOLD = 30
LEFT_THUMB_DEADZONE = 7849
RIGHT_THUMB_DEADZONE = 8689
_THUMB_SCALE = float(0x8000)
_TRIGGER_SCALE = 255.0


class Button(IntFlag):
    """Game pad buttons as bit flags."""

    UP = 1 << 0
    RIGHT = 1 << 1
    DOWN = 1 << 2
    LEFT = 1 << 3
    A = 1 << 4
    B = 1 << 5
    X = 1 << 6
    Y = 1 << 7
    START = 1 << 8
    BACK = 1 << 9
    LEFT_THUMB = 1 << 10
    RIGHT_THUMB = 1 << 11
    LEFT_SHOULDER = 1 << 12
    RIGHT_SHOULDER = 1 << 13
    LEFT_TRIGGER = 1 << 14
    RIGHT_TRIGGER = 1 << 15


_ALL_BUTTONS = 0xFFFF
_NO_BUTTONS = Button(0)

# Keys that press a button directly.
_KEY_BUTTONS: tuple[tuple[str, Button], ...] = (
    ("Z", Button.A),
    ("X", Button.B),
    ("V", Button.Y),
    ("UP", Button.UP),
    ("RIGHT", Button.RIGHT),
    ("DOWN", Button.DOWN),
    ("LEFT", Button.LEFT),
    ("RETURN", Button.Y),
    ("SPACE", Button.X),
)


@dataclass(frozen=True)
class PadState:
    """Raw state read from a connected controller."""

    buttons: Button = _NO_BUTTONS
    left_trigger: int = 0
    right_trigger: int = 0
    thumb_lx: int = 0
    thumb_ly: int = 0
    thumb_rx: int = 0
    thumb_ry: int = 0

    def __post_init__(self) -> None:
        for name in ("left_trigger", "right_trigger"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be within 0..255, got {value}")
        for name in ("thumb_lx", "thumb_ly", "thumb_rx", "thumb_ry"):
            value = getattr(self, name)
            if not -32768 <= value <= 32767:
                raise ValueError(f"{name} must be within -32768..32767, got {value}")


def _dead_zone(x: int, y: int, zone: int) -> tuple[int, int]:
    if -zone < x < zone and -zone < y < zone:
        return 0, 0
    return x, y


def _unit(x: float, y: float) -> tuple[float, float]:
    power = math.hypot(x, y)
    return x / power, y / power


@dataclass
class GamePad:
    """Current buttons, the buttons pressed and released this frame, and axes."""

    slot: int = 0
    button: Button = _NO_BUTTONS
    button_down: Button = _NO_BUTTONS
    button_up: Button = _NO_BUTTONS
    axis_lx: float = 0.0
    axis_ly: float = 0.0
    axis_rx: float = 0.0
    axis_ry: float = 0.0
    trigger_l: float = 0.0
    trigger_r: float = 0.0
    _previous: Button = field(default=_NO_BUTTONS, repr=False)

    def update(self, pad: Optional[PadState] = None, keys: Iterable[str] = ()) -> None:
        """Read one frame from ``pad`` (None if disconnected) and held ``keys``.

        Keys are names such as ``"W"``, ``"UP"``, ``"RETURN"`` or ``"SPACE"``.
        """
        held = {key.upper() for key in keys}
        self.axis_lx = self.axis_ly = 0.0
        self.axis_rx = self.axis_ry = 0.0
        self.trigger_l = self.trigger_r = 0.0
        buttons = _NO_BUTTONS

        if pad is not None:
            buttons |= pad.buttons
            if pad.left_trigger > TRIGGER_THRESHOLD:
                buttons |= Button.LEFT_TRIGGER
            if pad.right_trigger > TRIGGER_THRESHOLD:
                buttons |= Button.RIGHT_TRIGGER
            lx, ly = _dead_zone(pad.thumb_lx, pad.thumb_ly, LEFT_THUMB_DEADZONE)
            rx, ry = _dead_zone(pad.thumb_rx, pad.thumb_ry, RIGHT_THUMB_DEADZONE)
            self.trigger_l = pad.left_trigger / _TRIGGER_SCALE
            self.trigger_r = pad.right_trigger / _TRIGGER_SCALE
            self.axis_lx = lx / _THUMB_SCALE
            self.axis_ly = ly / _THUMB_SCALE
            self.axis_rx = rx / _THUMB_SCALE
            self.axis_ry = ry / _THUMB_SCALE

        self._emulate_with_keyboard(held, buttons)

    def _emulate_with_keyboard(self, held: set[str], buttons: Button) -> None:
        lx = ly = rx = ry = 0.0
        if "W" in held:
            ly = 1.0
        if "A" in held:
            lx = -1.0
        if "S" in held:
            ly = -1.0
        if "D" in held:
            lx = 1.0
        if "I" in held:
            ry = 1.0
        if "J" in held:
            rx = -1.0
        if "K" in held:
            ry = -1.0
        if "L" in held:
            rx = 1.0
        for key, button in _KEY_BUTTONS:
            if key in held:
                buttons |= button

        if buttons & Button.UP:
            ly = 1.0
        if buttons & Button.RIGHT:
            lx = 1.0
        if buttons & Button.DOWN:
            ly = -1.0
        if buttons & Button.LEFT:
            lx = -1.0

        if abs(lx) >= 1.0 or abs(ly) >= 1.0:
            self.axis_lx, self.axis_ly = _unit(lx, ly)
        if abs(rx) >= 1.0 or abs(ry) >= 1.0:
            self.axis_rx, self.axis_ry = _unit(rx, ry)

        previous = int(self.button)
        new = int(buttons)
        self._previous = self.button
        self.button = Button(new)
        self.button_down = Button(~previous & new & _ALL_BUTTONS)
        self.button_up = Button(~new & previous & _ALL_BUTTONS)