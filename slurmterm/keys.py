"""Translation of keyboard input into bytes for a child console."""

from __future__ import annotations

import enum

KEY_DOWN = 258
KEY_UP = 259
KEY_LEFT = 260
KEY_RIGHT = 261
KEY_BACKSPACE = 263
KEY_ENTER = 343
KEY_ESCAPE = 27


class KeyAction(enum.Enum):
    """What a key press does."""

    SEND = "send"
    SPLIT_HORIZONTAL = "split_horizontal"
    SPLIT_VERTICAL = "split_vertical"
    IGNORE = "ignore"


_SEQUENCES = {
    KEY_ENTER: b"\r\n",
    ord("\r"): b"\r\n",
    ord("\n"): b"\r\n",
    KEY_BACKSPACE: b"\b",
    ord("\b"): b"\b",
    127: b"\b",
    KEY_RIGHT: b"\x1b[C",
    KEY_LEFT: b"\x1b[D",
    ord("\t"): b"\t",
}


def encode_key(key):
    """Return the bytes a key code sends to the console, or ``b""`` for none."""
    if key in _SEQUENCES:
        return _SEQUENCES[key]
    if 32 <= key <= 126:
        return bytes([key])
    return b""


def key_action(key):
    """Classify a key code: the up and down arrows split the active pane."""
    if key == KEY_UP:
        return KeyAction.SPLIT_HORIZONTAL
    if key == KEY_DOWN:
        return KeyAction.SPLIT_VERTICAL
    return KeyAction.SEND if encode_key(key) else KeyAction.IGNORE