"""Rendering of terminal output with ANSI escape sequences onto a window."""

from __future__ import annotations

import enum
import re
from contextlib import suppress

from slurmterm.window import Attr, Window

ESC = 0x1B
BEL = 0x07
_BACKSLASH = ord("\\")
_TAB_WIDTH = 8
_MAX_PARAMS = 63
_PARAM_BYTES = frozenset(b"0123456789; ?")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class AnsiType(enum.Enum):
    """Kinds of escape sequence."""

    CSI = "csi"
    OSC = "osc"
    DCS = "dcs"
    SINGLE = "single"


def clean_string(data):
    """Return ``data`` with every carriage return removed."""
    return data.replace("\r" if isinstance(data, str) else b"\r", data[:0])


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _tokens(params: str) -> list[str]:
    return [token for token in params.split(";") if token]


class AnsiRenderer:
    """Interpret a stream of terminal output and draw it on a window.

    ``colors`` is the number of colour pairs available; 0 means the display
    has no colour support. Each call to ``feed`` is parsed on its own.
    """

    def __init__(self, window: Window, colors=8):
        self.window = window
        self.colors = colors
        self.cursor_visible = True
        self.saved_cursor = (0, 0)
        self.last_sequence: AnsiType | None = None

    def _move(self, y: int, x: int) -> None:
        with suppress(IndexError):
            self.window.move(y, x)

    def _reset_attrs(self) -> None:
        self.window.attrs = Attr.NORMAL
        self.window.color_pair = 0

    def feed(self, data):
        """Draw a chunk of output bytes."""
        data = bytes(data)
        end = len(data)
        i = 0
        while i < end:
            byte = data[i]
            y, x = self.window.cursor
            if byte == ESC and i + 1 < end:
                i = self._escape(data, i + 1)
            elif byte == ord("\r"):
                self._move(y, 0)
            elif byte == ord("\n"):
                self._move(y + 1, x)
            elif byte == ord("\b"):
                if x > 0:
                    self._move(y, x - 1)
            elif byte == ord("\t"):
                self._move(y, (x // _TAB_WIDTH + 1) * _TAB_WIDTH)
            elif byte >= 0x20:
                self.window.add_char(chr(byte))
            i += 1

    def _escape(self, data: bytes, i: int) -> int:
        """Handle the sequence whose introducer is at ``i``; return its last index."""
        end = len(data)
        kind = data[i]
        if kind == ord("["):
            self.last_sequence = AnsiType.CSI
            i += 1
            start = i
            while i < end and i - start < _MAX_PARAMS and data[i] in _PARAM_BYTES:
                i += 1
            params = data[start:i].decode("ascii")
            command = chr(data[i]) if i < end else ""
            self._csi(command, params)
            return i
        if kind in (ord("]"), ord("P")):
            self.last_sequence = AnsiType.OSC if kind == ord("]") else AnsiType.DCS
            i += 1
            while i < end:
                if kind == ord("]") and data[i] == BEL:
                    break
                if data[i] == ESC and i + 1 < end and data[i + 1] == _BACKSLASH:
                    i += 1
                    break
                i += 1
            return i
        self.last_sequence = AnsiType.SINGLE
        self._single(chr(kind))
        return i

    def _single(self, command: str) -> None:
        win = self.window
        y, x = win.cursor
        if command == "D":
            if y >= win.height - 1:
                win.scroll(1)
            else:
                self._move(y + 1, x)
        elif command == "E":
            self._move(y + 1, 0)
        elif command == "M":
            if y <= 0:
                win.scroll(-1)
            else:
                self._move(y - 1, x)
        elif command == "c":
            win.clear()
            self._move(0, 0)
            self._reset_attrs()

    def _csi(self, command: str, params: str) -> None:
        win = self.window
        y, x = win.cursor
        count = _atoi(params) if params else 1
        if command == "m":
            self._sgr(params)
        elif command == "A":
            self._move(max(0, y - count), x)
        elif command == "B":
            self._move(y + count, x)
        elif command == "C":
            self._move(y, x + count)
        elif command == "D":
            self._move(y, max(0, x - count))
        elif command in ("H", "f"):
            tokens = _tokens(params)
            row = _atoi(tokens[0]) if tokens else 1
            col = _atoi(tokens[1]) if len(tokens) > 1 else 1
            self._move(row - 1, col - 1)
        elif command == "J":
            mode = _atoi(params) if params else 0
            if mode == 0:
                win.clear_to_bottom()
            elif mode == 2:
                win.clear()
        elif command == "K":
            mode = _atoi(params) if params else 0
            if mode == 0:
                win.clear_to_eol()
            elif mode == 2:
                self._move(y, 0)
                win.clear_to_eol()
                self._move(y, x)
        elif command == "S":
            win.scroll(max(0, count))
        elif command == "T":
            win.scroll(-max(0, count))
        elif command in ("h", "l"):
            if "?25" in _tokens(params):
                self.cursor_visible = command == "h"
        elif command == "s":
            self.saved_cursor = (y, x)
        elif command == "u":
            self._move(*self.saved_cursor)

    def _sgr(self, params: str) -> None:
        win = self.window
        if params in ("", "0"):
            self._reset_attrs()
            return
        for token in _tokens(params):
            code = _atoi(token)
            if code == 0:
                self._reset_attrs()
            elif code == 1:
                win.attrs |= Attr.BOLD
            elif code == 2:
                win.attrs |= Attr.DIM
            elif code == 4:
                win.attrs |= Attr.UNDERLINE
            elif code == 5:
                win.attrs |= Attr.BLINK
            elif code == 7:
                win.attrs |= Attr.REVERSE
            elif code == 22:
                win.attrs &= ~(Attr.BOLD | Attr.DIM)
            elif code == 24:
                win.attrs &= ~Attr.UNDERLINE
            elif code == 25:
                win.attrs &= ~Attr.BLINK
            elif code == 27:
                win.attrs &= ~Attr.REVERSE
            elif 30 <= code <= 37 or 90 <= code <= 97:
                pair = code % 10 + 1
                if self.colors and pair <= self.colors:
                    win.color_pair = pair
            elif code == 39:
                if self.colors:
                    win.color_pair = 0