"""A terminal multiplexer that shows several shells in split panes."""

from __future__ import annotations

import argparse
import curses
import locale
import os
import threading
from contextlib import suppress
from dataclasses import dataclass, field
from itertools import groupby

from slurmterm.ansi import AnsiRenderer
from slurmterm.keys import KEY_ESCAPE, KeyAction, encode_key, key_action
from slurmterm.layout import Layout, Rect
from slurmterm.pseudoconsole import READ_SIZE, PseudoConsole
from slurmterm.window import Attr, Cell, Window

_NO_KEY = -1
_QUIT_KEYS = (ord("q"), ord("Q"))

_CURSES_ATTRS = (
    (Attr.BOLD, curses.A_BOLD),
    (Attr.DIM, curses.A_DIM),
    (Attr.UNDERLINE, curses.A_UNDERLINE),
    (Attr.BLINK, curses.A_BLINK),
    (Attr.REVERSE, curses.A_REVERSE),
)

_PAIR_COLORS = (
    curses.COLOR_GREEN,
    curses.COLOR_YELLOW,
    curses.COLOR_RED,
    curses.COLOR_BLUE,
    curses.COLOR_MAGENTA,
    curses.COLOR_CYAN,
    curses.COLOR_WHITE,
    curses.COLOR_BLACK,
)


def _available_colors() -> int:
    try:
        if not curses.has_colors():
            return 0
    except curses.error:
        return 0
    return getattr(curses, "COLOR_PAIRS", 0)


@dataclass
class _Pane:
    rect: Rect
    console: PseudoConsole
    window: Window
    renderer: AnsiRenderer
    listener: threading.Thread | None = field(default=None, repr=False)


class Multiplexer:
    """Shows one console per pane on a curses screen and routes keys to the active one.

    The up arrow splits the active pane side by side, the down arrow splits
    it top and bottom; ``q`` is sent to the console and then ends the session.
    """

    def __init__(self, screen, command):
        self.screen = screen
        self.command = command
        height, width = screen.getmaxyx()
        self.layout = Layout(width, height)
        self.panes: list[_Pane] = []
        self._colors = _available_colors()
        self._lock = threading.Lock()

    def _open_pane(self, rect: Rect) -> _Pane:
        console = PseudoConsole(self.command, (rect.width, rect.height)).start()
        window = Window(rect.height, rect.width)
        pane = _Pane(rect, console, window, AnsiRenderer(window, self._colors))
        self.panes.append(pane)
        pane.listener = threading.Thread(target=self._listen, args=(pane,), daemon=True)
        pane.listener.start()
        return pane

    def _listen(self, pane: _Pane) -> None:
        while True:
            data = pane.console.read(READ_SIZE)
            if not data:
                return
            with self._lock:
                pane.renderer.feed(data)
                self._draw(pane)

    def _curses_attr(self, cell: Cell) -> int:
        value = 0
        for flag, attr in _CURSES_ATTRS:
            if cell.attrs & flag:
                value |= attr
        if self._colors and cell.color_pair:
            value |= curses.color_pair(cell.color_pair)
        return value

    def _draw(self, pane: _Pane) -> None:
        rect, win = pane.rect, pane.window
        for y in range(win.height):
            cells = [win.cell(y, x) for x in range(win.width)]
            x = 0
            for attr, group in groupby(cells, key=self._curses_attr):
                text = "".join(cell.char for cell in group)
                # Writing the bottom-right cell of a curses screen reports an error.
                with suppress(curses.error):
                    self.screen.addstr(rect.y + y, rect.x + x, text, attr)
                x += len(text)
        cursor_y, cursor_x = win.cursor
        with suppress(curses.error):
            self.screen.move(rect.y + cursor_y, rect.x + cursor_x)
        self.screen.refresh()

    def _split(self, index: int, horizontal: bool) -> None:
        with self._lock:
            try:
                new_index = self.layout.split(index, horizontal)
            except ValueError:
                return
            pane = self.panes[index]
            pane.rect = self.layout.panes[index]
            pane.window.resize(pane.rect.height, pane.rect.width)
            pane.console.resize((pane.rect.width, pane.rect.height))
            new_pane = self._open_pane(self.layout.panes[new_index])
            self._draw(pane)
            self._draw(new_pane)

    def _send(self, pane: _Pane, data: bytes) -> None:
        with suppress(OSError, RuntimeError):
            pane.console.write(data)

    def _handle(self, key: int) -> None:
        index = self.layout.active
        action = key_action(key)
        if action is KeyAction.SPLIT_HORIZONTAL:
            self._split(index, True)
        elif action is KeyAction.SPLIT_VERTICAL:
            self._split(index, False)
        elif action is KeyAction.SEND:
            self._send(self.panes[index], encode_key(key))

    def run(self):
        """Start the first pane and process keys until ``q`` is pressed."""
        with self._lock:
            self._open_pane(self.layout.panes[0])
        try:
            while True:
                key = self.screen.getch()
                if key == KEY_ESCAPE:
                    self.screen.nodelay(True)
                    following = self.screen.getch()
                    self.screen.nodelay(False)
                    if following == _NO_KEY:
                        self._send(self.panes[self.layout.active], bytes([KEY_ESCAPE]))
                        continue
                    key = following
                self._handle(key)
                if key in _QUIT_KEYS:
                    return
        finally:
            self._shutdown()

    def _shutdown(self) -> None:
        for pane in self.panes:
            pane.console.close()
        for pane in self.panes:
            if pane.listener is not None:
                pane.listener.join(timeout=1)


def _default_shell() -> str:
    if os.name == "nt":
        return os.environ.get("COMSPEC", "cmd.exe")
    return os.environ.get("SHELL", "/bin/sh")


def _init_colors() -> None:
    if not curses.has_colors():
        return
    curses.start_color()
    for pair, color in enumerate(_PAIR_COLORS, start=1):
        if pair < curses.COLOR_PAIRS:
            curses.init_pair(pair, color, curses.COLOR_BLACK)


def _session(stdscr, command) -> None:
    _init_colors()
    stdscr.keypad(True)
    curses.noecho()
    curses.cbreak()
    stdscr.nodelay(False)
    stdscr.refresh()
    Multiplexer(stdscr, command).run()


def main(argv=None):
    """Run the multiplexer on the current terminal."""
    parser = argparse.ArgumentParser(
        prog="slurmterm", description="Split the terminal into several shells."
    )
    parser.add_argument(
        "command", nargs=argparse.REMAINDER, help="program to run in each pane"
    )
    args = parser.parse_args(argv)
    command = args.command or _default_shell()
    locale.setlocale(locale.LC_ALL, "")
    curses.wrapper(_session, command)
    return 0