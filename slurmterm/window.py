"""A character-cell window with a cursor, attributes and colour pairs."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Attr(enum.IntFlag):
    """Display attributes of a character cell."""

    NORMAL = 0
    BOLD = 1
    DIM = 2
    UNDERLINE = 4
    BLINK = 8
    REVERSE = 16


@dataclass(frozen=True)
class Cell:
    """One character position of a window."""

    char: str = " "
    attrs: Attr = Attr.NORMAL
    color_pair: int = 0


_BLANK = Cell()


class Window:
    """A rectangular grid of cells with a cursor.

    The cursor never leaves the grid: moves to a position outside it raise
    ``IndexError`` and leave the cursor where it was.
    """

    def __init__(self, height, width):
        if height < 1 or width < 1:
            raise ValueError(f"window size must be positive, got {height}x{width}")
        self._height = height
        self._width = width
        self._rows = [self._blank_row() for _ in range(height)]
        self._y = 0
        self._x = 0
        self.attrs = Attr.NORMAL
        self.color_pair = 0

    def _blank_row(self) -> list[Cell]:
        return [_BLANK] * self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def cursor(self) -> tuple[int, int]:
        """The cursor position as ``(y, x)``."""
        return self._y, self._x

    def _check(self, y: int, x: int) -> None:
        if not (0 <= y < self._height and 0 <= x < self._width):
            raise IndexError(f"position ({y}, {x}) is outside the window")

    def move(self, y, x):
        """Place the cursor at row ``y``, column ``x``."""
        self._check(y, x)
        self._y, self._x = y, x

    def cell(self, y, x) -> Cell:
        """Return the cell at row ``y``, column ``x``."""
        self._check(y, x)
        return self._rows[y][x]

    def add_char(self, ch):
        """Write one character at the cursor and advance it.

        At the end of a line the cursor wraps to the next line; in the
        bottom-right corner it stays put.
        """
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        self._rows[self._y][self._x] = Cell(ch, Attr(self.attrs), self.color_pair)
        if self._x + 1 < self._width:
            self._x += 1
        elif self._y + 1 < self._height:
            self._y += 1
            self._x = 0

    def clear(self):
        """Blank the whole window and home the cursor."""
        self._rows = [self._blank_row() for _ in range(self._height)]
        self._y = self._x = 0

    def clear_to_eol(self):
        """Blank from the cursor to the end of its line."""
        row = self._rows[self._y]
        row[self._x:] = [_BLANK] * (self._width - self._x)

    def clear_to_bottom(self):
        """Blank from the cursor to the end of the window."""
        self.clear_to_eol()
        for y in range(self._y + 1, self._height):
            self._rows[y] = self._blank_row()

    def scroll(self, lines):
        """Scroll the contents up by ``lines`` rows, or down if negative."""
        count = min(abs(lines), self._height)
        blanks = [self._blank_row() for _ in range(count)]
        if lines > 0:
            self._rows = self._rows[count:] + blanks
        elif lines < 0:
            self._rows = blanks + self._rows[: self._height - count]

    def resize(self, height, width):
        """Change the size, keeping the top-left contents and clamping the cursor."""
        if height < 1 or width < 1:
            raise ValueError(f"window size must be positive, got {height}x{width}")
        rows = []
        for row in self._rows[:height]:
            rows.append((row + [_BLANK] * width)[:width])
        self._width = width
        self._height = height
        rows.extend(self._blank_row() for _ in range(height - len(rows)))
        self._rows = rows
        self._y = min(self._y, height - 1)
        self._x = min(self._x, width - 1)

    def row_text(self, y) -> str:
        """Return the characters of row ``y`` as a string."""
        if not 0 <= y < self._height:
            raise IndexError(f"row {y} is outside the window")
        return "".join(cell.char for cell in self._rows[y])

    def lines(self) -> list[str]:
        """Return the text of every row, top to bottom."""
        return ["".join(cell.char for cell in row) for row in self._rows]