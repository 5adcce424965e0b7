"""Pane geometry for splitting the screen."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """A pane's position and size in screen cells."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"pane size must be positive, got {self.width}x{self.height}")

    def split_horizontal(self):
        """Split into a left half and the remaining right part."""
        if self.width < 2:
            raise ValueError("pane is too narrow to split")
        half = self.width // 2
        left = Rect(self.x, self.y, half, self.height)
        right = Rect(self.x + half, self.y, self.width - half, self.height)
        return left, right

    def split_vertical(self):
        """Split into a top half and the remaining bottom part."""
        if self.height < 2:
            raise ValueError("pane is too short to split")
        half = self.height // 2
        top = Rect(self.x, self.y, self.width, half)
        bottom = Rect(self.x, self.y + half, self.width, self.height - half)
        return top, bottom


class Layout:
    """The set of panes covering the screen and which one is active."""

    def __init__(self, width, height):
        self.panes: list[Rect] = [Rect(0, 0, width, height)]
        self.active = 0

    def split(self, index, horizontal):
        """Split pane ``index``; the new pane becomes active and its index is returned."""
        if not 0 <= index < len(self.panes):
            raise IndexError(f"no pane {index}")
        pane = self.panes[index]
        first, second = pane.split_horizontal() if horizontal else pane.split_vertical()
        self.panes[index] = first
        self.panes.append(second)
        self.active = len(self.panes) - 1
        return self.active