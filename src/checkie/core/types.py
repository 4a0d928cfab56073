"""Coordinate type and helpers.

Board layout: ``(0, 0)`` is the bottom-left square, ``x`` grows to the right,
``y`` grows upward. Dark (playable) squares satisfy ``(x + y) % 2 == 0``.
"""

from __future__ import annotations

from typing import NamedTuple


class Coordinate(NamedTuple):
    """Square address ``(x, y)``."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


def is_within(coord: Coordinate, size: int) -> bool:
    """Whether *coord* lies inside a ``size`` x ``size`` board."""
    return 0 <= coord.x < size and 0 <= coord.y < size


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Square halfway between *a* and *b* (the jumped square of a capture)."""
    return Coordinate((a.x + b.x) // 2, (a.y + b.y) // 2)


DIAGONALS: tuple[tuple[int, int], ...] = ((1, 1), (-1, 1), (1, -1), (-1, -1))
