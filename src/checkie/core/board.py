"""Board - piece placement on a square checkers board."""

from __future__ import annotations

from collections.abc import Iterator

from checkie.core.enums import Player
from checkie.core.piece import Piece
from checkie.core.types import Coordinate, is_within

DEFAULT_SIZE = 8
_HOME_ROWS = 3


class Board:
    """Mutable ``size`` x ``size`` grid of optional pieces."""

    __slots__ = ("_size", "_squares")

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size < 2 * _HOME_ROWS:
            raise ValueError(f"Board size too small: {size}")
        self._size = size
        self._squares: list[Piece | None] = [None] * (size * size)

    def _index(self, coord: Coordinate) -> int:
        if not is_within(coord, self._size):
            raise IndexError(f"Square {coord} outside {self._size}x{self._size} board")
        return coord.y * self._size + coord.x

    # -- Element access -----------------------------------------------------

    def size(self) -> int:
        return self._size

    def __getitem__(self, coord: Coordinate) -> Piece | None:
        return self._squares[self._index(coord)]

    def __setitem__(self, coord: Coordinate, piece: Piece | None) -> None:
        self._squares[self._index(coord)] = piece

    def square_at(self, coord: Coordinate) -> Piece | None:
        """Piece on *coord*, or ``None`` for an empty square."""
        return self[coord]

    def contains(self, coord: Coordinate) -> bool:
        return is_within(coord, self._size)

    def is_empty(self, coord: Coordinate) -> bool:
        return self[coord] is None

    @staticmethod
    def is_light_square(coord: Coordinate) -> bool:
        """Square parity used for rendering only; pieces stand on dark squares."""
        return (coord.x + coord.y) % 2 == 1

    # -- Query helpers ------------------------------------------------------

    def coordinates(self) -> Iterator[Coordinate]:
        for y in range(self._size):
            for x in range(self._size):
                yield Coordinate(x, y)

    def pieces(self, player: Player) -> list[Coordinate]:
        """Squares occupied by *player*, bottom row first."""
        return [
            c
            for c in self.coordinates()
            if (p := self._squares[c.y * self._size + c.x]) is not None
            and p.color is player
        ]

    def count(self, player: Player) -> int:
        return sum(1 for p in self._squares if p is not None and p.color is player)

    # -- Copying / factories ------------------------------------------------

    def copy(self) -> Board:
        b = Board.__new__(Board)
        b._size = self._size
        b._squares = self._squares.copy()
        return b

    @classmethod
    def initial(cls, size: int = DEFAULT_SIZE) -> Board:
        """Standard starting position: three rows of men per side."""
        b = cls(size)
        for y in range(size):
            if _HOME_ROWS <= y < size - _HOME_ROWS:
                continue
            color = Player.BLACK if y < _HOME_ROWS else Player.WHITE
            for x in range(size):
                coord = Coordinate(x, y)
                if not cls.is_light_square(coord):
                    b[coord] = Piece(color)
        return b

    # -- Text form ----------------------------------------------------------

    def to_text(self) -> str:
        """Rows from the top down, ``.`` for empty squares."""
        rows: list[str] = []
        for y in range(self._size - 1, -1, -1):
            row = self._squares[y * self._size : (y + 1) * self._size]
            rows.append("".join(str(p) if p else "." for p in row))
        return "\n".join(rows)

    @classmethod
    def from_text(cls, text: str) -> Board:
        """Inverse of :meth:`to_text`."""
        rows = [line.strip() for line in text.strip().splitlines()]
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError("Board text must be square")
        b = cls(size)
        for i, row in enumerate(rows):
            y = size - 1 - i
            for x, ch in enumerate(row):
                if ch != ".":
                    b[Coordinate(x, y)] = Piece.from_char(ch)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and self._squares == other._squares

    def __repr__(self) -> str:
        return self.to_text()
