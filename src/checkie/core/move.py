"""Move and MoveRecord value objects."""

from __future__ import annotations

from dataclasses import dataclass

from checkie.core.enums import Player
from checkie.core.piece import Piece
from checkie.core.types import Coordinate, midpoint


@dataclass(frozen=True, slots=True)
class Move:
    """A single diagonal step or jump."""

    start: Coordinate
    end: Coordinate

    @property
    def is_jump(self) -> bool:
        return abs(self.end.x - self.start.x) == 2

    @property
    def jumped(self) -> Coordinate | None:
        """Square of the captured piece, for jumps."""
        return midpoint(self.start, self.end) if self.is_jump else None

    def __str__(self) -> str:
        sep = "x" if self.is_jump else "-"
        return f"{self.start}{sep}{self.end}"


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Everything needed to revert one applied move exactly.

    ``jump_from_before`` / ``jump_from_after`` hold the square of a piece that
    is in the middle of a multi-jump, before and after this move.
    """

    move: Move
    player: Player
    piece: Piece
    next_player: Player
    captured: Piece | None = None
    promoted: bool = False
    jump_from_before: Coordinate | None = None
    jump_from_after: Coordinate | None = None

    @property
    def passes_turn(self) -> bool:
        return self.next_player is not self.player
