"""Core enumerations for the checkers domain."""

from __future__ import annotations

from enum import IntEnum


class Player(IntEnum):
    """Side color. BLACK moves toward increasing ``y``."""

    BLACK = 0
    WHITE = 1

    @property
    def opposite(self) -> Player:
        return Player(1 - self.value)

    @property
    def forward(self) -> int:
        """Row direction in which this side's men advance."""
        return 1 if self is Player.BLACK else -1

    def __str__(self) -> str:
        return self.name.lower()


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    BLACK_WINS = 1
    WHITE_WINS = 2

    @classmethod
    def win_for(cls, player: Player) -> GameResult:
        return cls.BLACK_WINS if player is Player.BLACK else cls.WHITE_WINS
