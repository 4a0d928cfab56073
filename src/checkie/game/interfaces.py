"""Abstract interfaces for the game layer.

High-level code depends on these ABCs/protocols, not on the concrete game or
bot implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from checkie.core.move import Move, MoveRecord
    from checkie.core.types import Coordinate
    from checkie.game.state import GameState


# ── Enumerations ─────────────────────────────────────────────────────────────


class GameVariant(IntEnum):
    """Who sits at the board."""

    HUMAN_VS_HUMAN = auto()
    HUMAN_VS_BOT = auto()


class SelectionPhase(IntEnum):
    """Finite-state-machine states for move input."""

    AWAITING_SELECTION = auto()
    PIECE_SELECTED = auto()


class MoveOutcome(IntEnum):
    """What a single ``do_move`` input did to the human side of the game."""

    IGNORED = auto()
    SELECTED = auto()
    DESELECTED = auto()
    MOVED = auto()


# ── Configuration ────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class BotPolicy:
    """Pacing and safety limits for the bot alternation loop.

    Args:
        no_move_delay_s: Pause after the bot reports it cannot move, before
            control returns to the human.
        max_moves_per_turn: Upper bound on bot moves in one alternation.
    """

    no_move_delay_s: float = 1.0
    max_moves_per_turn: int = 64


class BotStrategyError(RuntimeError):
    """A bot strategy broke its contract (e.g. claimed a move it never made)."""


# ── Protocols ────────────────────────────────────────────────────────────────


class IMoveSink(Protocol):
    """What a bot strategy may see of and do to a live game."""

    @property
    def state(self) -> GameState: ...

    def commit_move(self, move: Move) -> MoveRecord: ...


class IBotStrategy(Protocol):
    """Automated player bound to a move sink."""

    def attempt_move(self) -> bool:
        """Apply one legal move for the side to move.

        Returns ``False`` only when that side has no legal move. Any other
        failure must raise.
        """
        ...


BotFactory = Callable[[IMoveSink], IBotStrategy]


# ── Abstract game ────────────────────────────────────────────────────────────


class IGame(ABC):
    """Move interface shared by every game variant."""

    @abstractmethod
    def do_move(self, coord: Coordinate) -> MoveOutcome:
        """Handle one square activation from the presentation layer."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Revert the most recent move. Returns False if there is none."""

    @abstractmethod
    def can_undo(self) -> bool:
        """Whether there is a move to undo."""

    @abstractmethod
    def is_highlighted_square(self, coord: Coordinate) -> bool:
        """Whether *coord* is a legal destination of the current selection."""

    def play_opening(self) -> bool:
        """Run any automatic opening moves. Returns True if one was played."""
        return False
