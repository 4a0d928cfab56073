"""Game state: board, side to move, selection and undo history."""

from __future__ import annotations

from dataclasses import dataclass, field

from checkie.core.board import Board
from checkie.core.enums import GameResult, Player
from checkie.core.move import Move, MoveRecord
from checkie.core.rules import Rules
from checkie.core.types import Coordinate
from checkie.game.interfaces import SelectionPhase


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Detached copy of what a redraw needs.

    The board is a private copy, so a snapshot stays valid while the game it
    came from keeps changing on another thread.
    """

    board: Board
    highlighted: frozenset[Coordinate]
    current_player: Player

    def is_highlighted(self, coord: Coordinate) -> bool:
        return coord in self.highlighted


@dataclass
class GameState:
    """Manages the board, turn order, selection and move history.

    This is a pure data/logic class with no threading and no UI. Every mutation
    either fully commits or leaves the state untouched.
    """

    board: Board = field(default_factory=Board.initial)
    current_player: Player = Player.BLACK
    history: list[MoveRecord] = field(default_factory=list)
    selection: Coordinate | None = None
    highlighted: frozenset[Coordinate] = frozenset()
    jump_from: Coordinate | None = None

    # ── Selection ────────────────────────────────────────────────────────

    @property
    def phase(self) -> SelectionPhase:
        if self.selection is None:
            return SelectionPhase.AWAITING_SELECTION
        return SelectionPhase.PIECE_SELECTED

    def select(self, coord: Coordinate) -> None:
        self.selection = coord
        self.highlighted = Rules.legal_destinations(
            self.board, coord, self.current_player, self.jump_from
        )

    def clear_selection(self) -> None:
        self.selection = None
        self.highlighted = frozenset()

    def is_highlighted(self, coord: Coordinate) -> bool:
        return coord in self.highlighted

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply *move* for the side to move and return its history record.

        Raises :class:`~checkie.core.rules.IllegalMoveError` before touching
        any field if the move is not legal.
        """
        board, record = Rules.apply_move(
            self.board, move, self.current_player, self.jump_from
        )
        self.board = board
        self.current_player = record.next_player
        self.jump_from = record.jump_from_after
        self.history.append(record)
        self.clear_selection()
        return record

    def undo_last_move(self) -> MoveRecord | None:
        """Undo the last move. Returns its record, or None if history is empty."""
        if not self.history:
            return None
        record = self.history[-1]
        board = Rules.revert_move(self.board, record)
        self.history.pop()
        self.board = board
        self.current_player = record.player
        self.jump_from = record.jump_from_before
        self.clear_selection()
        return record

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def can_undo(self) -> bool:
        return bool(self.history)

    @property
    def ply_count(self) -> int:
        return len(self.history)

    def legal_moves(self) -> list[Move]:
        return Rules.legal_moves(self.board, self.current_player, self.jump_from)

    def has_legal_move(self) -> bool:
        return Rules.has_any_legal_move(self.board, self.current_player, self.jump_from)

    @property
    def result(self) -> GameResult:
        """The side to move loses when it has no legal move."""
        if self.has_legal_move():
            return GameResult.IN_PROGRESS
        return GameResult.win_for(self.current_player.opposite)

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            board=self.board.copy(),
            highlighted=frozenset(self.highlighted),
            current_player=self.current_player,
        )
