"""Checkers rules: move generation, application and reversal."""

from __future__ import annotations

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.move import Move, MoveRecord
from checkie.core.types import DIAGONALS, Coordinate


class IllegalMoveError(ValueError):
    """Raised when a move that is not legal is applied."""


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    Product policy:
    - Captures are forced: when any jump exists, simple moves are illegal.
    - After a jump the same piece must keep jumping while it can
      (``jump_from``), unless the jump crowned it.
    """

    # ── Move generation ──────────────────────────────────────────────────

    @staticmethod
    def _directions(board: Board, coord: Coordinate) -> list[tuple[int, int]]:
        piece = board[coord]
        if piece is None:
            return []
        if piece.crowned:
            return list(DIAGONALS)
        fwd = piece.color.forward
        return [(dx, dy) for dx, dy in DIAGONALS if dy == fwd]

    @staticmethod
    def _jumps_from(board: Board, coord: Coordinate) -> list[Move]:
        piece = board[coord]
        if piece is None:
            return []
        moves: list[Move] = []
        for dx, dy in Rules._directions(board, coord):
            over = coord.offset(dx, dy)
            end = coord.offset(2 * dx, 2 * dy)
            if not board.contains(end) or not board.is_empty(end):
                continue
            victim = board[over]
            if victim is None or victim.color is piece.color:
                continue
            moves.append(Move(coord, end))
        return moves

    @staticmethod
    def _steps_from(board: Board, coord: Coordinate) -> list[Move]:
        moves: list[Move] = []
        for dx, dy in Rules._directions(board, coord):
            end = coord.offset(dx, dy)
            if board.contains(end) and board.is_empty(end):
                moves.append(Move(coord, end))
        return moves

    @staticmethod
    def legal_moves(
        board: Board,
        player: Player,
        jump_from: Coordinate | None = None,
    ) -> list[Move]:
        """All legal moves for *player*.

        When *jump_from* is set only further jumps by that piece are legal.
        """
        if jump_from is not None:
            piece = board[jump_from]
            if piece is None or piece.color is not player:
                return []
            return Rules._jumps_from(board, jump_from)

        origins = board.pieces(player)
        jumps = [m for c in origins for m in Rules._jumps_from(board, c)]
        if jumps:
            return jumps
        return [m for c in origins for m in Rules._steps_from(board, c)]

    @staticmethod
    def legal_destinations(
        board: Board,
        coord: Coordinate,
        player: Player,
        jump_from: Coordinate | None = None,
    ) -> frozenset[Coordinate]:
        """Squares the piece on *coord* may legally move to."""
        if not board.contains(coord):
            return frozenset()
        piece = board[coord]
        if piece is None or piece.color is not player:
            return frozenset()
        return frozenset(
            m.end for m in Rules.legal_moves(board, player, jump_from) if m.start == coord
        )

    @staticmethod
    def has_any_legal_move(
        board: Board,
        player: Player,
        jump_from: Coordinate | None = None,
    ) -> bool:
        return bool(Rules.legal_moves(board, player, jump_from))

    # ── Application ──────────────────────────────────────────────────────

    @staticmethod
    def is_promotion_row(board: Board, coord: Coordinate, player: Player) -> bool:
        last = board.size() - 1 if player is Player.BLACK else 0
        return coord.y == last

    @staticmethod
    def apply_move(
        board: Board,
        move: Move,
        player: Player,
        jump_from: Coordinate | None = None,
        *,
        validate: bool = True,
    ) -> tuple[Board, MoveRecord]:
        """Return the board after *move* and the record to revert it.

        *board* itself is left untouched. Search code that only applies moves
        it just generated may pass ``validate=False``.
        """
        if validate and move not in Rules.legal_moves(board, player, jump_from):
            raise IllegalMoveError(f"Illegal move for {player}: {move}")

        piece = board[move.start]
        assert piece is not None

        after = board.copy()
        after[move.start] = None

        captured = None
        jumped = move.jumped
        if jumped is not None:
            captured = after[jumped]
            after[jumped] = None

        promoted = not piece.crowned and Rules.is_promotion_row(board, move.end, player)
        after[move.end] = piece.crown() if promoted else piece

        next_player = player.opposite
        jump_from_after = None
        if jumped is not None and not promoted and Rules._jumps_from(after, move.end):
            next_player = player
            jump_from_after = move.end

        record = MoveRecord(
            move=move,
            player=player,
            piece=piece,
            next_player=next_player,
            captured=captured,
            promoted=promoted,
            jump_from_before=jump_from,
            jump_from_after=jump_from_after,
        )
        return after, record

    @staticmethod
    def revert_move(board: Board, record: MoveRecord) -> Board:
        """Return the board as it was before *record* was applied."""
        before = board.copy()
        move = record.move
        before[move.end] = None
        before[move.start] = record.piece
        jumped = move.jumped
        if jumped is not None:
            before[jumped] = record.captured
        return before
