"""Fixed-depth minimax bot over material balance."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from checkie.core.enums import Player
from checkie.core.rules import Rules

if TYPE_CHECKING:
    from checkie.core.board import Board
    from checkie.core.move import Move
    from checkie.core.types import Coordinate
    from checkie.game.interfaces import IMoveSink

_LOGGER = logging.getLogger(__name__)

_MAN_VALUE = 1
_KING_VALUE = 2
_WIN_SCORE = 1_000


class MinimaxBot:
    """Searches ``max_depth`` plies and plays the move with the best
    worst-case material balance for the side to move.

    Every ply is one applied move, so a multi-jump continuation by the
    same side costs depth just like a change of turn.
    """

    __slots__ = ("_sink", "_max_depth", "_nodes")

    def __init__(self, sink: IMoveSink, max_depth: int = 3) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self._sink = sink
        self._max_depth = max_depth
        self._nodes = 0

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def nodes(self) -> int:
        """Positions visited by the last search."""
        return self._nodes

    def attempt_move(self) -> bool:
        state = self._sink.state
        move = self.best_move(state.board, state.current_player, state.jump_from)
        if move is None:
            return False
        _LOGGER.debug("Selected move: %s after %d nodes", move, self._nodes)
        self._sink.commit_move(move)
        return True

    def best_move(
        self,
        board: Board,
        player: Player,
        jump_from: Coordinate | None = None,
    ) -> Move | None:
        """Best move for *player*, or None when it has no legal move."""
        self._nodes = 0
        best: Move | None = None
        best_score = -_WIN_SCORE - 1
        for move in Rules.legal_moves(board, player, jump_from):
            after, record = Rules.apply_move(
                board, move, player, jump_from, validate=False
            )
            score = self._minimax(
                after,
                record.next_player,
                record.jump_from_after,
                self._max_depth - 1,
                player,
            )
            if score > best_score:
                best, best_score = move, score
        return best

    def _minimax(
        self,
        board: Board,
        to_move: Player,
        jump_from: Coordinate | None,
        depth: int,
        me: Player,
    ) -> int:
        self._nodes += 1
        moves = Rules.legal_moves(board, to_move, jump_from)
        if not moves:
            return -_WIN_SCORE if to_move is me else _WIN_SCORE
        if depth <= 0:
            return self.evaluate(board, me)

        scores = []
        for move in moves:
            after, record = Rules.apply_move(
                board, move, to_move, jump_from, validate=False
            )
            scores.append(
                self._minimax(
                    after, record.next_player, record.jump_from_after, depth - 1, me
                )
            )
        return max(scores) if to_move is me else min(scores)

    @staticmethod
    def evaluate(board: Board, me: Player) -> int:
        """Material balance from *me*'s point of view."""
        score = 0
        for player in Player:
            sign = 1 if player is me else -1
            for coord in board.pieces(player):
                piece = board[coord]
                assert piece is not None
                score += sign * (_KING_VALUE if piece.crowned else _MAN_VALUE)
        return score
