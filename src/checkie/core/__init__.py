"""Core domain layer: checkers board and rules with zero external dependencies.

Quick start::

    from checkie.core import Board, Player, Rules

    board = Board.initial()
    for move in Rules.legal_moves(board, Player.BLACK):
        print(move)
"""

from checkie.core.board import Board
from checkie.core.enums import GameResult, Player
from checkie.core.move import Move, MoveRecord
from checkie.core.piece import Piece
from checkie.core.rules import IllegalMoveError, Rules
from checkie.core.types import Coordinate, is_within

__all__ = [
    # Enums
    "GameResult",
    "Player",
    # Types / helpers
    "Coordinate",
    "is_within",
    # Domain objects
    "Board",
    "IllegalMoveError",
    "Move",
    "MoveRecord",
    "Piece",
    "Rules",
]
