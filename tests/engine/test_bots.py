"""Tests for the bot strategies."""

from __future__ import annotations

import random

import pytest

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.move import Move
from checkie.core.piece import Piece
from checkie.core.types import Coordinate as C
from checkie.engine.minimax_bot import MinimaxBot
from checkie.engine.random_bot import RandomBot
from checkie.game.game import Game
from checkie.game.state import GameState


def _sink(board: Board, player: Player = Player.BLACK) -> Game:
    return Game(state=GameState(board=board, current_player=player))


class TestRandomBot:
    def test_plays_a_legal_move(self) -> None:
        game = _sink(Board.initial())
        legal = game.state.legal_moves()
        bot = RandomBot(game, random.Random(7))
        assert bot.attempt_move()
        assert game.state.history[0].move in legal
        assert game.current_player is Player.WHITE

    def test_seeded_bots_agree(self) -> None:
        a, b = _sink(Board.initial()), _sink(Board.initial())
        RandomBot(a, random.Random(42)).attempt_move()
        RandomBot(b, random.Random(42)).attempt_move()
        assert a.board == b.board

    def test_returns_false_without_moves(self) -> None:
        board = Board()
        board[C(2, 2)] = Piece(Player.BLACK)
        game = _sink(board, Player.WHITE)
        assert not RandomBot(game).attempt_move()
        assert game.state.history == []


class TestMinimaxBot:
    def test_avoids_hanging_its_only_piece(self) -> None:
        board = Board()
        board[C(2, 2)] = Piece(Player.BLACK)
        board[C(4, 4)] = Piece(Player.WHITE)
        bot = MinimaxBot(_sink(board))
        assert bot.best_move(board, Player.BLACK) == Move(C(2, 2), C(1, 3))
        assert bot.nodes > 0

    def test_attempt_move_commits_through_sink(self) -> None:
        board = Board()
        board[C(2, 2)] = Piece(Player.BLACK)
        board[C(4, 4)] = Piece(Player.WHITE)
        game = _sink(board)
        assert MinimaxBot(game).attempt_move()
        assert game.board[C(1, 3)] == Piece(Player.BLACK)
        assert game.state.ply_count == 1

    def test_finishes_multi_jump(self) -> None:
        board = Board()
        board[C(4, 4)] = Piece(Player.BLACK)
        board[C(5, 5)] = Piece(Player.WHITE)
        board[C(0, 6)] = Piece(Player.WHITE)
        game = Game(
            state=GameState(board=board, current_player=Player.BLACK, jump_from=C(4, 4))
        )
        assert MinimaxBot(game).attempt_move()
        assert game.board[C(6, 6)] == Piece(Player.BLACK)

    def test_returns_false_without_moves(self) -> None:
        board = Board()
        board[C(0, 6)] = Piece(Player.BLACK)
        board[C(1, 7)] = Piece(Player.WHITE)
        game = _sink(board)
        assert not MinimaxBot(game).attempt_move()
        assert game.state.history == []

    def test_evaluate_counts_kings_double(self) -> None:
        board = Board()
        board[C(0, 0)] = Piece(Player.BLACK, crowned=True)
        board[C(2, 2)] = Piece(Player.WHITE)
        assert MinimaxBot.evaluate(board, Player.BLACK) == 1
        assert MinimaxBot.evaluate(board, Player.WHITE) == -1

    def test_rejects_zero_depth(self) -> None:
        with pytest.raises(ValueError):
            MinimaxBot(_sink(Board()), max_depth=0)
