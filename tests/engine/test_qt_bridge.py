"""Tests for the Qt move worker."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from checkie.core.enums import Player
from checkie.core.types import Coordinate
from checkie.engine.qt_bridge import MoveWorker
from checkie.engine.random_bot import RandomBot
from checkie.game.game import Game
from checkie.game.interfaces import BotPolicy, GameVariant, IGame, MoveOutcome

pytestmark = pytest.mark.usefixtures("qapp")


class _ExplodingGame(IGame):
    def do_move(self, coord: Coordinate) -> MoveOutcome:
        raise RuntimeError(f"boom at {coord}")

    def undo_move(self) -> bool:
        return False

    def can_undo(self) -> bool:
        return False

    def is_highlighted_square(self, coord: Coordinate) -> bool:
        return False


class _ExplodingOpening(_ExplodingGame):
    def play_opening(self) -> bool:
        raise RuntimeError("no opening book")


class TestMoveWorker:
    def test_emits_outcome_for_selection(self) -> None:
        worker = MoveWorker()
        finished = QSignalSpy(worker.move_finished)
        failed = QSignalSpy(worker.move_failed)
        game = Game()

        worker.run_move(game, (2, 2), 3)

        assert len(finished) == 1
        assert finished[0][0] == 3
        assert finished[0][1] == MoveOutcome.SELECTED
        assert len(failed) == 0
        assert game.state.selection == Coordinate(2, 2)

    def test_emits_failure_when_game_raises(self) -> None:
        worker = MoveWorker()
        finished = QSignalSpy(worker.move_finished)
        failed = QSignalSpy(worker.move_failed)

        worker.run_move(_ExplodingGame(), (1, 1), 5)

        assert len(finished) == 0
        assert len(failed) == 1
        assert failed[0][0] == 5
        assert "RuntimeError" in failed[0][1]
        assert "boom at (1,1)" in failed[0][1]

    def test_rejects_non_game(self) -> None:
        worker = MoveWorker()
        failed = QSignalSpy(worker.move_failed)

        worker.run_move(object(), (0, 0), 9)

        assert len(failed) == 1
        assert failed[0] == [9, "Worker received invalid game"]

    def test_rejects_malformed_square(self) -> None:
        worker = MoveWorker()
        failed = QSignalSpy(worker.move_failed)
        game = Game()

        worker.run_move(game, (1, 2, 3), 2)

        assert len(failed) == 1
        assert failed[0][0] == 2
        assert game.state.selection is None

    def test_opening_lets_bot_move_first(self) -> None:
        worker = MoveWorker()
        finished = QSignalSpy(worker.move_finished)
        game = Game(
            GameVariant.HUMAN_VS_BOT,
            human_player=Player.WHITE,
            bot_factory=RandomBot,
            policy=BotPolicy(no_move_delay_s=0),
            autostart=False,
        )
        assert game.state.ply_count == 0

        worker.run_opening(game, 4)

        assert len(finished) == 1
        assert finished[0] == [4, True]
        assert game.state.ply_count == 1

    def test_opening_failure_is_reported(self) -> None:
        worker = MoveWorker()
        failed = QSignalSpy(worker.move_failed)

        worker.run_opening(_ExplodingOpening(), 6)

        assert len(failed) == 1
        assert failed[0] == [6, "RuntimeError: no opening book"]
