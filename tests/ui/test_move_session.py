"""Tests for MoveOrchestrator threading and request bookkeeping."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator

import pytest
from PyQt6.QtTest import QSignalSpy

from checkie.core.enums import Player
from checkie.core.types import Coordinate as C
from checkie.engine.random_bot import RandomBot
from checkie.game.game import Game
from checkie.game.interfaces import BotPolicy, GameVariant, IGame, MoveOutcome
from checkie.ui.move_session import MoveInFlightError, MoveOrchestrator

_WAIT_MS = 5000


class _BlockingGame(IGame):
    """Holds the worker inside ``do_move`` until released."""

    def __init__(self) -> None:
        self.entered = threading.Event()
        self.release = threading.Event()

    def do_move(self, coord: C) -> MoveOutcome:
        self.entered.set()
        self.release.wait(_WAIT_MS / 1000)
        return MoveOutcome.IGNORED

    def undo_move(self) -> bool:
        return False

    def can_undo(self) -> bool:
        return False

    def is_highlighted_square(self, coord: C) -> bool:
        return False


class _FaultyGame(_BlockingGame):
    def do_move(self, coord: C) -> MoveOutcome:
        raise RuntimeError("bot lost its mind")


@pytest.fixture
def make_session(qapp: object) -> Iterator[Callable[[object], MoveOrchestrator]]:
    del qapp
    sessions: list[MoveOrchestrator] = []

    def factory(game: object) -> MoveOrchestrator:
        session = MoveOrchestrator(game)  # type: ignore[arg-type]
        sessions.append(session)
        return session

    yield factory

    for session in sessions:
        game = session.game
        if isinstance(game, _BlockingGame):
            game.release.set()
        session.shutdown()


class TestSubmit:
    def test_move_runs_on_worker_and_notifies_once(self, make_session) -> None:
        game = Game()
        session = make_session(game)
        changed = QSignalSpy(session.state_changed)

        assert session.submit(C(2, 2))
        assert session.is_busy
        assert changed.wait(_WAIT_MS)

        assert len(changed) == 1
        assert not session.is_busy
        assert game.state.selection == C(2, 2)

    def test_second_submit_rejected_while_busy(self, make_session) -> None:
        game = _BlockingGame()
        session = make_session(game)
        changed = QSignalSpy(session.state_changed)

        assert session.submit(C(2, 2))
        assert game.entered.wait(_WAIT_MS / 1000)
        assert not session.submit(C(3, 3))
        assert not session.can_undo()
        assert not session.undo_move()

        game.release.set()
        assert changed.wait(_WAIT_MS)
        assert len(changed) == 1
        assert not session.is_busy

    def test_fault_reports_then_redraws(self, make_session) -> None:
        session = make_session(_FaultyGame())
        events: list[str] = []
        session.move_failed.connect(lambda message: events.append(f"failed: {message}"))
        session.state_changed.connect(lambda: events.append("changed"))
        changed = QSignalSpy(session.state_changed)

        assert session.submit(C(0, 0))
        assert changed.wait(_WAIT_MS)

        assert events == ["failed: RuntimeError: bot lost its mind", "changed"]
        assert not session.is_busy

    def test_shutdown_before_setup_is_noop(self, make_session) -> None:
        session = make_session(Game())
        session.shutdown()
        assert not session.is_busy


class TestGameLifecycle:
    def test_swap_refused_while_busy(self, make_session) -> None:
        game = _BlockingGame()
        session = make_session(game)
        assert session.submit(C(2, 2))
        assert game.entered.wait(_WAIT_MS / 1000)

        with pytest.raises(MoveInFlightError):
            session.start_new_game(GameVariant.HUMAN_VS_HUMAN)
        with pytest.raises(MoveInFlightError):
            session.save()
        assert session.game is game

    def test_two_player_game_swaps_immediately(self, make_session) -> None:
        session = make_session(Game())
        changed = QSignalSpy(session.state_changed)

        game = session.start_new_game(GameVariant.HUMAN_VS_HUMAN)

        assert session.game is game
        assert not session.is_busy
        assert len(changed) == 1

    def test_bot_opening_runs_on_worker(self, make_session) -> None:
        session = make_session(Game())
        changed = QSignalSpy(session.state_changed)

        game = session.start_new_game(
            GameVariant.HUMAN_VS_BOT,
            Player.WHITE,
            bot_factory=RandomBot,
            policy=BotPolicy(no_move_delay_s=0),
        )

        assert session.game is game
        assert session.is_busy
        assert changed.wait(_WAIT_MS)
        assert len(changed) == 1
        assert not session.is_busy
        assert game.state.ply_count == 1
        assert game.current_player is Player.WHITE

    def test_new_game_returns_before_bot_opens(self, make_session, gated_bot) -> None:
        session = make_session(Game())
        changed = QSignalSpy(session.state_changed)

        game = session.start_new_game(
            GameVariant.HUMAN_VS_BOT,
            Player.WHITE,
            bot_factory=gated_bot,
            policy=BotPolicy(no_move_delay_s=0),
        )

        assert gated_bot.moves == 0
        assert session.is_busy
        assert len(changed) == 0
        assert not session.submit(C(5, 5))
        with pytest.raises(MoveInFlightError):
            session.save()

        assert gated_bot.entered.wait(_WAIT_MS / 1000)
        gated_bot.release.set()
        assert changed.wait(_WAIT_MS)

        assert len(changed) == 1
        assert gated_bot.moves == 1
        assert game.state.ply_count == 1
        assert not session.is_busy

    def test_undo_notifies(self, make_session) -> None:
        game = Game()
        game.do_move(C(2, 2))
        game.do_move(C(3, 3))
        session = make_session(game)
        changed = QSignalSpy(session.state_changed)

        assert session.can_undo()
        assert session.undo_move()
        assert len(changed) == 1
        assert not session.undo_move()
        assert len(changed) == 1

    def test_save_and_restore(self, make_session) -> None:
        game = Game()
        game.do_move(C(2, 2))
        game.do_move(C(3, 3))
        session = make_session(game)
        blob = session.save()

        session.start_new_game(GameVariant.HUMAN_VS_HUMAN)
        changed = QSignalSpy(session.state_changed)
        restored = session.restore(blob)

        assert len(changed) == 1
        assert session.game is restored
        assert restored.board == game.board
        assert restored.current_player is Player.WHITE
