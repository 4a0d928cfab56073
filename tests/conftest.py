"""Fixtures shared by the checkie test suite."""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

from checkie.game.interfaces import IMoveSink

# Qt needs a platform plugin even for widgets that are never shown.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

GATE_TIMEOUT_S = 5.0


class GatedBot:
    """Bot factory whose bot blocks inside ``attempt_move`` until released.

    Once released it plays the first legal move. ``entered`` is set as soon
    as a worker thread is parked in the bot.
    """

    def __init__(self) -> None:
        self.entered = threading.Event()
        self.release = threading.Event()
        self.moves = 0
        self._sink: IMoveSink | None = None

    def __call__(self, sink: IMoveSink) -> GatedBot:
        self._sink = sink
        return self

    def attempt_move(self) -> bool:
        assert self._sink is not None
        self.entered.set()
        self.release.wait(GATE_TIMEOUT_S)
        moves = self._sink.state.legal_moves()
        if not moves:
            return False
        self._sink.commit_move(moves[0])
        self.moves += 1
        return True


def _in_ui_package(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """One QApplication for the whole run."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def gated_bot() -> Iterator[GatedBot]:
    bot = GatedBot()
    yield bot
    bot.release.set()


@pytest.fixture(autouse=True)
def _close_windows(request: pytest.FixtureRequest) -> Iterator[None]:
    """Close every top-level window a tests/ui test leaves behind.

    Closing a MainWindow also stops its move worker thread.
    """
    if not _in_ui_package(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()
