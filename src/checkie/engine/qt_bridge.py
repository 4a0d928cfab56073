"""Qt bridge to run game moves and bot turns in a worker thread."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from checkie.core.types import Coordinate
from checkie.game.interfaces import IGame

_LOGGER = logging.getLogger(__name__)


class MoveWorker(QObject):
    """Thread-affine worker that runs ``IGame.do_move`` and bot openings on demand."""

    move_finished = pyqtSignal(int, object)
    move_failed = pyqtSignal(int, str)

    @pyqtSlot(object, object, int)
    def run_move(self, game_obj: object, coord_obj: object, request_id: int) -> None:
        """Apply *coord_obj* to *game_obj* and emit the outcome."""
        if not isinstance(game_obj, IGame):
            self.move_failed.emit(request_id, "Worker received invalid game")
            return
        try:
            coord = Coordinate(*coord_obj)  # type: ignore[misc]
        except (TypeError, ValueError):
            self.move_failed.emit(request_id, f"Worker received invalid square {coord_obj!r}")
            return

        self._run(request_id, lambda: game_obj.do_move(coord), f"Move at {coord}")

    @pyqtSlot(object, int)
    def run_opening(self, game_obj: object, request_id: int) -> None:
        """Let the bot of a fresh *game_obj* open, then emit completion."""
        if not isinstance(game_obj, IGame):
            self.move_failed.emit(request_id, "Worker received invalid game")
            return
        self._run(request_id, game_obj.play_opening, "Opening")

    def _run(self, request_id: int, action: Callable[[], object], label: str) -> None:
        try:
            outcome = action()
        except Exception as exc:
            _LOGGER.exception("%s failed", label)
            self.move_failed.emit(request_id, f"{type(exc).__name__}: {exc}")
            return

        self.move_finished.emit(request_id, outcome)
