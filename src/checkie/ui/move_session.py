"""Move orchestration between the UI thread and the move worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from checkie.core.enums import Player
from checkie.core.types import Coordinate
from checkie.engine.qt_bridge import MoveWorker
from checkie.game.game import Game, start_new_game
from checkie.game.interfaces import BotFactory, BotPolicy, GameVariant
from checkie.game.persistence import deserialize, serialize

_LOGGER = logging.getLogger(__name__)


class MoveInFlightError(RuntimeError):
    """Raised when the game is swapped or saved while a move is running."""


class MoveOrchestrator(QObject):
    """Owns the worker thread and hands square activations to it.

    At most one move is in flight. When it completes, ``state_changed`` is
    emitted exactly once on the UI thread; a failed move additionally emits
    ``move_failed`` with a description just before it.

    Signals:
        state_changed(): Redraw from the current game state.
        move_failed(str): A move aborted with an internal fault.
    """

    state_changed = pyqtSignal()
    move_failed = pyqtSignal(str)

    _move_requested = pyqtSignal(object, object, int)
    _opening_requested = pyqtSignal(object, int)

    _SHUTDOWN_WAIT_MS = 2000

    def __init__(self, game: Game, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._game = game
        self._thread = QThread(self)
        self._worker = MoveWorker()
        self._request_id = 0
        self._in_flight: int | None = None
        self._is_started = False

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def game(self) -> Game:
        return self._game

    @property
    def is_busy(self) -> bool:
        return self._in_flight is not None

    # ── Lifecycle ────────────────────────────────────────────────────────

    def setup(self) -> None:
        """Start the worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._worker.moveToThread(self._thread)
        self._move_requested.connect(self._worker.run_move)
        self._opening_requested.connect(self._worker.run_opening)
        self._worker.move_finished.connect(self._on_move_finished)
        self._worker.move_failed.connect(self._on_move_failed)
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Stop the worker thread, waiting for an in-flight move to finish."""
        if not self._is_started:
            return
        self._thread.quit()
        self._thread.wait(self._SHUTDOWN_WAIT_MS)
        self._in_flight = None
        self._is_started = False

    # ── Presentation → core ──────────────────────────────────────────────

    def submit(self, coord: Coordinate) -> bool:
        """Dispatch one square activation. Returns False if a move is in flight."""
        if self.is_busy:
            _LOGGER.warning("Ignoring %s: a move is already in flight", coord)
            return False
        request_id = self._next_request()
        _LOGGER.debug("Submitting %s as request %d", coord, request_id)
        self._move_requested.emit(self._game, tuple(coord), request_id)
        return True

    def start_new_game(
        self,
        variant: GameVariant,
        human_player: Player | None = None,
        *,
        bot_factory: BotFactory | None = None,
        policy: BotPolicy | None = None,
    ) -> Game:
        """Replace the game with a fresh one.

        When the bot moves first its opening runs on the worker thread: this
        returns at once with the orchestrator busy, and ``state_changed``
        follows when the opening completes. Otherwise ``state_changed`` is
        emitted before returning.
        """
        self._require_idle("start a new game")
        game = start_new_game(
            variant,
            human_player,
            bot_factory=bot_factory,
            policy=policy,
            autostart=False,
        )
        if game.bot is None or game.is_humans_turn:
            self._swap(game)
            return game

        self._game = game
        request_id = self._next_request()
        _LOGGER.debug("Requesting bot opening as request %d", request_id)
        self._opening_requested.emit(game, request_id)
        return game

    def restore(
        self,
        blob: bytes,
        *,
        bot_factory: BotFactory | None = None,
        policy: BotPolicy | None = None,
    ) -> Game:
        """Replace the game with one decoded from *blob*."""
        self._require_idle("restore a game")
        game = deserialize(blob, bot_factory=bot_factory, policy=policy)
        self._swap(game)
        return game

    def save(self) -> bytes:
        self._require_idle("save the game")
        return serialize(self._game)

    def undo_move(self) -> bool:
        """Undo back to the human's previous turn; refused while busy."""
        if self.is_busy:
            return False
        ok = self._game.undo_turn()
        if ok:
            self.state_changed.emit()
        return ok

    def can_undo(self) -> bool:
        return not self.is_busy and self._game.can_undo()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _next_request(self) -> int:
        self.setup()
        self._request_id += 1
        self._in_flight = self._request_id
        return self._request_id

    def _require_idle(self, action: str) -> None:
        if self.is_busy:
            raise MoveInFlightError(f"Cannot {action} while a move is in flight")

    def _swap(self, game: Game) -> None:
        self._game = game
        self.state_changed.emit()

    def _on_move_finished(self, request_id: int, outcome: object) -> None:
        if request_id != self._in_flight:
            return
        self._in_flight = None
        _LOGGER.debug("Request %d finished: %s", request_id, outcome)
        self.state_changed.emit()

    def _on_move_failed(self, request_id: int, message: str) -> None:
        if request_id != self._in_flight:
            return
        self._in_flight = None
        _LOGGER.error("Request %d failed: %s", request_id, message)
        self.move_failed.emit(message)
        self.state_changed.emit()
