"""MainWindow: top-level window wiring the board view to the game."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QCloseEvent
from PyQt6.QtWidgets import QMainWindow, QStatusBar, QWidget

from checkie.core.enums import GameResult, Player
from checkie.core.types import Coordinate
from checkie.game.game import Game
from checkie.game.interfaces import GameVariant
from checkie.game.persistence import PersistenceError
from checkie.ui.board_view import BoardView
from checkie.ui.move_session import MoveOrchestrator
from checkie.ui.settings import AppSettings

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window for Checkie."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Checkie")
        self.setMinimumSize(360, 400)
        self.resize(640, 680)

        self._settings = settings or AppSettings()
        self._last_error: str | None = None

        self._session = MoveOrchestrator(Game(GameVariant.HUMAN_VS_HUMAN), self)
        self._board_view = BoardView()
        self.setCentralWidget(self._board_view)
        self.setStatusBar(QStatusBar())

        self._setup_menu()
        self._connect_signals()
        self._session.setup()
        self._sync()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_menu(self) -> None:
        menu = self.menuBar().addMenu("&Game")

        self._act_new_black = QAction("New Game vs Bot (play Black)", self)
        self._act_new_black.triggered.connect(
            lambda: self.new_game(GameVariant.HUMAN_VS_BOT, Player.BLACK)
        )
        self._act_new_white = QAction("New Game vs Bot (play White)", self)
        self._act_new_white.triggered.connect(
            lambda: self.new_game(GameVariant.HUMAN_VS_BOT, Player.WHITE)
        )
        self._act_new_two = QAction("New Two-Player Game", self)
        self._act_new_two.triggered.connect(
            lambda: self.new_game(GameVariant.HUMAN_VS_HUMAN)
        )
        self._act_undo = QAction("&Undo", self)
        self._act_undo.setShortcut("Ctrl+Z")
        self._act_undo.triggered.connect(self._on_undo)

        for action in (self._act_new_black, self._act_new_white, self._act_new_two):
            menu.addAction(action)
        menu.addSeparator()
        menu.addAction(self._act_undo)

    def _connect_signals(self) -> None:
        self._board_view.square_clicked.connect(self._on_square_clicked)
        self._session.state_changed.connect(self._sync)
        self._session.move_failed.connect(self._on_move_failed)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def session(self) -> MoveOrchestrator:
        return self._session

    def new_game(self, variant: GameVariant, human_player: Player | None = None) -> None:
        if self._session.is_busy:
            return
        self._last_error = None
        self._session.start_new_game(
            variant,
            human_player,
            bot_factory=self._settings.bot_factory(),
            policy=self._settings.bot_policy(),
        )
        if self._session.is_busy:
            self._show_busy()

    def save_state(self) -> bytes:
        return self._session.save()

    def restore_state(self, blob: bytes) -> bool:
        """Swap in a saved game. Returns False if *blob* cannot be restored."""
        try:
            self._session.restore(
                blob,
                bot_factory=self._settings.bot_factory(),
                policy=self._settings.bot_policy(),
            )
        except PersistenceError as exc:
            _LOGGER.warning("Could not restore saved game: %s", exc)
            return False
        return True

    def status_text(self) -> str:
        game = self._session.game
        if self._last_error is not None:
            return f"Error: {self._last_error}"
        if self._session.is_busy:
            return "Thinking..."
        result = game.result
        if result != GameResult.IN_PROGRESS:
            winner = "Black" if result == GameResult.BLACK_WINS else "White"
            loser = str(game.current_player).capitalize()
            return f"{loser} has no legal moves. {winner} wins."
        side = str(game.current_player).capitalize()
        return f"{side} to move"

    # ── Slots ────────────────────────────────────────────────────────────

    def _on_square_clicked(self, coord: Coordinate) -> None:
        if self._session.is_busy:
            return
        self._last_error = None
        if self._session.submit(coord):
            self._show_busy()

    def _on_undo(self) -> None:
        self._session.undo_move()

    def _on_move_failed(self, message: str) -> None:
        self._last_error = message

    def _show_busy(self) -> None:
        """Lock input while a move runs; the board keeps its last snapshot."""
        self._board_view.set_interactive(False)
        self._act_undo.setEnabled(False)
        self.statusBar().showMessage(self.status_text())

    def _sync(self) -> None:
        """Re-derive every visual from the current game state."""
        if self._session.is_busy:
            self._show_busy()
            return
        game = self._session.game
        self._board_view.set_snapshot(game.state.snapshot())
        self._board_view.set_interactive(True)
        self._act_undo.setEnabled(self._session.can_undo())
        self.statusBar().showMessage(self.status_text())

    def closeEvent(self, event: QCloseEvent) -> None:
        self._session.shutdown()
        super().closeEvent(event)
