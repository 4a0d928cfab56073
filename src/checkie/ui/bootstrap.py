"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from PyQt6.QtCore import QByteArray, QSettings

from checkie.ui.settings import AppSettings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

    from checkie.ui.main_window import MainWindow

_LOGGER = logging.getLogger(__name__)
_ORGANIZATION = "Checkie"
_APPLICATION = "Checkie"
_SAVED_GAME_KEY = "game/saved"


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _configure_application(app: QApplication) -> None:
    app.setOrganizationName(_ORGANIZATION)
    app.setApplicationName(_APPLICATION)
    app.setStyle("Fusion")


def restore_saved_game(window: MainWindow, store: QSettings) -> None:
    """Load the game stored by :func:`store_game`, if any."""
    raw = store.value(_SAVED_GAME_KEY)
    if raw is None:
        return
    if isinstance(raw, QByteArray):
        blob: bytes | None = raw.data()
    elif isinstance(raw, (bytes, bytearray)):
        blob = bytes(raw)
    else:
        blob = None
    if blob is None or not window.restore_state(blob):
        _LOGGER.info("Discarding unreadable saved game")
        store.remove(_SAVED_GAME_KEY)


def store_game(window: MainWindow, store: QSettings) -> None:
    """Persist the current game unless a move is still running."""
    if window.session.is_busy:
        _LOGGER.warning("Move in flight at exit; saved game not updated")
        return
    store.setValue(_SAVED_GAME_KEY, QByteArray(window.save_state()))


def run_application(argv: list[str] | None = None) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from checkie.ui.main_window import MainWindow

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    store = QSettings()
    settings = AppSettings.load(store)
    _configure_logging(settings.log_level)

    window = MainWindow(settings)
    restore_saved_game(window, store)
    app.aboutToQuit.connect(lambda: store_game(window, store))
    window.show()

    code = app.exec()
    settings.save(store)
    return code
