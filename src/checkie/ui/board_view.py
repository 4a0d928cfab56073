"""BoardView: QWidget that paints the board and reports square clicks."""

from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QMouseEvent, QPainter, QPaintEvent, QPen
from PyQt6.QtWidgets import QSizePolicy, QWidget

from checkie.core.board import Board
from checkie.core.enums import Player
from checkie.core.types import Coordinate
from checkie.game.state import StateSnapshot

_DARK_SQUARE = QColor(117, 48, 15)
_LIGHT_SQUARE = QColor(231, 197, 133)
_HIGHLIGHT = QColor(0, 0xEE, 0)
_BLACK_PIECE = QColor(11, 12, 18)
_WHITE_PIECE = QColor(250, 246, 221)
_CROWN = QColor(212, 175, 55)


class BoardView(QWidget):
    """Renders a :class:`StateSnapshot` with row 0 at the bottom.

    The view only ever holds a detached snapshot, never the live game state,
    so a repaint during an in-flight move shows the last completed position.

    Signals:
        square_clicked(Coordinate): Primary-button press, mapped to a square.
            Presses outside the board still map to a (possibly out-of-range)
            coordinate; the game ignores those.
    """

    square_clicked = pyqtSignal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._snapshot: StateSnapshot | None = None
        self._interactive = True

        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 320)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    # ── Public API ───────────────────────────────────────────────────────

    def set_snapshot(self, snapshot: StateSnapshot) -> None:
        """Display *snapshot* until the next call."""
        self._snapshot = snapshot
        self.update()

    def snapshot(self) -> StateSnapshot | None:
        return self._snapshot

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive

    def is_interactive(self) -> bool:
        return self._interactive

    def square_at(self, x: float, y: float) -> Coordinate:
        """Board coordinate under widget point ``(x, y)``."""
        size = self._board_size()
        s, x_offset, y_offset = self._geometry()
        if s <= 0:
            return Coordinate(-1, -1)
        col = int((x - x_offset) // s)
        row = int((y - y_offset) // s)
        return Coordinate(col, size - row - 1)

    def square_rect(self, coord: Coordinate) -> QRectF:
        """Widget rectangle covering *coord*."""
        s, x_offset, y_offset = self._geometry()
        left = x_offset + coord.x * s
        top = y_offset + (self._board_size() - coord.y - 1) * s
        return QRectF(left, top, s, s)

    # ── Qt events ────────────────────────────────────────────────────────

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton or not self._interactive:
            event.ignore()
            return
        pos = event.position()
        self.square_clicked.emit(self.square_at(pos.x(), pos.y()))
        event.accept()

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), Qt.GlobalColor.black)
            if self._snapshot is None or self._geometry()[0] <= 0:
                return
            board = self._snapshot.board
            for coord in board.coordinates():
                self._draw_square(painter, coord)
                self._draw_piece(painter, board, coord)
        finally:
            painter.end()

    # ── Drawing helpers ──────────────────────────────────────────────────

    def _board_size(self) -> int:
        return self._snapshot.board.size() if self._snapshot is not None else 0

    def _geometry(self) -> tuple[int, int, int]:
        """Square size and board offsets for the current widget size."""
        size = self._board_size()
        if size == 0:
            return 0, 0, 0
        square = min(self.width(), self.height()) // size
        x_offset = (self.width() - square * size) // 2
        y_offset = (self.height() - square * size) // 2
        return square, x_offset, y_offset

    def square_color(self, coord: Coordinate) -> QColor:
        if self._snapshot is not None and self._snapshot.is_highlighted(coord):
            return _HIGHLIGHT
        if Board.is_light_square(coord):
            return _LIGHT_SQUARE
        return _DARK_SQUARE

    def _draw_square(self, painter: QPainter, coord: Coordinate) -> None:
        painter.fillRect(self.square_rect(coord), self.square_color(coord))

    def _draw_piece(self, painter: QPainter, board: Board, coord: Coordinate) -> None:
        piece = board[coord]
        if piece is None:
            return
        rect = self.square_rect(coord)
        center = QPointF(rect.center())
        radius = rect.width() / 2.5
        color = _BLACK_PIECE if piece.color is Player.BLACK else _WHITE_PIECE
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(color)
        painter.drawEllipse(center, radius, radius)
        if piece.crowned:
            painter.setPen(QPen(_CROWN, max(2.0, radius / 6)))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawEllipse(center, radius / 2, radius / 2)
