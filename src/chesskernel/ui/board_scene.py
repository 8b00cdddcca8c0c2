"""BoardScene — QGraphicsScene that draws a ChessBoard and its safe squares."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chesskernel.core.board import ChessBoard
from chesskernel.core.piece import Piece
from chesskernel.core.types import BOARD_SIZE, Coords, SafeSquares
from chesskernel.ui.theme import BoardTheme


class BoardScene(QGraphicsScene):
    """Renders squares, coordinates, pieces and highlights.

    The scene only reads the board. Completed selections are reported
    through ``move_made`` and applied by whoever drives the game.

    Signals:
        move_made(Coords, Coords): source and destination of a safe move
            picked by the user.
    """

    move_made = pyqtSignal(object, object)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._board: ChessBoard | None = None
        self._flipped = False

        # Interaction state
        self._selected: Coords | None = None
        self._safe_squares: SafeSquares = {}
        self._interactive = True
        self._show_coordinates = True
        self._show_safe_squares = True

        # Visual layers
        self._square_items: dict[Coords, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._check_items: list[QGraphicsRectItem] = []
        self._safe_dot_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Coords, QGraphicsSimpleTextItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_board(self, board: ChessBoard) -> None:
        """Display *board* (full redraw of pieces)."""
        self._board = board
        self.refresh()

    def refresh(self) -> None:
        """Re-read the board after it was mutated."""
        self._clear_selection()
        self._sync_pieces()
        self.highlight_check()

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation."""
        self._flipped = flipped
        self._draw_board()
        if self._board is not None:
            self.refresh()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        if self._board is not None:
            self.refresh()

    def set_show_coordinates(self, visible: bool) -> None:
        """Show or hide rank/file coordinate labels."""
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_safe_squares(self, visible: bool) -> None:
        """Show or hide safe-square dots for the selected piece."""
        self._show_safe_squares = visible
        if not visible:
            self._clear_items(self._safe_dot_items)

    def highlight_check(self) -> None:
        """Highlight the side-to-move king when it is in check."""
        self._clear_items(self._check_items)
        board = self._board
        if board is None or not board.check_state:
            return
        king = board.king_coords(board.player_color)
        if king is None:
            return
        rect = self._make_highlight(king, self._theme.highlight_check)
        rect.setZValue(0.6)
        self._check_items.append(rect)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self.TILE
        font = QFont("Sans Serif", max(9, t // 8))

        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                coords = Coords(row, col)
                vc, vr = self._visual_coords(coords)
                is_dark = ChessBoard.is_square_dark(row, col)
                color = self._theme.dark_square if is_dark else self._theme.light_square
                rect = QGraphicsRectItem(vc * t, vr * t, t, t)
                rect.setBrush(QBrush(color))
                rect.setPen(QPen(Qt.PenStyle.NoPen))
                rect.setZValue(0)
                self.addItem(rect)
                self._square_items[coords] = rect

                text_color = (
                    self._theme.coord_dark if is_dark else self._theme.coord_light
                )
                # Rank numbers (left edge)
                if col == 0:
                    self._add_coord_label(
                        str(row + 1), vc * t + 2, vr * t + 1, font, text_color
                    )
                # File letters (bottom edge)
                if row == 0:
                    self._add_coord_label(
                        chr(ord("a") + col),
                        vc * t + t - 12,
                        vr * t + t - 16,
                        font,
                        text_color,
                    )

        self.setSceneRect(0, 0, BOARD_SIZE * t, BOARD_SIZE * t)

    def _add_coord_label(
        self, label: str, x: float, y: float, font: QFont, color: QColor
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece glyphs from the board view."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._board is None:
            return

        t = self.TILE
        font = QFont("DejaVu Sans", int(t * 0.6))
        for row, cells in enumerate(self._board.chess_board_view):
            for col, char in enumerate(cells):
                if char is None:
                    continue
                coords = Coords(row, col)
                item = QGraphicsSimpleTextItem(Piece.from_char(char).symbol)
                item.setFont(font)
                item.setBrush(QBrush(self._theme.piece_text))
                vc, vr = self._visual_coords(coords)
                bounds = item.boundingRect()
                item.setPos(
                    vc * t + (t - bounds.width()) / 2,
                    vr * t + (t - bounds.height()) / 2,
                )
                item.setZValue(1)
                self.addItem(item)
                self._piece_items[coords] = item

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._board is None or event is None:
            return super().mousePressEvent(event)
        self.click(self._pos_to_coords(event.scenePos()))
        super().mousePressEvent(event)

    def click(self, coords: Coords | None) -> None:
        """Select an own piece, or complete a move to one of its safe squares."""
        board = self._board
        if board is None or coords is None:
            self._clear_selection()
            return

        if self._selected is not None and coords in self._safe_squares.get(
            self._selected, ()
        ):
            src = self._selected
            self._clear_selection()
            self.move_made.emit(src, coords)
            return

        piece = board[coords]
        if piece is not None and piece.color == board.player_color:
            self._select_square(coords)
        else:
            self._clear_selection()

    # ── Selection / highlights ───────────────────────────────────────────

    def _select_square(self, coords: Coords) -> None:
        self._clear_selection()
        self._selected = coords
        self._highlight_items.append(
            self._make_highlight(coords, self._theme.highlight_from)
        )

        if self._board is None:
            return
        self._safe_squares = self._board.find_safe_squares()
        if self._show_safe_squares:
            for dst in self._safe_squares.get(coords, ()):
                dot = self._make_highlight(dst, self._theme.highlight_to)
                self._safe_dot_items.append(dot)

    def _clear_selection(self) -> None:
        self._selected = None
        self._safe_squares = {}
        self._clear_items(self._highlight_items)
        self._clear_items(self._safe_dot_items)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, coords: Coords) -> tuple[int, int]:
        """Board cell → visual (column, row), rank 1 at the bottom."""
        if self._flipped:
            return BOARD_SIZE - 1 - coords.col, coords.row
        return coords.col, BOARD_SIZE - 1 - coords.row

    def _pos_to_coords(self, pos: QPointF) -> Coords | None:
        """Scene position → board cell."""
        t = self.TILE
        vc = int(pos.x() // t)
        vr = int(pos.y() // t)
        if not (0 <= vc < BOARD_SIZE and 0 <= vr < BOARD_SIZE):
            return None
        if self._flipped:
            return Coords(vr, BOARD_SIZE - 1 - vc)
        return Coords(BOARD_SIZE - 1 - vr, vc)

    def _make_highlight(self, coords: Coords, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a cell."""
        t = self.TILE
        vc, vr = self._visual_coords(coords)
        rect = QGraphicsRectItem(vc * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
