"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from chesskernel.core.board import ChessBoard
from chesskernel.core.types import Coords
from chesskernel.ui.settings import BoardSettings, apply_settings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

    from chesskernel.ui.board_view import BoardView

_LOGGER = logging.getLogger(__name__)


class BoardDriver:
    """Minimal turn driver: applies picked moves and hands over the turn."""

    def __init__(self, board: ChessBoard, view: BoardView) -> None:
        self._board = board
        self._view = view
        view.move_made.connect(self.on_move_made)
        view.board_scene.set_board(board)

    @property
    def board(self) -> ChessBoard:
        return self._board

    def on_move_made(self, src: Coords, dst: Coords) -> None:
        self._board.move(src, dst)
        self._board.pass_turn()
        self._view.board_scene.refresh()

        if not self._board.find_safe_squares():
            _LOGGER.info("%s has no safe moves left", self._board.player_color)
        elif self._board.check_state:
            _LOGGER.info("%s is in check", self._board.player_color)


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _configure_application(app: QApplication) -> None:
    app.setApplicationName("Chess Kernel")
    app.setStyle("Fusion")


def run_application(
    argv: list[str] | None = None,
    settings: BoardSettings | None = None,
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from chesskernel.ui.board_view import BoardView

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    view = BoardView()
    apply_settings(view.board_scene, settings or BoardSettings())
    driver = BoardDriver(ChessBoard(), view)
    _LOGGER.debug("Starting with %s to move", driver.board.player_color)

    view.setWindowTitle("Chess Kernel")
    view.resize(640, 640)
    view.show()

    return app.exec()
