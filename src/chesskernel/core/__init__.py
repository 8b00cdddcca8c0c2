"""Core rules kernel — pure chess logic with zero external dependencies.

Quick start::

    from chesskernel.core import ChessBoard

    board = ChessBoard()
    for src, destinations in board.find_safe_squares().items():
        print(src, destinations)
"""

from chesskernel.core.board import ChessBoard
from chesskernel.core.enums import Color, FENChar, MovementMode, PieceType
from chesskernel.core.errors import IllegalMoveError
from chesskernel.core.piece import Piece
from chesskernel.core.types import (
    BOARD_SIZE,
    Coords,
    SafeSquares,
    are_coords_valid,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "FENChar",
    "MovementMode",
    "PieceType",
    # Types / helpers
    "BOARD_SIZE",
    "Coords",
    "SafeSquares",
    "are_coords_valid",
    "parse_square",
    "square_name",
    # Domain objects
    "ChessBoard",
    "IllegalMoveError",
    "Piece",
]
