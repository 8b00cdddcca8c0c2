"""ChessBoard - 8x8 grid, check detection and safe-move generation."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from chesskernel.core.enums import Color, MovementMode, PieceType
from chesskernel.core.errors import IllegalMoveError
from chesskernel.core.piece import Piece
from chesskernel.core.types import BOARD_SIZE, Coords, SafeSquares, are_coords_valid

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class ChessBoard:
    """Owns every piece on an 8x8 grid and answers rules queries.

    The board never decides whose turn it is: ``player_color`` is set at
    construction and updated by the driver after each applied move.
    """

    __slots__ = ("_grid", "_player_color")

    def __init__(self, player_color: Color = Color.WHITE) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        self._player_color = player_color
        for col, piece_type in enumerate(_BACK_RANK):
            self._grid[0][col] = Piece(Color.WHITE, piece_type)
            self._grid[1][col] = Piece(Color.WHITE, PieceType.PAWN)
            self._grid[6][col] = Piece(Color.BLACK, PieceType.PAWN)
            self._grid[7][col] = Piece(Color.BLACK, piece_type)

    # -- Factories ----------------------------------------------------------

    @classmethod
    def empty(cls, player_color: Color = Color.WHITE) -> ChessBoard:
        """Board with no pieces on it."""
        board = cls(player_color)
        board.clear()
        return board

    @classmethod
    def from_placement(
        cls,
        placement: Mapping[Coords, Piece],
        player_color: Color = Color.WHITE,
    ) -> ChessBoard:
        """Board holding exactly the pieces in *placement*."""
        board = cls.empty(player_color)
        for coords, piece in placement.items():
            board[coords] = piece
        return board

    # -- Element access -----------------------------------------------------

    def __getitem__(self, coords: Coords) -> Piece | None:
        return self._grid[coords.row][coords.col]

    def __setitem__(self, coords: Coords, piece: Piece | None) -> None:
        self._grid[coords.row][coords.col] = piece

    def is_empty(self, coords: Coords) -> bool:
        return self._grid[coords.row][coords.col] is None

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    def occupied(self) -> Iterator[tuple[Coords, Piece]]:
        """Yield every occupied cell in row-major order."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self._grid[row][col]
                if piece is not None:
                    yield Coords(row, col), piece

    # -- Queries ------------------------------------------------------------

    @property
    def player_color(self) -> Color:
        """Color that currently owns move rights."""
        return self._player_color

    @player_color.setter
    def player_color(self, color: Color) -> None:
        self._player_color = color

    def pass_turn(self) -> None:
        """Hand move rights to the other side."""
        self._player_color = self._player_color.opposite

    @property
    def chess_board_view(self) -> list[list[str | None]]:
        """Row-major grid of FEN letters (``None`` for empty cells)."""
        return [
            [str(piece) if piece is not None else None for piece in row]
            for row in self._grid
        ]

    @staticmethod
    def is_square_dark(row: int, col: int) -> bool:
        """Dark iff row and column share parity (a1 is dark)."""
        return row % 2 == col % 2

    def king_coords(self, color: Color) -> Coords | None:
        for coords, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return coords
        return None

    @property
    def check_state(self) -> bool:
        """Whether the side to move is currently in check."""
        return self.is_in_check(self._player_color)

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king within reach of any opposing piece?"""
        grid = self._grid
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = grid[row][col]
                if piece is None or piece.color == color:
                    continue

                is_leap = piece.movement_mode == MovementMode.LEAP
                for d in piece.directions:
                    new_row = row + d.row
                    new_col = col + d.col
                    if not are_coords_valid(new_row, new_col):
                        continue

                    if is_leap:
                        # pawns only attack diagonally
                        if piece.piece_type == PieceType.PAWN and d.col == 0:
                            continue
                        if self._is_king_of(grid[new_row][new_col], color):
                            return True
                        continue

                    while are_coords_valid(new_row, new_col):
                        attacked = grid[new_row][new_col]
                        if self._is_king_of(attacked, color):
                            return True
                        if attacked is not None:
                            break
                        new_row += d.row
                        new_col += d.col
        return False

    @staticmethod
    def _is_king_of(piece: Piece | None, color: Color) -> bool:
        return (
            piece is not None
            and piece.piece_type == PieceType.KING
            and piece.color == color
        )

    # -- Safe-move generation -----------------------------------------------

    @contextmanager
    def _probe(self, piece: Piece, src: Coords, dst: Coords) -> Iterator[None]:
        """Temporarily move *piece* from *src* to *dst*, restoring on exit."""
        captured = self[dst]
        self[src] = None
        self[dst] = piece
        try:
            yield
        finally:
            self[src] = piece
            self[dst] = captured

    def _is_position_safe_after_move(
        self, piece: Piece, src: Coords, dst: Coords
    ) -> bool:
        target = self[dst]
        if target is not None and target.color == piece.color:
            return False

        with self._probe(piece, src, dst):
            in_check = self.is_in_check(piece.color)
        return not in_check

    def _pawn_step_allowed(self, piece: Piece, src: Coords, d: Coords) -> bool:
        """Occupancy rules that apply to pawns before any safety probe."""
        dst = src.shifted(d)
        target = self[dst]
        if abs(d.row) == 2:
            step = Coords(src.row + d.row // 2, src.col)
            return target is None and self.is_empty(step)
        if d.col == 0:
            return target is None
        return target is not None and target.color != piece.color

    def _leap_squares(self, piece: Piece, src: Coords) -> list[Coords]:
        squares: list[Coords] = []
        is_pawn = piece.piece_type == PieceType.PAWN
        for d in piece.directions:
            dst = src.shifted(d)
            if not dst.is_valid():
                continue
            if is_pawn and not self._pawn_step_allowed(piece, src, d):
                continue
            target = self[dst]
            if target is not None and target.color == piece.color:
                continue
            if self._is_position_safe_after_move(piece, src, dst):
                squares.append(dst)
        return squares

    def _slide_squares(self, piece: Piece, src: Coords) -> list[Coords]:
        squares: list[Coords] = []
        for d in piece.directions:
            dst = src.shifted(d)
            while dst.is_valid():
                target = self[dst]
                if target is not None and target.color == piece.color:
                    break
                if self._is_position_safe_after_move(piece, src, dst):
                    squares.append(dst)
                if target is not None:
                    break
                dst = dst.shifted(d)
        return squares

    def find_safe_squares(self) -> SafeSquares:
        """Map each movable piece of the side to move to its safe squares.

        Pieces without a single safe destination are left out of the map.
        The grid is probed in place but always restored before returning.
        """
        safe_squares: SafeSquares = {}
        for src, piece in list(self.occupied()):
            if piece.color != self._player_color:
                continue
            if piece.movement_mode == MovementMode.LEAP:
                squares = self._leap_squares(piece, src)
            else:
                squares = self._slide_squares(piece, src)
            if squares:
                safe_squares[src] = squares

        _LOGGER.debug(
            "%s has %d safe destinations across %d pieces",
            self._player_color,
            sum(len(v) for v in safe_squares.values()),
            len(safe_squares),
        )
        return safe_squares

    # -- Mutation -----------------------------------------------------------

    def move(self, src: Coords, dst: Coords) -> Piece | None:
        """Apply a move taken from the current safe-move map.

        Returns the captured piece, if any. Move rights are not flipped;
        the driver calls :meth:`pass_turn` once it accepts the move.
        """
        if dst not in self.find_safe_squares().get(src, ()):
            raise IllegalMoveError(f"Illegal move: {src}{dst}")

        piece = self[src]
        assert piece is not None
        captured = self[dst]
        self[src] = None
        self[dst] = piece
        piece.mark_moved()
        _LOGGER.debug(
            "%s %s %s%s%s",
            piece.color,
            piece.piece_type.name.lower(),
            src,
            "x" if captured is not None else "-",
            dst,
        )
        return captured

    # -- Copying / dunder helpers -------------------------------------------

    def copy(self) -> ChessBoard:
        """Deep copy: new piece objects, same colors, identities and latches."""
        board = ChessBoard.empty(self._player_color)
        for coords, piece in self.occupied():
            clone = Piece(piece.color, piece.piece_type)
            if piece.has_moved:
                clone.mark_moved()
            board[coords] = clone
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChessBoard):
            return NotImplemented
        return (
            self._player_color == other._player_color
            and self.chess_board_view == other.chess_board_view
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE - 1, -1, -1):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{row + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
