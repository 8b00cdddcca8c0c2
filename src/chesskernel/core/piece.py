"""Piece: a single chessman, discriminated by its identity.

Every identity carries its direction table and movement mode as data;
there are no per-identity subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chesskernel.core.enums import Color, FENChar, MovementMode, PieceType
from chesskernel.core.types import Coords


def _offsets(*pairs: tuple[int, int]) -> tuple[Coords, ...]:
    return tuple(Coords(dr, dc) for dr, dc in pairs)


# Pawn offsets are forward-relative: +row is "forward" for White.
_PAWN_DIRS = _offsets((1, 0), (2, 0), (1, -1), (1, 1))
_KNIGHT_DIRS = _offsets(
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
)
_BISHOP_DIRS = _offsets((1, 1), (1, -1), (-1, 1), (-1, -1))
_ROOK_DIRS = _offsets((1, 0), (-1, 0), (0, 1), (0, -1))
_QUEEN_DIRS = _BISHOP_DIRS + _ROOK_DIRS
_KING_DIRS = _offsets(
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)

_DIRECTIONS: dict[PieceType, tuple[Coords, ...]] = {
    PieceType.PAWN: _PAWN_DIRS,
    PieceType.KNIGHT: _KNIGHT_DIRS,
    PieceType.BISHOP: _BISHOP_DIRS,
    PieceType.ROOK: _ROOK_DIRS,
    PieceType.QUEEN: _QUEEN_DIRS,
    PieceType.KING: _KING_DIRS,
}

_MODES: dict[PieceType, MovementMode] = {
    PieceType.PAWN: MovementMode.LEAP,
    PieceType.KNIGHT: MovementMode.LEAP,
    PieceType.BISHOP: MovementMode.SLIDE,
    PieceType.ROOK: MovementMode.SLIDE,
    PieceType.QUEEN: MovementMode.SLIDE,
    PieceType.KING: MovementMode.LEAP,
}

_FEN_CHARS: dict[tuple[Color, PieceType], FENChar] = {
    (Color.WHITE, PieceType.PAWN): FENChar.WHITE_PAWN,
    (Color.WHITE, PieceType.KNIGHT): FENChar.WHITE_KNIGHT,
    (Color.WHITE, PieceType.BISHOP): FENChar.WHITE_BISHOP,
    (Color.WHITE, PieceType.ROOK): FENChar.WHITE_ROOK,
    (Color.WHITE, PieceType.QUEEN): FENChar.WHITE_QUEEN,
    (Color.WHITE, PieceType.KING): FENChar.WHITE_KING,
    (Color.BLACK, PieceType.PAWN): FENChar.BLACK_PAWN,
    (Color.BLACK, PieceType.KNIGHT): FENChar.BLACK_KNIGHT,
    (Color.BLACK, PieceType.BISHOP): FENChar.BLACK_BISHOP,
    (Color.BLACK, PieceType.ROOK): FENChar.BLACK_ROOK,
    (Color.BLACK, PieceType.QUEEN): FENChar.BLACK_QUEEN,
    (Color.BLACK, PieceType.KING): FENChar.BLACK_KING,
}

_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    str(ch): key for key, ch in _FEN_CHARS.items()
}

_UNICODE: dict[FENChar, str] = {
    FENChar.WHITE_PAWN: "♙",
    FENChar.WHITE_KNIGHT: "♘",
    FENChar.WHITE_BISHOP: "♗",
    FENChar.WHITE_ROOK: "♖",
    FENChar.WHITE_QUEEN: "♕",
    FENChar.WHITE_KING: "♔",
    FENChar.BLACK_PAWN: "♟",
    FENChar.BLACK_KNIGHT: "♞",
    FENChar.BLACK_BISHOP: "♝",
    FENChar.BLACK_ROOK: "♜",
    FENChar.BLACK_QUEEN: "♛",
    FENChar.BLACK_KING: "♚",
}


@dataclass(eq=False, slots=True)
class Piece:
    """One chessman on the board.

    Color and identity never change. ``has_moved`` is a one-way latch kept
    for collaborators (castling eligibility); move generation ignores it.
    Pieces compare by object identity.
    """

    color: Color
    piece_type: PieceType
    _has_moved: bool = field(default=False, init=False, repr=False)

    # ── Movement data ────────────────────────────────────────────────────

    @property
    def directions(self) -> tuple[Coords, ...]:
        """Direction offsets in table order, oriented for this piece's color."""
        dirs = _DIRECTIONS[self.piece_type]
        if self.piece_type == PieceType.PAWN and self.color == Color.BLACK:
            return tuple(Coords(-d.row, d.col) for d in dirs)
        return dirs

    @property
    def movement_mode(self) -> MovementMode:
        return _MODES[self.piece_type]

    @property
    def has_moved(self) -> bool:
        return self._has_moved

    def mark_moved(self) -> None:
        self._has_moved = True

    # ── Serialisation ────────────────────────────────────────────────────

    @property
    def fen_char(self) -> FENChar:
        return _FEN_CHARS[(self.color, self.piece_type)]

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return self.fen_char.value

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[self.fen_char]
