"""Coordinate value type and board geometry helpers.

Board layout (row-major, White at the bottom):
    row 0 = rank 1 (White's back rank), row 7 = rank 8
    col 0 = file a, col 7 = file h
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

BOARD_SIZE = 8


@dataclass(frozen=True, slots=True)
class Coords:
    """A (row, col) pair; used both for cells and for direction offsets."""

    row: int
    col: int

    def shifted(self, delta: Coords, steps: int = 1) -> Coords:
        """Cell reached by applying *delta* *steps* times."""
        return Coords(self.row + delta.row * steps, self.col + delta.col * steps)

    def is_valid(self) -> bool:
        return are_coords_valid(self.row, self.col)

    def __str__(self) -> str:
        return square_name(self)


# Source cell -> ordered destinations reachable this turn.
SafeSquares: TypeAlias = dict[Coords, list[Coords]]


def are_coords_valid(row: int, col: int) -> bool:
    """Whether (row, col) lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def square_name(coords: Coords) -> str:
    """Algebraic name, e.g. Coords(0, 4) → 'e1'."""
    return chr(ord("a") + coords.col) + str(coords.row + 1)


def parse_square(name: str) -> Coords:
    """Parse square name, e.g. 'e4' → Coords(3, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Coords(int(name[1]) - 1, ord(name[0]) - ord("a"))
