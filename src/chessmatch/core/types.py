"""Coordinate value objects and destination-matrix helpers.

Two coordinate systems are used:

* :class:`Position`: raw zero-based ``(row, column)`` on a :class:`Board`.
  Row 0 is the top of the diagram (rank 8), column 0 is file ``a``.
* :class:`ChessPosition`: chess notation, file ``a``–``h`` and rank 1–8.

    ChessPosition("a", 8) <-> Position(0, 0)
    ChessPosition("h", 1) <-> Position(7, 7)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from chessmatch.core.errors import InvalidPositionNotationError

Matrix: TypeAlias = list[list[bool]]

FILES = "abcdefgh"
RANKS = "12345678"
_SIZE = 8


@dataclass(frozen=True, slots=True)
class Position:
    """Raw board coordinate."""

    row: int
    column: int

    def offset(self, d_row: int, d_column: int) -> Position:
        return Position(self.row + d_row, self.column + d_column)

    def __str__(self) -> str:
        return f"{self.row}, {self.column}"


@dataclass(frozen=True, slots=True)
class ChessPosition:
    """Square in chess notation, e.g. ``ChessPosition("e", 4)``."""

    file: str
    rank: int

    def __post_init__(self) -> None:
        if (
            not isinstance(self.file, str)
            or len(self.file) != 1
            or self.file not in FILES
            or not isinstance(self.rank, int)
            or not 1 <= self.rank <= _SIZE
        ):
            raise InvalidPositionNotationError(
                f"Invalid chess position {self.file!r}{self.rank!r}: "
                "valid values are from a1 to h8"
            )

    # ── Conversion ───────────────────────────────────────────────────────

    def to_position(self) -> Position:
        return Position(_SIZE - self.rank, ord(self.file) - ord("a"))

    @classmethod
    def from_position(cls, position: Position) -> ChessPosition:
        return cls(chr(ord("a") + position.column), _SIZE - position.row)

    @classmethod
    def parse(cls, text: str) -> ChessPosition:
        """Parse square name, e.g. ``'e4'``."""
        if (
            not isinstance(text, str)
            or len(text) != 2
            or text[0] not in FILES
            or text[1] not in RANKS
        ):
            raise InvalidPositionNotationError(f"Invalid square name: {text!r}")
        return cls(text[0], int(text[1]))

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"


def coerce_chess_position(value: ChessPosition | str) -> ChessPosition:
    """Accept either a :class:`ChessPosition` or its ``"e4"`` text form."""
    if isinstance(value, ChessPosition):
        return value
    return ChessPosition.parse(value)


# ── Destination matrices ─────────────────────────────────────────────────────


def empty_matrix(rows: int, columns: int) -> Matrix:
    return [[False] * columns for _ in range(rows)]


def matrix_any(matrix: Matrix) -> bool:
    """Whether any cell of *matrix* is set."""
    return any(any(row) for row in matrix)


def matrix_positions(matrix: Matrix) -> list[Position]:
    """Set cells of *matrix* in row-major order."""
    return [
        Position(r, c)
        for r, row in enumerate(matrix)
        for c, marked in enumerate(row)
        if marked
    ]
