"""Board - piece placement on a rectangular grid."""

from __future__ import annotations

from chessmatch.core.errors import (
    ConfigurationError,
    OutOfBoundsError,
    SquareOccupiedError,
)
from chessmatch.core.piece import Piece
from chessmatch.core.types import FILES, Position


class Board:
    """Mutable ``rows`` x ``columns`` grid of optional pieces.

    The grid is the single source of truth for where a piece stands;
    :meth:`position_of` is kept in step with it by :meth:`place` and
    :meth:`remove`, the only two mutators.
    """

    __slots__ = ("_rows", "_columns", "_squares", "_positions")

    def __init__(self, rows: int = 8, columns: int = 8) -> None:
        if rows < 1 or columns < 1:
            raise ConfigurationError(
                "Error creating board: there must be at least 1 row and 1 column"
            )
        self._rows = rows
        self._columns = columns
        self._squares: list[list[Piece | None]] = [
            [None] * columns for _ in range(rows)
        ]
        # Pieces hash by identity.
        self._positions: dict[Piece, Position] = {}

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    # -- Element access -----------------------------------------------------

    def exists(self, position: Position) -> bool:
        return 0 <= position.row < self._rows and 0 <= position.column < self._columns

    def occupant(self, position: Position) -> Piece | None:
        self._require(position)
        return self._squares[position.row][position.column]

    def __getitem__(self, position: Position) -> Piece | None:
        return self.occupant(position)

    def is_occupied(self, position: Position) -> bool:
        return self.occupant(position) is not None

    def position_of(self, piece: Piece) -> Position | None:
        """Where *piece* stands, or ``None`` if it is not on this board."""
        return self._positions.get(piece)

    # -- Mutation -----------------------------------------------------------

    def place(self, piece: Piece, position: Position) -> None:
        if self.is_occupied(position):
            raise SquareOccupiedError(
                f"There is already a piece on position {position}"
            )
        if piece in self._positions:
            raise SquareOccupiedError(
                f"{piece!r} is already on the board at {self._positions[piece]}"
            )
        self._squares[position.row][position.column] = piece
        self._positions[piece] = position

    def remove(self, position: Position) -> Piece | None:
        piece = self.occupant(position)
        if piece is None:
            return None
        self._squares[position.row][position.column] = None
        del self._positions[piece]
        return piece

    # -- Query helpers ------------------------------------------------------

    def snapshot(self) -> list[list[Piece | None]]:
        """Row-major copy of the grid."""
        return [row.copy() for row in self._squares]

    def __len__(self) -> int:
        return len(self._positions)

    def _require(self, position: Position) -> None:
        if not self.exists(position):
            raise OutOfBoundsError(f"Position not on the board: {position}")

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for r, row in enumerate(self._squares):
            cells = " ".join(str(p) if p else "." for p in row)
            rows.append(f"{self._rows - r} {cells}")
        if self._columns <= len(FILES):
            rows.append("  " + " ".join(FILES[: self._columns]))
        return "\n".join(rows)
