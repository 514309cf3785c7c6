"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def code(self) -> str:
        """Single upper-case letter, e.g. ``N`` for a knight."""
        return _CODES[self]

    @classmethod
    def from_code(cls, code: str) -> PieceType:
        """Parse a one-letter piece code (case-insensitive)."""
        try:
            return _FROM_CODE[code.upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Invalid piece code: {code!r}") from None


_CODES: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_FROM_CODE: dict[str, PieceType] = {v: k for k, v in _CODES.items()}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
    PieceType.QUEEN,
)


class GamePhase(IntEnum):
    """Finite-state-machine states for a match."""

    AWAITING_MOVE = auto()
    CHECKMATE = auto()


class GameResult(IntEnum):
    """Outcome of a match. Draws are not modelled."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
