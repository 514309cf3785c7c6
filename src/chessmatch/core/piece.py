"""Piece entity."""

from __future__ import annotations

from dataclasses import dataclass

from chessmatch.core.enums import Color, PieceType

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


@dataclass(eq=False, slots=True)
class Piece:
    """A single piece instance on (or captured from) a board.

    Pieces compare by identity: two white pawns are different pieces, which
    is what en-passant eligibility and the captured list rely on.  The square
    a piece stands on is owned by the :class:`~chessmatch.core.board.Board`.
    """

    color: Color
    piece_type: PieceType
    move_count: int = 0

    def increase_move_count(self) -> None:
        self.move_count += 1

    def decrease_move_count(self) -> None:
        self.move_count -= 1

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter code (uppercase = white, lowercase = black)."""
        code = self.piece_type.code
        return code if self.color == Color.WHITE else code.lower()

    def __repr__(self) -> str:
        return (
            f"Piece({self.color.name}, {self.piece_type.name}, "
            f"moves={self.move_count})"
        )

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]
