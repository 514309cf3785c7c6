"""Per-piece destination generation.

Destinations here ignore the "own king left in check" rule; the match
filters those out by tentative execution.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.types import Matrix, Position, empty_matrix, matrix_any

if TYPE_CHECKING:
    from chessmatch.core.board import Board
    from chessmatch.core.piece import Piece

# (d_row, d_column) pairs.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Column distance from the king to its castling rook, and the king's step.
KINGSIDE_ROOK_OFFSET = 3
QUEENSIDE_ROOK_OFFSET = -4
CASTLING_STEP = 2


def pawn_direction(color: Color) -> int:
    """Row delta of a forward pawn step: white climbs towards row 0."""
    return -1 if color == Color.WHITE else 1


def pawn_home_row(color: Color, rows: int) -> int:
    return rows - 2 if color == Color.WHITE else 1


def promotion_row(color: Color, rows: int) -> int:
    """Row farthest from *color*'s side of the board."""
    return 0 if color == Color.WHITE else rows - 1


def castling_rook_squares(
    king_from: Position, king_to: Position
) -> tuple[Position, Position] | None:
    """Rook ``(from, to)`` for a castling king move, or ``None`` otherwise."""
    delta = king_to.column - king_from.column
    if king_to.row != king_from.row or abs(delta) != CASTLING_STEP:
        return None
    if delta > 0:
        rook_from = king_from.offset(0, KINGSIDE_ROOK_OFFSET)
        rook_to = king_from.offset(0, 1)
    else:
        rook_from = king_from.offset(0, QUEENSIDE_ROOK_OFFSET)
        rook_to = king_from.offset(0, -1)
    return rook_from, rook_to


class MoveGenerator:
    """Computes destination matrices against the current board.

    Args:
        board: Board to read.  Nothing is cached; call again after every
            mutation.
        en_passant_vulnerable: The pawn that just made a double step, if any.
        checked_color: Color whose king is currently flagged in check; that
            king may not castle.
    """

    __slots__ = ("_board", "_en_passant", "_checked_color", "_dispatch")

    def __init__(
        self,
        board: Board,
        en_passant_vulnerable: Piece | None = None,
        checked_color: Color | None = None,
    ) -> None:
        self._board = board
        self._en_passant = en_passant_vulnerable
        self._checked_color = checked_color
        self._dispatch: dict[PieceType, Callable[[Piece, Position, Matrix], None]] = {
            PieceType.PAWN: self._gen_pawn,
            PieceType.KNIGHT: self._gen_knight,
            PieceType.BISHOP: self._gen_bishop,
            PieceType.ROOK: self._gen_rook,
            PieceType.QUEEN: self._gen_queen,
            PieceType.KING: self._gen_king,
        }

    # -- Public API ---------------------------------------------------------

    def destinations(self, piece: Piece) -> Matrix:
        """Boolean ``rows`` x ``columns`` matrix of squares *piece* may move to."""
        board = self._board
        mat = empty_matrix(board.rows, board.columns)
        position = board.position_of(piece)
        if position is None:
            return mat
        self._dispatch[piece.piece_type](piece, position, mat)
        return mat

    def can_reach(self, piece: Piece, position: Position) -> bool:
        if not self._board.exists(position):
            return False
        return self.destinations(piece)[position.row][position.column]

    def has_any_destination(self, piece: Piece) -> bool:
        return matrix_any(self.destinations(piece))

    # -- Square predicates --------------------------------------------------

    def _is_opponent(self, position: Position, color: Color) -> bool:
        target = self._board.occupant(position)
        return target is not None and target.color != color

    def _can_land(self, position: Position, color: Color) -> bool:
        target = self._board.occupant(position)
        return target is None or target.color != color

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, piece: Piece, position: Position, mat: Matrix) -> None:
        board = self._board
        color = piece.color
        step = pawn_direction(color)

        one_step = position.offset(step, 0)
        if board.exists(one_step) and not board.is_occupied(one_step):
            mat[one_step.row][one_step.column] = True

            two_step = position.offset(2 * step, 0)
            if (
                piece.move_count == 0
                and board.exists(two_step)
                and not board.is_occupied(two_step)
            ):
                mat[two_step.row][two_step.column] = True

        for d_column in (-1, 1):
            diagonal = position.offset(step, d_column)
            if board.exists(diagonal) and self._is_opponent(diagonal, color):
                mat[diagonal.row][diagonal.column] = True

        # En passant: only from the row a double step of ours would reach + 1.
        if position.row != pawn_home_row(color, board.rows) + 3 * step:
            return
        for d_column in (-1, 1):
            beside = position.offset(0, d_column)
            if not board.exists(beside):
                continue
            victim = board.occupant(beside)
            if (
                victim is not None
                and victim is self._en_passant
                and victim.color != color
            ):
                landing = beside.offset(step, 0)
                if board.exists(landing):
                    mat[landing.row][landing.column] = True

    def _gen_knight(self, piece: Piece, position: Position, mat: Matrix) -> None:
        self._gen_steps(piece, position, KNIGHT_OFFSETS, mat)

    def _gen_bishop(self, piece: Piece, position: Position, mat: Matrix) -> None:
        self._gen_sliding(piece, position, BISHOP_DIRS, mat)

    def _gen_rook(self, piece: Piece, position: Position, mat: Matrix) -> None:
        self._gen_sliding(piece, position, ROOK_DIRS, mat)

    def _gen_queen(self, piece: Piece, position: Position, mat: Matrix) -> None:
        self._gen_sliding(piece, position, QUEEN_DIRS, mat)

    def _gen_king(self, piece: Piece, position: Position, mat: Matrix) -> None:
        self._gen_steps(piece, position, KING_OFFSETS, mat)
        self._gen_castling(piece, position, mat)

    def _gen_steps(
        self,
        piece: Piece,
        position: Position,
        offsets: tuple[tuple[int, int], ...],
        mat: Matrix,
    ) -> None:
        board = self._board
        for d_row, d_column in offsets:
            target = position.offset(d_row, d_column)
            if board.exists(target) and self._can_land(target, piece.color):
                mat[target.row][target.column] = True

    def _gen_sliding(
        self,
        piece: Piece,
        position: Position,
        directions: tuple[tuple[int, int], ...],
        mat: Matrix,
    ) -> None:
        board = self._board
        for d_row, d_column in directions:
            target = position.offset(d_row, d_column)
            while board.exists(target) and not board.is_occupied(target):
                mat[target.row][target.column] = True
                target = target.offset(d_row, d_column)
            if board.exists(target) and self._is_opponent(target, piece.color):
                mat[target.row][target.column] = True

    def _gen_castling(self, king: Piece, position: Position, mat: Matrix) -> None:
        if king.move_count != 0 or king.color == self._checked_color:
            return

        for rook_offset in (KINGSIDE_ROOK_OFFSET, QUEENSIDE_ROOK_OFFSET):
            if not self._can_castle_with(king, position, rook_offset):
                continue
            direction = 1 if rook_offset > 0 else -1
            landing = position.offset(0, CASTLING_STEP * direction)
            mat[landing.row][landing.column] = True

    def _can_castle_with(
        self, king: Piece, position: Position, rook_offset: int
    ) -> bool:
        board = self._board
        rook_square = position.offset(0, rook_offset)
        if not board.exists(rook_square):
            return False
        rook = board.occupant(rook_square)
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or rook.move_count != 0
        ):
            return False

        direction = 1 if rook_offset > 0 else -1
        for step in range(1, abs(rook_offset)):
            if board.is_occupied(position.offset(0, step * direction)):
                return False
        return True
