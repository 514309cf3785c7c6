"""Core domain layer: board, pieces and move generation.

Quick start::

    from chessmatch.core import Board, ChessPosition, Color, Piece, PieceType
    from chessmatch.core import MoveGenerator

    board = Board()
    rook = Piece(Color.WHITE, PieceType.ROOK)
    board.place(rook, ChessPosition.parse("a1").to_position())
    matrix = MoveGenerator(board).destinations(rook)
"""

from chessmatch.core.board import Board
from chessmatch.core.enums import (
    PROMOTION_TYPES,
    Color,
    GamePhase,
    GameResult,
    PieceType,
)
from chessmatch.core.errors import (
    ChessError,
    ConfigurationError,
    IllegalMoveError,
    InvalidPositionNotationError,
    InvalidPromotionTypeError,
    InvalidSourceError,
    KingNotFoundError,
    MatchOverError,
    NoPendingPromotionError,
    OutOfBoundsError,
    PositionError,
    RuleViolation,
    SelfCheckError,
    SquareOccupiedError,
    StateError,
)
from chessmatch.core.move_generator import MoveGenerator
from chessmatch.core.piece import Piece
from chessmatch.core.types import (
    ChessPosition,
    Matrix,
    Position,
    empty_matrix,
    matrix_any,
    matrix_positions,
)

__all__ = [
    # Enums
    "PROMOTION_TYPES",
    "Color",
    "GamePhase",
    "GameResult",
    "PieceType",
    # Types / helpers
    "ChessPosition",
    "Matrix",
    "Position",
    "empty_matrix",
    "matrix_any",
    "matrix_positions",
    # Domain objects
    "Board",
    "MoveGenerator",
    "Piece",
    # Errors
    "ChessError",
    "ConfigurationError",
    "IllegalMoveError",
    "InvalidPositionNotationError",
    "InvalidPromotionTypeError",
    "InvalidSourceError",
    "KingNotFoundError",
    "MatchOverError",
    "NoPendingPromotionError",
    "OutOfBoundsError",
    "PositionError",
    "RuleViolation",
    "SelfCheckError",
    "SquareOccupiedError",
    "StateError",
]
