"""chessmatch: two-player chess rules engine.

Quick start::

    from chessmatch import Color, new_match

    match = new_match()
    match.apply_move("f2", "f3")
    match.apply_move("e7", "e5")
    match.apply_move("g2", "g4")
    match.apply_move("d8", "h4")
    assert match.checkmate and match.winner is Color.BLACK
"""

from chessmatch.core import (
    Board,
    ChessError,
    ChessPosition,
    Color,
    GamePhase,
    GameResult,
    Piece,
    PieceType,
    Position,
    RuleViolation,
    StateError,
)
from chessmatch.game import (
    Match,
    MatchSettings,
    apply_move,
    legal_destinations,
    new_match,
    resolve_promotion,
)

__version__ = "0.1.0"

__all__ = [
    "Board",
    "ChessError",
    "ChessPosition",
    "Color",
    "GamePhase",
    "GameResult",
    "Match",
    "MatchSettings",
    "Piece",
    "PieceType",
    "Position",
    "RuleViolation",
    "StateError",
    "apply_move",
    "legal_destinations",
    "new_match",
    "resolve_promotion",
]
