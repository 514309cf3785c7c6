"""Function-style entry points for a presentation layer.

Positions may be given as :class:`~chessmatch.core.types.ChessPosition`
instances or as ``"e4"``-style strings; malformed strings raise
:class:`~chessmatch.core.errors.InvalidPositionNotationError`.
"""

from __future__ import annotations

from chessmatch.core.piece import Piece
from chessmatch.core.types import ChessPosition, Matrix
from chessmatch.game.config import MatchSettings
from chessmatch.game.match import Match


def new_match(settings: MatchSettings | None = None) -> Match:
    """Standard initial setup, turn 1, white to move."""
    return Match(settings)


def legal_destinations(match: Match, position: ChessPosition | str) -> Matrix:
    return match.legal_destinations(position)


def apply_move(
    match: Match, source: ChessPosition | str, target: ChessPosition | str
) -> Piece | None:
    return match.apply_move(source, target)


def resolve_promotion(match: Match, code: str) -> Piece:
    return match.resolve_promotion(code)
