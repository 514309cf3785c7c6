"""Exception hierarchy for the chess engine.

``RuleViolation`` and its subclasses are the only errors a caller is expected
to recover from (re-prompt the player); the match is left untouched when one
is raised.  Everything else signals malformed construction or a broken
engine invariant.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(ChessError):
    """Invalid construction-time parameters (board size, settings)."""


# ── Board addressing ─────────────────────────────────────────────────────────


class PositionError(ChessError):
    """A board cell was addressed incorrectly."""


class OutOfBoundsError(PositionError):
    """Position does not exist on the board."""


class SquareOccupiedError(PositionError):
    """A piece was placed onto a cell that already holds one."""


# ── Caller input ─────────────────────────────────────────────────────────────


class InvalidPositionNotationError(ChessError, ValueError):
    """Square notation outside ``a1``..``h8`` or malformed text."""


class InvalidPromotionTypeError(ChessError, ValueError):
    """Promotion code is not one of B, N, R, Q."""


# ── Rule violations ──────────────────────────────────────────────────────────


class RuleViolation(ChessError):
    """An illegal move attempt.  ``reason`` is meant for the player."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class InvalidSourceError(RuleViolation):
    """Source square is empty, foreign, or its piece cannot move."""


class IllegalMoveError(RuleViolation):
    """Target square is not among the source piece's destinations."""


class SelfCheckError(RuleViolation):
    """The move would leave the mover's own king attacked."""


# ── Engine state ─────────────────────────────────────────────────────────────


class StateError(ChessError):
    """Operation invoked out of sequence or an engine invariant is broken."""


class NoPendingPromotionError(StateError):
    """``resolve_promotion`` called while no pawn awaits promotion."""


class KingNotFoundError(StateError):
    """No king of the requested color is on the board."""


class MatchOverError(StateError):
    """A move was submitted after checkmate."""
