"""Game management layer: match orchestrator, settings and API functions.

Quick start::

    from chessmatch.game import new_match, apply_move

    match = new_match()
    apply_move(match, "e2", "e4")
"""

from chessmatch.game.api import (
    apply_move,
    legal_destinations,
    new_match,
    resolve_promotion,
)
from chessmatch.game.config import DEFAULT_SETTINGS, MatchSettings
from chessmatch.game.match import Match, MatchEvents

__all__ = [
    # Settings
    "DEFAULT_SETTINGS",
    "MatchSettings",
    # Concrete
    "Match",
    "MatchEvents",
    # Functions
    "apply_move",
    "legal_destinations",
    "new_match",
    "resolve_promotion",
]
