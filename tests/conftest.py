"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessmatch.core.enums import Color, PieceType
from chessmatch.game.config import MatchSettings
from chessmatch.game.match import Match

LayoutFactory = Callable[..., Match]


def build_match(
    layout: dict[str, str],
    side_to_move: Color = Color.WHITE,
    settings: MatchSettings | None = None,
) -> Match:
    """Custom position from ``{"e1": "K", "e8": "k"}`` (uppercase = white)."""
    match = Match(settings, setup=False, side_to_move=side_to_move)
    for square, code in layout.items():
        color = Color.WHITE if code.isupper() else Color.BLACK
        match.place_new_piece(PieceType.from_code(code), color, square)
    return match


@pytest.fixture
def match() -> Match:
    """A fresh match in the standard starting position."""
    return Match()


@pytest.fixture
def layout() -> LayoutFactory:
    """Factory for matches built from a square -> piece-code mapping."""
    return build_match
