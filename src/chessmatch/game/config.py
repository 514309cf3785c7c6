"""Match settings, optionally loaded from environment variables.

Recognised variables:

- ``CHESSMATCH_DEFAULT_PROMOTION``: piece a pawn auto-promotes to
  (``B``, ``N``, ``R`` or ``Q``; default ``Q``).
- ``CHESSMATCH_LOG_MOVES``: emit DEBUG records for executed moves
  (``1``/``0``/``true``/``false``; default on).
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from chessmatch.core.enums import PROMOTION_TYPES, PieceType
from chessmatch.core.errors import ConfigurationError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _promotion(value: str) -> PieceType:
    try:
        piece_type = PieceType.from_code(value.strip())
    except ValueError:
        piece_type = None
    if piece_type not in PROMOTION_TYPES:
        raise ConfigurationError(f"Invalid default promotion: {value!r}")
    return piece_type


def _flag(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"Invalid boolean setting: {value!r}")


def _get(
    env: Mapping[str, str], name: str, default: Any, cast: Callable[[str], Any]
) -> Any:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    return cast(raw)


@dataclass(frozen=True, slots=True)
class MatchSettings:
    """Tunable knobs for a :class:`~chessmatch.game.match.Match`."""

    default_promotion: PieceType = PieceType.QUEEN
    log_moves: bool = True

    def __post_init__(self) -> None:
        if self.default_promotion not in PROMOTION_TYPES:
            raise ConfigurationError(
                f"Invalid default promotion: {self.default_promotion!r}"
            )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> MatchSettings:
        env = os.environ if env is None else env
        return cls(
            default_promotion=_get(
                env, "CHESSMATCH_DEFAULT_PROMOTION", PieceType.QUEEN, _promotion
            ),
            log_moves=_get(env, "CHESSMATCH_LOG_MOVES", True, _flag),
        )


DEFAULT_SETTINGS = MatchSettings()
