"""Match, the orchestrator of a chess game.

Owns the board and every piece.  Validates, executes and (when the mover
would be left in check) reverts moves, then re-derives check and checkmate
for the side to move.  Emits events via simple callbacks so a presentation
layer or tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessmatch.core.board import Board
from chessmatch.core.enums import (
    PROMOTION_TYPES,
    Color,
    GamePhase,
    GameResult,
    PieceType,
)
from chessmatch.core.errors import (
    IllegalMoveError,
    InvalidPromotionTypeError,
    InvalidSourceError,
    KingNotFoundError,
    MatchOverError,
    NoPendingPromotionError,
    SelfCheckError,
    StateError,
)
from chessmatch.core.move_generator import (
    MoveGenerator,
    castling_rook_squares,
    promotion_row,
)
from chessmatch.core.piece import Piece
from chessmatch.core.types import (
    ChessPosition,
    Matrix,
    Position,
    coerce_chess_position,
    matrix_positions,
)
from chessmatch.game.config import DEFAULT_SETTINGS, MatchSettings

logger = logging.getLogger(__name__)

BOARD_SIZE = 8

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[ChessPosition, ChessPosition, "Piece | None"], None]
PromotionCallback = Callable[[Piece], None]
CheckCallback = Callable[[Color], None]
GameOverCallback = Callable[[GameResult], None]


@dataclass
class MatchEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion: list[PromotionCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


@dataclass(slots=True)
class _Execution:
    """Everything needed to revert one executed move exactly."""

    source: Position
    target: Position
    piece: Piece
    # (victim, square it stood on, index in the on-board list)
    capture: tuple[Piece, Position, int] | None = None
    # (rook, from, to)
    castling: tuple[Piece, Position, Position] | None = None

    @property
    def captured(self) -> Piece | None:
        return self.capture[0] if self.capture is not None else None


# ── Match ────────────────────────────────────────────────────────────────────


class Match:
    """A single game between white and black.

    Args:
        settings: Tunables; defaults to :data:`DEFAULT_SETTINGS`.
        setup: Place the standard 32 pieces.  Pass ``False`` to build a custom
            position with :meth:`place_new_piece`.
        side_to_move: Color to play first.

    Thread-safety: none.  Every public method leaves the match in a committed
    state; callers sharing a match across threads must serialise access.
    """

    __slots__ = (
        "_settings",
        "_board",
        "_turn",
        "_current_player",
        "_checked_color",
        "_checkmate",
        "_en_passant_vulnerable",
        "_promoted",
        "_pieces_on_board",
        "_captured",
        "_last_move_turn",
        "events",
    )

    def __init__(
        self,
        settings: MatchSettings | None = None,
        *,
        setup: bool = True,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        self._settings = settings if settings is not None else DEFAULT_SETTINGS
        self._board = Board(BOARD_SIZE, BOARD_SIZE)
        self._turn = 1
        self._current_player = side_to_move
        self._checked_color: Color | None = None
        self._checkmate = False
        self._en_passant_vulnerable: Piece | None = None
        self._promoted: Piece | None = None
        self._pieces_on_board: list[Piece] = []
        self._captured: list[Piece] = []
        self._last_move_turn = 0
        self.events = MatchEvents()
        if setup:
            self._initial_setup()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def settings(self) -> MatchSettings:
        return self._settings

    @property
    def turn(self) -> int:
        return self._turn

    @property
    def current_player(self) -> Color:
        return self._current_player

    @property
    def check(self) -> bool:
        """Whether the king of the side to move (or the mated side) is attacked."""
        return self._checked_color is not None

    @property
    def checkmate(self) -> bool:
        return self._checkmate

    @property
    def phase(self) -> GamePhase:
        return GamePhase.CHECKMATE if self._checkmate else GamePhase.AWAITING_MOVE

    @property
    def winner(self) -> Color | None:
        return self._current_player if self._checkmate else None

    @property
    def result(self) -> GameResult:
        if not self._checkmate:
            return GameResult.IN_PROGRESS
        if self._current_player == Color.WHITE:
            return GameResult.WHITE_WINS
        return GameResult.BLACK_WINS

    @property
    def en_passant_vulnerable(self) -> Piece | None:
        return self._en_passant_vulnerable

    @property
    def promoted(self) -> Piece | None:
        """Piece awaiting a promotion choice, if any."""
        return self._promoted

    @property
    def captured_pieces(self) -> list[Piece]:
        return list(self._captured)

    @property
    def pieces_on_board(self) -> list[Piece]:
        return list(self._pieces_on_board)

    def captured(self, color: Color) -> list[Piece]:
        """Captured pieces of *color*, in capture order."""
        return [p for p in self._captured if p.color == color]

    def pieces(self) -> list[list[Piece | None]]:
        """Board snapshot: occupant per cell, row 0 = rank 8."""
        return self._board.snapshot()

    def piece_at(self, position: ChessPosition | str) -> Piece | None:
        return self._board.occupant(coerce_chess_position(position).to_position())

    def chess_position_of(self, piece: Piece) -> ChessPosition | None:
        position = self._board.position_of(piece)
        if position is None:
            return None
        return ChessPosition.from_position(position)

    # ── Setup ────────────────────────────────────────────────────────────

    def place_new_piece(
        self,
        piece_type: PieceType,
        color: Color,
        position: ChessPosition | str,
    ) -> Piece:
        """Create a piece and register it on the board at *position*."""
        piece = Piece(color, piece_type)
        self._board.place(piece, coerce_chess_position(position).to_position())
        self._pieces_on_board.append(piece)
        return piece

    def _initial_setup(self) -> None:
        for column, piece_type in enumerate(_BACK_RANK):
            file = chr(ord("a") + column)
            self.place_new_piece(piece_type, Color.WHITE, ChessPosition(file, 1))
            self.place_new_piece(PieceType.PAWN, Color.WHITE, ChessPosition(file, 2))
            self.place_new_piece(piece_type, Color.BLACK, ChessPosition(file, 8))
            self.place_new_piece(PieceType.PAWN, Color.BLACK, ChessPosition(file, 7))

    # ── Commands ─────────────────────────────────────────────────────────

    def legal_destinations(self, source: ChessPosition | str) -> Matrix:
        """Destination matrix for the current player's piece on *source*."""
        position = coerce_chess_position(source).to_position()
        piece = self._validate_source(position)
        return self._generator().destinations(piece)

    def apply_move(
        self, source: ChessPosition | str, target: ChessPosition | str
    ) -> Piece | None:
        """Validate and play a move; return the captured piece, if any.

        Raises:
            MatchOverError: The match already ended in checkmate.
            InvalidSourceError: Empty, foreign or immobile source piece.
            IllegalMoveError: *target* is not a destination of that piece.
            SelfCheckError: The move would leave the mover in check.
        """
        self._require_in_progress()

        source_cp = coerce_chess_position(source)
        target_cp = coerce_chess_position(target)
        src = source_cp.to_position()
        dst = target_cp.to_position()

        piece = self._validate_source(src)
        if not self._generator().can_reach(piece, dst):
            raise IllegalMoveError("The chosen piece can't move to target position")

        mover = self._current_player
        execution = self._execute(src, dst)
        committed = False
        try:
            if self.is_in_check(mover):
                logger.debug(
                    "Rejected %s-%s: leaves %s in check", source_cp, target_cp, mover
                )
                raise SelfCheckError("You can't put yourself in check")
            committed = True
        finally:
            if not committed:
                self._undo(execution)

        if self._settings.log_moves:
            logger.debug(
                "Turn %d: %s %s %s-%s%s",
                self._turn,
                mover,
                piece.piece_type.name.lower(),
                source_cp,
                target_cp,
                f" captures {execution.captured!r}" if execution.captured else "",
            )
        self._emit_move(source_cp, target_cp, execution.captured)

        self._promoted = None
        if piece.piece_type == PieceType.PAWN and dst.row == promotion_row(
            piece.color, self._board.rows
        ):
            self._promoted = self._replace_promoted(
                piece, self._settings.default_promotion
            )

        self._last_move_turn = self._turn
        self._conclude_turn(mover)

        # Eligibility changes only once the opponent's mate search is done.
        if piece.piece_type == PieceType.PAWN and abs(dst.row - src.row) == 2:
            self._en_passant_vulnerable = piece
        else:
            self._en_passant_vulnerable = None
        return execution.captured

    def resolve_promotion(self, code: str) -> Piece:
        """Replace the pending promotion piece with one of ``B``/``N``/``R``/``Q``.

        Check and checkmate are re-evaluated against the new piece.

        Raises:
            MatchOverError: The promoting move already delivered checkmate.
            NoPendingPromotionError: No pawn has just been promoted.
            InvalidPromotionTypeError: *code* is not a promotion choice.
        """
        self._require_in_progress()
        if self._promoted is None:
            raise NoPendingPromotionError("There is no piece to be promoted")
        try:
            piece_type = PieceType.from_code(code)
        except ValueError:
            piece_type = None
        if piece_type not in PROMOTION_TYPES:
            raise InvalidPromotionTypeError(f"Invalid type for promotion: {code!r}")

        new_piece = self._replace_promoted(self._promoted, piece_type)
        self._promoted = None
        self._conclude_turn(new_piece.color)
        return new_piece

    # ── Rule queries ─────────────────────────────────────────────────────

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king a destination of any opposing piece?"""
        king_square = self._position_of(self._king(color))
        gen = self._generator()
        for piece in self._pieces_on_board:
            if piece.color == color:
                continue
            if gen.destinations(piece)[king_square.row][king_square.column]:
                return True
        return False

    def is_checkmate(self, color: Color) -> bool:
        """Exhaustive simulate/test/revert search for a move escaping check."""
        if not self.is_in_check(color):
            return False

        trials = 0
        defenders = [p for p in self._pieces_on_board if p.color == color]
        for piece in defenders:
            source = self._position_of(piece)
            for target in matrix_positions(self._generator().destinations(piece)):
                trials += 1
                execution = self._execute(source, target)
                try:
                    still_in_check = self.is_in_check(color)
                finally:
                    self._undo(execution)
                if not still_in_check:
                    logger.debug("%s escapes check after %d trial(s)", color, trials)
                    return False

        logger.debug("%s has no escape after %d trial(s)", color, trials)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _generator(self) -> MoveGenerator:
        return MoveGenerator(
            self._board,
            en_passant_vulnerable=self._en_passant_vulnerable,
            checked_color=self._checked_color,
        )

    def _require_in_progress(self) -> None:
        if self._checkmate:
            winner = self._current_player.name.lower()
            raise MatchOverError(f"The match is over: {winner} won by checkmate")

    def _king(self, color: Color) -> Piece:
        for piece in self._pieces_on_board:
            if piece.color == color and piece.piece_type == PieceType.KING:
                return piece
        raise KingNotFoundError(f"There is no {color.name.lower()} king on the board")

    def _position_of(self, piece: Piece) -> Position:
        position = self._board.position_of(piece)
        if position is None:
            raise StateError(f"{piece!r} is registered but not on the board")
        return position

    def _validate_source(self, position: Position) -> Piece:
        if not self._board.exists(position):
            raise InvalidSourceError("Source position is not on the board")
        piece = self._board.occupant(position)
        if piece is None:
            raise InvalidSourceError("There is no piece on source position")
        if piece.color != self._current_player:
            raise InvalidSourceError("The chosen piece is not yours")
        if not self._generator().has_any_destination(piece):
            raise InvalidSourceError("There is no possible moves for the chosen piece")
        return piece

    def _execute(self, source: Position, target: Position) -> _Execution:
        board = self._board
        piece = board.remove(source)
        if piece is None:
            square = ChessPosition.from_position(source)
            raise StateError(f"Nothing to move on {square}")
        piece.increase_move_count()
        execution = _Execution(source=source, target=target, piece=piece)

        captured_at = target
        captured = board.remove(target)
        board.place(piece, target)
        if captured is None and (
            piece.piece_type == PieceType.PAWN and source.column != target.column
        ):
            # En passant: the victim stands beside the source square.
            captured_at = Position(source.row, target.column)
            captured = board.remove(captured_at)

        rook_squares = None
        if piece.piece_type == PieceType.KING:
            rook_squares = castling_rook_squares(source, target)
        if rook_squares is not None:
            rook_from, rook_to = rook_squares
            rook = board.remove(rook_from)
            if rook is None:
                square = ChessPosition.from_position(rook_from)
                raise StateError(f"No rook to castle with on {square}")
            board.place(rook, rook_to)
            rook.increase_move_count()
            execution.castling = (rook, rook_from, rook_to)

        if captured is not None:
            index = self._pieces_on_board.index(captured)
            del self._pieces_on_board[index]
            self._captured.append(captured)
            execution.capture = (captured, captured_at, index)
        return execution

    def _undo(self, execution: _Execution) -> None:
        board = self._board
        piece = execution.piece
        board.remove(execution.target)
        piece.decrease_move_count()
        board.place(piece, execution.source)

        if execution.castling is not None:
            rook, rook_from, rook_to = execution.castling
            board.remove(rook_to)
            board.place(rook, rook_from)
            rook.decrease_move_count()

        if execution.capture is not None:
            captured, captured_at, index = execution.capture
            board.place(captured, captured_at)
            self._captured.pop()
            self._pieces_on_board.insert(index, captured)

    def _replace_promoted(self, old: Piece, piece_type: PieceType) -> Piece:
        position = self._position_of(old)

        self._board.remove(position)
        new_piece = Piece(old.color, piece_type, old.move_count)
        self._board.place(new_piece, position)
        self._pieces_on_board[self._pieces_on_board.index(old)] = new_piece

        logger.info(
            "%s promotes on %s to %s",
            old.color,
            ChessPosition.from_position(position),
            piece_type.name.lower(),
        )
        for cb in self.events.on_promotion:
            cb(new_piece)
        return new_piece

    def _conclude_turn(self, mover: Color) -> None:
        """Derive check, checkmate, turn and side to move after *mover* played."""
        opponent = mover.opposite

        self._checked_color = None
        in_check = self.is_in_check(opponent)
        if in_check:
            self._checked_color = opponent
            logger.info("%s is in check", opponent)
            for cb in self.events.on_check:
                cb(opponent)

        if in_check and self.is_checkmate(opponent):
            self._checkmate = True
            self._turn = self._last_move_turn
            self._current_player = mover
            logger.info("Checkmate on turn %d: %s wins", self._turn, mover)
            for cb in self.events.on_game_over:
                cb(self.result)
            return

        self._checkmate = False
        self._turn = self._last_move_turn + 1
        self._current_player = opponent

    def _emit_move(
        self, source: ChessPosition, target: ChessPosition, captured: Piece | None
    ) -> None:
        for cb in self.events.on_move:
            cb(source, target, captured)

    def __repr__(self) -> str:
        header = f"Match(turn={self._turn}, to_move={self._current_player})"
        return f"{header}\n{self._board!r}"
