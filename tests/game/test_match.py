"""Tests for Match, the turn orchestrator."""

import logging

import pytest

from chessmatch.core.enums import Color, GamePhase, GameResult, PieceType
from chessmatch.core.errors import (
    IllegalMoveError,
    InvalidSourceError,
    KingNotFoundError,
    MatchOverError,
    RuleViolation,
    SelfCheckError,
    StateError,
)
from chessmatch.core.piece import Piece
from chessmatch.core.types import ChessPosition, Position, matrix_positions
from chessmatch.game.match import Match


# White king boxed in by its own pawns; a black d7-d5 mates unless taken en
# passant.
_PAWN_WALL = {
    "e4": "K", "e5": "P", "d3": "P", "e3": "P", "f3": "P",
    "d4": "P", "f4": "P", "f5": "P",
    "d7": "p", "d8": "r", "h8": "k",
}


def _play(match: Match, *moves: str) -> None:
    """Play space-free ``"e2e4"`` style moves."""
    for move in moves:
        match.apply_move(move[:2], move[2:])


def _state(match: Match) -> tuple[list[list[Piece | None]], list[int], list[Piece]]:
    """Occupants, every piece's move counter, and captured pieces."""
    counters = [p.move_count for p in match.pieces_on_board + match.captured_pieces]
    return match.pieces(), counters, match.captured_pieces


class TestNewMatch:
    def test_initial_state(self, match: Match) -> None:
        assert match.turn == 1
        assert match.current_player == Color.WHITE
        assert not match.check
        assert not match.checkmate
        assert match.phase == GamePhase.AWAITING_MOVE
        assert match.result == GameResult.IN_PROGRESS
        assert match.winner is None

    def test_thirty_two_pieces(self, match: Match) -> None:
        assert len(match.pieces_on_board) == 32
        assert match.captured_pieces == []

    def test_snapshot_orientation(self, match: Match) -> None:
        grid = match.pieces()
        top_left = grid[0][0]
        bottom_right = grid[7][7]
        assert top_left is not None and str(top_left) == "r"
        assert bottom_right is not None and str(bottom_right) == "R"
        assert str(grid[7][4]) == "K"
        assert str(grid[0][3]) == "q"

    def test_piece_at_and_chess_position(self, match: Match) -> None:
        king = match.piece_at("e8")
        assert king is not None
        assert king.piece_type == PieceType.KING and king.color == Color.BLACK
        assert match.chess_position_of(king) == ChessPosition("e", 8)

    def test_no_player_in_check_at_start(self, match: Match) -> None:
        assert not match.is_in_check(Color.WHITE)
        assert not match.is_in_check(Color.BLACK)


class TestLegalDestinations:
    def test_pawn(self, match: Match) -> None:
        mat = match.legal_destinations("e2")
        assert matrix_positions(mat) == [Position(4, 4), Position(5, 4)]

    def test_knight(self, match: Match) -> None:
        mat = match.legal_destinations(ChessPosition("g", 1))
        assert mat[5][5] and mat[5][7]

    def test_empty_square(self, match: Match) -> None:
        with pytest.raises(InvalidSourceError, match="no piece"):
            match.legal_destinations("e4")

    def test_opponent_piece(self, match: Match) -> None:
        with pytest.raises(InvalidSourceError, match="not yours"):
            match.legal_destinations("e7")

    def test_immobile_piece(self, match: Match) -> None:
        with pytest.raises(InvalidSourceError, match="no possible moves"):
            match.legal_destinations("a1")

    def test_invalid_source_is_rule_violation(self, match: Match) -> None:
        with pytest.raises(RuleViolation) as excinfo:
            match.legal_destinations("d4")
        assert excinfo.value.reason == "There is no piece on source position"


class TestApplyMove:
    def test_quiet_move(self, match: Match) -> None:
        captured = match.apply_move("e2", "e4")
        assert captured is None
        assert match.turn == 2
        assert match.current_player == Color.BLACK
        pawn = match.piece_at("e4")
        assert pawn is not None and pawn.move_count == 1
        assert match.piece_at("e2") is None

    def test_capture(self, match: Match) -> None:
        _play(match, "e2e4", "d7d5")
        victim = match.piece_at("d5")
        captured = match.apply_move("e4", "d5")
        assert captured is victim
        assert match.captured_pieces == [victim]
        assert match.captured(Color.BLACK) == [victim]
        assert match.captured(Color.WHITE) == []
        assert len(match.pieces_on_board) == 31
        assert victim not in match.pieces_on_board

    def test_illegal_target_leaves_state(self, match: Match) -> None:
        before = _state(match)
        with pytest.raises(IllegalMoveError, match="can't move"):
            match.apply_move("e2", "e5")
        assert _state(match) == before
        assert match.turn == 1

    def test_wrong_player(self, match: Match) -> None:
        with pytest.raises(InvalidSourceError, match="not yours"):
            match.apply_move("e7", "e5")

    def test_turns_alternate(self, match: Match) -> None:
        _play(match, "e2e4", "e7e5", "g1f3")
        assert match.turn == 4
        assert match.current_player == Color.BLACK

    def test_double_step_sets_en_passant_vulnerable(self, match: Match) -> None:
        match.apply_move("e2", "e4")
        assert match.en_passant_vulnerable is match.piece_at("e4")
        match.apply_move("g8", "f6")
        assert match.en_passant_vulnerable is None

    def test_single_step_does_not_set_vulnerable(self, match: Match) -> None:
        match.apply_move("e2", "e3")
        assert match.en_passant_vulnerable is None


class TestSelfCheck:
    def test_pinned_rook_cannot_leave_file(self, layout) -> None:
        match = layout({"e1": "K", "e2": "R", "e8": "r", "a8": "k"})
        before = _state(match)
        with pytest.raises(SelfCheckError, match="put yourself in check"):
            match.apply_move("e2", "d2")
        assert _state(match) == before
        assert match.current_player == Color.WHITE
        assert match.turn == 1

    def test_pinned_rook_may_slide_along_pin(self, layout) -> None:
        match = layout({"e1": "K", "e2": "R", "e8": "r", "a8": "k"})
        match.apply_move("e2", "e5")
        assert match.current_player == Color.BLACK

    def test_king_cannot_step_into_attack(self, layout) -> None:
        match = layout({"e1": "K", "d8": "r", "h8": "k"})
        with pytest.raises(SelfCheckError):
            match.apply_move("e1", "d1")
        assert match.piece_at("e1") is not None

    def test_failed_capture_restores_victim(self, layout) -> None:
        match = layout({"e1": "K", "e2": "B", "e8": "r", "d3": "b", "a8": "k"})
        victim = match.piece_at("d3")
        before = _state(match)
        with pytest.raises(SelfCheckError):
            match.apply_move("e2", "d3")
        assert match.piece_at("d3") is victim
        assert victim in match.pieces_on_board
        assert _state(match) == before


class TestCheckDetection:
    def test_check_without_mate(self, match: Match) -> None:
        _play(match, "e2e4", "f7f5", "d1h5")
        assert match.check
        assert not match.checkmate
        assert match.current_player == Color.BLACK
        assert match.turn == 4

    def test_check_is_cleared_by_block(self, match: Match) -> None:
        _play(match, "e2e4", "f7f5", "d1h5", "g7g6")
        assert not match.check
        assert match.current_player == Color.WHITE

    def test_missing_king(self, layout) -> None:
        match = layout({"e1": "K"})
        with pytest.raises(KingNotFoundError, match="no black king"):
            match.is_in_check(Color.BLACK)

    def test_king_lifted_off_board(self, match: Match) -> None:
        match.board.remove(ChessPosition.parse("e1").to_position())
        with pytest.raises(StateError, match="not on the board"):
            match.is_in_check(Color.WHITE)


class TestCheckmate:
    def test_fools_mate(self, match: Match) -> None:
        _play(match, "f2f3", "e7e5", "g2g4", "d8h4")
        assert match.check
        assert match.checkmate
        assert match.phase == GamePhase.CHECKMATE
        assert match.winner == Color.BLACK
        assert match.result == GameResult.BLACK_WINS
        assert match.turn == 4

    def test_scholars_mate(self, match: Match) -> None:
        _play(match, "e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7")
        assert match.checkmate
        assert match.winner == Color.WHITE
        assert match.result == GameResult.WHITE_WINS

    def test_back_rank_mate(self, layout) -> None:
        match = layout(
            {"g8": "k", "f7": "p", "g7": "p", "h7": "p", "a1": "R", "g1": "K"}
        )
        match.apply_move("a1", "a8")
        assert match.checkmate
        assert match.winner == Color.WHITE

    def test_capture_escapes_mate(self, layout) -> None:
        match = layout(
            {
                "g8": "k", "f7": "p", "g7": "p", "h7": "p", "b7": "b",
                "a1": "R", "g1": "K",
            }
        )
        match.apply_move("a1", "a8")
        assert match.check
        assert not match.checkmate

    def test_match_halts_after_mate(self, match: Match) -> None:
        _play(match, "f2f3", "e7e5", "g2g4", "d8h4")
        with pytest.raises(MatchOverError, match="black won"):
            match.apply_move("a2", "a3")

    def test_search_leaves_board_untouched(self, match: Match) -> None:
        _play(match, "e2e4", "f7f5", "d1h5")
        before = _state(match)
        assert not match.is_checkmate(Color.BLACK)
        assert _state(match) == before

    def test_not_in_check_is_not_mate(self, match: Match) -> None:
        assert not match.is_checkmate(Color.WHITE)

    def test_fresh_double_step_is_not_an_escape(self, layout) -> None:
        match = layout(_PAWN_WALL, side_to_move=Color.BLACK)
        match.apply_move("d7", "d5")
        assert match.checkmate
        assert match.winner == Color.BLACK
        assert match.turn == 1
        assert match.en_passant_vulnerable is match.piece_at("d5")

    def test_en_passant_trial_is_reverted(self, layout) -> None:
        match = layout(_PAWN_WALL, side_to_move=Color.BLACK)
        match.apply_move("d7", "d5")
        before = _state(match)
        on_board = match.pieces_on_board
        assert not match.is_checkmate(Color.WHITE)
        assert _state(match) == before
        assert match.pieces_on_board == on_board
        assert match.captured_pieces == []

    def test_castling_is_not_a_way_out(self, layout) -> None:
        match = layout(
            {
                "e1": "K", "a1": "R", "h1": "R",
                "g7": "k", "d8": "r", "f8": "r", "b5": "r",
            },
            side_to_move=Color.BLACK,
        )
        match.apply_move("b5", "e5")
        assert match.checkmate
        assert match.winner == Color.BLACK
        for square in ("e1", "a1", "h1"):
            piece = match.piece_at(square)
            assert piece is not None and piece.move_count == 0
        assert match.piece_at("g1") is None
        assert match.piece_at("c1") is None


class TestEvents:
    def test_move_callback(self, match: Match) -> None:
        seen = []
        match.events.on_move.append(
            lambda src, dst, cap: seen.append((str(src), str(dst), cap))
        )
        match.apply_move("e2", "e4")
        assert seen == [("e2", "e4", None)]

    def test_check_and_game_over_callbacks(self, match: Match) -> None:
        checks: list[Color] = []
        results: list[GameResult] = []
        match.events.on_check.append(checks.append)
        match.events.on_game_over.append(results.append)
        _play(match, "f2f3", "e7e5", "g2g4", "d8h4")
        assert checks == [Color.WHITE]
        assert results == [GameResult.BLACK_WINS]

    def test_rejected_move_emits_nothing(self, match: Match) -> None:
        seen = []
        match.events.on_move.append(lambda *args: seen.append(args))
        with pytest.raises(IllegalMoveError):
            match.apply_move("e2", "e5")
        assert seen == []

    def test_move_reported_before_promotion(self, layout) -> None:
        match = layout({"e1": "K", "a7": "P", "h6": "k"})
        order: list[str] = []
        match.events.on_move.append(lambda *args: order.append("move"))
        match.events.on_promotion.append(lambda piece: order.append("promotion"))
        match.apply_move("a7", "a8")
        assert order == ["move", "promotion"]


class TestLogging:
    def test_checkmate_logged(
        self, match: Match, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="chessmatch")
        _play(match, "f2f3", "e7e5", "g2g4", "d8h4")
        assert "Checkmate on turn 4: black wins" in caplog.text

    def test_moves_logged_at_debug(
        self, match: Match, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="chessmatch")
        match.apply_move("e2", "e4")
        assert "white pawn e2-e4" in caplog.text
