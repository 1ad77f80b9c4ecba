"""Tests for GameController — the orchestrator."""

from __future__ import annotations

from chesscore.core.enums import Color, PieceType
from chesscore.core.move import Move, MoveResult
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import (
    A1,
    A2,
    A3,
    A7,
    A8,
    B1,
    C3,
    D5,
    D7,
    D8,
    E2,
    E3,
    E4,
    E5,
    E7,
    F2,
    F3,
    G2,
    G4,
    H4,
    Square,
)
from chesscore.engine.config import search_depth
from chesscore.engine.search import SearchResult
from chesscore.game.controller import GameController
from chesscore.game.interfaces import GamePhase


class _FixedEngine:
    """Always proposes the same move."""

    def __init__(self, move: Move | None) -> None:
        self.move = move
        self.calls = 0

    def search(
        self,
        position: Position,
        color: Color | None = None,
        depth: int | None = None,
    ) -> SearchResult:
        self.calls += 1
        return SearchResult(self.move, 0, 1, 1)


def _make_hh_controller(fen: str | None = None) -> GameController:
    """Helper: human vs human game."""
    ctrl = GameController()
    ctrl.new_game(Color.WHITE, vs_ai=False, fen=fen)
    return ctrl


def _play(ctrl: GameController, *moves: tuple[Square, Square]) -> None:
    for from_sq, to_sq in moves:
        assert ctrl.submit_move(from_sq, to_sq) is not None


class TestNewGame:
    def test_not_started_before_new_game(self) -> None:
        ctrl = GameController()
        assert ctrl.phase == GamePhase.NOT_STARTED
        assert not ctrl.is_legal_move(E2, E4)

    def test_phase_awaiting(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.side_to_move == Color.WHITE
        assert ctrl.position == Position.initial()

    def test_starting_color(self) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.WHITE, vs_ai=False, starting_color=Color.BLACK)
        assert ctrl.side_to_move == Color.BLACK

    def test_custom_fen(self) -> None:
        ctrl = _make_hh_controller("4k3/8/8/8/4P3/8/8/4K3 b")
        assert ctrl.side_to_move == Color.BLACK
        assert ctrl.position.board[E4] == Piece(Color.WHITE, PieceType.PAWN)

    def test_already_mated_fen_is_game_over(self) -> None:
        ctrl = _make_hh_controller("R5k1/8/6K1/8/8/8/8/8 b")
        assert ctrl.is_game_over
        assert ctrl.winner == Color.WHITE

    def test_ai_colors(self) -> None:
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.BLACK)
        assert ctrl.human_color == Color.BLACK
        assert ctrl.ai_color == Color.WHITE
        assert ctrl.is_ai_turn

    def test_no_ai_color_in_hh_mode(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.ai_color is None
        assert not ctrl.is_ai_turn

    def test_phase_event_fired(self) -> None:
        ctrl = GameController()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game(Color.WHITE, vs_ai=False)
        assert phases == [GamePhase.AWAITING_MOVE]


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_hh_controller()
        result = ctrl.submit_move(E2, E4)
        assert result == MoveResult()
        assert ctrl.side_to_move == Color.BLACK

    def test_illegal_move_rejected(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_move(E2, E5) is None
        assert ctrl.side_to_move == Color.WHITE
        assert ctrl.position == Position.initial()

    def test_wrong_color_rejected(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_move(E7, E5) is None

    def test_human_move_hands_turn_to_ai(self) -> None:
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.WHITE)
        assert ctrl.submit_move(E2, E4) is not None
        assert ctrl.is_ai_turn
        # The engine's pieces are not the human's to move.
        assert ctrl.submit_move(D7, D5) is None

    def test_human_playing_black_waits_for_ai(self) -> None:
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.BLACK)
        assert ctrl.submit_move(E7, E5) is None

    def test_move_event(self) -> None:
        ctrl = _make_hh_controller()
        seen: list[tuple[Move, MoveResult]] = []
        ctrl.events.on_move.append(lambda move, result: seen.append((move, result)))
        ctrl.submit_move(E2, E4)
        assert seen == [(Move(E2, E4), MoveResult())]

    def test_legal_destinations(self) -> None:
        ctrl = _make_hh_controller()
        assert set(ctrl.legal_destinations(E2)) == {E3, E4}
        assert set(ctrl.legal_destinations(B1)) == {A3, C3}
        assert ctrl.legal_destinations(E7) == []


class TestCaptures:
    def test_captured_tally(self) -> None:
        ctrl = _make_hh_controller()
        _play(ctrl, (E2, E4), (D7, D5))
        result = ctrl.submit_move(E4, D5)
        assert result is not None
        assert result.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert ctrl.captured(Color.BLACK) == [Piece(Color.BLACK, PieceType.PAWN)]
        assert ctrl.captured(Color.WHITE) == []

    def test_captured_returns_copy(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.captured(Color.WHITE).append(Piece(Color.WHITE, PieceType.QUEEN))
        assert ctrl.captured(Color.WHITE) == []


class TestPromotion:
    _FEN = "4k3/P7/8/8/8/8/8/4K3 w"

    def test_promotion_waits_for_choice(self) -> None:
        ctrl = _make_hh_controller(self._FEN)
        required: list[tuple[Square, Color]] = []
        ctrl.events.on_promotion_required.append(
            lambda sq, color: required.append((sq, color))
        )

        result = ctrl.submit_move(A7, A8)

        assert result is not None and result.is_promotion
        assert ctrl.phase == GamePhase.AWAITING_PROMOTION
        assert ctrl.pending_promotion == A8
        assert required == [(A8, Color.WHITE)]
        # No further moves until the piece is chosen.
        assert ctrl.submit_move(E2, E4) is None
        assert not ctrl.is_legal_move(A8, A7)

    def test_king_is_not_a_promotion_choice(self) -> None:
        ctrl = _make_hh_controller(self._FEN)
        ctrl.submit_move(A7, A8)
        assert not ctrl.promote(PieceType.KING)
        assert ctrl.phase == GamePhase.AWAITING_PROMOTION

    def test_promote_to_queen(self) -> None:
        ctrl = _make_hh_controller(self._FEN)
        ctrl.submit_move(A7, A8)
        assert ctrl.promote(PieceType.QUEEN)
        assert ctrl.position.board[A8] == Piece(Color.WHITE, PieceType.QUEEN)
        assert ctrl.pending_promotion is None
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.side_to_move == Color.BLACK
        assert ctrl.is_king_in_danger(Color.BLACK)

    def test_promote_outside_promotion_phase(self) -> None:
        ctrl = _make_hh_controller(self._FEN)
        assert not ctrl.promote(PieceType.QUEEN)

    def test_engine_promotes_to_queen(self) -> None:
        ctrl = GameController(_FixedEngine(Move(A2, A1)))
        ctrl.new_game(Color.WHITE, fen="4k3/8/8/8/8/8/p7/7K b")

        result = ctrl.play_ai_move()

        assert result is not None and result.is_promotion
        assert ctrl.position.board[A1] == Piece(Color.BLACK, PieceType.QUEEN)
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.side_to_move == Color.WHITE


class TestCheckmate:
    def test_fools_mate(self) -> None:
        ctrl = _make_hh_controller()
        winners: list[Color] = []
        ctrl.events.on_game_over.append(winners.append)

        _play(ctrl, (F2, F3), (E7, E5), (G2, G4), (D8, H4))

        assert ctrl.is_game_over
        assert ctrl.winner == Color.BLACK
        assert winners == [Color.BLACK]
        assert ctrl.is_checkmate(Color.WHITE)
        assert ctrl.submit_move(E2, E4) is None

    def test_engine_delivers_mate(self) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.BLACK, fen="6k1/8/6K1/8/8/8/8/R7 w", difficulty="easy")

        result = ctrl.play_ai_move()

        assert result is not None
        assert ctrl.position.board[A8] == Piece(Color.WHITE, PieceType.ROOK)
        assert ctrl.is_game_over
        assert ctrl.winner == Color.WHITE


class TestEngineTurn:
    def test_play_ai_move_uses_engine(self) -> None:
        engine = _FixedEngine(Move(E2, E4))
        ctrl = GameController(engine)
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game(Color.BLACK)

        result = ctrl.play_ai_move()

        assert result == MoveResult()
        assert engine.calls == 1
        assert ctrl.side_to_move == Color.BLACK
        assert phases == [
            GamePhase.AWAITING_MOVE,
            GamePhase.THINKING,
            GamePhase.AWAITING_MOVE,
        ]

    def test_play_ai_move_on_human_turn_is_noop(self) -> None:
        engine = _FixedEngine(Move(E7, E5))
        ctrl = GameController(engine)
        ctrl.new_game(Color.WHITE)
        assert ctrl.play_ai_move() is None
        assert engine.calls == 0

    def test_engine_without_move(self) -> None:
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.BLACK)
        assert ctrl.play_ai_move() is None
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.position == Position.initial()

    def test_snapshot_then_submit(self) -> None:
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.BLACK)

        snapshot = ctrl.engine_snapshot()

        assert snapshot is not None
        assert snapshot == ctrl.position
        assert snapshot is not ctrl.position
        assert ctrl.phase == GamePhase.THINKING

        assert ctrl.submit_engine_move(Move(E2, E5)) is None
        assert ctrl.submit_engine_move(Move(E2, E4)) is not None
        assert ctrl.side_to_move == Color.BLACK
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_snapshot_on_human_turn(self) -> None:
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.WHITE)
        assert ctrl.engine_snapshot() is None
        assert ctrl.submit_engine_move(Move(E2, E4)) is None


    def test_cancel_after_search_without_move(self) -> None:
        # Black is stalemated, so an off-thread search finds nothing.
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.WHITE, fen="7k/8/5KQ1/8/8/8/8/8 b")
        assert ctrl.engine_snapshot() is not None
        assert ctrl.phase == GamePhase.THINKING

        ctrl.cancel_engine_move()

        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.is_ai_turn
        assert ctrl.engine_snapshot() is not None

    def test_cancel_outside_thinking_is_noop(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.cancel_engine_move()
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_rejected_engine_move_allows_retry(self) -> None:
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.BLACK)
        ctrl.engine_snapshot()

        assert ctrl.submit_engine_move(Move(E2, E5)) is None

        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.is_ai_turn
        assert ctrl.engine_snapshot() is not None
        assert ctrl.submit_engine_move(Move(E2, E4)) is not None


class TestOffBoardSquares:
    def test_is_legal_move_rejects(self) -> None:
        ctrl = _make_hh_controller()
        # (-1, 4) would otherwise index row 7 (e1).
        assert not ctrl.is_legal_move((-1, 4), E2)
        assert not ctrl.is_legal_move(E2, (8, 4))

    def test_submit_move_rejects(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_move((-2, 4), E4) is None
        assert ctrl.submit_move(E2, (4, 8)) is None
        assert ctrl.position == Position.initial()

    def test_legal_destinations_empty(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.legal_destinations((-2, 1)) == []

    def test_engine_move_rejected(self) -> None:
        ctrl = GameController(_FixedEngine(None))
        ctrl.new_game(Color.BLACK)
        assert ctrl.submit_engine_move(Move((-2, 4), E4)) is None
        assert ctrl.position == Position.initial()


class TestRestartAndSettings:
    def test_restart_resets_state(self) -> None:
        ctrl = _make_hh_controller()
        _play(ctrl, (E2, E4), (D7, D5), (E4, D5))

        ctrl.restart()

        assert ctrl.position == Position.initial()
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.captured(Color.BLACK) == []
        assert ctrl.winner is None

    def test_restart_keeps_fen(self) -> None:
        fen = "4k3/P7/8/8/8/8/8/4K3 w"
        ctrl = _make_hh_controller(fen)
        ctrl.submit_move(A7, A8)

        ctrl.restart()

        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.position.board[A7] == Piece(Color.WHITE, PieceType.PAWN)
        assert ctrl.position.board[A8] is None

    def test_restart_after_mate(self) -> None:
        ctrl = _make_hh_controller()
        _play(ctrl, (F2, F3), (E7, E5), (G2, G4), (D8, H4))
        ctrl.restart()
        assert not ctrl.is_game_over
        assert ctrl.winner is None

    def test_set_difficulty(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.set_difficulty("hard")
        assert search_depth() == 5

    def test_new_game_difficulty(self) -> None:
        ctrl = GameController()
        ctrl.new_game(Color.WHITE, vs_ai=False, difficulty="medium")
        assert search_depth() == 4
