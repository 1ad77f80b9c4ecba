"""GameController — the boundary between the chess core and a presentation layer.

Coordinates: Position, Rules, the minimax engine and promotion handling.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesscore.core.enums import Color, PieceType
from chesscore.core.move import Move, MoveResult
from chesscore.core.notation import position_from_fen
from chesscore.core.piece import PROMOTION_TYPES, Piece
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import Square, is_valid_square
from chesscore.engine.config import set_difficulty as _set_global_difficulty
from chesscore.engine.minimax import MinimaxEngine
from chesscore.engine.search import IEngine
from chesscore.game.interfaces import GamePhase, IGameController

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, MoveResult], None]
PromotionCallback = Callable[[Square, Color], None]  # square, pawn color
GameOverCallback = Callable[[Color], None]  # winner
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Runs one game: validates human moves, drives the engine side,
    handles promotion and detects checkmate.

    Thread-safety: every method must be called from a single thread.  An
    off-thread search (see :class:`chesscore.engine.qt_bridge.EngineWorker`)
    works on :meth:`engine_snapshot` and hands its move back through
    :meth:`submit_engine_move`.
    """

    __slots__ = (
        "_position",
        "_engine",
        "_phase",
        "_human_color",
        "_vs_ai",
        "_starting_color",
        "_fen",
        "_pending_promotion",
        "_captured",
        "_winner",
        "events",
    )

    def __init__(self, engine: IEngine | None = None) -> None:
        self._position = Position.initial()
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._phase = GamePhase.NOT_STARTED
        self._human_color = Color.WHITE
        self._vs_ai = True
        self._starting_color = Color.WHITE
        self._fen: str | None = None
        self._pending_promotion: Square | None = None
        self._captured: dict[Color, list[Piece]] = {Color.WHITE: [], Color.BLACK: []}
        self._winner: Color | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def human_color(self) -> Color:
        return self._human_color

    @property
    def ai_color(self) -> Color | None:
        return self._human_color.opposite if self._vs_ai else None

    @property
    def is_ai_turn(self) -> bool:
        return (
            self._phase == GamePhase.AWAITING_MOVE
            and self.ai_color == self._position.side_to_move
        )

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    @property
    def winner(self) -> Color | None:
        return self._winner

    @property
    def pending_promotion(self) -> Square | None:
        return self._pending_promotion

    def captured(self, color: Color) -> list[Piece]:
        """Pieces of *color* taken so far, in capture order."""
        return list(self._captured[color])

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        human_color: Color = Color.WHITE,
        *,
        vs_ai: bool = True,
        starting_color: Color | None = None,
        difficulty: str | None = None,
        fen: str | None = None,
    ) -> None:
        """Start a game from the opening layout, or from *fen* if given.

        With *fen* the side to move comes from the FEN and *starting_color*
        is ignored.
        """
        if difficulty is not None:
            self.set_difficulty(difficulty)

        self._human_color = human_color
        self._vs_ai = vs_ai
        self._fen = fen
        if fen is not None:
            loaded = position_from_fen(fen)
            self._position.board = loaded.board
            self._position.side_to_move = loaded.side_to_move
        else:
            self._position.reset(
                starting_color if starting_color is not None else Color.WHITE
            )
        self._starting_color = self._position.side_to_move
        self._pending_promotion = None
        self._captured = {Color.WHITE: [], Color.BLACK: []}
        self._winner = None

        _LOGGER.info(
            "New game: human=%s vs_ai=%s first=%s",
            human_color,
            vs_ai,
            self._starting_color,
        )
        self._finish_turn()

    def restart(self) -> None:
        """Start over with the same sides and first mover."""
        self.new_game(
            self._human_color,
            vs_ai=self._vs_ai,
            starting_color=self._starting_color,
            fen=self._fen,
        )

    def is_legal_move(self, from_sq: Square, to_sq: Square) -> bool:
        if self._phase != GamePhase.AWAITING_MOVE:
            return False
        return self._is_legal(from_sq, to_sq)

    def legal_destinations(self, from_sq: Square) -> list[Square]:
        """Squares to highlight for the piece on *from_sq*."""
        if self._phase != GamePhase.AWAITING_MOVE or not is_valid_square(from_sq):
            return []
        return Rules.legal_destinations(self._position, from_sq)

    def submit_move(self, from_sq: Square, to_sq: Square) -> MoveResult | None:
        if self._phase != GamePhase.AWAITING_MOVE:
            return None
        if self._vs_ai and self._position.side_to_move != self._human_color:
            return None
        if not self._is_legal(from_sq, to_sq):
            return None

        mover = self._position.side_to_move
        result = self._apply(from_sq, to_sq)

        if result.is_promotion:
            self._pending_promotion = to_sq
            self._set_phase(GamePhase.AWAITING_PROMOTION)
            for cb in self.events.on_promotion_required:
                cb(to_sq, mover)
            return result

        self._finish_turn()
        return result

    def promote(self, piece_type: PieceType) -> bool:
        if self._phase != GamePhase.AWAITING_PROMOTION:
            return False
        if piece_type not in PROMOTION_TYPES:
            return False
        assert self._pending_promotion is not None

        self._position.promote(self._pending_promotion, piece_type)
        self._pending_promotion = None
        self._finish_turn()
        return True

    def is_king_in_danger(self, color: Color) -> bool:
        return Rules.is_king_in_danger(self._position, color)

    def is_checkmate(self, color: Color) -> bool:
        return Rules.is_checkmate(self._position, color)

    def set_difficulty(self, level: str) -> None:
        """Process-wide; affects subsequent engine moves only."""
        _set_global_difficulty(level)

    def play_ai_move(self) -> MoveResult | None:
        """Compute and commit the engine's move on the calling thread."""
        if not self.is_ai_turn:
            return None

        self._set_phase(GamePhase.THINKING)
        result = self._engine.search(self._position, self._position.side_to_move)
        if result.best_move is None:
            self._set_phase(GamePhase.AWAITING_MOVE)
            return None
        return self._apply_engine_move(result.best_move)

    def engine_snapshot(self) -> Position | None:
        """Hand an off-thread engine a private copy and mark the game as thinking."""
        if not self.is_ai_turn:
            return None
        self._set_phase(GamePhase.THINKING)
        return self._position.copy()

    def submit_engine_move(self, move: Move) -> MoveResult | None:
        """Commit a move computed off-thread.

        A rejected move hands the turn back to the engine, so the host can
        request another search.
        """
        if self._phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return None
        if self.ai_color != self._position.side_to_move:
            return None
        if not self._is_legal(move.from_sq, move.to_sq):
            _LOGGER.warning("Rejected engine move %s", move)
            self.cancel_engine_move()
            return None
        return self._apply_engine_move(move)

    def cancel_engine_move(self) -> None:
        """Leave THINKING after the off-thread search produced no usable move."""
        if self._phase == GamePhase.THINKING:
            self._set_phase(GamePhase.AWAITING_MOVE)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _is_legal(self, from_sq: Square, to_sq: Square) -> bool:
        # Off-board coordinates from a caller would wrap around in the grid.
        if not (is_valid_square(from_sq) and is_valid_square(to_sq)):
            return False
        return Rules.is_legal_move(self._position, from_sq, to_sq)

    def _apply_engine_move(self, move: Move) -> MoveResult:
        result = self._apply(move.from_sq, move.to_sq)
        # The engine side always takes a queen.
        if result.is_promotion:
            self._position.promote(move.to_sq, PieceType.QUEEN)
        self._finish_turn()
        return result

    def _apply(self, from_sq: Square, to_sq: Square) -> MoveResult:
        result = self._position.commit_move(from_sq, to_sq)
        if result.captured is not None:
            self._captured[result.captured.color].append(result.captured)

        move = Move(from_sq, to_sq)
        _LOGGER.debug("Move %s captured=%s", move, result.captured)
        for cb in self.events.on_move:
            cb(move, result)
        return result

    def _finish_turn(self) -> None:
        """Decide whether the side now to move is mated."""
        side = self._position.side_to_move
        if Rules.is_checkmate(self._position, side):
            self._winner = side.opposite
            _LOGGER.info("Checkmate: %s wins", self._winner)
            self._set_phase(GamePhase.GAME_OVER)
            for cb in self.events.on_game_over:
                cb(self._winner)
            return
        self._set_phase(GamePhase.AWAITING_MOVE)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
