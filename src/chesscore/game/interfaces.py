"""Game-layer enumerations and the controller contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chesscore.core.enums import Color, PieceType
    from chesscore.core.move import Move, MoveResult
    from chesscore.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # a human pawn reached the last rank
    THINKING = auto()  # engine is computing
    GAME_OVER = auto()


# ── Controller contract ──────────────────────────────────────────────────────


class IGameController(ABC):
    """Boundary consumed by a presentation layer."""

    @abstractmethod
    def new_game(
        self,
        human_color: Color,
        *,
        vs_ai: bool = True,
        starting_color: Color | None = None,
        difficulty: str | None = None,
        fen: str | None = None,
    ) -> None: ...

    @abstractmethod
    def is_legal_move(self, from_sq: Square, to_sq: Square) -> bool: ...

    @abstractmethod
    def submit_move(self, from_sq: Square, to_sq: Square) -> MoveResult | None: ...

    @abstractmethod
    def promote(self, piece_type: PieceType) -> bool: ...

    @abstractmethod
    def is_king_in_danger(self, color: Color) -> bool: ...

    @abstractmethod
    def is_checkmate(self, color: Color) -> bool: ...

    @abstractmethod
    def set_difficulty(self, level: str) -> None: ...

    @abstractmethod
    def play_ai_move(self) -> MoveResult | None: ...

    @abstractmethod
    def submit_engine_move(self, move: Move) -> MoveResult | None: ...

    @abstractmethod
    def cancel_engine_move(self) -> None: ...
