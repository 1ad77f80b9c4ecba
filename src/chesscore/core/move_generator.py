"""Legal move enumeration with capture-first ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.move import Move
from chesscore.core.piece import PIECE_VALUES
from chesscore.core.rules import Rules
from chesscore.core.types import all_squares

if TYPE_CHECKING:
    from chesscore.core.enums import Color
    from chesscore.core.position import Position

CAPTURE_BONUS_FACTOR = 2


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Legality probes mutate the position but always restore it before
    returning.
    """

    __slots__ = ("_pos",)

    def __init__(self, position: Position) -> None:
        self._pos = position

    # -- Public API ---------------------------------------------------------

    def generate_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, captures first.

        Candidates are scanned row-major by origin, then row-major by
        destination.  The sort is stable, so moves with equal bonus keep
        that scan order.
        """
        pos = self._pos
        board = pos.board
        moves: list[Move] = []
        append = moves.append

        for from_sq in board.pieces(color):
            for to_sq in all_squares():
                if not Rules.is_legal_move(pos, from_sq, to_sq, ignore_turn=True):
                    continue
                target = board[to_sq]
                bonus = 0
                if target is not None:
                    bonus = PIECE_VALUES[target.piece_type] * CAPTURE_BONUS_FACTOR
                append(Move(from_sq, to_sq, bonus))

        moves.sort(key=lambda m: m.ordering_bonus, reverse=True)
        return moves

    def generate_legal_moves(self) -> list[Move]:
        """All legal moves for the side to move."""
        return self.generate_moves(self._pos.side_to_move)
