"""Static evaluation, positive scores favour White."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import Color
from chesscore.core.piece import PIECE_VALUES
from chesscore.core.rules import Rules

if TYPE_CHECKING:
    from chesscore.core.position import Position

# Same table for both colors, indexed by the piece's own (row, col).
POSITION_WEIGHTS: tuple[tuple[int, ...], ...] = (
    (0, 0, 0, 0, 0, 0, 0, 0),
    (2, 2, 2, 2, 2, 2, 2, 2),
    (2, 3, 4, 4, 4, 4, 3, 2),
    (3, 4, 6, 6, 6, 6, 4, 3),
    (3, 4, 6, 6, 6, 6, 4, 3),
    (2, 3, 4, 4, 4, 4, 3, 2),
    (2, 2, 2, 2, 2, 2, 2, 2),
    (0, 0, 0, 0, 0, 0, 0, 0),
)

CHECK_BONUS = 15


def evaluate(position: Position) -> int:
    """Score *position* from White's point of view.

    Each piece contributes its material value plus its square weight.  When
    the piece's side has the opponent in check, the piece also earns
    :data:`CHECK_BONUS`, so the bonus scales with the number of pieces.
    """
    score = 0
    # The board is not mutated during evaluation, so one danger query per
    # color gives the same answer as asking again for every piece.
    in_danger: dict[Color, bool] = {}

    for (row, col), piece in position.board.occupied():
        value = PIECE_VALUES[piece.piece_type] + POSITION_WEIGHTS[row][col]

        opponent = piece.color.opposite
        if opponent not in in_danger:
            in_danger[opponent] = Rules.is_king_in_danger(position, opponent)
        if in_danger[opponent]:
            value += CHECK_BONUS

        score += value if piece.color == Color.WHITE else -value

    return score
