"""Move legality, check and checkmate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import Color, PieceType
from chesscore.core.types import Square, all_squares

if TYPE_CHECKING:
    from chesscore.core.piece import Piece
    from chesscore.core.position import Position


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _is_path_clear(position: Position, from_sq: Square, to_sq: Square) -> bool:
    """Every square strictly between *from_sq* and *to_sq* is empty."""
    board = position.board
    step_r = _sign(to_sq[0] - from_sq[0])
    step_c = _sign(to_sq[1] - from_sq[1])
    r = from_sq[0] + step_r
    c = from_sq[1] + step_c
    while (r, c) != to_sq:
        if board[(r, c)] is not None:
            return False
        r += step_r
        c += step_c
    return True


def _pawn_pattern(
    position: Position,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    target: Piece | None,
) -> bool:
    # White marches toward row 0, Black toward row 7.
    direction = -1 if piece.color == Color.WHITE else 1
    start_row = 6 if piece.color == Color.WHITE else 1
    dr = to_sq[0] - from_sq[0]
    dc = to_sq[1] - from_sq[1]

    if dc == 0 and dr == direction:
        return target is None
    if dc == 0 and dr == 2 * direction:
        return (
            from_sq[0] == start_row
            and target is None
            and position.board[(from_sq[0] + direction, from_sq[1])] is None
        )
    if abs(dc) == 1 and dr == direction:
        return target is not None
    return False


def _matches_pattern(
    position: Position,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    target: Piece | None,
) -> bool:
    """Raw movement rule for *piece*, ignoring turn and king safety."""
    dr = to_sq[0] - from_sq[0]
    dc = to_sq[1] - from_sq[1]
    abs_dr = abs(dr)
    abs_dc = abs(dc)
    ptype = piece.piece_type

    if ptype == PieceType.PAWN:
        return _pawn_pattern(position, piece, from_sq, to_sq, target)
    if ptype == PieceType.ROOK:
        return (dr == 0 or dc == 0) and _is_path_clear(position, from_sq, to_sq)
    if ptype == PieceType.BISHOP:
        return abs_dr == abs_dc and _is_path_clear(position, from_sq, to_sq)
    if ptype == PieceType.QUEEN:
        return (dr == 0 or dc == 0 or abs_dr == abs_dc) and _is_path_clear(
            position, from_sq, to_sq
        )
    if ptype == PieceType.KING:
        return abs_dr <= 1 and abs_dc <= 1
    if ptype == PieceType.KNIGHT:
        return (abs_dr, abs_dc) in ((2, 1), (1, 2))
    return False


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Castling, en passant and draw rules are not part of this rule set.
    """

    @staticmethod
    def is_legal_move(
        position: Position,
        from_sq: Square,
        to_sq: Square,
        *,
        ignore_turn: bool = False,
        check_safety: bool = True,
    ) -> bool:
        """Whether the piece on *from_sq* may move to *to_sq*.

        Args:
            ignore_turn: Accept a piece of either color, not only the side
                to move.  Used when generating moves during look-ahead.
            check_safety: Reject moves that leave the mover's own king
                attacked.  Disabled for pure attack testing so that
                :meth:`is_king_in_danger` never recurses into itself.
        """
        board = position.board
        piece = board[from_sq]
        if piece is None:
            return False
        if not ignore_turn and piece.color != position.side_to_move:
            return False
        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return False

        if not _matches_pattern(position, piece, from_sq, to_sq, target):
            return False
        if not check_safety:
            return True

        with position.probing(from_sq, to_sq):
            return not Rules.is_king_in_danger(position, piece.color)

    @staticmethod
    def attacks(position: Position, from_sq: Square, to_sq: Square) -> bool:
        """Whether the piece on *from_sq* has a movement pattern onto *to_sq*."""
        return Rules.is_legal_move(
            position, from_sq, to_sq, ignore_turn=True, check_safety=False
        )

    @staticmethod
    def is_king_in_danger(position: Position, color: Color) -> bool:
        """Is *color*'s king attacked?  A missing king is never in danger."""
        king_sq = position.board.king_square(color)
        if king_sq is None:
            return False
        for sq in position.board.pieces(color.opposite):
            if Rules.attacks(position, sq, king_sq):
                return True
        return False

    @staticmethod
    def legal_destinations(position: Position, from_sq: Square) -> list[Square]:
        """Squares the piece on *from_sq* may legally move to, row-major."""
        return [
            to_sq
            for to_sq in all_squares()
            if Rules.is_legal_move(position, from_sq, to_sq)
        ]

    @staticmethod
    def has_any_legal_move(position: Position, color: Color) -> bool:
        """Whether *color* has at least one fully legal move.

        The side to move is not consulted, so either color may be queried.
        """
        for from_sq in position.board.pieces(color):
            for to_sq in all_squares():
                if Rules.is_legal_move(position, from_sq, to_sq, ignore_turn=True):
                    return True
        return False

    @staticmethod
    def is_checkmate(position: Position, color: Color) -> bool:
        return Rules.is_king_in_danger(
            position, color
        ) and not Rules.has_any_legal_move(position, color)
