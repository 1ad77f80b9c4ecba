"""Position — the game state (board + side to move) and its move primitives."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from chesscore.core.board import Board
from chesscore.core.enums import Color, PieceType
from chesscore.core.move import MoveResult
from chesscore.core.piece import PROMOTION_TYPES, Piece
from chesscore.core.types import Square, square_name


class Position:
    """Board plus side to move.

    Two kinds of mutation are offered:

    * :meth:`commit_move` applies a real move, reports capture/promotion and
      flips the side to move exactly once.
    * :meth:`probe_move` / :meth:`unprobe_move` perform a raw grid swap and its
      exact inverse for speculative look-ahead; the side to move is untouched.
      Prefer :meth:`probing`, which guarantees the undo on every exit path.
    """

    __slots__ = ("board", "side_to_move")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move

    @classmethod
    def initial(cls, starting_color: Color = Color.WHITE) -> Position:
        return cls(Board.initial(), starting_color)

    def reset(self, starting_color: Color = Color.WHITE) -> None:
        """Lay out the standard opening and hand the move to *starting_color*."""
        self.board = Board.initial()
        self.side_to_move = starting_color

    # ── Committed moves ──────────────────────────────────────────────────

    def commit_move(self, from_sq: Square, to_sq: Square) -> MoveResult:
        """Apply a move the caller has already validated.

        The move is not re-checked for legality.  A pawn reaching the far
        rank is reported via ``is_promotion`` but keeps its type; see
        :meth:`promote`.
        """
        piece = self.board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(from_sq)}")

        captured = self.board[to_sq]
        self.board[to_sq] = piece
        self.board[from_sq] = None

        promotion_row = 0 if piece.color == Color.WHITE else 7
        is_promotion = (
            piece.piece_type == PieceType.PAWN and to_sq[0] == promotion_row
        )

        self.side_to_move = self.side_to_move.opposite
        return MoveResult(captured=captured, is_promotion=is_promotion)

    def promote(self, sq: Square, piece_type: PieceType) -> None:
        """Replace the piece on *sq* with a *piece_type* of the same color."""
        if piece_type not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {piece_type.name}")
        piece = self.board[sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(sq)}")
        self.board[sq] = Piece(piece.color, piece_type)

    # ── Speculative moves ────────────────────────────────────────────────

    def probe_move(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Raw-move a piece; return whatever stood on *to_sq*."""
        board = self.board
        captured = board[to_sq]
        board[to_sq] = board[from_sq]
        board[from_sq] = None
        return captured

    def unprobe_move(
        self, from_sq: Square, to_sq: Square, captured: Piece | None
    ) -> None:
        """Exact inverse of :meth:`probe_move`."""
        board = self.board
        board[from_sq] = board[to_sq]
        board[to_sq] = captured

    @contextmanager
    def probing(self, from_sq: Square, to_sq: Square) -> Iterator[Piece | None]:
        """Scope a probe: the board is restored when the block exits."""
        captured = self.probe_move(from_sq, to_sq)
        try:
            yield captured
        finally:
            self.unprobe_move(from_sq, to_sq, captured)

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent snapshot sharing no mutable state."""
        return Position(self.board.copy(), self.side_to_move)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.board == other.board and self.side_to_move == other.side_to_move

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
