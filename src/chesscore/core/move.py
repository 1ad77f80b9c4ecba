"""Move and MoveResult value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chesscore.core.types import Square, square_name

if TYPE_CHECKING:
    from chesscore.core.piece import Piece


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move.

    ``ordering_bonus`` only sequences search exploration; it is not part of
    the move's identity.
    """

    from_sq: Square
    to_sq: Square
    ordering_bonus: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of a committed move.

    On ``is_promotion`` the pawn is still a pawn; the caller picks the new
    piece type.
    """

    captured: Piece | None = None
    is_promotion: bool = False
