"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesscore.core.enums import Color
    from chesscore.core.move import Move
    from chesscore.core.position import Position


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: float
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for engines used by the game layer and the Qt worker."""

    def search(
        self,
        position: Position,
        color: Color | None = None,
        depth: int | None = None,
    ) -> SearchResult: ...
