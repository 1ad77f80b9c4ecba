"""Depth-limited minimax with alpha-beta pruning."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from chesscore.core.enums import Color
from chesscore.core.move_generator import MoveGenerator
from chesscore.engine.config import search_depth
from chesscore.engine.evaluate import evaluate
from chesscore.engine.search import IEngine, SearchResult

if TYPE_CHECKING:
    from chesscore.core.move import Move, MoveResult
    from chesscore.core.position import Position

_LOGGER = logging.getLogger(__name__)

# Infinite so that a mate plus an ordering bonus still ties with other mates.
_INF_SCORE = math.inf


class MinimaxEngine(IEngine):
    """Fixed-depth searcher; White maximises, Black minimises.

    Look-ahead uses :meth:`Position.probing`, so the side to move never
    changes during a search and the board is restored after every probe.
    """

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes = 0

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent search."""
        return self._nodes

    def search(
        self,
        position: Position,
        color: Color | None = None,
        depth: int | None = None,
    ) -> SearchResult:
        """Pick the best move for *color* without committing it.

        *color* defaults to the side to move and *depth* to the configured
        difficulty.  Each root score includes the move's ordering bonus.
        """
        if color is None:
            color = position.side_to_move
        if depth is None:
            depth = search_depth()
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        moves = MoveGenerator(position).generate_moves(color)
        best_move: Move | None = None
        best_score = -_INF_SCORE if color == Color.WHITE else _INF_SCORE

        for move in moves:
            with position.probing(move.from_sq, move.to_sq):
                value = self.minimax(
                    position, depth - 1, color == Color.BLACK, -_INF_SCORE, _INF_SCORE
                )
            value += move.ordering_bonus

            if best_move is None:
                improved = True
            elif color == Color.WHITE:
                improved = value > best_score
            else:
                improved = value < best_score
            if improved:
                best_score = value
                best_move = move

        _LOGGER.debug(
            "search %s depth=%d moves=%d nodes=%d score=%s best=%s",
            color,
            depth,
            len(moves),
            self._nodes,
            best_score,
            best_move,
        )
        return SearchResult(best_move, best_score, depth, self._nodes)

    def choose_move(
        self,
        position: Position,
        color: Color | None = None,
        depth: int | None = None,
    ) -> MoveResult | None:
        """Search, then commit the best move.  ``None`` if there is none."""
        result = self.search(position, color, depth)
        if result.best_move is None:
            return None
        return position.commit_move(result.best_move.from_sq, result.best_move.to_sq)

    def minimax(
        self,
        position: Position,
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float,
    ) -> float:
        """Score of the best line for the side implied by *maximizing*."""
        self._nodes += 1
        if depth == 0:
            return evaluate(position)

        color = Color.WHITE if maximizing else Color.BLACK
        moves = MoveGenerator(position).generate_moves(color)

        if maximizing:
            best = -_INF_SCORE
            for move in moves:
                with position.probing(move.from_sq, move.to_sq):
                    best = max(
                        best, self.minimax(position, depth - 1, False, alpha, beta)
                    )
                alpha = max(alpha, best)
                if beta <= alpha:
                    break
            return best

        best = _INF_SCORE
        for move in moves:
            with position.probing(move.from_sq, move.to_sq):
                best = min(best, self.minimax(position, depth - 1, True, alpha, beta))
            beta = min(beta, best)
            if beta <= alpha:
                break
        return best
