"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesscore.core.position import Position
from chesscore.engine.config import set_difficulty
from chesscore.engine.minimax import MinimaxEngine

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    The search runs on a private copy of the requested position, so the
    live game position is never touched from the worker thread.  The owner
    commits the emitted move on its own thread.
    """

    best_move_ready = pyqtSignal(int, object, float, int)
    search_no_move = pyqtSignal(int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_engine", "_depth")

    def __init__(self, *, depth: int | None = None) -> None:
        super().__init__()
        self._engine = MinimaxEngine()
        self._depth = depth

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for the side to move in *position_obj* and emit the result."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        snapshot = position_obj.copy()
        try:
            result = self._engine.search(
                snapshot, snapshot.side_to_move, depth=self._depth
            )
        except Exception as exc:
            _LOGGER.warning("Engine search %d failed: %s", request_id, exc)
            self.search_error.emit(request_id, str(exc))
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result.nodes)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.nodes,
        )

    @pyqtSlot(str)
    def set_difficulty(self, level: str) -> None:
        """Update the process-wide difficulty (takes effect on the next search).

        A ``depth`` given to the constructor is discarded, so this worker
        follows the configured difficulty from now on.
        """
        self._depth = None
        set_difficulty(level)
