"""Tests for Qt engine bridge worker."""

from __future__ import annotations

import math

import pytest
from PyQt6.QtTest import QSignalSpy

from chesscore.core.enums import Color
from chesscore.core.notation import position_from_fen
from chesscore.core.position import Position
from chesscore.engine.config import search_depth
from chesscore.engine.qt_bridge import EngineWorker
from chesscore.engine.search import SearchResult

pytestmark = pytest.mark.usefixtures("qapp")


class _FailingEngine:
    def search(
        self,
        position: Position,
        color: Color | None = None,
        depth: int | None = None,
    ) -> SearchResult:
        raise RuntimeError("engine exploded")


class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        position = position_from_fen("4k3/8/8/3q4/8/8/8/3RK3 w")
        worker = EngineWorker(depth=1)

        best_moves = QSignalSpy(worker.best_move_ready)
        worker.request_move(position, 3)

        assert len(best_moves) == 1
        request_id, move, _score, nodes = best_moves[0]
        assert request_id == 3
        assert str(move) == "d1d5"
        assert nodes > 0

    def test_mate_score_is_infinite(self) -> None:
        position = position_from_fen("6k1/8/6K1/8/8/8/8/R7 w")
        worker = EngineWorker(depth=2)

        best_moves = QSignalSpy(worker.best_move_ready)
        worker.request_move(position, 4)

        assert len(best_moves) == 1
        _request_id, move, score, _nodes = best_moves[0]
        assert str(move) == "a1a8"
        assert score == math.inf

    def test_live_position_untouched(self) -> None:
        position = position_from_fen("4k3/8/8/3q4/8/8/8/3RK3 w")
        before = position.copy()
        worker = EngineWorker(depth=2)

        worker.request_move(position, 1)

        assert position == before

    def test_emits_no_move_when_mated(self) -> None:
        position = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b")
        worker = EngineWorker(depth=1)

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(position, 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_rejects_invalid_position(self) -> None:
        worker = EngineWorker(depth=1)
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a position", 5)

        assert len(errors) == 1
        assert errors[0][0] == 5

    def test_engine_failure_becomes_error_signal(self) -> None:
        worker = EngineWorker(depth=1)
        worker._engine = _FailingEngine()
        errors = QSignalSpy(worker.search_error)

        worker.request_move(Position.initial(), 9)

        assert len(errors) == 1
        assert errors[0][1] == "engine exploded"

    def test_set_difficulty_updates_global_depth(self) -> None:
        worker = EngineWorker(depth=1)
        worker.set_difficulty("medium")
        assert search_depth() == 4
        assert worker._depth is None
