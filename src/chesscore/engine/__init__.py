"""Chess engine package: evaluation, minimax search and the Qt worker bridge."""

from chesscore.engine.config import (
    Difficulty,
    EngineConfig,
    configure_logging,
    depth_for,
    get_config,
    load_config,
    search_depth,
    set_difficulty,
)
from chesscore.engine.evaluate import CHECK_BONUS, POSITION_WEIGHTS, evaluate
from chesscore.engine.minimax import MinimaxEngine
from chesscore.engine.search import IEngine, SearchResult

__all__ = [
    "CHECK_BONUS",
    "Difficulty",
    "EngineConfig",
    "IEngine",
    "MinimaxEngine",
    "POSITION_WEIGHTS",
    "SearchResult",
    "configure_logging",
    "depth_for",
    "evaluate",
    "get_config",
    "load_config",
    "search_depth",
    "set_difficulty",
]
