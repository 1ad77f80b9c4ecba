"""Process-wide engine configuration: difficulty, search depth, logging."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class Difficulty(StrEnum):
    """Named difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXTREME = "extreme"


_DEPTHS: dict[str, int] = {
    Difficulty.EASY: 3,
    Difficulty.MEDIUM: 4,
    Difficulty.HARD: 5,
}
_FALLBACK_DEPTH = 6


def depth_for(level: str) -> int:
    """Search depth in plies for *level*; unknown levels search deepest."""
    return _DEPTHS.get(level, _FALLBACK_DEPTH)


@dataclass
class EngineConfig:
    """All engine settings that may change between games."""

    difficulty: str = Difficulty.EASY
    log_level: str = "INFO"

    @property
    def search_depth(self) -> int:
        return depth_for(self.difficulty)


_CONFIG = EngineConfig()


def get_config() -> EngineConfig:
    return _CONFIG


def set_difficulty(level: str) -> None:
    """Set the difficulty used by every subsequent search."""
    _CONFIG.difficulty = level


def search_depth() -> int:
    """Depth the next search will use."""
    return _CONFIG.search_depth


def load_config(path: str = "chesscore.toml") -> EngineConfig:
    """Read the ``[engine]`` table of a TOML file into the global config.

    A missing file leaves the current settings untouched.
    """
    if not os.path.exists(path):
        return _CONFIG
    with open(path, "rb") as fh:
        data: dict[str, Any] = tomllib.load(fh)

    section = data.get("engine", {})
    for key in ("difficulty", "log_level"):
        if key not in section:
            continue
        value = section[key]
        if not isinstance(value, str):
            raise ValueError(f"engine.{key} must be a string, got {value!r}")
        setattr(_CONFIG, key, value)
    return _CONFIG


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler at *level* (defaults to the config's)."""
    logging.basicConfig(
        level=(level or _CONFIG.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
