"""Game management layer — controller, phases, promotion and game-over events.

Quick start::

    from chesscore.core import Color
    from chesscore.game import GameController

    ctrl = GameController()
    ctrl.new_game(Color.WHITE, vs_ai=True, difficulty="easy")
"""

from chesscore.game.controller import GameController, GameEvents
from chesscore.game.interfaces import GamePhase, IGameController

__all__ = [
    "GameController",
    "GameEvents",
    "GamePhase",
    "IGameController",
]
