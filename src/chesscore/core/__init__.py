"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from chesscore.core import Color, MoveGenerator, Position

    pos = Position.initial(Color.WHITE)
    for move in MoveGenerator(pos).generate_legal_moves():
        print(move)
"""

from chesscore.core.board import Board
from chesscore.core.enums import Color, PieceType
from chesscore.core.move import Move, MoveResult
from chesscore.core.move_generator import MoveGenerator
from chesscore.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.piece import PIECE_VALUES, PROMOTION_TYPES, Piece
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import (
    Square,
    all_squares,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Types / helpers
    "Square",
    "all_squares",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "MoveResult",
    "PIECE_VALUES",
    "PROMOTION_TYPES",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
