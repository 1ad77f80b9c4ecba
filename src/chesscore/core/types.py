"""Square type alias and coordinate helpers.

Board layout (row, col), row 0 at the top:
    row 0 is rank 8 (Black's home rank), row 7 is rank 1 (White's home rank)
    col 0 is file a, col 7 is file h

So a8 = (0, 0), h8 = (0, 7), a1 = (7, 0), h1 = (7, 7).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (row, col), each 0–7


def make_square(row: int, col: int) -> Square:
    """Create square from row (0–7) and col (0–7)."""
    return (row, col)


def is_valid_square(sq: Square) -> bool:
    """Check whether both coordinates lie on the board."""
    row, col = sq
    return 0 <= row < 8 and 0 <= col < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 0) → 'a1', (0, 7) → 'h8'."""
    row, col = sq
    return chr(ord("a") + col) + str(8 - row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(8 - int(name[1]), ord(name[0]) - ord("a"))


def all_squares() -> Iterator[Square]:
    """Every square in raster order (row-major)."""
    for row in range(8):
        for col in range(8):
            yield (row, col)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((7, c) for c in range(8))
