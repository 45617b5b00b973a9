"""Square indexing and algebraic-name helpers.

Board layout (little-endian rank-file, same as python-chess):
    a1=0, b1=1, ..., h1=7
    a2=8, ...
    a8=56, ..., h8=63
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int  # 0–63

FILES = 8
RANKS = 8
ALL_SQUARES: tuple[Square, ...] = tuple(range(FILES * RANKS))

_FILE_NAMES = "abcdefgh"
_RANK_NAMES = "12345678"


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 7


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return sq >> 3


def make_square(file: int, rank: int) -> Square:
    return rank * FILES + file


def is_valid_square(sq: int) -> bool:
    return 0 <= sq < FILES * RANKS


def is_light(sq: Square) -> bool:
    """True for light squares (h1 is light, a1 is dark)."""
    return (file_of(sq) + rank_of(sq)) % 2 == 1


def square_name(sq: Square) -> str:
    """Algebraic name, e.g. 0 → 'a1', 63 → 'h8'."""
    if not is_valid_square(sq):
        raise ValueError(f"Square index out of range: {sq!r}")
    return _FILE_NAMES[file_of(sq)] + _RANK_NAMES[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Inverse of :func:`square_name`, e.g. 'e4' → 28."""
    if len(name) != 2 or name[0] not in _FILE_NAMES or name[1] not in _RANK_NAMES:
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(_FILE_NAMES.index(name[0]), _RANK_NAMES.index(name[1]))


def square_title(sq: Square) -> str:
    """Multi-line tooltip describing a board cell."""
    shade = "light" if is_light(sq) else "dark"
    return (
        f"Algebraic: {square_name(sq)}\n"
        f"Rank: {rank_of(sq)}\n"
        f"File: {file_of(sq)}\n"
        f"Index: {sq}\n"
        f"Color: {shade}"
    )
