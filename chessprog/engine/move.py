from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .piece import EMPTY, Color, Piece


BOARD_SIZE = 8


class MoveKind(Enum):
    """Classification attached to generated moves."""

    STANDARD = "standard"
    CAPTURE = "capture"
    THREATENED = "threatened"
    BOTH = "both"


@dataclass(frozen=True)
class Square:
    """Board coordinate; ``file`` and ``rank`` are 0-based (a1 is (0, 0))."""

    file: int
    rank: int

    @property
    def on_board(self) -> bool:
        return 0 <= self.file < BOARD_SIZE and 0 <= self.rank < BOARD_SIZE

    def __str__(self) -> str:
        return square_to_str(self)


@dataclass(frozen=True)
class Move:
    """Engine move record.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        captured (Piece): Piece found on ``to_sq`` when the move was applied.
        player (Color): Color of the side that made the move.
        kind (Optional[MoveKind]): Set by move generation only.
    """

    from_sq: Square
    to_sq: Square
    captured: Piece = EMPTY
    player: Color = Color.NONE
    kind: Optional[MoveKind] = None

    def to_str(self) -> str:
        """Serialize as origin + destination, e.g. ``"e2e4"``."""
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)

    def with_kind(self, kind: MoveKind) -> "Move":
        return replace(self, kind=kind)


def parse_move(text: str) -> Move:
    """Parse a coordinate move string such as ``"e2e4"``.

    Raises:
        ValueError: If the string is not two concatenated square names.
    """
    if len(text) != 4:
        raise ValueError(f"invalid move length: {text!r}")
    return Move(str_to_square(text[0:2]), str_to_square(text[2:4]))


def str_to_square(s: str) -> Square:
    """Convert algebraic notation such as ``"e4"`` into a :class:`Square`.

    Raises:
        ValueError: If ``s`` is not a valid square name.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    return Square(ord(s[0]) - ord("a"), int(s[1]) - 1)


def square_to_str(sq: Square) -> str:
    """Convert an on-board square into algebraic notation.

    Raises:
        ValueError: If ``sq`` lies outside the board.
    """
    if not sq.on_board:
        raise ValueError(f"invalid square: ({sq.file}, {sq.rank})")
    return chr(ord("a") + sq.file) + str(sq.rank + 1)


def delta(move: Move) -> Tuple[int, int]:
    """Signed (file, rank) displacement of ``move``."""
    return move.to_sq.file - move.from_sq.file, move.to_sq.rank - move.from_sq.rank
