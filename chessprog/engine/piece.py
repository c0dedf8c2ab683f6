from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Color(Enum):
    """Side owning a piece. ``NONE`` only ever pairs with an empty square."""

    WHITE = "w"
    BLACK = "b"
    NONE = "-"

    @property
    def opposite(self) -> "Color":
        if self is Color.WHITE:
            return Color.BLACK
        if self is Color.BLACK:
            return Color.WHITE
        return Color.NONE


class PieceKind(Enum):
    NONE = "."
    PAWN = "p"
    ROOK = "r"
    KNIGHT = "n"
    BISHOP = "b"
    QUEEN = "q"
    KING = "k"


@dataclass(frozen=True)
class Piece:
    """Immutable (kind, color) pair stored on a board square."""

    kind: PieceKind
    color: Color

    @property
    def is_empty(self) -> bool:
        return self.kind is PieceKind.NONE

    def to_char(self) -> str:
        """Placement character: uppercase for White, lowercase for Black, ``.`` if empty."""
        if self.is_empty:
            return PieceKind.NONE.value
        ch = self.kind.value
        return ch.upper() if self.color is Color.WHITE else ch

    @classmethod
    def from_char(cls, ch: str) -> "Piece":
        """Create a piece from its placement character, e.g. ``"N"`` -> white knight.

        Raises:
            ValueError: If ``ch`` is not one of ``PNBRQKpnbrqk``.
        """
        try:
            kind, color = CHAR_TO_PIECE[ch]
        except KeyError:
            raise ValueError(f"invalid piece character: {ch!r}") from None
        return cls(kind, color)


EMPTY = Piece(PieceKind.NONE, Color.NONE)

CHAR_TO_PIECE: Dict[str, Tuple[PieceKind, Color]] = {}
for _kind in PieceKind:
    if _kind is PieceKind.NONE:
        continue
    CHAR_TO_PIECE[_kind.value.upper()] = (_kind, Color.WHITE)
    CHAR_TO_PIECE[_kind.value] = (_kind, Color.BLACK)
