from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .move import BOARD_SIZE, Square
from .piece import EMPTY, Color, Piece, PieceKind


STARTPOS_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def _empty_grid() -> List[List[Piece]]:
    return [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    """8x8 grid of pieces.

    Notes:
    - ``grid[file][rank]``; a1 is ``grid[0][0]``, h8 is ``grid[7][7]``.
    - Squares are visited file-major (a1, a2, ..., a8, b1, ...) by
      :meth:`squares`, which fixes the scan order of every full-board search.
    """

    grid: List[List[Piece]] = field(default_factory=_empty_grid)

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board holding the standard initial layout."""
        return cls.from_placement(STARTPOS_PLACEMENT)

    @classmethod
    def from_placement(cls, placement: str) -> "Board":
        """Create a board from the piece-placement field of a FEN record.

        Args:
            placement (str): Ranks 8 down to 1 separated by ``/``; digits
                encode runs of empty squares.

        Returns:
            Board: Board with the described pieces.

        Raises:
            ValueError: If ``placement`` is empty, does not have 8 ranks, or a
                rank does not describe exactly 8 squares.
        """
        if not placement or not isinstance(placement, str):
            raise ValueError("placement must be a non-empty string")
        ranks = placement.strip().split("/")
        if len(ranks) != BOARD_SIZE:
            raise ValueError("placement must have 8 ranks")
        board = cls()
        for rank_idx, rank in enumerate(ranks[::-1]):  # start from rank 1 (bottom)
            file_idx = 0
            for ch in rank:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > BOARD_SIZE:
                        raise ValueError("invalid empty count in placement rank")
                    file_idx += n
                else:
                    if file_idx >= BOARD_SIZE:
                        raise ValueError("too many squares in placement rank")
                    board.grid[file_idx][rank_idx] = Piece.from_char(ch)
                    file_idx += 1
            if file_idx != BOARD_SIZE:
                raise ValueError("rank does not sum to 8 squares in placement")
        return board

    def to_placement(self) -> str:
        """Serialize the grid into a FEN piece-placement field."""
        ranks_str: List[str] = []
        for rank_idx in range(BOARD_SIZE - 1, -1, -1):
            run = 0
            row = []
            for file_idx in range(BOARD_SIZE):
                piece = self.grid[file_idx][rank_idx]
                if piece.is_empty:
                    run += 1
                    continue
                if run > 0:
                    row.append(str(run))
                    run = 0
                row.append(piece.to_char())
            if run > 0:
                row.append(str(run))
            ranks_str.append("".join(row))
        return "/".join(ranks_str)

    def piece_at(self, sq: Square) -> Piece:
        return self.grid[sq.file][sq.rank]

    def set_piece(self, sq: Square, piece: Piece) -> None:
        self.grid[sq.file][sq.rank] = piece

    def is_empty_at(self, sq: Square) -> bool:
        return self.grid[sq.file][sq.rank].is_empty

    def squares(self) -> Iterator[Square]:
        for f in range(BOARD_SIZE):
            for r in range(BOARD_SIZE):
                yield Square(f, r)

    def pieces(self, color: Color) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every piece of ``color`` in scan order."""
        for sq in self.squares():
            piece = self.grid[sq.file][sq.rank]
            if piece.color is color:
                yield sq, piece

    def find_king(self, color: Color) -> Optional[Square]:
        """Return the first square holding ``color``'s king, or ``None``."""
        for sq, piece in self.pieces(color):
            if piece.kind is PieceKind.KING:
                return sq
        return None

    def copy(self) -> "Board":
        return Board(grid=[list(col) for col in self.grid])
