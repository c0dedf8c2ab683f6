"""Static evaluation for the minimax search.

Pure, deterministic, and side-effect free.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Final

from chessprog.engine.board import Board
from chessprog.engine.game import GameState
from chessprog.engine.piece import Color, PieceKind
from chessprog.engine.result import GameStatus
from chessprog.engine.status import game_status


PIECE_VALUES: Final[Dict[PieceKind, int]] = {
    PieceKind.NONE: 0,
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 100,
}

CHECKMATE_SCORE: Final = 999
DRAW_SCORE: Final = 0


class MaterialScoring(Enum):
    """How non-terminal leaves are scored.

    SIDE_TO_MOVE counts only the material of the side to move at the leaf and
    never subtracts the opponent's. BALANCE scores own minus opposing material.
    """

    SIDE_TO_MOVE = "side_to_move"
    BALANCE = "balance"


def material(board: Board, color: Color) -> int:
    return sum(PIECE_VALUES[piece.kind] for _, piece in board.pieces(color))


def evaluate(
    state: GameState,
    perspective: Color,
    scoring: MaterialScoring = MaterialScoring.SIDE_TO_MOVE,
) -> int:
    """Score ``state`` for ``perspective`` (higher is better for that side).

    Args:
        state (GameState): Position to score; not modified.
        perspective (Color): The maximizing side, i.e. the search root's mover.
        scoring (MaterialScoring): Material strategy for non-terminal leaves.

    Returns:
        int: ``0`` for a draw, ``+/-CHECKMATE_SCORE`` for a mate (positive when
        the mated side is not ``perspective``), otherwise material.
    """
    status = game_status(state)
    if status is GameStatus.DRAW:
        return DRAW_SCORE
    if status is GameStatus.CHECKMATE:
        return -CHECKMATE_SCORE if state.turn is perspective else CHECKMATE_SCORE
    if scoring is MaterialScoring.BALANCE:
        return material(state.board, perspective) - material(state.board, perspective.opposite)
    own = material(state.board, state.turn)
    return own if state.turn is perspective else -own
