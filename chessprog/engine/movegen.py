from __future__ import annotations

from typing import List, Optional, Tuple

from .attacks import is_king_in_check
from .game import GameState, is_legal_move, speculate
from .move import Move, MoveKind, Square
from .result import Result


def classify(state: GameState, move: Move) -> MoveKind:
    """Tag a legal move for the side to move.

    CAPTURE: the destination held an enemy piece. THREATENED: the move puts
    the opponent's king in check. BOTH: both at once.
    """
    with speculate(state, move) as applied:
        gives_check = is_king_in_check(state.board, state.turn.opposite)
    is_capture = not applied.captured.is_empty
    if gives_check and is_capture:
        return MoveKind.BOTH
    if gives_check:
        return MoveKind.THREATENED
    if is_capture:
        return MoveKind.CAPTURE
    return MoveKind.STANDARD


def _destinations(state: GameState, origin: Square) -> List[Move]:
    # Destinations are scanned file-major, matching Board.squares()
    moves: List[Move] = []
    for to_sq in state.board.squares():
        move = Move(origin, to_sq)
        if is_legal_move(state, move) is Result.SUCCESS:
            moves.append(move)
    return moves


def legal_moves_from(
    state: Optional[GameState], origin: Square, *, with_kinds: bool = True
) -> Tuple[Result, List[Move]]:
    """List every legal move of the piece on ``origin``.

    The piece may belong to either side: for the side not to move the turn is
    switched for the duration of the scan and restored afterwards.

    Returns:
        Tuple[Result, List[Move]]: ``SUCCESS`` and the moves (each tagged with
        its :class:`MoveKind` unless ``with_kinds`` is False), or the error
        and an empty list.
    """
    if state is None:
        return Result.INVALID_ARGUMENT, []
    if not origin.on_board:
        return Result.INVALID_POSITION, []
    piece = state.board.piece_at(origin)
    if piece.is_empty:
        return Result.EMPTY_POSITION, []

    original_turn = state.turn
    state.turn = piece.color
    try:
        moves = _destinations(state, origin)
        if with_kinds:
            moves = [m.with_kind(classify(state, m)) for m in moves]
    finally:
        state.turn = original_turn
    return Result.SUCCESS, moves


def all_legal_moves(state: GameState) -> List[Move]:
    """Every legal move of the side to move, in scan order, without kinds."""
    moves: List[Move] = []
    for sq, _ in state.board.pieces(state.turn):
        moves.extend(_destinations(state, sq))
    return moves


def any_legal_move(state: GameState) -> bool:
    for sq, _ in state.board.pieces(state.turn):
        if _destinations(state, sq):
            return True
    return False
