from __future__ import annotations

from .game import GameState, make_move, unmake_move
from .movegen import all_legal_moves


def perft(state: GameState, depth: int) -> int:
    """Compute perft node count for ``state`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Moves are made and unmade in place; the undo history is not touched.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in all_legal_moves(state):
        applied = make_move(state, m)
        try:
            nodes += perft(state, depth - 1)
        finally:
            unmake_move(state, applied)
    return nodes
