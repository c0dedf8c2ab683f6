from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Tuple

from chessprog.engine.game import GameState, make_move, unmake_move
from chessprog.engine.move import Move
from chessprog.engine.movegen import all_legal_moves
from chessprog.eval import MaterialScoring, evaluate


logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: int
    nodes: int
    depth: int
    time_ms: int


class SearchService:
    """Fixed-depth, full-width minimax (no pruning).

    The root side to move maximizes, the other side minimizes. Children are
    visited in scan order (origin file, origin rank, destination file,
    destination rank) and only a strictly better score replaces the current
    best, so the first move found wins ties and results are deterministic.
    """

    def __init__(self, scoring: MaterialScoring = MaterialScoring.SIDE_TO_MOVE) -> None:
        self.scoring = scoring

    def search(self, game: GameState, depth: Optional[int] = None) -> SearchResult:
        """Pick a move for the side to move.

        Args:
            game (GameState): Position to search. Moves are made and unmade in
                place; board and turn are restored before returning and the
                undo history is never touched.
            depth (Optional[int]): Plies to search; defaults to the game's
                configured difficulty.

        Returns:
            SearchResult: Best root move (``None`` at depth 0 or when the side
            to move has no legal move) and its minimax score.

        Raises:
            ValueError: If ``depth`` is negative.
        """
        if depth is None:
            depth = game.difficulty.depth
        if depth < 0:
            raise ValueError("depth must be >= 0")

        root = game.turn
        nodes = 0
        # Moves currently made on the board, innermost last
        stack: List[Move] = []
        start = time.perf_counter()

        def minimax(d: int) -> Tuple[int, Optional[Move]]:
            nonlocal nodes
            nodes += 1
            if d == 0:
                return evaluate(game, root, self.scoring), None
            moves = all_legal_moves(game)
            if not moves:
                # Terminal node: mate or stalemate
                return evaluate(game, root, self.scoring), None

            maximizing = game.turn is root
            best_score = 0
            best_move: Optional[Move] = None
            for mv in moves:
                stack.append(make_move(game, mv))
                try:
                    score, _ = minimax(d - 1)
                finally:
                    unmake_move(game, stack.pop())
                if (
                    best_move is None
                    or (maximizing and score > best_score)
                    or (not maximizing and score < best_score)
                ):
                    best_score = score
                    best_move = mv
            return best_score, best_move

        score, best = minimax(depth)
        time_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search depth=%d best=%s score=%d nodes=%d time_ms=%d",
            depth,
            best.to_str() if best else None,
            score,
            nodes,
            time_ms,
        )
        return SearchResult(best_move=best, score=score, nodes=nodes, depth=depth, time_ms=time_ms)


def ai_move(game: GameState, depth: Optional[int] = None) -> Optional[Move]:
    """Computer move for the side to move at the configured difficulty."""
    return SearchService().search(game, depth).best_move
