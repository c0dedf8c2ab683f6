from __future__ import annotations

from typing import List

import pytest

from chessprog.engine.game import Difficulty, GameState, commit, make_move, unmake_move
from chessprog.engine.move import Move, str_to_square
from chessprog.engine.movegen import all_legal_moves
from chessprog.engine.result import GameStatus, Result
from chessprog.engine.status import game_status
from chessprog.eval import CHECKMATE_SCORE, MaterialScoring, evaluate
from chessprog.search.service import SearchService, ai_move


def _is_same_move(a: Move, b: Move) -> bool:
    return a.from_sq == b.from_sq and a.to_sq == b.to_sq


def _child_scores(game: GameState) -> List[int]:
    root = game.turn
    scores = []
    for mv in all_legal_moves(game):
        applied = make_move(game, mv)
        scores.append(evaluate(game, root))
        unmake_move(game, applied)
    return scores


def test_depth_zero_returns_static_score_and_no_move() -> None:
    game = GameState.new()
    res = SearchService().search(game, depth=0)
    assert res.best_move is None
    assert res.score == evaluate(game, game.turn)
    assert res.nodes == 1


def test_mate_in_one_is_found() -> None:
    game = GameState.from_position("7k/8/6K1/8/8/8/Q7/8 w")
    res = SearchService().search(game, depth=1)
    assert res.best_move is not None
    assert res.score == CHECKMATE_SCORE
    make_move(game, res.best_move)
    assert game_status(game) is GameStatus.CHECKMATE


def test_prefers_winning_the_queen() -> None:
    game = GameState.from_position("q3k3/8/8/8/8/8/8/R3K3 w")
    for scoring in MaterialScoring:
        res = SearchService(scoring=scoring).search(game, depth=1)
        assert res.best_move is not None
        assert res.best_move.to_str() == "a1a8"


def test_root_score_is_max_of_children_and_first_wins_ties() -> None:
    game = GameState.from_position("4k3/8/8/3p4/4P3/8/8/4K3 w")
    scores = _child_scores(game)
    res = SearchService().search(game, depth=1)
    assert res.score == max(scores)
    first_best = all_legal_moves(game)[scores.index(max(scores))]
    assert res.best_move is not None and _is_same_move(res.best_move, first_best)


def test_depth_two_is_max_of_min() -> None:
    game = GameState.from_position("4k3/8/8/3p4/4P3/8/8/4K3 w")
    root = game.turn
    expected = None
    for mv in all_legal_moves(game):
        a = make_move(game, mv)
        replies = []
        for reply in all_legal_moves(game):
            b = make_move(game, reply)
            replies.append(evaluate(game, root))
            unmake_move(game, b)
        worst = min(replies) if replies else evaluate(game, root)
        expected = worst if expected is None else max(expected, worst)
        unmake_move(game, a)
    res = SearchService().search(game, depth=2)
    assert res.score == expected


def test_search_is_deterministic_and_restores_state() -> None:
    game = GameState.from_position("4k3/8/8/3p4/4P3/8/8/4K3 w")
    before = game.to_position()
    a = SearchService().search(game, depth=2)
    b = SearchService().search(game, depth=2)
    assert a.best_move is not None and b.best_move is not None
    assert _is_same_move(a.best_move, b.best_move)
    assert a.score == b.score
    assert a.nodes == b.nodes
    assert game.to_position() == before


def test_search_does_not_touch_history() -> None:
    game = GameState.from_position("4k3/8/8/3p4/4P3/8/8/4K3 w")
    for mv in ("e1e2", "e8e7", "e2e1", "e7e8", "e1e2", "e8e7"):
        assert commit(game, str_to_square(mv[:2]), str_to_square(mv[2:])) is Result.SUCCESS
    assert game.history.is_full()
    SearchService().search(game, depth=2)
    assert [m.to_str() for m in game.history] == ["e1e2", "e8e7", "e2e1", "e7e8", "e1e2", "e8e7"]


def test_stalemate_root_returns_draw_and_no_move() -> None:
    game = GameState.from_position("7k/5Q2/6K1/8/8/8/8/8 b")
    res = SearchService().search(game, depth=2)
    assert res.best_move is None
    assert res.score == 0


def test_checkmate_root_reports_loss() -> None:
    game = GameState.from_position("7k/6Q1/6K1/8/8/8/8/8 b")
    res = SearchService().search(game, depth=2)
    assert res.best_move is None
    assert res.score == -CHECKMATE_SCORE


def test_depth_defaults_to_difficulty() -> None:
    game = GameState.from_position("4k3/8/8/3p4/4P3/8/8/4K3 w")
    game.set_difficulty(Difficulty.AMATEUR)
    res = SearchService().search(game)
    assert res.depth == 1


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValueError):
        SearchService().search(GameState.new(), depth=-1)


def test_ai_move_returns_a_legal_move() -> None:
    game = GameState.from_position("q3k3/8/8/8/8/8/8/R3K3 w")
    mv = ai_move(game, depth=1)
    assert mv is not None
    assert any(_is_same_move(mv, m) for m in all_legal_moves(game))
