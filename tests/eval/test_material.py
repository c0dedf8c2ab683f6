from __future__ import annotations

from chessprog.engine.board import Board
from chessprog.engine.game import GameState
from chessprog.engine.piece import Color
from chessprog.eval import CHECKMATE_SCORE, MaterialScoring, evaluate, material


def test_startpos_material() -> None:
    b = Board.startpos()
    # 8 pawns, 2 knights, 2 bishops, 2 rooks, queen, king
    assert material(b, Color.WHITE) == 8 + 6 + 6 + 10 + 9 + 100
    assert material(b, Color.BLACK) == material(b, Color.WHITE)


def test_side_to_move_scoring_counts_only_the_mover() -> None:
    game = GameState.from_position("q3k3/8/8/8/8/8/8/R3K3 w")
    assert evaluate(game, Color.WHITE) == 105
    assert evaluate(game, Color.BLACK) == -105
    game.turn = Color.BLACK
    assert evaluate(game, Color.WHITE) == -109
    assert evaluate(game, Color.BLACK) == 109


def test_balance_scoring_subtracts_opponent() -> None:
    game = GameState.from_position("q3k3/8/8/8/8/8/8/R3K3 w")
    assert evaluate(game, Color.WHITE, MaterialScoring.BALANCE) == -4
    assert evaluate(game, Color.BLACK, MaterialScoring.BALANCE) == 4
    assert evaluate(GameState.new(), Color.WHITE, MaterialScoring.BALANCE) == 0


def test_checkmate_favors_side_not_to_move() -> None:
    game = GameState.from_position("7k/6Q1/6K1/8/8/8/8/8 b")
    assert evaluate(game, Color.WHITE) == CHECKMATE_SCORE
    assert evaluate(game, Color.BLACK) == -CHECKMATE_SCORE


def test_stalemate_scores_zero() -> None:
    game = GameState.from_position("7k/5Q2/6K1/8/8/8/8/8 b")
    assert evaluate(game, Color.WHITE) == 0
    assert evaluate(game, Color.BLACK, MaterialScoring.BALANCE) == 0
