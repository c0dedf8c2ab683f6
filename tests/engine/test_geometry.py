from __future__ import annotations

from typing import Dict, Set

from chessprog.engine.board import Board
from chessprog.engine.move import Move, str_to_square
from chessprog.engine.piece import Piece
from chessprog.engine.rules import is_legal_geometry


def board_with(pieces: Dict[str, str]) -> Board:
    b = Board.empty()
    for name, ch in pieces.items():
        b.set_piece(str_to_square(name), Piece.from_char(ch))
    return b


def reachable(b: Board, origin: str) -> Set[str]:
    fr = str_to_square(origin)
    return {str(to) for to in b.squares() if is_legal_geometry(b, Move(fr, to))}


def test_rook_on_empty_board() -> None:
    got = reachable(board_with({"d4": "R"}), "d4")
    expected = {f"d{r}" for r in range(1, 9)} | {f"{f}4" for f in "abcdefgh"}
    expected.discard("d4")
    assert got == expected


def test_bishop_on_empty_board() -> None:
    got = reachable(board_with({"d4": "B"}), "d4")
    assert got == {"a1", "b2", "c3", "e5", "f6", "g7", "h8", "a7", "b6", "c5", "e3", "f2", "g1"}


def test_queen_is_rook_plus_bishop() -> None:
    b = board_with({"d4": "Q"})
    assert len(reachable(b, "d4")) == 27
    assert reachable(b, "d4") == reachable(board_with({"d4": "R"}), "d4") | reachable(
        board_with({"d4": "B"}), "d4"
    )


def test_knight_l_shapes() -> None:
    got = reachable(board_with({"d4": "N"}), "d4")
    assert got == {"b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5"}


def test_knight_jumps_over_pieces() -> None:
    b = board_with({"b1": "N", "a2": "P", "b2": "P", "c2": "P"})
    assert reachable(b, "b1") == {"a3", "c3", "d2"}


def test_king_single_steps() -> None:
    got = reachable(board_with({"d4": "K"}), "d4")
    assert got == {"c3", "c4", "c5", "d3", "d5", "e3", "e4", "e5"}


def test_king_in_corner() -> None:
    assert reachable(board_with({"a1": "K"}), "a1") == {"a2", "b1", "b2"}


def test_white_pawn_pushes() -> None:
    assert reachable(board_with({"e2": "P"}), "e2") == {"e3", "e4"}
    # Off the start rank only a single step is allowed
    assert reachable(board_with({"e3": "P"}), "e3") == {"e4"}


def test_black_pawn_moves_down_the_board() -> None:
    assert reachable(board_with({"d7": "p"}), "d7") == {"d6", "d5"}
    assert reachable(board_with({"d6": "p"}), "d6") == {"d5"}


def test_pawn_captures_diagonally_only_enemies() -> None:
    b = board_with({"e4": "P", "d5": "p", "f5": "p", "e5": "p"})
    assert reachable(b, "e4") == {"d5", "f5"}
    b2 = board_with({"e4": "P", "d5": "N", "f5": "p"})
    assert reachable(b2, "e4") == {"e5", "f5"}


def test_pawn_never_moves_backwards_or_sideways() -> None:
    b = board_with({"e4": "P", "d3": "p", "f3": "p"})
    assert reachable(b, "e4") == {"e5"}


def test_pawn_double_step_checks_destination_only() -> None:
    # The intermediate square is not inspected
    assert reachable(board_with({"e2": "P", "e3": "n"}), "e2") == {"e4"}
    assert reachable(board_with({"e2": "P", "e4": "n"}), "e2") == {"e3"}


def test_rook_blocked_by_intermediate_piece() -> None:
    b = board_with({"a1": "R", "a4": "n"})
    got = reachable(b, "a1")
    assert {"a2", "a3", "a4"} <= got
    assert "a5" not in got and "a8" not in got


def test_bishop_blocked_by_intermediate_piece() -> None:
    b = board_with({"c1": "B", "e3": "p"})
    got = reachable(b, "c1")
    assert {"d2", "e3", "b2", "a3"} == got


def test_bishop_adjacent_capture() -> None:
    b = board_with({"c1": "B", "d2": "p", "b2": "P"})
    assert reachable(b, "c1") == {"d2"}


def test_friendly_fire_rejected_for_every_piece() -> None:
    for ch in "PRNBQK":
        b = board_with({"d4": ch, "e5": "P", "d5": "P", "e6": "P", "d3": "P"})
        got = reachable(b, "d4")
        assert not ({"e5", "d5", "e6", "d3"} & got), ch


def test_empty_origin_is_never_legal() -> None:
    assert reachable(Board.empty(), "d4") == set()
