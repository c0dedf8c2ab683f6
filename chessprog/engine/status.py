from __future__ import annotations

from .attacks import is_king_in_check
from .game import GameMode, GameState
from .movegen import any_legal_move
from .result import GameStatus


def game_status(state: GameState) -> GameStatus:
    """Classify the position for the side to move; never cached."""
    in_check = is_king_in_check(state.board, state.turn)
    has_moves = any_legal_move(state)
    if in_check:
        return GameStatus.CHECK if has_moves else GameStatus.CHECKMATE
    return GameStatus.RUNNING if has_moves else GameStatus.DRAW


def is_game_over(state: GameState) -> bool:
    return game_status(state) in (GameStatus.CHECKMATE, GameStatus.DRAW)


def current_player_is_ai(state: GameState) -> bool:
    """True when the computer should play the side to move."""
    return state.mode is GameMode.ONE_PLAYER and state.turn is not state.user_color
