from __future__ import annotations

from enum import Enum


class Result(Enum):
    """Outcome of a core operation, returned as a value rather than raised."""

    SUCCESS = "success"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_POSITION = "invalid_position"
    EMPTY_POSITION = "empty_position"
    ILLEGAL_MOVE = "illegal_move"
    KING_STILL_THREATENED = "king_still_threatened"
    KING_WILL_BE_THREATENED = "king_will_be_threatened"
    EMPTY_HISTORY = "empty_history"

    @property
    def ok(self) -> bool:
        return self is Result.SUCCESS


class GameStatus(Enum):
    RUNNING = "running"
    CHECK = "check"
    CHECKMATE = "checkmate"
    DRAW = "draw"
