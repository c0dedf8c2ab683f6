from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Any, Iterator, Optional, Tuple

from .attacks import is_king_in_check
from .board import Board, STARTPOS_PLACEMENT
from .history import HistoryStack
from .move import Move, Square
from .piece import EMPTY, Color
from .result import Result
from .rules import is_legal_geometry, is_on_board


logger = logging.getLogger(__name__)


class GameMode(IntEnum):
    ONE_PLAYER = 1
    TWO_PLAYER = 2


class Difficulty(IntEnum):
    """Computer strength; the value is the search depth in plies."""

    AMATEUR = 1
    EASY = 2
    MODERATE = 3
    HARD = 4
    EXPERT = 5

    @property
    def depth(self) -> int:
        return int(self.value)


DEFAULT_MODE = GameMode.ONE_PLAYER
DEFAULT_DIFFICULTY = Difficulty.EASY
DEFAULT_USER_COLOR = Color.WHITE


def _coerce(enum_cls: type, value: Any) -> Optional[Enum]:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, bool):
        return None
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return None


@dataclass
class GameState:
    """A single game: board, side to move, settings and undo history.

    Responsibility: own the mutable state. Rules live in :mod:`.rules`,
    move application in the functions below, enumeration in :mod:`.movegen`.
    """

    board: Board = field(default_factory=Board.startpos)
    turn: Color = Color.WHITE
    mode: GameMode = DEFAULT_MODE
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    user_color: Color = DEFAULT_USER_COLOR
    history: HistoryStack[Move] = field(default_factory=HistoryStack)

    @classmethod
    def new(cls) -> "GameState":
        return cls()

    @classmethod
    def from_position(cls, position: str) -> "GameState":
        """Create a game from ``"<placement> [w|b]"``.

        The side-to-move field is optional and defaults to White. Any further
        fields (as in a full FEN record) are ignored.

        Raises:
            ValueError: If the placement or side-to-move field is invalid.
        """
        if not position or not isinstance(position, str):
            raise ValueError("position must be a non-empty string")
        parts = position.strip().split()
        if not parts:
            raise ValueError("position must be a non-empty string")
        board = Board.from_placement(parts[0])
        turn = Color.WHITE
        if len(parts) > 1:
            if parts[1] not in ("w", "b"):
                raise ValueError("side to move must be 'w' or 'b'")
            turn = Color(parts[1])
        return cls(board=board, turn=turn)

    def to_position(self) -> str:
        return f"{self.board.to_placement()} {self.turn.value}"

    def copy(self) -> "GameState":
        """Deep, independent clone (own board grid, own history)."""
        return replace(self, board=self.board.copy(), history=self.history.copy())

    def reset(self) -> Result:
        """Restore the initial layout with White to move; settings are kept."""
        self.board = Board.from_placement(STARTPOS_PLACEMENT)
        self.turn = Color.WHITE
        self.history = HistoryStack()
        return Result.SUCCESS

    # --- Settings ---
    def set_default_settings(self) -> Result:
        self.mode = DEFAULT_MODE
        self.difficulty = DEFAULT_DIFFICULTY
        self.user_color = DEFAULT_USER_COLOR
        return Result.SUCCESS

    def set_mode(self, mode: Any) -> Result:
        value = _coerce(GameMode, mode)
        if value is None:
            return Result.INVALID_ARGUMENT
        self.mode = value  # type: ignore[assignment]
        return Result.SUCCESS

    def set_difficulty(self, difficulty: Any) -> Result:
        value = _coerce(Difficulty, difficulty)
        if value is None:
            return Result.INVALID_ARGUMENT
        self.difficulty = value  # type: ignore[assignment]
        return Result.SUCCESS

    def set_user_color(self, color: Any) -> Result:
        value = _coerce(Color, color)
        if value is None or value is Color.NONE:
            return Result.INVALID_ARGUMENT
        self.user_color = value  # type: ignore[assignment]
        return Result.SUCCESS

    def in_check(self) -> bool:
        return is_king_in_check(self.board, self.turn)


# --- Move execution ---
def apply(state: GameState, move: Move) -> Move:
    """Move the piece on the board without touching turn or history.

    Returns:
        Move: ``move`` annotated with the captured piece and the mover's color;
        pass it to :func:`revert` to undo.
    """
    board = state.board
    applied = replace(
        move,
        captured=board.piece_at(move.to_sq),
        player=board.piece_at(move.from_sq).color,
    )
    board.set_piece(move.to_sq, board.piece_at(move.from_sq))
    board.set_piece(move.from_sq, EMPTY)
    return applied


def revert(state: GameState, applied: Move) -> None:
    """Exact inverse of :func:`apply`."""
    board = state.board
    board.set_piece(applied.from_sq, board.piece_at(applied.to_sq))
    board.set_piece(applied.to_sq, applied.captured)


@contextmanager
def speculate(state: GameState, move: Move) -> Iterator[Move]:
    """Apply ``move`` for the duration of the block; always reverted on exit."""
    applied = apply(state, move)
    try:
        yield applied
    finally:
        revert(state, applied)


def make_move(state: GameState, move: Move) -> Move:
    """Apply ``move`` and pass the turn, without recording history."""
    applied = apply(state, move)
    state.turn = state.turn.opposite
    return applied


def unmake_move(state: GameState, applied: Move) -> None:
    revert(state, applied)
    state.turn = state.turn.opposite


def is_legal_move(state: Optional[GameState], move: Move) -> Result:
    """Validate ``move`` for the side to move.

    Checks run in a fixed order and the first failure is returned:
    board bounds, ownership of the origin, geometry, then check-safety.
    """
    if state is None:
        return Result.INVALID_ARGUMENT
    if not is_on_board(move):
        return Result.INVALID_POSITION
    board = state.board
    if board.piece_at(move.from_sq).color is not state.turn:
        return Result.EMPTY_POSITION
    if not is_legal_geometry(board, move):
        return Result.ILLEGAL_MOVE
    was_in_check = is_king_in_check(board, state.turn)
    with speculate(state, move):
        stays_in_check = is_king_in_check(board, state.turn)
    if was_in_check and stays_in_check:
        return Result.KING_STILL_THREATENED
    if stays_in_check:
        return Result.KING_WILL_BE_THREATENED
    return Result.SUCCESS


def commit(state: Optional[GameState], from_sq: Square, to_sq: Square) -> Result:
    """Validate and play a move, record it for undo and pass the turn."""
    if state is None:
        return Result.INVALID_ARGUMENT
    move = Move(from_sq, to_sq)
    res = is_legal_move(state, move)
    if res is not Result.SUCCESS:
        return res
    applied = make_move(state, move)
    state.history.push(applied)
    logger.debug("commit %s by %s", applied.to_str(), applied.player.name)
    return Result.SUCCESS


def undo(state: Optional[GameState]) -> Tuple[Result, Optional[Move]]:
    """Take back the most recent recorded move."""
    if state is None:
        return Result.INVALID_ARGUMENT, None
    if state.history.is_empty():
        return Result.EMPTY_HISTORY, None
    applied = state.history.pop()
    unmake_move(state, applied)
    logger.debug("undo %s by %s", applied.to_str(), applied.player.name)
    return Result.SUCCESS, applied
