from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from ...engine.game import GameState


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Retrieve existing sessions by `game_id`
    - Serialize access to one game so only a single writer touches it at a time
    - Delete sessions
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, GameState] = {}
        self._game_locks: Dict[str, threading.Lock] = {}

    def create(self, game: Optional[GameState] = None) -> str:
        """Create a new game session and return its `game_id`."""
        gid = str(uuid.uuid4())
        if game is None:
            game = GameState.new()
        with self._lock:
            self._games[gid] = game
            self._game_locks[gid] = threading.Lock()
        return gid

    def get(self, game_id: str) -> Optional[GameState]:
        with self._lock:
            return self._games.get(game_id)

    @contextmanager
    def locked(self, game_id: str) -> Iterator[Optional[GameState]]:
        """Hold the game's exclusive lock for the block; yields None if unknown."""
        with self._lock:
            game_lock = self._game_locks.get(game_id)
        if game_lock is None:
            yield None
            return
        with game_lock:
            yield self.get(game_id)

    def set(self, game_id: str, game: GameState) -> None:
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = game

    def delete(self, game_id: str) -> bool:
        with self._lock:
            if game_id not in self._games:
                return False
            del self._games[game_id]
            del self._game_locks[game_id]
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
