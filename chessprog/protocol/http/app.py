from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    GameRuleError,
    exception_handler,
    game_rule_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from ...engine.board import STARTPOS_PLACEMENT
from ...engine.game import GameState, commit, undo
from ...engine.move import parse_move, str_to_square
from ...engine.movegen import legal_moves_from
from ...engine.perft import perft as perft_nodes
from ...engine.result import Result
from ...engine.status import current_player_is_ai, game_status
from ...search.service import SearchService
from .session import InMemorySessionStore


logger = logging.getLogger(__name__)

MAX_SEARCH_DEPTH = 5
MAX_PERFT_DEPTH = 4


class SettingsRequest(BaseModel):
    mode: Optional[int] = Field(default=None, description="1 = one player, 2 = two players")
    difficulty: Optional[int] = Field(default=None, description="1 (amateur) .. 5 (expert)")
    user_color: Optional[str] = Field(default=None, description="'w' or 'b'")


class CreateGameResponse(BaseModel):
    game_id: str
    position: str


class SetPositionRequest(BaseModel):
    position: str = Field(..., description="Piece placement and optional side to move")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Origin and destination squares, e.g., e2e4")


class AIMoveRequest(BaseModel):
    depth: Optional[int] = Field(default=None, ge=0, le=MAX_SEARCH_DEPTH)
    commit: bool = True


class PerftRequest(BaseModel):
    position: str = Field(default=f"{STARTPOS_PLACEMENT} w")
    depth: int = Field(default=1, ge=0, le=MAX_PERFT_DEPTH)


class LegalMove(BaseModel):
    move: str
    to: str
    kind: str


class MovesResponse(BaseModel):
    square: str
    moves: list[LegalMove]


class GameStateResponse(BaseModel):
    game_id: str
    position: str
    turn: str
    status: str
    mode: int
    difficulty: int
    user_color: str
    current_player: str
    last_move: Optional[str]
    move_history: list[str]


class AIMoveResponse(BaseModel):
    best_move: Optional[str]
    score: int
    nodes: int
    depth: int
    time_ms: int
    committed: bool
    state: GameStateResponse


def create_app() -> FastAPI:
    app = FastAPI(title="chessprog API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(GameRuleError, game_rule_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    # In-memory session store for games
    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    def create_game(req: Optional[SettingsRequest] = None) -> CreateGameResponse:
        game = GameState.new()
        if req is not None:
            _apply_settings(game, req)
        game_id = store.create(game)
        logger.info("created game %s", game_id)
        return CreateGameResponse(game_id=game_id, position=game.to_position())

    @app.get("/api/games/{game_id}/state", response_model=GameStateResponse)
    def get_state(game_id: str) -> GameStateResponse:
        with store.locked(game_id) as game:
            return _state_response(game_id, _require_game(game))

    @app.delete("/api/games/{game_id}")
    def delete_game(game_id: str) -> Dict[str, Any]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        logger.info("deleted game %s", game_id)
        return {"game_id": game_id, "deleted": True}

    @app.post("/api/games/{game_id}/clone", response_model=CreateGameResponse)
    def clone_game(game_id: str) -> CreateGameResponse:
        with store.locked(game_id) as game:
            clone = _require_game(game).copy()
        clone_id = store.create(clone)
        logger.info("cloned game %s into %s", game_id, clone_id)
        return CreateGameResponse(game_id=clone_id, position=clone.to_position())

    @app.post("/api/games/{game_id}/reset", response_model=GameStateResponse)
    def reset_game(game_id: str) -> GameStateResponse:
        with store.locked(game_id) as game:
            game = _require_game(game)
            game.reset()
            return _state_response(game_id, game)

    @app.post("/api/games/{game_id}/settings", response_model=GameStateResponse)
    def update_settings(game_id: str, req: SettingsRequest) -> GameStateResponse:
        with store.locked(game_id) as game:
            game = _require_game(game)
            _apply_settings(game, req)
            return _state_response(game_id, game)

    @app.post("/api/games/{game_id}/position", response_model=GameStateResponse)
    def set_position(game_id: str, req: SetPositionRequest) -> GameStateResponse:
        with store.locked(game_id) as game:
            game = _require_game(game)
            try:
                loaded = GameState.from_position(req.position)
            except ValueError:
                raise HTTPException(status_code=400, detail="invalid position")
            loaded.mode = game.mode
            loaded.difficulty = game.difficulty
            loaded.user_color = game.user_color
            store.set(game_id, loaded)
            return _state_response(game_id, loaded)

    @app.post("/api/games/{game_id}/move", response_model=GameStateResponse)
    def make_move(game_id: str, req: MoveRequest) -> GameStateResponse:
        try:
            move = parse_move(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        with store.locked(game_id) as game:
            game = _require_game(game)
            res = commit(game, move.from_sq, move.to_sq)
            if res is not Result.SUCCESS:
                raise GameRuleError(res)
            return _state_response(game_id, game)

    @app.get("/api/games/{game_id}/moves/{square}", response_model=MovesResponse)
    def get_moves(game_id: str, square: str) -> MovesResponse:
        try:
            origin = str_to_square(square)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        with store.locked(game_id) as game:
            res, moves = legal_moves_from(_require_game(game), origin)
        if res is not Result.SUCCESS:
            raise GameRuleError(res)
        return MovesResponse(
            square=square,
            moves=[
                LegalMove(
                    move=m.to_str(),
                    to=str(m.to_sq),
                    kind=m.kind.value if m.kind else "standard",
                )
                for m in moves
            ],
        )

    @app.post("/api/games/{game_id}/undo", response_model=GameStateResponse)
    def undo_move(game_id: str) -> GameStateResponse:
        with store.locked(game_id) as game:
            game = _require_game(game)
            res, _ = undo(game)
            if res is not Result.SUCCESS:
                raise GameRuleError(res, "no moves to undo")
            return _state_response(game_id, game)

    @app.post("/api/games/{game_id}/ai-move", response_model=AIMoveResponse)
    def ai_move(game_id: str, req: Optional[AIMoveRequest] = None) -> AIMoveResponse:
        req = req or AIMoveRequest()
        with store.locked(game_id) as game:
            game = _require_game(game)
            res = SearchService().search(game, depth=req.depth)
            committed = False
            if req.commit and res.best_move is not None:
                committed = commit(game, res.best_move.from_sq, res.best_move.to_sq).ok
            return AIMoveResponse(
                best_move=res.best_move.to_str() if res.best_move else None,
                score=res.score,
                nodes=res.nodes,
                depth=res.depth,
                time_ms=res.time_ms,
                committed=committed,
                state=_state_response(game_id, game),
            )

    @app.post("/api/perft")
    def perft(req: PerftRequest) -> Dict[str, Any]:
        try:
            game = GameState.from_position(req.position)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid position")
        return {"nodes": perft_nodes(game, req.depth), "depth": req.depth}

    return app


def _require_game(game: Optional[GameState]) -> GameState:
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _apply_settings(game: GameState, req: SettingsRequest) -> None:
    # Validate everything first so a rejected request changes nothing
    trial = game.copy()
    checks = (
        (req.mode, trial.set_mode, "invalid game mode"),
        (req.difficulty, trial.set_difficulty, "invalid difficulty level"),
        (req.user_color, trial.set_user_color, "invalid user color"),
    )
    for value, setter, message in checks:
        if value is None:
            continue
        if setter(value) is not Result.SUCCESS:
            raise GameRuleError(Result.INVALID_ARGUMENT, message)
    game.mode = trial.mode
    game.difficulty = trial.difficulty
    game.user_color = trial.user_color


def _state_response(game_id: str, game: GameState) -> GameStateResponse:
    history = [m.to_str() for m in game.history]
    return GameStateResponse(
        game_id=game_id,
        position=game.to_position(),
        turn=game.turn.value,
        status=game_status(game).value,
        mode=int(game.mode),
        difficulty=int(game.difficulty),
        user_color=game.user_color.value,
        current_player="ai" if current_player_is_ai(game) else "human",
        last_move=history[-1] if history else None,
        move_history=history,
    )


# Default app for non-factory servers
app = create_app()
