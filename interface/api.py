"""FastAPI REST interface for the rules engine."""

import logging
import threading
from typing import Annotated, Any, Dict, Tuple

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from chessrules.config import CONFIG, configure_logging
from chessrules.core.board import square_name
from chessrules.errors import InvalidStateError
from chessrules.main import Engine

configure_logging()
_log = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.api.app_name, version="1.0.0")

# One game per app; the lock serializes moves arriving from several clients.
engine = Engine()
_engine_lock = threading.Lock()

Coord = Annotated[int, Field(ge=0, le=7)]


class MoveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: Tuple[Coord, Coord] = Field(alias="from")
    to: Tuple[Coord, Coord]


def _snapshot() -> Dict[str, Any]:
    record = engine.to_record()
    record["fen"] = engine.fen()
    record["can_undo"] = engine.can_undo()
    record["can_redo"] = engine.can_redo()
    return record


@app.get("/state")
def get_state():
    with _engine_lock:
        return _snapshot()


@app.post("/state")
def load_state(record: Dict[str, Any]):
    with _engine_lock:
        try:
            engine.load_record(record)
        except InvalidStateError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _snapshot()


@app.get("/moves")
def get_moves(file: int = Query(..., ge=0, le=7), rank: int = Query(..., ge=0, le=7)):
    with _engine_lock:
        targets = engine.valid_moves((file, rank))
        return {"from": [file, rank], "targets": [list(t) for t in targets]}


@app.post("/move")
def make_move(req: MoveRequest):
    frm, to = tuple(req.from_), tuple(req.to)
    with _engine_lock:
        if not engine.apply_move(frm, to):
            raise HTTPException(
                status_code=400,
                detail=f"Illegal move: {square_name(frm)}{square_name(to)}",
            )
        return _snapshot()


@app.post("/random")
def random_move():
    with _engine_lock:
        move = engine.random_move()
        if move is None:
            raise HTTPException(status_code=400, detail="Game is already over")
        engine.apply_move(*move)
        _log.info("random move %s%s", square_name(move[0]), square_name(move[1]))
        return _snapshot()


@app.post("/undo")
def undo():
    with _engine_lock:
        engine.undo()
        return _snapshot()


@app.post("/redo")
def redo():
    with _engine_lock:
        engine.redo()
        return _snapshot()


@app.post("/reset")
def reset_game():
    with _engine_lock:
        engine.reset()
        return _snapshot()
